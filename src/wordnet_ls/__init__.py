__version__ = "0.1.0"

from .exceptions import (
    WordnetLsError as WordnetLsError,
    ConfigurationError as ConfigurationError,
    LexiconError as LexiconError,
    ProtocolError as ProtocolError,
    ExitBeforeShutdownError as ExitBeforeShutdownError,
)

from .models import (
    PartOfSpeech as PartOfSpeech,
    RelationType as RelationType,
    Relation as Relation,
    Sense as Sense,
)

from .locator import (
    word_at as word_at,
    word_at_position as word_at_position,
)

from .lexicon import (
    LexicalResolver as LexicalResolver,
    WnResolver as WnResolver,
)

from .render import (
    render_hover as render_hover,
    render_reference as render_reference,
    write_reference as write_reference,
)

from .config import ServerOptions as ServerOptions

from .session import (
    Session as Session,
    Lifecycle as Lifecycle,
    MessageKind as MessageKind,
    classify as classify,
    transition as transition,
)

__all__ = [
    # Errors
    "WordnetLsError",
    "ConfigurationError",
    "LexiconError",
    "ProtocolError",
    "ExitBeforeShutdownError",
    # Domain model
    "PartOfSpeech",
    "RelationType",
    "Relation",
    "Sense",
    # Word lookup and rendering
    "word_at",
    "word_at_position",
    "LexicalResolver",
    "WnResolver",
    "render_hover",
    "render_reference",
    "write_reference",
    # Session
    "ServerOptions",
    "Session",
    "Lifecycle",
    "MessageKind",
    "classify",
    "transition",
]
