"""Server startup: handshake, options, and the lexical database."""

from __future__ import annotations

import logging
from typing import Any, Callable

from lsprotocol import types

from wordnet_ls import __version__
from wordnet_ls.config import ServerOptions, decode_initialization_options
from wordnet_ls.exceptions import ConfigurationError, LexiconError
from wordnet_ls.lexicon import LexicalResolver, WnResolver
from wordnet_ls.session import Session, converter
from wordnet_ls.transport import Connection

logger = logging.getLogger(__name__)

SERVER_NAME = "wordnet-ls"

ResolverFactory = Callable[[ServerOptions], LexicalResolver]


def server_capabilities() -> dict[str, Any]:
    """InitializeResult advertising hover and definition support."""
    result = types.InitializeResult(
        capabilities=types.ServerCapabilities(
            hover_provider=True,
            definition_provider=True,
        ),
        server_info=types.ServerInfo(name=SERVER_NAME, version=__version__),
    )
    return converter.unstructure(result)


def open_resolver(options: ServerOptions) -> LexicalResolver:
    return WnResolver.open(options.wordnet, options.lexicon)


def start(
    connection: Connection,
    defaults: dict[str, Any] | None = None,
    resolver_factory: ResolverFactory = open_resolver,
) -> Session:
    """Run the handshake and build the session.

    Fatal problems are shown to the user before being raised.

    Raises:
        ConfigurationError: If the options or the WordNet location are
            unusable.
        LexiconError: If the WordNet database cannot be opened.
    """
    params = connection.initialize(server_capabilities())
    options_value = params.get("initializationOptions") if isinstance(params, dict) else None

    try:
        options = decode_initialization_options(options_value, defaults)
        if not options.wordnet.exists():
            raise ConfigurationError(
                f"WordNet location does not exist: {options.wordnet}"
            )
        resolver = resolver_factory(options)
    except (ConfigurationError, LexiconError) as e:
        show_error(connection, str(e))
        raise

    logger.info(f"Using WordNet at {options.wordnet}")
    return Session(resolver, connection, options)


def show_error(connection: Connection, message: str) -> None:
    """Pop up an error message in the client."""
    params = types.ShowMessageParams(type=types.MessageType.Error, message=message)
    connection.notify(types.WINDOW_SHOW_MESSAGE, converter.unstructure(params))
