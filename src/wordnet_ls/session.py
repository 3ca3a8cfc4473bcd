"""Protocol session: lifecycle state and message dispatch."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from lsprotocol import types
from lsprotocol.converters import get_converter

from wordnet_ls.config import ServerOptions
from wordnet_ls.exceptions import ExitBeforeShutdownError
from wordnet_ls.lexicon import LexicalResolver
from wordnet_ls.locator import word_at_position
from wordnet_ls.models import Sense
from wordnet_ls.render import render_hover, write_reference
from wordnet_ls.transport import (
    ErrorCode,
    Message,
    Notification,
    Request,
    Response,
)

logger = logging.getLogger(__name__)

converter = get_converter()


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

class Lifecycle(Enum):
    """Session states. TERMINATED is absorbing."""

    ACTIVE = "active"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


class Event(Enum):
    """Lifecycle events."""

    SHUTDOWN = "shutdown"
    EXIT = "exit"


_TRANSITIONS: dict[tuple[Lifecycle, Event], Lifecycle] = {
    (Lifecycle.ACTIVE, Event.SHUTDOWN): Lifecycle.SHUTTING_DOWN,
    (Lifecycle.ACTIVE, Event.EXIT): Lifecycle.TERMINATED,
    (Lifecycle.SHUTTING_DOWN, Event.SHUTDOWN): Lifecycle.SHUTTING_DOWN,
    (Lifecycle.SHUTTING_DOWN, Event.EXIT): Lifecycle.TERMINATED,
    (Lifecycle.TERMINATED, Event.SHUTDOWN): Lifecycle.TERMINATED,
    (Lifecycle.TERMINATED, Event.EXIT): Lifecycle.TERMINATED,
}


def transition(state: Lifecycle, event: Event) -> Lifecycle:
    """Next lifecycle state; defined for every (state, event) pair."""
    return _TRANSITIONS[(state, event)]


# ---------------------------------------------------------------------------
# Message classification
# ---------------------------------------------------------------------------

class MessageKind(Enum):
    """Every message the session can receive, recognized or not."""

    HOVER = "hover"
    DEFINITION = "definition"
    SHUTDOWN = "shutdown"
    EXIT = "exit"
    UNKNOWN_REQUEST = "unknown_request"
    UNKNOWN_NOTIFICATION = "unknown_notification"
    RESPONSE = "response"
    UNSUPPORTED = "unsupported"


_REQUEST_KINDS: dict[str, MessageKind] = {
    types.TEXT_DOCUMENT_HOVER: MessageKind.HOVER,
    types.TEXT_DOCUMENT_DEFINITION: MessageKind.DEFINITION,
    types.SHUTDOWN: MessageKind.SHUTDOWN,
}

_NOTIFICATION_KINDS: dict[str, MessageKind] = {
    types.EXIT: MessageKind.EXIT,
}


def classify(message: Any) -> MessageKind:
    """Tag an inbound message with its MessageKind."""
    if isinstance(message, Request):
        return _REQUEST_KINDS.get(message.method, MessageKind.UNKNOWN_REQUEST)
    if isinstance(message, Notification):
        return _NOTIFICATION_KINDS.get(message.method, MessageKind.UNKNOWN_NOTIFICATION)
    if isinstance(message, Response):
        return MessageKind.RESPONSE
    return MessageKind.UNSUPPORTED


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

class Channel(Protocol):
    """The part of a Connection the session talks to."""

    def receive(self) -> Optional[Message]: ...

    def send(self, message: Message) -> None: ...


class Session:
    """Owns the lexical resolver and the lifecycle of one client session."""

    def __init__(
        self,
        resolver: LexicalResolver,
        connection: Channel,
        options: ServerOptions,
    ) -> None:
        self.resolver = resolver
        self.connection = connection
        self.options = options
        self.state = Lifecycle.ACTIVE
        self._handlers: dict[MessageKind, Callable[[Any], None]] = {
            MessageKind.HOVER: self._on_hover,
            MessageKind.DEFINITION: self._on_definition,
            MessageKind.SHUTDOWN: self._on_shutdown,
            MessageKind.EXIT: self._on_exit,
            MessageKind.UNKNOWN_REQUEST: self._on_unknown_request,
            MessageKind.UNKNOWN_NOTIFICATION: self._on_unknown_notification,
            MessageKind.RESPONSE: self._on_response,
            MessageKind.UNSUPPORTED: self._on_unsupported,
        }

    def serve(self) -> None:
        """Handle messages one at a time until the session terminates.

        End of stream counts as an exit notification.

        Raises:
            ExitBeforeShutdownError: If the client exits without shutdown.
        """
        while self.state is not Lifecycle.TERMINATED:
            message = self.connection.receive()
            if message is None:
                logger.info("Connection closed by client")
                message = Notification(method=types.EXIT)
            self.handle(message)

    def handle(self, message: Any) -> Lifecycle:
        """Process exactly one inbound message and return the new state."""
        if isinstance(message, Request) and self.state is not Lifecycle.ACTIVE:
            self.connection.send(Response.fail(
                message.id,
                ErrorCode.INVALID_REQUEST,
                "received request after shutdown",
            ))
            return self.state

        self._handlers[classify(message)](message)
        return self.state

    def log_message(
        self, text: str, level: types.MessageType = types.MessageType.Log
    ) -> None:
        """Send a message to the client's log channel."""
        logger.info(text)
        params = types.LogMessageParams(type=level, message=text)
        self.connection.send(Notification(
            method=types.WINDOW_LOG_MESSAGE,
            params=converter.unstructure(params),
        ))

    # -- lifecycle --------------------------------------------------------

    def _on_shutdown(self, request: Request) -> None:
        self.state = transition(self.state, Event.SHUTDOWN)
        logger.info("Shutdown requested")
        self.connection.send(Response.ok(request.id, None))

    def _on_exit(self, notification: Notification) -> None:
        previous = self.state
        self.state = transition(previous, Event.EXIT)
        if previous is Lifecycle.ACTIVE:
            raise ExitBeforeShutdownError(
                "Received exit notification before shutdown request"
            )
        logger.info("Exit after shutdown")

    # -- language features ------------------------------------------------

    def _on_hover(self, request: Request) -> None:
        self._reply(request, self._hover)

    def _on_definition(self, request: Request) -> None:
        self._reply(request, self._definition)

    def _reply(
        self,
        request: Request,
        build: Callable[[types.TextDocumentPositionParams], Any],
    ) -> None:
        """Answer a text document position request with ``build``'s result.

        Params that are not a text document position get InvalidParams.
        A failing lookup gets InternalError; the session keeps running.
        """
        try:
            params = converter.structure(
                request.params, types.TextDocumentPositionParams
            )
        except Exception as e:
            logger.warning(f"Invalid {request.method} params: {e}")
            self.connection.send(Response.fail(
                request.id, ErrorCode.INVALID_PARAMS, f"Invalid params: {e}",
            ))
            return

        try:
            result = build(params)
        except Exception as e:
            logger.exception(f"{request.method} failed")
            self.connection.send(Response.fail(
                request.id, ErrorCode.INTERNAL_ERROR, f"{request.method} failed: {e}",
            ))
            return
        self.connection.send(Response.ok(request.id, result))

    def _hover(self, params: types.TextDocumentPositionParams) -> Any:
        word, senses = self._lookup(params)
        if word is None:
            return None
        text = render_hover(word, senses, self.resolver)
        if text is None:
            return None
        hover = types.Hover(
            contents=types.MarkupContent(kind=types.MarkupKind.Markdown, value=text),
        )
        return converter.unstructure(hover)

    def _definition(self, params: types.TextDocumentPositionParams) -> Any:
        word, senses = self._lookup(params)
        if word is None or not senses:
            return None
        try:
            path = write_reference(
                word, senses, self.resolver, self.options.scratch_dir
            )
        except OSError as e:
            logger.warning(f"Cannot write reference for {word!r}: {e}")
            return None
        origin = types.Position(line=0, character=0)
        location = types.Location(
            uri=path.resolve().as_uri(),
            range=types.Range(start=origin, end=origin),
        )
        return converter.unstructure(location)

    def _lookup(
        self, params: types.TextDocumentPositionParams
    ) -> tuple[Optional[str], list[Sense]]:
        """Word under the cursor and its senses; (None, []) when no word."""
        word = word_at_position(
            params.text_document.uri,
            params.position.line,
            params.position.character,
        )
        if word is None:
            logger.debug(f"No word at {params.text_document.uri}:{params.position}")
            return None, []

        senses = self.resolver.senses_for(word)
        logger.debug(f"{len(senses)} senses for {word!r}")
        return word, senses

    # -- everything else --------------------------------------------------

    def _on_unknown_request(self, request: Request) -> None:
        self.log_message(f"Unmatched request received: {request.method}")

    def _on_unknown_notification(self, notification: Notification) -> None:
        self.log_message(f"Unmatched notification received: {notification.method}")

    def _on_response(self, response: Response) -> None:
        self.log_message(f"Unmatched response received: {response.id}")

    def _on_unsupported(self, message: Any) -> None:
        self.log_message(f"Unsupported message received: {message!r}")
