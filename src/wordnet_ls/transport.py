"""
JSON-RPC 2.0 message channel for the language server.

LSP messages travel over stdio with HTTP-style headers:
    Content-Length: <length>\r\n
    \r\n
    <JSON body>

This module turns that byte stream into typed Request, Response and
Notification values and back, and performs the initialize handshake.
"""
from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, BinaryIO, Optional, Union

from wordnet_ls.exceptions import ProtocolError

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"


# =============================================================================
# Error Codes
# =============================================================================


class ErrorCode(IntEnum):
    """JSON-RPC and LSP error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    SERVER_NOT_INITIALIZED = -32002


# =============================================================================
# Message Types
# =============================================================================


@dataclass
class ResponseError:
    """The error member of a failed response."""

    code: int
    message: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": int(self.code), "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


@dataclass
class Request:
    """A JSON-RPC request message."""

    id: Union[int, str]
    method: str
    params: Any = None


@dataclass
class Response:
    """A JSON-RPC response message."""

    id: Union[int, str, None]
    result: Any = None
    error: Optional[ResponseError] = None

    @classmethod
    def ok(cls, id: Union[int, str, None], result: Any = None) -> Response:
        return cls(id=id, result=result)

    @classmethod
    def fail(
        cls, id: Union[int, str, None], code: int, message: str
    ) -> Response:
        return cls(id=id, error=ResponseError(code=code, message=message))


@dataclass
class Notification:
    """A JSON-RPC notification message (no id, no response expected)."""

    method: str
    params: Any = None


Message = Union[Request, Response, Notification]


def parse_message(data: Any) -> Message:
    """Build a typed message from a decoded JSON object."""
    if not isinstance(data, dict):
        raise ProtocolError("Message must be a JSON object", ErrorCode.INVALID_REQUEST)

    if "method" in data:
        method = data["method"]
        if not isinstance(method, str):
            raise ProtocolError("Method must be a string", ErrorCode.INVALID_REQUEST)
        if "id" in data:
            return Request(id=data["id"], method=method, params=data.get("params"))
        return Notification(method=method, params=data.get("params"))

    if "id" in data:
        error = data.get("error")
        return Response(
            id=data["id"],
            result=data.get("result"),
            error=ResponseError(
                code=error.get("code", ErrorCode.INTERNAL_ERROR),
                message=error.get("message", ""),
                data=error.get("data"),
            ) if isinstance(error, dict) else None,
        )

    raise ProtocolError("Message has neither method nor id", ErrorCode.INVALID_REQUEST)


def message_to_dict(message: Message) -> dict[str, Any]:
    """Serialize a typed message to its JSON-RPC object."""
    data: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION}
    if isinstance(message, Request):
        data["id"] = message.id
        data["method"] = message.method
        if message.params is not None:
            data["params"] = message.params
    elif isinstance(message, Notification):
        data["method"] = message.method
        if message.params is not None:
            data["params"] = message.params
    else:
        data["id"] = message.id
        if message.error is not None:
            data["error"] = message.error.to_dict()
        else:
            data["result"] = message.result
    return data


# =============================================================================
# Framing
# =============================================================================


class MessageReader:
    """Reads framed JSON messages from a binary stream."""

    def __init__(self, input_stream: Optional[BinaryIO] = None):
        self.input = input_stream or sys.stdin.buffer

    def read(self) -> Optional[dict[str, Any]]:
        """Read one message body, or None at end of stream.

        Raises:
            ProtocolError: If the headers or the JSON body are malformed.
        """
        content_length = self._read_headers()
        if content_length is None:
            return None

        body = self.input.read(content_length)
        if len(body) < content_length:
            return None

        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ProtocolError(f"Invalid JSON: {e}", ErrorCode.PARSE_ERROR) from e

    def _read_headers(self) -> Optional[int]:
        content_length = None

        while True:
            line = self.input.readline()
            if not line:
                return None

            line = line.decode("ascii", errors="replace").strip()
            if not line:
                # Empty line marks end of headers
                break

            if line.lower().startswith("content-length:"):
                try:
                    content_length = int(line.split(":", 1)[1].strip())
                except ValueError as e:
                    raise ProtocolError(
                        f"Invalid Content-Length: {line}", ErrorCode.PARSE_ERROR
                    ) from e
            # Other headers (Content-Type) are ignored

        if content_length is None:
            raise ProtocolError("Missing Content-Length header", ErrorCode.PARSE_ERROR)

        return content_length


class MessageWriter:
    """Writes JSON messages with Content-Length framing."""

    def __init__(self, output_stream: Optional[BinaryIO] = None):
        self.output = output_stream or sys.stdout.buffer

    def write(self, message: dict[str, Any]) -> None:
        body = json.dumps(message, ensure_ascii=False).encode("utf-8")
        header = f"Content-Length: {len(body)}\r\n\r\n".encode("ascii")
        self.output.write(header)
        self.output.write(body)
        self.output.flush()


# =============================================================================
# Connection
# =============================================================================


class Connection:
    """A bidirectional channel of typed messages."""

    def __init__(self, reader: MessageReader, writer: MessageWriter):
        self.reader = reader
        self.writer = writer

    @classmethod
    def stdio(cls) -> Connection:
        return cls(MessageReader(), MessageWriter())

    @classmethod
    def from_streams(cls, input_stream: BinaryIO, output_stream: BinaryIO) -> Connection:
        return cls(MessageReader(input_stream), MessageWriter(output_stream))

    def receive(self) -> Optional[Message]:
        """Block until the next message arrives; None at end of stream.

        Malformed messages are answered with an error response (id null)
        and skipped.
        """
        while True:
            try:
                data = self.reader.read()
                if data is None:
                    return None
                return parse_message(data)
            except ProtocolError as e:
                logger.warning(f"Dropping malformed message: {e.message}")
                self.send(Response.fail(None, e.code, e.message))

    def send(self, message: Message) -> None:
        self.writer.write(message_to_dict(message))

    def notify(self, method: str, params: Any = None) -> None:
        self.send(Notification(method=method, params=params))

    def initialize(self, capabilities: dict[str, Any]) -> Any:
        """Run the server side of the initialize handshake.

        Waits for the ``initialize`` request, answers it with
        ``capabilities`` (an InitializeResult object), then waits for the
        ``initialized`` notification. Returns the initialize params.

        Raises:
            ProtocolError: If the stream ends or the client exits first.
        """
        while True:
            message = self.receive()
            if message is None:
                raise ProtocolError("Connection closed before initialize")
            if isinstance(message, Request) and message.method == "initialize":
                params = message.params
                self.send(Response.ok(message.id, capabilities))
                break
            if isinstance(message, Request):
                self.send(Response.fail(
                    message.id,
                    ErrorCode.SERVER_NOT_INITIALIZED,
                    f"expected initialize request, got {message.method}",
                ))
            elif isinstance(message, Notification) and message.method == "exit":
                raise ProtocolError("Exit notification before initialize")
            else:
                logger.debug(f"Ignoring {message!r} before initialize")

        while True:
            message = self.receive()
            if message is None:
                raise ProtocolError("Connection closed before initialized")
            if isinstance(message, Notification) and message.method == "initialized":
                return params
            if isinstance(message, Request):
                self.send(Response.fail(
                    message.id,
                    ErrorCode.SERVER_NOT_INITIALIZED,
                    f"expected initialized notification, got {message.method}",
                ))
            elif isinstance(message, Notification) and message.method == "exit":
                raise ProtocolError("Exit notification before initialized")
            else:
                logger.debug(f"Ignoring {message!r} before initialized")
