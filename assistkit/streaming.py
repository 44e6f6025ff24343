"""Reader for server-sent event streams of JSON messages."""

from __future__ import annotations

import json
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

__all__ = [
    "DEFAULT_EMPTY_MESSAGES_LIMIT",
    "StreamAPIError",
    "StreamReader",
    "TooManyEmptyStreamMessages",
]

T = TypeVar("T")

DEFAULT_EMPTY_MESSAGES_LIMIT = 300

_DATA_PREFIX = b"data: "
_ERROR_PREFIX = b'data: {"error":'
_DONE = b"[DONE]"


class TooManyEmptyStreamMessages(Exception):
    """The stream sent more non-data lines in a row than allowed."""

    def __init__(self, message: str = "stream has sent too many empty messages") -> None:
        super().__init__(message)


class StreamAPIError(Exception):
    """An error object reported by the server inside a stream."""

    def __init__(
        self,
        message: Any = "",
        error_type: str | None = None,
        param: Any = None,
        code: Any = None,
    ) -> None:
        super().__init__(f"error, {message}")
        self.message = message
        self.error_type = error_type
        self.param = param
        self.code = code


class StreamReader(Generic[T]):
    """Reads ``data:`` lines from an event stream and decodes each message.

    ``lines`` yields raw lines (bytes or str) including their line endings;
    a final line without a newline counts as the end of the stream.
    """

    def __init__(
        self,
        lines: Iterable[bytes | str],
        decode: Callable[[bytes], T] = json.loads,
        empty_messages_limit: int = DEFAULT_EMPTY_MESSAGES_LIMIT,
    ) -> None:
        self._source = lines
        self._lines = iter(lines)
        self._decode = decode
        self._empty_messages_limit = empty_messages_limit
        self._errors = bytearray()
        self._finished = False

    def _next_line(self) -> bytes | None:
        try:
            raw = next(self._lines)
        except StopIteration:
            return None
        if isinstance(raw, str):
            raw = raw.encode()
        if not raw.endswith(b"\n"):
            return None
        return raw

    def _accumulated_error(self) -> StreamAPIError | None:
        if not self._errors:
            return None
        try:
            payload = json.loads(bytes(self._errors))
        except ValueError:
            return None
        if not isinstance(payload, dict):
            return None
        details = payload.get("error")
        if details is None:
            return StreamAPIError()
        if not isinstance(details, dict):
            return None
        return StreamAPIError(
            message=details.get("message", ""),
            error_type=details.get("type"),
            param=details.get("param"),
            code=details.get("code"),
        )

    def recv(self) -> T:
        """Return the next message; raise EOFError when the stream has ended."""
        if self._finished:
            raise EOFError("stream finished")

        empty_messages = 0
        has_error_prefix = False
        while True:
            raw = self._next_line()
            if raw is None or has_error_prefix:
                api_error = self._accumulated_error()
                if api_error is not None:
                    raise api_error
                raise EOFError("end of stream")

            line = raw.strip()
            if line.startswith(_ERROR_PREFIX):
                has_error_prefix = True
            if has_error_prefix or not line.startswith(_DATA_PREFIX):
                if has_error_prefix:
                    line = line.removeprefix(_DATA_PREFIX)
                self._errors += line
                empty_messages += 1
                if empty_messages > self._empty_messages_limit:
                    raise TooManyEmptyStreamMessages()
                continue

            payload = line.removeprefix(_DATA_PREFIX)
            if payload == _DONE:
                self._finished = True
                raise EOFError("stream finished")
            return self._decode(payload)

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                message = self.recv()
            except EOFError:
                return
            yield message

    def close(self) -> None:
        """Close the underlying source if it can be closed."""
        closer = getattr(self._source, "close", None)
        if callable(closer):
            closer()

    def __enter__(self) -> StreamReader[T]:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()