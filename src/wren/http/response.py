"""Mutable per-request HTTP response and its body sinks.

Handlers and hooks share one ``Response`` for the lifetime of a request.
Status and headers stay editable until the first body byte reaches the
transport; from then on they are committed.

Two sinks implement the ``BodySink`` protocol:

- ``TransportBody`` streams to ASGI ``send()``. The first write commits
  ``http.response.start`` with the current status and headers.
- ``BufferedBody`` collects bytes in memory. The dispatcher swaps it in
  for HEAD requests so the length a GET would have produced can be
  measured and the bytes discarded.
"""

import io
from typing import Protocol, runtime_checkable

from wren._internal.asgi import Send
from wren.http.headers import MutableHeaders


def body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


@runtime_checkable
class BodySink(Protocol):
    """Anything a response body can be written to."""

    async def write(self, data: bytes) -> None: ...


class BufferedBody:
    """In-memory body sink.

    Unbounded: it holds whatever the handler writes.
    """

    __slots__ = ("_buffer",)

    def __init__(self) -> None:
        self._buffer = io.BytesIO()

    async def write(self, data: bytes) -> None:
        self._buffer.write(data)

    @property
    def length(self) -> int:
        """Number of bytes currently buffered."""
        with self._buffer.getbuffer() as view:
            return view.nbytes

    def truncate(self) -> None:
        """Discard all buffered bytes."""
        self._buffer.seek(0)
        self._buffer.truncate(0)

    def getvalue(self) -> bytes:
        return self._buffer.getvalue()


class TransportBody:
    """Body sink that streams to the ASGI transport.

    Headers are committed lazily: the first non-empty ``write()`` (or
    ``complete()``) sends ``http.response.start`` using the owning
    response's status and headers at that moment. A *discard* sink (HEAD)
    never sends body bytes.
    """

    __slots__ = ("_completed", "_discard", "_response", "_send", "_started")

    def __init__(self, send: Send, response: "Response", *, discard: bool = False) -> None:
        self._send = send
        self._response = response
        self._discard = discard
        self._started = False
        self._completed = False

    @property
    def started(self) -> bool:
        return self._started

    @property
    def completed(self) -> bool:
        return self._completed

    async def _start(self) -> None:
        self._started = True
        await self._send(
            {
                "type": "http.response.start",
                "status": self._response.status,
                "headers": self._response.headers.raw(),
            }
        )

    async def write(self, data: bytes) -> None:
        if not data or self._discard or not body_allowed(self._response.status):
            return
        if not self._started:
            await self._start()
        await self._send({"type": "http.response.body", "body": data, "more_body": True})

    async def complete(self) -> None:
        """Close the stream, committing headers first if nothing was written."""
        if self._completed:
            return
        if not self._started:
            if body_allowed(self._response.status) and "content-length" not in self._response.headers:
                self._response.headers["content-length"] = "0"
            await self._start()
        self._completed = True
        await self._send({"type": "http.response.body", "body": b"", "more_body": False})


class Response:
    """A mutable HTTP response owned by a single request.

    Usage in a handler::

        async def create(ctx: HttpContext) -> None:
            ctx.response.status = 201
            ctx.response.content_type = "text/plain; charset=utf-8"
            await ctx.response.write("created")
    """

    __slots__ = ("body", "headers", "status")

    def __init__(self, body: BodySink | None = None) -> None:
        self.status: int = 200
        self.headers = MutableHeaders()
        self.body: BodySink = body if body is not None else BufferedBody()

    @classmethod
    def for_transport(cls, send: Send, *, head: bool = False) -> "Response":
        """Create a response whose body streams to ASGI ``send()``.

        With *head* set, body bytes are dropped; only status and headers
        are sent.
        """
        response = cls()
        response.body = TransportBody(send, response, discard=head)
        return response

    def __repr__(self) -> str:
        return f"<Response status={self.status} headers={self.headers!r}>"

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @content_type.setter
    def content_type(self, value: str) -> None:
        self.headers["content-type"] = value

    @property
    def content_length(self) -> int | None:
        value = self.headers.get("content-length")
        if value is None:
            return None
        return int(value)

    @content_length.setter
    def content_length(self, value: int) -> None:
        self.headers["content-length"] = str(value)

    @property
    def has_started(self) -> bool:
        """True once status and headers have been sent to the client."""
        return isinstance(self.body, TransportBody) and self.body.started

    async def write(self, data: str | bytes) -> None:
        """Write to the current body sink (``str`` is UTF-8 encoded)."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        await self.body.write(data)

    def clear(self) -> None:
        """Reset status and headers. Only meaningful before the response starts."""
        if self.has_started:
            msg = "Cannot clear a response that has already started."
            raise RuntimeError(msg)
        self.status = 200
        self.headers = MutableHeaders()
        if isinstance(self.body, BufferedBody):
            self.body.truncate()
