"""ASGI handler — translates ASGI scope/messages to wren types.

The only component that touches raw ASGI directly. Builds the request
context, runs the pipeline, maps uncaught failures to status codes, and
completes the response stream.
"""

import logging
import traceback

from wren._internal.asgi import Receive, Scope, Send
from wren.errors import HTTPError
from wren.http.context import HttpContext
from wren.http.request import Request
from wren.http.response import BufferedBody, Response, TransportBody
from wren.middleware.protocol import Next
from wren.negotiation import ResponseNegotiator

logger = logging.getLogger("wren.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    pipeline: Next,
    negotiators: tuple[ResponseNegotiator, ...] = (),
    debug: bool = False,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    response = Response.for_transport(send, head=request.is_head)
    transport = response.body
    assert isinstance(transport, TransportBody)
    ctx = HttpContext(
        request=request,
        response=response,
        negotiators=negotiators,
    )

    try:
        await pipeline(ctx)
    except HTTPError as exc:
        logger.debug("%d %s %s: %s", exc.status, ctx.method, ctx.path, exc.detail)
        if _can_rewrite(ctx, transport):
            detail = exc.detail or f"Error {exc.status}"
            await _write_error(ctx, transport, exc.status, detail, exc.headers)
    except Exception:
        logger.exception("500 %s %s", ctx.method, ctx.path)
        if _can_rewrite(ctx, transport):
            detail = traceback.format_exc() if debug else "Internal Server Error"
            await _write_error(ctx, transport, 500, detail)

    await finish_response(ctx, transport)


def _can_rewrite(ctx: HttpContext, transport: TransportBody) -> bool:
    if transport.started:
        logger.warning(
            "Response for %s %s already started; closing stream without error body",
            ctx.method,
            ctx.path,
        )
        return False
    return True


async def _write_error(
    ctx: HttpContext,
    transport: TransportBody,
    status: int,
    detail: str,
    headers: tuple[tuple[str, str], ...] = (),
) -> None:
    """Replace whatever the pipeline left with a plain-text error."""
    response = ctx.response
    response.clear()
    response.body = transport
    response.status = status
    for name, value in headers:
        response.headers.append(name, value)

    body = detail.encode("utf-8")
    response.content_type = "text/plain; charset=utf-8"
    response.content_length = len(body)
    await response.write(body)


async def finish_response(ctx: HttpContext, transport: TransportBody) -> None:
    """Flush anything still buffered and close the ASGI response.

    On HEAD the buffer only holds bytes written after the dispatcher
    measured the body; they are dropped and its ``Content-Length`` stands.
    """
    body = ctx.response.body
    if body is not transport and isinstance(body, BufferedBody) and not ctx.request.is_head:
        data = body.getvalue()
        if data:
            if ctx.response.content_length is None:
                ctx.response.content_length = len(data)
            await transport.write(data)
    await transport.complete()
