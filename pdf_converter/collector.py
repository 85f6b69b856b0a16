"""Bounded accumulation of streamed request bodies."""

import asyncio
from typing import AsyncIterable, AsyncIterator, Optional

from starlette.requests import ClientDisconnect

from pdf_converter.exceptions import (
    BodyTooLargeError,
    RequestAbortedError,
    TransportError,
)
from pdf_converter.logger import Timer, get_logger

logger = get_logger(__name__)

ABORT_ERRORS = (ClientDisconnect, ConnectionError, asyncio.IncompleteReadError)


async def _next_chunk(iterator: AsyncIterator[bytes]) -> Optional[bytes]:
    """Read one chunk, translating transport failures. None means end of body."""
    try:
        return await iterator.__anext__()
    except StopAsyncIteration:
        return None
    except ABORT_ERRORS as exc:
        raise RequestAbortedError("Request aborted") from exc
    except Exception as exc:
        raise TransportError(f"Failed to read request body: {exc}") from exc


async def _close(iterator: AsyncIterator[bytes]) -> None:
    aclose = getattr(iterator, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception as exc:
        logger.debug(
            "Error while closing body stream",
            extra_data={"error_type": type(exc).__name__, "error": str(exc)},
        )


async def collect_body(stream: AsyncIterable[bytes], max_size: int) -> bytes:
    """Accumulate ``stream`` into one buffer of at most ``max_size`` bytes.

    The size check runs after every chunk. As soon as the running total
    passes ``max_size`` the partial buffer is dropped, the stream is closed
    without being drained and :class:`BodyTooLargeError` is raised.

    Args:
        stream: Async iterable of body chunks (e.g. ``request.stream()``)
        max_size: Maximum number of body bytes to accept

    Returns:
        The complete body

    Raises:
        BodyTooLargeError: If the body exceeds ``max_size``
        RequestAbortedError: If the client goes away mid-body
        TransportError: On any other read failure
    """
    iterator = stream.__aiter__()
    chunks: list[bytes] = []
    received = 0

    with Timer() as timer:
        try:
            while True:
                chunk = await _next_chunk(iterator)
                if chunk is None:
                    break
                if not chunk:
                    continue

                received += len(chunk)
                if received > max_size:
                    chunks.clear()
                    await _close(iterator)
                    logger.warning(
                        "Request body exceeds size limit",
                        extra_data={
                            "received_bytes": received,
                            "max_size_bytes": max_size,
                        },
                    )
                    raise BodyTooLargeError("File too large")
                chunks.append(bytes(chunk))
        except (RequestAbortedError, TransportError) as exc:
            chunks.clear()
            logger.warning(
                "Request body collection failed",
                extra_data={
                    "error_type": type(exc).__name__,
                    "received_bytes": received,
                    "collection_time_ms": timer.elapsed_ms,
                },
            )
            raise
        except asyncio.CancelledError:
            chunks.clear()
            raise

    body = b"".join(chunks)
    logger.debug(
        "Request body received",
        extra_data={
            "body_size_bytes": len(body),
            "chunk_count": len(chunks),
            "collection_time_ms": timer.elapsed_ms,
        },
    )
    return body
