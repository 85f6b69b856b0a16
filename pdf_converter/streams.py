"""Content stream location and decoding.

The locator is a heuristic scanner over raw bytes: it knows nothing about
objects, the cross-reference table or the page tree, only the textual
``stream`` / ``endstream`` keywords that bracket stream data. A stronger
design would resolve the object graph behind the same ``extract_text``
contract; callers would not change.
"""

import zlib
from typing import Iterator, Optional

from pdf_converter.logger import get_logger
from pdf_converter.models import StreamRegion

logger = get_logger(__name__)

STREAM = b"stream"
END_STREAM = b"endstream"
_END_PREFIX = END_STREAM[: -len(STREAM)]

CR = 0x0D
LF = 0x0A


def _is_endstream_tail(buffer: bytes, index: int) -> bool:
    """True if the ``stream`` keyword at ``index`` belongs to ``endstream``."""
    prefix_start = index - len(_END_PREFIX)
    return prefix_start >= 0 and buffer[prefix_start:index] == _END_PREFIX


def _region_after(buffer: bytes, marker_index: int) -> Optional[StreamRegion]:
    start = marker_index + len(STREAM)
    # Exactly one EOL separates the keyword from the data
    if buffer[start : start + 2] == b"\r\n":
        start += 2
    elif buffer[start : start + 1] == b"\n":
        start += 1

    end = buffer.find(END_STREAM, start)
    if end == -1:
        return None

    while end > start and buffer[end - 1] in (CR, LF):
        end -= 1
    return StreamRegion(start, end)


def locate_streams(buffer: bytes, start: int = 0) -> Iterator[StreamRegion]:
    """Yield the region of every ``stream ... endstream`` pair in ``buffer``.

    Scanning resumes just past each opening keyword, so a keyword that
    happens to occur inside binary stream data only produces a false start.
    An opening keyword with no closing keyword after it yields nothing.
    """
    index = buffer.find(STREAM, start)
    while index != -1:
        if not _is_endstream_tail(buffer, index):
            region = _region_after(buffer, index)
            if region is not None:
                yield region
        index = buffer.find(STREAM, index + len(STREAM))


def _inflate(data: bytes, max_size: Optional[int], wbits: int):
    inflater = zlib.decompressobj(wbits)
    return inflater.decompress(data, max_size or 0), inflater


def decode_stream(raw: bytes, max_size: Optional[int] = None) -> str:
    """Inflate ``raw`` and return it as single-byte (Latin-1) text.

    Streams that do not inflate (already plain, another filter, corrupt or
    truncated data) are returned as-is. Non-text streams such as images can
    therefore leak binary noise into the tokenizer; that is accepted.

    Args:
        raw: Stream bytes between the keywords
        max_size: Cap on inflated output; longer output is truncated
    """
    if not raw:
        return ""

    try:
        data, inflater = _inflate(raw, max_size, zlib.MAX_WBITS)
        if not inflater.eof and not inflater.unconsumed_tail:
            # The locator trims trailing CR/LF, which can eat Adler-32 bytes;
            # retry as bare deflate data so only the checksum is lost.
            data, inflater = _inflate(raw[2:], max_size, -zlib.MAX_WBITS)
    except zlib.error as exc:
        logger.debug(
            "Stream did not inflate, using raw bytes",
            extra_data={"stream_size_bytes": len(raw), "error": str(exc)},
        )
        return raw.decode("latin-1")

    if inflater.unconsumed_tail:
        logger.warning(
            "Inflated stream truncated at size limit",
            extra_data={"stream_size_bytes": len(raw), "max_size": max_size},
        )
    elif not inflater.eof:
        logger.debug(
            "Stream is truncated, using raw bytes",
            extra_data={"stream_size_bytes": len(raw)},
        )
        return raw.decode("latin-1")

    return data.decode("latin-1")
