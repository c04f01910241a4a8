"""Server-Sent Events decoding for chat-completion streams."""
from __future__ import annotations

from collections.abc import Iterable, Iterator

DONE_SENTINEL = "[DONE]"


def iter_sse_data(lines: Iterable[str]) -> Iterator[str]:
    """Yield the ``data`` payload of each SSE event in *lines*.

    - Lines beginning with ``:`` are comments (the gateway sends keep-alives).
    - Blank lines dispatch the current event; multi-line data is joined with ``\\n``.
    - ``event``, ``id`` and ``retry`` fields are ignored.
    - Iteration stops at the ``[DONE]`` sentinel.
    """
    data_parts: list[str] = []

    for raw_line in lines:
        line = raw_line.rstrip("\r\n")

        if line.startswith(":"):
            continue

        if line == "":
            if data_parts:
                payload = "\n".join(data_parts)
                data_parts = []
                if payload.strip() == DONE_SENTINEL:
                    return
                yield payload
            continue

        field_name, _, value = line.partition(":")
        if field_name != "data":
            continue
        # Only one leading space belongs to the field separator
        if value.startswith(" "):
            value = value[1:]
        data_parts.append(value)

    # Stream ended without a trailing blank line
    if data_parts:
        payload = "\n".join(data_parts)
        if payload.strip() != DONE_SENTINEL:
            yield payload
