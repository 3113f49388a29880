"""Bounded "head" reads of file contents."""

from __future__ import annotations

from pathlib import Path

CHUNK_SIZE = 32 * 1024


def read_head(path: Path | str, max_bytes: int) -> tuple[str, OSError | None]:
    """Read at most *max_bytes* from the start of *path*.

    The file is read sequentially in :data:`CHUNK_SIZE` chunks until the cap
    or end-of-file is reached.  Hitting the cap is not an error.  When a read
    fails after some data was collected, the partial text is returned
    together with the error so the caller can decide what to keep.

    Returns
    -------
    (text, error)
        Decoded text (UTF-8, undecodable bytes replaced) and ``None`` or the
        ``OSError`` that stopped the read.
    """
    if max_bytes <= 0:
        return "", None

    try:
        fh = open(path, "rb")
    except OSError as exc:
        return "", exc

    chunks: list[bytes] = []
    total = 0
    error: OSError | None = None
    with fh:
        while total < max_bytes:
            try:
                chunk = fh.read(min(CHUNK_SIZE, max_bytes - total))
            except OSError as exc:
                error = exc
                break
            if not chunk:
                break
            chunks.append(chunk)
            total += len(chunk)

    return b"".join(chunks).decode("utf-8", errors="replace"), error
