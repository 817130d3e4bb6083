"""Plain-text load and save for documents.

Read and write failures raise ``OSError`` to the caller unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from vimcore.buffer import Buffer
from vimcore.runtime import telemetry

PathLike = Union[str, Path]


def read_document(path: PathLike) -> Buffer:
    target = Path(path)
    with target.open(encoding="utf-8", newline="") as handle:
        text = handle.read()
    buffer = Buffer.from_text(text, name=target.name)
    telemetry.record_event(
        "file.read", level="debug", data={"path": str(target), "lines": buffer.len()}
    )
    return buffer


def write_document(path: PathLike, text: str) -> Path:
    """Write ``text`` to ``path`` and return the path written."""

    target = Path(path)
    target.write_text(text, encoding="utf-8")
    telemetry.record_event(
        "file.write", data={"path": str(target), "bytes": len(text.encode("utf-8"))}
    )
    return target


__all__ = ["PathLike", "read_document", "write_document"]
