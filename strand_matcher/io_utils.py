"""I/O helpers for reading plain or gzip-compressed variant lists.

BIM files are often shipped compressed; compression is detected from the
magic bytes so a misnamed file still opens correctly.
"""

import gzip
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

# Gzip magic bytes (first two bytes of gzip file)
GZIP_MAGIC = b"\x1f\x8b"


def is_gzipped(filepath: Path) -> bool:
    """Detect if a file is gzip-compressed.

    Args:
        filepath: Path to file to check

    Returns:
        True if the file starts with the gzip magic bytes. For unreadable
        files the ".gz" extension decides.
    """
    try:
        with open(filepath, "rb") as f:
            magic = f.read(2)
    except OSError:
        return filepath.suffix == ".gz"
    return magic == GZIP_MAGIC


@contextmanager
def open_text(filepath: Path) -> Iterator[IO[str]]:
    """Open a text file for reading, decompressing gzip transparently.

    Example:
        with open_text(Path("data.bim.gz")) as f:
            for line in f:
                process(line)
    """
    if is_gzipped(filepath):
        f = gzip.open(filepath, "rt", encoding="utf-8")
    else:
        f = open(filepath, "r", encoding="utf-8")

    try:
        yield f
    finally:
        f.close()
