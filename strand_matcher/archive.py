"""Strand archive access.

Each chip is distributed as a ZIP archive holding one strand file
(``*.strand``) plus build/miss files that are ignored here.
"""

import io
import logging
import shutil
import zipfile
from pathlib import Path, PurePosixPath

from strand_matcher.exceptions import ArchiveError
from strand_matcher.models import VariantEntry
from strand_matcher.parsers.strand import parse_strand_lines

logger = logging.getLogger(__name__)

DEFAULT_STRAND_SUFFIX = ".strand"


def list_strand_archives(directory: Path) -> list[Path]:
    """List the ZIP archives directly inside a directory.

    Args:
        directory: Directory holding strand archives

    Returns:
        Archive paths sorted by name

    Raises:
        FileNotFoundError: If the directory doesn't exist
        NotADirectoryError: If the path is not a directory
    """
    if not directory.exists():
        raise FileNotFoundError(f"Strand directory not found: {directory}")
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")

    return sorted(
        path
        for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() == ".zip"
    )


def find_strand_member(archive: zipfile.ZipFile, suffix: str = DEFAULT_STRAND_SUFFIX) -> str | None:
    """Return the name of the first archive member ending in ``suffix``."""
    for name in archive.namelist():
        if name.endswith(suffix):
            return name
    return None


def read_strand_archive(
    archive_path: Path,
    suffix: str = DEFAULT_STRAND_SUFFIX,
) -> tuple[str, dict[str, VariantEntry]]:
    """Read the strand file inside a ZIP archive.

    Only the first member ending in ``suffix`` is read.

    Args:
        archive_path: Path to the ZIP archive
        suffix: Strand file name suffix

    Returns:
        Tuple of (strand file name, ID -> VariantEntry mapping). An archive
        without a strand file gives ("", {}).

    Raises:
        ArchiveError: If the archive is not a valid ZIP file
        ParseError: If the strand file has a malformed line
        OSError: If the archive cannot be opened
    """
    try:
        with zipfile.ZipFile(archive_path) as archive:
            member = find_strand_member(archive, suffix)
            if member is None:
                logger.warning(f"No '*{suffix}' file in {archive_path.name}")
                return "", {}

            with archive.open(member) as raw:
                text = io.TextIOWrapper(raw, encoding="utf-8", errors="replace")
                variants = parse_strand_lines(text, filename=f"{archive_path.name}:{member}")
    except zipfile.BadZipFile as e:
        raise ArchiveError(archive_path, f"not a valid ZIP archive ({e})") from e

    logger.debug(f"{archive_path.name}: {member} has {len(variants):,} variants")
    return member, variants


def extract_strand_file(archive_path: Path, member: str, dest_dir: Path) -> Path:
    """Extract one strand file from its archive.

    The member is written under its base name, ignoring directories
    inside the archive.

    Args:
        archive_path: Path to the ZIP archive
        member: Member name as returned by read_strand_archive
        dest_dir: Directory to write into (created if missing)

    Returns:
        Path of the extracted file

    Raises:
        ArchiveError: If the archive is invalid or has no such member
    """
    dest_dir.mkdir(parents=True, exist_ok=True)
    target = dest_dir / PurePosixPath(member).name

    try:
        with zipfile.ZipFile(archive_path) as archive:
            with archive.open(member) as src, open(target, "wb") as dst:
                shutil.copyfileobj(src, dst)
    except KeyError as e:
        raise ArchiveError(archive_path, f"no member named '{member}'") from e
    except zipfile.BadZipFile as e:
        raise ArchiveError(archive_path, f"not a valid ZIP archive ({e})") from e

    return target
