"""PLINK BIM file parser.

BIM file format (tab/space-separated, no header):
chromosome  rsID  genetic_distance  position  allele1  allele2
1           rs123 0                 10000     A        G

Parsing is strict: one malformed line aborts the whole load.
"""

from collections.abc import Iterable, Iterator
from pathlib import Path

from strand_matcher.exceptions import ParseError
from strand_matcher.io_utils import open_text
from strand_matcher.models import SourceEntry
from strand_matcher.utils import normalize_chromosome, parse_position


def parse_bim_lines(lines: Iterable[str], filename: str = "<bim>") -> Iterator[SourceEntry]:
    """Parse BIM records from an iterable of lines.

    Args:
        lines: Lines of a BIM file
        filename: Name used in error messages

    Yields:
        SourceEntry for each non-blank line, in file order

    Raises:
        ParseError: If a line has fewer than 6 columns or a bad position
    """
    for line_num, line in enumerate(lines, 1):
        parts = line.split()
        if not parts:
            continue

        if len(parts) < 6:
            raise ParseError(
                filename,
                line_num,
                f"expected 6 columns, got {len(parts)}",
            )

        position = parse_position(parts[3])
        if position is None:
            raise ParseError(filename, line_num, f"invalid position '{parts[3]}'")

        yield SourceEntry(
            name=parts[1],
            chromosome=normalize_chromosome(parts[0]),
            position=position,
            alleles=(parts[4].upper(), parts[5].upper()),
        )


def load_bim(filepath: Path) -> list[SourceEntry]:
    """Load all variants from a PLINK BIM file.

    The whole list is kept in memory because every strand archive is
    scored against it. Gzipped files are supported.

    Args:
        filepath: Path to PLINK .bim file

    Returns:
        SourceEntry list in file order

    Raises:
        FileNotFoundError: If file doesn't exist
        ParseError: If any line is malformed

    Example:
        >>> variants = load_bim(Path("data.bim"))
        >>> variants[0].name
        'rs123'
    """
    if not filepath.exists():
        raise FileNotFoundError(f"BIM file not found: {filepath}")

    with open_text(filepath) as f:
        return list(parse_bim_lines(f, filename=str(filepath)))
