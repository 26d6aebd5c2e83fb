"""Strand file parser.

Strand file format (whitespace-separated, no header), as shipped in the
Will Rayner strand archives:
SNP_ID      chromosome  position  %match  strand  alleles
rs3094315   1           752566    100     +       AG

Alleles may also be given as two columns ("A G"). Older strand files have
no allele column at all. Position parsing is lenient; an unreadable
position is stored as 0.
"""

import logging
from collections.abc import Iterable

from strand_matcher.exceptions import ParseError
from strand_matcher.models import MISSING_ALLELES, UNKNOWN_STRAND, VariantEntry
from strand_matcher.utils import normalize_chromosome, parse_position

logger = logging.getLogger(__name__)

# Strand markers kept as-is; anything else becomes UNKNOWN_STRAND
STRAND_MARKERS = {"+", "-"}


def parse_alleles(fields: list[str]) -> tuple[str, str]:
    """Read the allele pair from the columns after the strand marker.

    Args:
        fields: Columns from index 5 onwards

    Returns:
        Upper-cased allele pair, or MISSING_ALLELES if there is none
    """
    if len(fields) >= 2:
        return fields[0].upper(), fields[1].upper()
    if len(fields) == 1 and len(fields[0]) == 2:
        combined = fields[0].upper()
        return combined[0], combined[1]
    return MISSING_ALLELES


def parse_strand_lines(
    lines: Iterable[str],
    filename: str = "<strand>",
) -> dict[str, VariantEntry]:
    """Parse a strand file body into an ID -> VariantEntry mapping.

    Duplicate IDs keep the last occurrence.

    Args:
        lines: Lines of a strand file
        filename: Name used in error and log messages

    Returns:
        Mapping from variant ID to VariantEntry

    Raises:
        ParseError: If a line lacks the ID, chromosome, position or
            strand columns
    """
    variants: dict[str, VariantEntry] = {}
    duplicates = 0

    for line_num, line in enumerate(lines, 1):
        parts = line.split()
        if not parts:
            continue

        if len(parts) < 5:
            raise ParseError(
                filename,
                line_num,
                f"expected at least 5 columns, got {len(parts)}",
            )

        snp_id = parts[0]
        position = parse_position(parts[2])
        strand = parts[4] if parts[4] in STRAND_MARKERS else UNKNOWN_STRAND

        if snp_id in variants:
            duplicates += 1

        variants[snp_id] = VariantEntry(
            name=snp_id,
            chromosome=normalize_chromosome(parts[1]),
            position=position if position is not None else 0,
            alleles=parse_alleles(parts[5:7]),
            strand=strand,
        )

    if duplicates:
        logger.debug(
            f"{filename}: {duplicates:,} duplicate variant IDs, last occurrence kept"
        )

    return variants
