"""Tab-separated score table.

One row per scanned strand file, best match first:
strand  name_match_rate  pos_match_rate  original_match_rate  plus_match_rate  atcg_match_rate
"""

from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from strand_matcher.models import ScoreRecord

TABLE_COLUMNS = [
    "strand",
    "name_match_rate",
    "pos_match_rate",
    "original_match_rate",
    "plus_match_rate",
    "atcg_match_rate",
]


def format_row(record: ScoreRecord) -> str:
    """Format one score record as a table row (without newline)."""
    rates = (
        record.name_match_rate,
        record.name_pos_match_rate,
        record.strand_match_rate,
        record.plus_match_rate,
        record.atcg_match_rate,
    )
    return "\t".join([record.name, *(f"{rate:.6f}" for rate in rates)])


def write_score_table(records: Iterable[ScoreRecord], stream: TextIO) -> int:
    """Write the header and one row per record.

    Args:
        records: Score records in the order they should appear
        stream: Open text stream

    Returns:
        Number of rows written (excluding header)
    """
    stream.write("\t".join(TABLE_COLUMNS) + "\n")
    rows = 0
    for record in records:
        stream.write(format_row(record) + "\n")
        rows += 1
    return rows


def write_score_file(records: Iterable[ScoreRecord], output_path: Path) -> int:
    """Write the score table to a file, creating parent directories."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        return write_score_table(records, f)
