"""Ranking of scored strand files.

Records are ordered by ScoreRecord.priority, highest first. The tier
weights let name_match_rate dominate, then name_pos_match_rate, then
strand_match_rate, with plus_match_rate as a final tie breaker.
"""

import math
from collections.abc import Iterable, Iterator

from strand_matcher.models import ScoreRecord

# Priorities closer than this are reported as ties
PRIORITY_EPSILON = 1e-5


def records_tied(a: ScoreRecord, b: ScoreRecord, epsilon: float = PRIORITY_EPSILON) -> bool:
    """Check whether two records are indistinguishable by priority.

    Used for reporting only; ordering always uses the exact priority.
    """
    return abs(a.priority - b.priority) < epsilon


class Ranker:
    """Collects score records and yields them best first.

    Equal priorities keep the order in which records were added.

    Usage:
        ranker = Ranker()
        for record in records:
            ranker.add(record)
        for record in ranker:
            print(record.name)
    """

    def __init__(self, records: Iterable[ScoreRecord] = ()) -> None:
        self._records: list[ScoreRecord] = []
        for record in records:
            self.add(record)

    def add(self, record: ScoreRecord) -> None:
        """Add a scored strand file.

        Raises:
            ValueError: If the record's priority is not finite
        """
        if not math.isfinite(record.priority):
            raise ValueError(f"Non-finite priority for strand file '{record.name}'")
        self._records.append(record)

    def ranked(self) -> list[ScoreRecord]:
        """Return all records in descending priority order."""
        return sorted(self._records, key=lambda record: record.priority, reverse=True)

    def __iter__(self) -> Iterator[ScoreRecord]:
        return iter(self.ranked())

    def __len__(self) -> int:
        return len(self._records)
