"""Data models for strand matching.

Variant records from the BIM file and from strand files, allele/strand
classification outcomes, per-candidate match counts and score records.
"""

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path

# Strand marker used when a strand file gives neither "+" nor "-"
UNKNOWN_STRAND = "*"

# Allele pair used when a strand file carries no allele columns
MISSING_ALLELES: tuple[str, str] = ("X", "X")

# Tier weights for the ranking priority
NAME_MATCH_WEIGHT = 4000.0
NAME_POS_MATCH_WEIGHT = 3000.0
STRAND_MATCH_WEIGHT = 2000.0
PLUS_MATCH_WEIGHT = 1.0


class AlleleMatch(Enum):
    """Relationship between BIM alleles and strand file alleles."""

    ORIGINAL = auto()
    PLUS = auto()
    ATCG = auto()
    MISMATCH = auto()


@dataclass(frozen=True, slots=True)
class SourceEntry:
    """Variant from the PLINK .bim file being identified.

    Attributes:
        name: Variant identifier (not guaranteed unique)
        chromosome: Chromosome code (see normalize_chromosome)
        position: Base pair position
        alleles: Allele pair, order carries no meaning
    """

    name: str
    chromosome: int
    position: int
    alleles: tuple[str, str]


@dataclass(frozen=True, slots=True)
class VariantEntry:
    """Variant from a chip strand file.

    Attributes:
        name: Variant identifier
        chromosome: Chromosome code
        position: Base pair position (0 if the file gave none)
        alleles: Allele pair, MISSING_ALLELES if the file has no allele columns
        strand: "+", "-" or UNKNOWN_STRAND
    """

    name: str
    chromosome: int
    position: int
    alleles: tuple[str, str] = MISSING_ALLELES
    strand: str = UNKNOWN_STRAND


def safe_ratio(numerator: int | float, denominator: int | float) -> float:
    """Divide, returning 0.0 when the result would not be finite."""
    if denominator == 0:
        return 0.0
    value = numerator / denominator
    return value if math.isfinite(value) else 0.0


@dataclass
class MatchCounts:
    """Running counts for one candidate strand file.

    Attributes:
        total: Number of BIM entries scored
        name_matches: BIM entries whose ID is in the strand file
        name_pos_matches: ID matches with the same chromosome and position
        strand_matches: Position matches with alleles as given
        plus_matches: Position matches after flipping a minus-strand entry
        atcg_matches: Position matches where both pairs are A/T or C/G
    """

    total: int = 0
    name_matches: int = 0
    name_pos_matches: int = 0
    strand_matches: int = 0
    plus_matches: int = 0
    atcg_matches: int = 0

    @property
    def oriented_matches(self) -> int:
        """Position matches that carry an orientation signal."""
        return self.name_pos_matches - self.atcg_matches

    @property
    def mismatches(self) -> int:
        """Position matches whose alleles did not match in any orientation."""
        return (
            self.name_pos_matches
            - self.strand_matches
            - self.plus_matches
            - self.atcg_matches
        )

    def add(self, outcome: AlleleMatch) -> None:
        """Record the allele outcome of one position match."""
        self.name_pos_matches += 1
        if outcome is AlleleMatch.ATCG:
            self.atcg_matches += 1
        elif outcome is AlleleMatch.ORIGINAL:
            self.strand_matches += 1
        elif outcome is AlleleMatch.PLUS:
            self.plus_matches += 1


@dataclass(frozen=True)
class ScoreRecord:
    """Match rates of the BIM file against one strand file.

    Every rate is finite; a non-finite value (division by zero) is stored
    as 0.0.

    Attributes:
        name: Strand file name inside its archive ("" if the archive had none)
        name_match_rate: name_matches / total
        name_pos_match_rate: name_pos_matches / name_matches
        strand_match_rate: strand_matches / (name_pos_matches - atcg_matches)
        plus_match_rate: plus_matches / (name_pos_matches - atcg_matches)
        atcg_match_rate: atcg_matches / name_pos_matches
        counts: Raw counts the rates were computed from
        archive: Archive the strand file was read from, if known
    """

    name: str
    name_match_rate: float = 0.0
    name_pos_match_rate: float = 0.0
    strand_match_rate: float = 0.0
    plus_match_rate: float = 0.0
    atcg_match_rate: float = 0.0
    counts: MatchCounts = field(default_factory=MatchCounts, compare=False)
    archive: Path | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        for rate_field in (
            "name_match_rate",
            "name_pos_match_rate",
            "strand_match_rate",
            "plus_match_rate",
            "atcg_match_rate",
        ):
            value = float(getattr(self, rate_field))
            if not math.isfinite(value):
                value = 0.0
            object.__setattr__(self, rate_field, value)

    @classmethod
    def from_counts(
        cls, name: str, counts: MatchCounts, archive: Path | None = None
    ) -> "ScoreRecord":
        """Build a record from raw counts."""
        return cls(
            name=name,
            name_match_rate=safe_ratio(counts.name_matches, counts.total),
            name_pos_match_rate=safe_ratio(counts.name_pos_matches, counts.name_matches),
            strand_match_rate=safe_ratio(counts.strand_matches, counts.oriented_matches),
            plus_match_rate=safe_ratio(counts.plus_matches, counts.oriented_matches),
            atcg_match_rate=safe_ratio(counts.atcg_matches, counts.name_pos_matches),
            counts=counts,
            archive=archive,
        )

    @property
    def priority(self) -> float:
        """Weighted ranking score; atcg_match_rate does not contribute."""
        return (
            self.name_match_rate * NAME_MATCH_WEIGHT
            + self.name_pos_match_rate * NAME_POS_MATCH_WEIGHT
            + self.strand_match_rate * STRAND_MATCH_WEIGHT
            + self.plus_match_rate * PLUS_MATCH_WEIGHT
        )


@dataclass
class ScanResult:
    """Outcome of scanning a directory of strand archives.

    Attributes:
        records: Score records in descending rank order
        archives: Strand file name -> last archive it was read from (reporting only)
        skipped: Archive path -> error message for archives that failed
        extracted: Strand files written by the extraction step
    """

    records: list[ScoreRecord] = field(default_factory=list)
    archives: dict[str, Path] = field(default_factory=dict)
    skipped: dict[Path, str] = field(default_factory=dict)
    extracted: list[Path] = field(default_factory=list)

    @property
    def best(self) -> ScoreRecord | None:
        """Top ranked record, if any archive was scored."""
        return self.records[0] if self.records else None
