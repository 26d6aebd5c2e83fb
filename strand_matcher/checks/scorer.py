"""Scoring of a BIM file against one strand file.

Processing flow per BIM variant:
1. Look the ID up in the strand file
2. Require the same chromosome and position
3. Classify the alleles and count the outcome
"""

from collections.abc import Mapping, Sequence
from pathlib import Path

from strand_matcher.checks.strand import classify_alleles
from strand_matcher.models import MatchCounts, ScoreRecord, SourceEntry, VariantEntry


def count_matches(
    bim_variants: Sequence[SourceEntry],
    strand_variants: Mapping[str, VariantEntry],
) -> MatchCounts:
    """Count ID, position and allele matches.

    Args:
        bim_variants: All variants from the BIM file
        strand_variants: ID -> VariantEntry mapping of one strand file

    Returns:
        MatchCounts for this strand file
    """
    counts = MatchCounts(total=len(bim_variants))

    for variant in bim_variants:
        strand_variant = strand_variants.get(variant.name)
        if strand_variant is None:
            continue

        counts.name_matches += 1

        if (
            strand_variant.chromosome != variant.chromosome
            or strand_variant.position != variant.position
        ):
            continue

        outcome = classify_alleles(
            variant.alleles,
            strand_variant.alleles,
            strand_variant.strand,
        )
        counts.add(outcome)

    return counts


def score_candidate(
    bim_variants: Sequence[SourceEntry],
    strand_name: str,
    strand_variants: Mapping[str, VariantEntry],
    archive: Path | None = None,
) -> ScoreRecord:
    """Score one strand file against the BIM file.

    An empty strand file (or an archive without one) scores 0.0 on every
    rate.

    Args:
        bim_variants: All variants from the BIM file
        strand_name: Name of the strand file inside its archive
        strand_variants: ID -> VariantEntry mapping of that strand file
        archive: Archive the strand file came from

    Returns:
        ScoreRecord with five finite match rates
    """
    counts = count_matches(bim_variants, strand_variants)
    return ScoreRecord.from_counts(strand_name, counts, archive=archive)
