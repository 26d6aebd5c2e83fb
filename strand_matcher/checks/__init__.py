"""Allele classification and per-candidate scoring."""

from strand_matcher.checks.scorer import score_candidate
from strand_matcher.checks.strand import classify_alleles

__all__ = ["classify_alleles", "score_candidate"]
