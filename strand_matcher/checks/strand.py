"""Allele and strand classification.

The check has 4 possible outcomes, tested in this order:
ATCG     - both pairs are A/T or C/G, orientation cannot be told from alleles
ORIGINAL - strand file alleles match the BIM alleles as given
PLUS     - minus-strand alleles match once complemented to the plus strand
MISMATCH - no match in any orientation
"""

from strand_matcher.models import AlleleMatch
from strand_matcher.utils import alleles_match, flip_alleles, is_self_complementary


def classify_alleles(
    bim_alleles: tuple[str, str],
    strand_alleles: tuple[str, str],
    strand: str,
) -> AlleleMatch:
    """Classify how strand file alleles relate to BIM alleles.

    The ATCG check comes first: an A/T or C/G pair matches itself under
    complementation, so an ORIGINAL match on such a site says nothing
    about orientation.

    Args:
        bim_alleles: Allele pair from the BIM file
        strand_alleles: Allele pair from the strand file
        strand: Strand marker from the strand file ("+", "-" or "*")

    Returns:
        AlleleMatch outcome

    Example:
        >>> classify_alleles(("A", "G"), ("T", "C"), "-")
        <AlleleMatch.PLUS: 2>
    """
    if is_self_complementary(bim_alleles) and is_self_complementary(strand_alleles):
        return AlleleMatch.ATCG

    if alleles_match(bim_alleles, strand_alleles):
        return AlleleMatch.ORIGINAL

    if strand == "-" and alleles_match(bim_alleles, flip_alleles(strand_alleles)):
        return AlleleMatch.PLUS

    return AlleleMatch.MISMATCH
