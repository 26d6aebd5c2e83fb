"""Utility functions for chromosome codes and allele orientation.

Chromosome tokens are reduced to integer codes so that downstream comparison
is a plain integer check. Allele helpers implement the complement table used
to detect strand flips (A<->T, C<->G).
"""

# Complement lookup table for DNA bases
COMPLEMENT: dict[str, str] = {
    "A": "T",
    "T": "A",
    "C": "G",
    "G": "C",
}

# Anything that is not a plain base complements to this
UNKNOWN_ALLELE = "X"

# Codes for non-numeric chromosomes (PLINK numbering)
CHROMOSOME_CODES: dict[str, int] = {
    "X": 23,
    "Y": 24,
    "XY": 25,
    "M": 26,
    "MT": 26,
}


def normalize_chromosome(chr_val: str) -> int:
    """Convert a chromosome token to its integer code.

    Numeric tokens are returned as integers. The symbolic tokens X, Y, XY,
    M and MT map to the PLINK codes 23-26. Anything else, including "chr"
    prefixed or lower-case tokens, maps to 0 so that a bad token never
    aborts a parse.

    Args:
        chr_val: Chromosome token from a BIM or strand file

    Returns:
        Integer chromosome code (0 for unrecognized tokens)

    Example:
        >>> normalize_chromosome("7")
        7
        >>> normalize_chromosome("X")
        23
        >>> normalize_chromosome("chrX")
        0
        >>> normalize_chromosome("bogus")
        0
    """
    token = chr_val.strip()

    if token.isascii() and token.isdigit():
        return int(token)

    return CHROMOSOME_CODES.get(token, 0)


def complement(allele: str) -> str:
    """Get the complement of a single allele.

    Args:
        allele: Allele token

    Returns:
        Complementary base, or "X" for anything that is not A, C, G or T

    Example:
        >>> complement("A")
        "T"
        >>> complement("0")
        "X"
    """
    return COMPLEMENT.get(allele, UNKNOWN_ALLELE)


def flip_alleles(alleles: tuple[str, str]) -> tuple[str, str]:
    """Get the complement of both alleles of a pair.

    Example:
        >>> flip_alleles(("T", "C"))
        ("A", "G")
    """
    a1, a2 = alleles
    return complement(a1), complement(a2)


def alleles_match(p: tuple[str, str], q: tuple[str, str]) -> bool:
    """Check that every allele of ``p`` occurs somewhere in ``q``.

    Order-insensitive containment, not multiset equality: ("A", "A")
    matches ("A", "G").

    Args:
        p: Allele pair to look for
        q: Allele pair to look in

    Returns:
        True if each element of p appears in q
    """
    return all(allele in q for allele in p)


def is_self_complementary(alleles: tuple[str, str]) -> bool:
    """Check if an allele pair cannot be oriented from its alleles alone.

    True for A/T and C/G pairs, whose complement is the same pair. Uses
    the same containment predicate as :func:`alleles_match`, so the missing
    allele sentinel ("X", "X") also counts as self-complementary.

    Example:
        >>> is_self_complementary(("A", "T"))
        True
        >>> is_self_complementary(("A", "G"))
        False
    """
    return alleles_match(alleles, flip_alleles(alleles))


def parse_position(token: str) -> int | None:
    """Parse a base pair position.

    Args:
        token: Position field

    Returns:
        The position, or None if the token is not a non-negative integer
    """
    if token.isascii() and token.isdigit():
        return int(token)
    return None
