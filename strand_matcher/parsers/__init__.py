"""Parsers for PLINK BIM files and chip strand files."""

from strand_matcher.parsers.bim import load_bim, parse_bim_lines
from strand_matcher.parsers.strand import parse_alleles, parse_strand_lines

__all__ = [
    "load_bim",
    "parse_bim_lines",
    "parse_alleles",
    "parse_strand_lines",
]
