"""Tests for file parsers."""

import gzip
import logging
from pathlib import Path

import pytest

from strand_matcher.exceptions import ParseError
from strand_matcher.models import MISSING_ALLELES, UNKNOWN_STRAND
from strand_matcher.parsers.bim import load_bim, parse_bim_lines
from strand_matcher.parsers.strand import parse_alleles, parse_strand_lines


class TestBimParser:
    """Tests for BIM file parser."""

    def test_parse_valid_bim(self, tmp_path: Path) -> None:
        """Test parsing a valid BIM file."""
        bim_file = tmp_path / "test.bim"
        bim_file.write_text(
            "1\trs123\t0\t10000\tA\tG\n"
            "1\trs456\t0\t20000\tC\tT\n"
            "X\trs789\t0.5\t30000\tG\tA\n"
        )

        variants = load_bim(bim_file)

        assert len(variants) == 3
        assert variants[0].name == "rs123"
        assert variants[0].chromosome == 1
        assert variants[0].position == 10000
        assert variants[0].alleles == ("A", "G")
        assert variants[2].chromosome == 23

    def test_keeps_file_order_and_duplicates(self) -> None:
        """Duplicate IDs are all kept, in file order."""
        variants = list(
            parse_bim_lines(
                [
                    "1 rs1 0 100 A G",
                    "2 rs2 0 200 C T",
                    "3 rs1 0 300 A C",
                ]
            )
        )
        assert [v.name for v in variants] == ["rs1", "rs2", "rs1"]
        assert [v.position for v in variants] == [100, 200, 300]

    def test_parse_lowercase_alleles(self) -> None:
        """Lowercase alleles are converted to uppercase."""
        variants = list(parse_bim_lines(["1\trs123\t0\t10000\ta\tg"]))
        assert variants[0].alleles == ("A", "G")

    def test_unknown_chromosome(self) -> None:
        """Unrecognized chromosome tokens give code 0, not an error."""
        variants = list(parse_bim_lines(["Un\trs1\t0\t100\tA\tG"]))
        assert variants[0].chromosome == 0

    def test_chr_prefixed_chromosome_not_matched_to_numeric(self) -> None:
        """A chr1 BIM line does not share a chromosome code with a strand line on 1."""
        bim_variant = next(parse_bim_lines(["chr1\trs1\t0\t100\tA\tG"]))
        strand_variant = parse_strand_lines(["rs1 1 100 100 + AG"], "chip.strand")["rs1"]

        assert bim_variant.chromosome == 0
        assert bim_variant.chromosome != strand_variant.chromosome

    def test_skips_blank_lines(self) -> None:
        variants = list(parse_bim_lines(["1 rs1 0 100 A G", "", "   ", "1 rs2 0 200 C T"]))
        assert len(variants) == 2

    def test_parse_missing_file(self, tmp_path: Path) -> None:
        """Test error on missing file."""
        with pytest.raises(FileNotFoundError):
            load_bim(tmp_path / "missing.bim")

    def test_too_few_columns(self, tmp_path: Path) -> None:
        """A short line aborts the load with file name and line number."""
        bim_file = tmp_path / "test.bim"
        bim_file.write_text("1\trs1\t0\t100\tA\tG\n1\trs123\t0\t10000\n")

        with pytest.raises(ParseError, match="expected 6 columns") as exc_info:
            load_bim(bim_file)

        assert exc_info.value.line_num == 2
        assert exc_info.value.filename == str(bim_file)
        assert str(bim_file) in str(exc_info.value)

    @pytest.mark.parametrize("position", ["abc", "-10", "1e5"])
    def test_bad_position_is_fatal(self, position: str) -> None:
        """Non-numeric positions are not recovered from."""
        with pytest.raises(ParseError, match="invalid position"):
            list(parse_bim_lines([f"1 rs1 0 {position} A G"]))

    def test_gzipped_bim(self, tmp_path: Path) -> None:
        """Gzipped BIM files are read transparently."""
        bim_file = tmp_path / "test.bim.gz"
        with gzip.open(bim_file, "wt") as f:
            f.write("1\trs1\t0\t100\tA\tG\n")

        variants = load_bim(bim_file)

        assert len(variants) == 1
        assert variants[0].name == "rs1"


class TestParseAlleles:
    """Tests for allele column handling in strand files."""

    def test_combined_token(self) -> None:
        assert parse_alleles(["AG"]) == ("A", "G")

    def test_separate_tokens(self) -> None:
        assert parse_alleles(["a", "g"]) == ("A", "G")

    def test_missing(self) -> None:
        assert parse_alleles([]) == MISSING_ALLELES

    def test_unusable_single_token(self) -> None:
        """A lone token that is not two characters gives the sentinel."""
        assert parse_alleles(["A"]) == MISSING_ALLELES
        assert parse_alleles(["AGT"]) == MISSING_ALLELES


class TestStrandParser:
    """Tests for strand file parser."""

    def test_parse_rayner_format(self) -> None:
        """Test the six column Rayner layout."""
        variants = parse_strand_lines(
            [
                "rs1\t1\t1000\t100\t+\tAG\n",
                "rs2\tX\t2000\t98.5\t-\tCT\n",
            ]
        )

        assert set(variants) == {"rs1", "rs2"}
        assert variants["rs1"].chromosome == 1
        assert variants["rs1"].position == 1000
        assert variants["rs1"].strand == "+"
        assert variants["rs1"].alleles == ("A", "G")
        assert variants["rs2"].chromosome == 23
        assert variants["rs2"].strand == "-"
        assert variants["rs2"].alleles == ("C", "T")

    def test_two_allele_columns(self) -> None:
        variants = parse_strand_lines(["rs1 1 1000 100 - T C"])
        assert variants["rs1"].alleles == ("T", "C")

    def test_missing_alleles_use_sentinel(self) -> None:
        """Strand files without allele columns give ('X', 'X')."""
        variants = parse_strand_lines(["rs1 1 1000 100 +"])
        assert variants["rs1"].alleles == ("X", "X")

    def test_lenient_position(self) -> None:
        """Unparseable positions default to 0."""
        variants = parse_strand_lines(["rs1 1 NA 100 + AG", "rs2 1 -4 100 + AG"])
        assert variants["rs1"].position == 0
        assert variants["rs2"].position == 0

    def test_unknown_strand_marker(self) -> None:
        variants = parse_strand_lines(["rs1 1 1000 100 ? AG"])
        assert variants["rs1"].strand == UNKNOWN_STRAND

    def test_duplicates_last_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        """The last occurrence of a duplicate ID is kept and reported."""
        with caplog.at_level(logging.DEBUG, logger="strand_matcher"):
            variants = parse_strand_lines(
                [
                    "rs1 1 1000 100 + AG",
                    "rs1 2 2000 100 - CT",
                ],
                filename="chip.strand",
            )

        assert len(variants) == 1
        assert variants["rs1"].position == 2000
        assert variants["rs1"].strand == "-"
        assert "duplicate variant IDs" in caplog.text

    def test_missing_strand_column_is_fatal(self) -> None:
        with pytest.raises(ParseError, match="expected at least 5 columns") as exc_info:
            parse_strand_lines(["rs1 1 1000 100 + AG", "rs2 1 2000 100"], filename="chip.strand")
        assert exc_info.value.line_num == 2
        assert "chip.strand" in str(exc_info.value)

    def test_empty_body(self) -> None:
        assert parse_strand_lines([]) == {}
