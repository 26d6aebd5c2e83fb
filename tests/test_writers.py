"""Tests for the score table and JSON report writers."""

import io
import json
from pathlib import Path

from strand_matcher.config import Config
from strand_matcher.models import MatchCounts, ScanResult, ScoreRecord
from strand_matcher.writers.report import ReportWriter
from strand_matcher.writers.table import (
    TABLE_COLUMNS,
    format_row,
    write_score_file,
    write_score_table,
)


def sample_records() -> list[ScoreRecord]:
    counts = MatchCounts(
        total=4,
        name_matches=4,
        name_pos_matches=4,
        strand_matches=3,
        atcg_matches=1,
    )
    return [
        ScoreRecord.from_counts("chipA.strand", counts),
        ScoreRecord(name="chipB.strand", name_match_rate=0.5, plus_match_rate=1.0),
    ]


class TestScoreTable:
    """Tests for the TSV table writer."""

    def test_header(self) -> None:
        stream = io.StringIO()
        write_score_table([], stream)
        assert stream.getvalue() == (
            "strand\tname_match_rate\tpos_match_rate\t"
            "original_match_rate\tplus_match_rate\tatcg_match_rate\n"
        )

    def test_rows_in_given_order(self) -> None:
        stream = io.StringIO()
        rows = write_score_table(sample_records(), stream)

        lines = stream.getvalue().splitlines()
        assert rows == 2
        assert len(lines) == 3
        assert lines[1].split("\t")[0] == "chipA.strand"
        assert lines[2].split("\t")[0] == "chipB.strand"

    def test_format_row(self) -> None:
        row = format_row(sample_records()[0]).split("\t")

        assert len(row) == len(TABLE_COLUMNS)
        assert row == [
            "chipA.strand",
            "1.000000",
            "1.000000",
            "1.000000",
            "0.000000",
            "0.250000",
        ]

    def test_original_column_is_strand_match_rate(self) -> None:
        record = ScoreRecord(name="chip", strand_match_rate=0.125)
        assert format_row(record).split("\t")[3] == "0.125000"

    def test_write_file(self, tmp_path: Path) -> None:
        output = tmp_path / "out" / "scores.tsv"

        write_score_file(sample_records(), output)

        assert output.read_text().startswith("strand\t")
        assert len(output.read_text().splitlines()) == 3


class TestReportWriter:
    """Tests for the JSON report."""

    def test_write_report(self, tmp_path: Path) -> None:
        config = Config(
            bim_file=tmp_path / "data.bim",
            strand_dir=tmp_path,
            report_file=tmp_path / "report.json",
        )
        result = ScanResult(
            records=sample_records() + [ScoreRecord(name="")],
            archives={
                "chipA.strand": tmp_path / "chipA.zip",
                "chipB.strand": tmp_path / "chipB.zip",
            },
            skipped={tmp_path / "bad.zip": "bad.zip: not a valid ZIP archive"},
            extracted=[tmp_path / "chipA.strand"],
        )

        writer = ReportWriter(config)
        writer.write(tmp_path / "report.json", result, bim_variants=4)

        report = json.loads((tmp_path / "report.json").read_text())

        assert report["metadata"]["tool"] == "strand-matcher"
        assert report["metadata"]["bim_variants"] == 4
        assert report["metadata"]["input_files"]["bim_file"] == str(tmp_path / "data.bim")

        candidates = report["candidates"]
        assert [c["rank"] for c in candidates] == [1, 2, 3]
        assert candidates[0]["strand"] == "chipA.strand"
        assert candidates[0]["archive"] == str(tmp_path / "chipA.zip")
        assert candidates[0]["original_match_rate"] == 1.0
        assert candidates[0]["counts"]["strand_matches"] == 3
        assert candidates[0]["counts"]["mismatches"] == 0
        assert candidates[0]["priority"] == 9000.0
        assert candidates[2]["archive"] is None

        assert report["skipped"] == {str(tmp_path / "bad.zip"): "bad.zip: not a valid ZIP archive"}
        assert report["extracted"] == [str(tmp_path / "chipA.strand")]

    def test_archive_taken_from_record(self, tmp_path: Path) -> None:
        config = Config(bim_file=tmp_path / "data.bim", strand_dir=tmp_path)
        record = ScoreRecord(name="chip.strand", archive=tmp_path / "a.zip")
        result = ScanResult(records=[record], archives={"chip.strand": tmp_path / "b.zip"})

        candidates = ReportWriter(config).build_candidates(result)

        assert candidates[0].archive == str(tmp_path / "a.zip")

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        config = Config(bim_file=tmp_path / "data.bim", strand_dir=tmp_path)
        ReportWriter(config).write(tmp_path / "r.json", ScanResult(), bim_variants=0)

        assert [p.name for p in tmp_path.iterdir()] == ["r.json"]
