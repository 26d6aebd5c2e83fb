"""JSON report writer.

Records metadata, every candidate's rates and raw counts, skipped archives
and extracted files for audit and reproducibility.
"""

import json
import tempfile
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path

from strand_matcher import __version__
from strand_matcher.config import Config
from strand_matcher.models import ScanResult, ScoreRecord


@dataclass
class CandidateReport:
    """Single strand file entry for JSON output.

    Attributes:
        rank: 1-based position in the ranking
        strand: Strand file name inside its archive
        archive: Archive the strand file was read from
        priority: Weighted ranking score
        name_match_rate: ID match rate
        pos_match_rate: ID + position match rate
        original_match_rate: Alleles match as given
        plus_match_rate: Alleles match after flipping minus strand
        atcg_match_rate: A/T or C/G share of position matches
        counts: Raw counts behind the rates
    """

    rank: int
    strand: str
    archive: str | None
    priority: float
    name_match_rate: float
    pos_match_rate: float
    original_match_rate: float
    plus_match_rate: float
    atcg_match_rate: float
    counts: dict


class ReportWriter:
    """Builds and writes the JSON report for one run.

    Created before scanning so the report can state the run duration.

    Usage:
        writer = ReportWriter(config)
        ...  # scan and rank
        writer.write(config.report_file, result, len(bim_variants))
    """

    def __init__(self, config: Config) -> None:
        """Initialize report writer.

        Args:
            config: Run configuration
        """
        self.config = config
        self.start_time = datetime.now()

    def build_candidates(self, result: ScanResult) -> list[CandidateReport]:
        """Convert ranked records into report entries."""
        return [
            self._candidate(
                rank, record, record.archive or result.archives.get(record.name)
            )
            for rank, record in enumerate(result.records, 1)
        ]

    @staticmethod
    def _candidate(rank: int, record: ScoreRecord, archive: Path | None) -> CandidateReport:
        counts = asdict(record.counts)
        counts["mismatches"] = record.counts.mismatches
        return CandidateReport(
            rank=rank,
            strand=record.name,
            archive=str(archive) if archive is not None and record.name else None,
            priority=record.priority,
            name_match_rate=record.name_match_rate,
            pos_match_rate=record.name_pos_match_rate,
            original_match_rate=record.strand_match_rate,
            plus_match_rate=record.plus_match_rate,
            atcg_match_rate=record.atcg_match_rate,
            counts=counts,
        )

    def write(self, output_path: Path, result: ScanResult, bim_variants: int) -> None:
        """Write complete JSON report atomically.

        Writes to a temporary file first, then renames to prevent
        partial files on interruption.

        Args:
            output_path: Path for JSON report file
            result: Outcome of the scan
            bim_variants: Number of variants loaded from the BIM file
        """
        end_time = datetime.now()
        duration = (end_time - self.start_time).total_seconds()

        metadata = {
            "version": __version__,
            "tool": "strand-matcher",
            "timestamp": end_time.isoformat(),
            "duration_seconds": duration,
            "input_files": {
                "bim_file": str(self.config.bim_file),
                "strand_dir": str(self.config.strand_dir),
            },
            "bim_variants": bim_variants,
            "options": {
                "strand_suffix": self.config.strand_suffix,
                "extract_count": self.config.extract_count,
                "fail_fast": self.config.fail_fast,
            },
        }

        report_dict = {
            "metadata": metadata,
            "candidates": [asdict(c) for c in self.build_candidates(result)],
            "skipped": {str(path): reason for path, reason in result.skipped.items()},
            "extracted": [str(path) for path in result.extracted],
        }

        output_path.parent.mkdir(parents=True, exist_ok=True)

        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=output_path.parent,
            suffix=".json.tmp",
            delete=False,
        ) as tmp:
            json.dump(report_dict, tmp, indent=2)
            tmp_path = Path(tmp.name)

        tmp_path.replace(output_path)
