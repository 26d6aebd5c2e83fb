"""Configuration dataclass for the strand matcher."""

from dataclasses import dataclass
from pathlib import Path

from strand_matcher.archive import DEFAULT_STRAND_SUFFIX


@dataclass
class Config:
    """Configuration for one chip detection run.

    Attributes:
        bim_file: Path to PLINK .bim file (may be gzipped)
        strand_dir: Directory containing strand ZIP archives
        output_file: TSV output path (stdout if None)
        extract_count: Number of best matching strand files to extract
        extract_dir: Directory for extracted strand files
        report_file: JSON report path (no report if None)
        strand_suffix: Name suffix identifying the strand file in an archive
        fail_fast: Abort the run on the first unreadable archive
        verbose: Enable verbose logging
        log_file: Optional log file with full debug output
    """

    bim_file: Path
    strand_dir: Path

    # Outputs
    output_file: Path | None = None
    extract_count: int = 0
    extract_dir: Path | None = None
    report_file: Path | None = None

    # Behavior
    strand_suffix: str = DEFAULT_STRAND_SUFFIX
    fail_fast: bool = False
    verbose: bool = False
    log_file: Path | None = None

    def __post_init__(self) -> None:
        """Coerce paths and set defaults."""
        self.bim_file = Path(self.bim_file)
        self.strand_dir = Path(self.strand_dir)

        if self.output_file is not None:
            self.output_file = Path(self.output_file)
        if self.report_file is not None:
            self.report_file = Path(self.report_file)
        if self.log_file is not None:
            self.log_file = Path(self.log_file)

        # Extract into the current directory unless told otherwise
        if self.extract_dir is None:
            self.extract_dir = Path.cwd()
        else:
            self.extract_dir = Path(self.extract_dir)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors: list[str] = []

        if not self.bim_file.exists():
            errors.append(f"BIM file not found: {self.bim_file}")
        elif not self.bim_file.is_file():
            errors.append(f"BIM path is not a file: {self.bim_file}")

        if not self.strand_dir.exists():
            errors.append(f"Strand directory not found: {self.strand_dir}")
        elif not self.strand_dir.is_dir():
            errors.append(f"Strand path is not a directory: {self.strand_dir}")

        if self.extract_count < 0:
            errors.append(f"extract_count must not be negative: {self.extract_count}")

        if not self.strand_suffix:
            errors.append("strand_suffix must not be empty")

        return errors
