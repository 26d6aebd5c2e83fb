"""Main orchestration for the strand matcher.

Implements run_scan(), which coordinates all components: loading the BIM
file, scoring every strand archive, ranking, writing the score table,
extracting the best strand files and writing the JSON report.
"""

import logging
import sys
import zipfile
from collections.abc import Callable, Sequence
from pathlib import Path, PurePosixPath

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from strand_matcher.archive import (
    DEFAULT_STRAND_SUFFIX,
    extract_strand_file,
    list_strand_archives,
    read_strand_archive,
)
from strand_matcher.checks.scorer import score_candidate
from strand_matcher.config import Config
from strand_matcher.exceptions import ArchiveError, ConfigurationError, ParseError
from strand_matcher.models import ScanResult, SourceEntry
from strand_matcher.parsers.bim import load_bim
from strand_matcher.ranking import Ranker, records_tied
from strand_matcher.writers.report import ReportWriter
from strand_matcher.writers.table import write_score_file, write_score_table

logger = logging.getLogger(__name__)

# Per-archive failures that skip the archive instead of aborting the run
ARCHIVE_ERRORS = (ArchiveError, ParseError, OSError, zipfile.LargeZipFile)


def score_archives(
    bim_variants: Sequence[SourceEntry],
    archive_paths: Sequence[Path],
    suffix: str = DEFAULT_STRAND_SUFFIX,
    fail_fast: bool = False,
    on_archive: Callable[[Path], None] | None = None,
) -> ScanResult:
    """Score every archive against the BIM variants and rank the results.

    Archives are processed one at a time; each strand mapping is dropped
    once its score is computed.

    Args:
        bim_variants: Variants loaded from the BIM file
        archive_paths: Strand archives to score
        suffix: Strand file name suffix inside the archives
        fail_fast: Re-raise the first archive error instead of skipping
        on_archive: Called after each archive, e.g. to advance a progress bar

    Returns:
        ScanResult with ranked records, archive mapping and skipped archives

    Raises:
        ArchiveError, ParseError, OSError: Only when fail_fast is set
    """
    ranker = Ranker()
    result = ScanResult()

    for archive_path in archive_paths:
        try:
            strand_name, strand_variants = read_strand_archive(archive_path, suffix)
        except ARCHIVE_ERRORS as e:
            if fail_fast:
                raise
            logger.warning(f"Skipping {archive_path.name}: {e}")
            result.skipped[archive_path] = str(e)
        else:
            record = score_candidate(
                bim_variants, strand_name, strand_variants, archive=archive_path
            )
            ranker.add(record)

            if strand_name:
                previous = result.archives.get(strand_name)
                if previous is not None:
                    logger.warning(
                        f"Strand file {strand_name} found in both {previous.name} "
                        f"and {archive_path.name}; each candidate keeps its own archive"
                    )
                result.archives[strand_name] = archive_path

            logger.debug(
                f"{archive_path.name}: name {record.name_match_rate:.4f}, "
                f"pos {record.name_pos_match_rate:.4f}, "
                f"original {record.strand_match_rate:.4f}, "
                f"plus {record.plus_match_rate:.4f}"
            )
        finally:
            if on_archive is not None:
                on_archive(archive_path)

    result.records = ranker.ranked()
    return result


def extract_best(
    result: ScanResult,
    count: int,
    dest_dir: Path,
    fail_fast: bool = False,
) -> list[Path]:
    """Extract the strand files of the ``count`` best ranked candidates.

    Each file is extracted from the archive its record was scored from.
    Candidates without a strand file, and candidates whose file name was
    already extracted from a better ranked archive, are passed over and do
    not use up the count.

    Args:
        result: Ranked scan result
        count: Number of strand files to extract
        dest_dir: Directory for extracted files
        fail_fast: Re-raise extraction errors instead of logging them

    Returns:
        Paths of the extracted files, best first
    """
    extracted: list[Path] = []
    if count <= 0:
        return extracted

    # Output file name -> archive it was extracted from
    taken: dict[str, Path] = {}
    attempted = 0

    for record in result.records:
        if attempted >= count:
            break
        archive_path = record.archive
        if not record.name or archive_path is None:
            continue

        target_name = PurePosixPath(record.name).name
        if target_name in taken:
            logger.warning(
                f"Not extracting {record.name} from {archive_path.name}: "
                f"{target_name} was already extracted from {taken[target_name].name}"
            )
            continue
        taken[target_name] = archive_path
        attempted += 1

        try:
            path = extract_strand_file(archive_path, record.name, dest_dir)
        except ARCHIVE_ERRORS as e:
            if fail_fast:
                raise
            logger.error(f"Could not extract {record.name}: {e}")
            continue
        logger.info(f"Extracted {record.name} from {archive_path.name} to {path}")
        extracted.append(path)

    return extracted


def run_scan(config: Config, console: Console | None = None) -> ScanResult:
    """Run a full chip detection.

    Main entry point that coordinates:
    1. Loading the BIM file
    2. Listing strand archives
    3. Scoring and ranking every archive
    4. Writing the score table (file or stdout)
    5. Extracting the best strand files (if requested)
    6. Writing the JSON report (if requested)

    Args:
        config: Run configuration
        console: Rich console for progress output (stderr by default)

    Returns:
        ScanResult of the run

    Raises:
        ConfigurationError: If the configuration does not validate
        ParseError: If the BIM file is malformed
        ArchiveError: On an unreadable archive when fail_fast is set
    """
    errors = config.validate()
    if errors:
        raise ConfigurationError("; ".join(errors))

    console = console or Console(stderr=True)
    report_writer = ReportWriter(config) if config.report_file else None

    # Step 1: Load BIM file
    console.print(f"Reading {config.bim_file.name}")
    bim_variants = load_bim(config.bim_file)
    console.print(f"Loaded {len(bim_variants):,} variants\n")
    if not bim_variants:
        logger.warning(f"{config.bim_file} contains no variants; every rate will be 0")

    # Step 2: List strand archives
    archive_paths = list_strand_archives(config.strand_dir)
    console.print(f"Found {len(archive_paths):,} archives in {config.strand_dir}\n")

    # Step 3: Score archives
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Scanning archives...", total=len(archive_paths))

        def advance(archive_path: Path) -> None:
            progress.update(task, description=f"Scanned {archive_path.name}")
            progress.advance(task)

        result = score_archives(
            bim_variants,
            archive_paths,
            suffix=config.strand_suffix,
            fail_fast=config.fail_fast,
            on_archive=advance,
        )

    if len(result.records) > 1 and records_tied(result.records[0], result.records[1]):
        logger.warning(
            f"Top candidates {result.records[0].name} and {result.records[1].name} "
            f"are tied"
        )

    # Step 4: Write score table
    if config.output_file is not None:
        write_score_file(result.records, config.output_file)
        console.print(f"Score table written to {config.output_file}")
    else:
        write_score_table(result.records, sys.stdout)
        sys.stdout.flush()

    # Step 5: Extract best strand files
    assert config.extract_dir is not None  # Set in Config.__post_init__
    result.extracted = extract_best(
        result,
        config.extract_count,
        config.extract_dir,
        fail_fast=config.fail_fast,
    )
    for path in result.extracted:
        console.print(f"Extracted {path}")

    # Step 6: Write JSON report
    if report_writer and config.report_file:
        report_writer.write(config.report_file, result, len(bim_variants))
        console.print(f"Report written to {config.report_file}")

    # Summary
    if result.skipped:
        console.print(f"\n[yellow]Skipped {len(result.skipped)} archive(s):[/yellow]")
        for path, reason in result.skipped.items():
            console.print(f"  {path.name}: {reason}")

    best = result.best
    if best is not None and best.name:
        console.print(
            f"\n[green]Best match: {best.name}[/green] "
            f"(name {best.name_match_rate:.4f}, pos {best.name_pos_match_rate:.4f})"
        )

    return result
