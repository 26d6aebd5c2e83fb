"""Typer CLI for the strand matcher.

Usage:
    # Rank all strand archives, table to stdout
    strand-matcher data.bim strand_archives/

    # Write the table to a file and extract the two best strand files
    strand-matcher data.bim strand_archives/ -o matches.tsv -e 2

    # Verbose progress plus a JSON report
    strand-matcher data.bim strand_archives/ -v --report-file report.json
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from strand_matcher import __version__

app = typer.Typer(
    name="strand-matcher",
    help="Guess the genotyping chip of a PLINK .bim file from Will Rayner strand archives",
    add_completion=False,
)

# stdout carries the score table
console = Console(stderr=True)


@app.command()
def match(
    bim: Annotated[
        Path,
        typer.Argument(
            help="PLINK .bim file to guess the chip type for",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    strand_dir: Annotated[
        Path,
        typer.Argument(
            help="Directory containing strand ZIP archives",
            exists=True,
            file_okay=False,
            dir_okay=True,
            readable=True,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output", "-o",
            help="Write the score table to this file instead of stdout",
            dir_okay=False,
        ),
    ] = None,
    extract: Annotated[
        int,
        typer.Option(
            "--extract", "-e",
            help="Extract the strand files of the N best matches",
            min=0,
        ),
    ] = 0,
    extract_dir: Annotated[
        Path | None,
        typer.Option(
            "--extract-dir",
            help="Directory for extracted strand files (default: current directory)",
            file_okay=False,
            dir_okay=True,
        ),
    ] = None,
    report_file: Annotated[
        Path | None,
        typer.Option(
            "--report-file",
            help="Write a JSON report with rates and raw counts",
            dir_okay=False,
        ),
    ] = None,
    suffix: Annotated[
        str,
        typer.Option(
            "--suffix",
            help="Name suffix of the strand file inside each archive",
        ),
    ] = ".strand",
    fail_fast: Annotated[
        bool,
        typer.Option(
            "--fail-fast",
            help="Abort on the first unreadable archive instead of skipping it",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-v",
            help="Be verbose and print progress details",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write a detailed debug log to this file",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Rank strand archives by how well they match a PLINK .bim file.

    For each archive the strand file is compared with the BIM file on
    variant ID, position and alleles. The table lists every archive's
    strand file, best match first:

        strand  name_match_rate  pos_match_rate  original_match_rate
        plus_match_rate  atcg_match_rate
    """
    from strand_matcher.config import Config
    from strand_matcher.logging_config import setup_logging
    from strand_matcher.main import run_scan

    setup_logging(verbose=verbose, log_file=log_file)

    console.print(f"[bold]Strand matcher[/bold] v{__version__}\n", style="blue")

    config = Config(
        bim_file=bim,
        strand_dir=strand_dir,
        output_file=output,
        extract_count=extract,
        extract_dir=extract_dir,
        report_file=report_file,
        strand_suffix=suffix,
        fail_fast=fail_fast,
        verbose=verbose,
        log_file=log_file,
    )

    errors = config.validate()
    if errors:
        for error in errors:
            console.print(f"[red]ERROR:[/red] {error}")
        raise typer.Exit(code=1)

    try:
        run_scan(config, console=console)
    except Exception as e:
        console.print(f"[red]ERROR:[/red] {e}")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
