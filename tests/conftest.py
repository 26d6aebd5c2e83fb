"""Pytest fixtures for strand_matcher tests."""

import zipfile
from pathlib import Path

import pytest

from strand_matcher.logging_config import reset_logging


def make_archive(path: Path, members: dict[str, str]) -> Path:
    """Write a ZIP archive with the given member names and text contents."""
    with zipfile.ZipFile(path, "w") as archive:
        for name, content in members.items():
            archive.writestr(name, content)
    return path


@pytest.fixture
def archive_factory():
    """Return the helper that writes a ZIP archive from a name -> text dict."""
    return make_archive


@pytest.fixture(autouse=True)
def clean_logging():
    """Drop handlers installed by setup_logging between tests."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def sample_bim(tmp_path: Path) -> Path:
    """Create a BIM file with four variants.

    - rs1: A/G
    - rs2: A/T (palindromic)
    - rs3: C/T
    - rs4: G/A on chromosome X
    """
    bim = tmp_path / "sample.bim"
    bim.write_text(
        "1\trs1\t0\t1000\tA\tG\n"
        "1\trs2\t0\t2000\tA\tT\n"
        "2\trs3\t0\t3000\tC\tT\n"
        "X\trs4\t0\t4000\tG\tA\n"
    )
    return bim


@pytest.fixture
def strand_dir(tmp_path: Path) -> Path:
    """Create a directory with three strand archives.

    - chipA: every variant present at the right position, plus strand
    - chipB: two variants, one at a wrong position, one on the minus strand
    - chipC: no strand file at all
    """
    directory = tmp_path / "strands"
    directory.mkdir()

    make_archive(
        directory / "chipA.zip",
        {
            "chipA-b37.strand": (
                "rs1\t1\t1000\t100\t+\tAG\n"
                "rs2\t1\t2000\t100\t+\tAT\n"
                "rs3\t2\t3000\t100\t+\tCT\n"
                "rs4\tX\t4000\t100\t+\tAG\n"
            ),
            "chipA-b37.miss": "",
        },
    )
    make_archive(
        directory / "chipB.zip",
        {
            "chipB-b37.strand": (
                "rs1\t1\t1000\t100\t-\tTC\n"
                "rs3\t2\t9999\t100\t+\tCT\n"
            ),
        },
    )
    make_archive(directory / "chipC.zip", {"README.txt": "no strand file here\n"})

    return directory
