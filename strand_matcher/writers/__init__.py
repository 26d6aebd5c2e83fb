"""Output writers for the score table and JSON report."""

from strand_matcher.writers.report import ReportWriter
from strand_matcher.writers.table import write_score_file, write_score_table

__all__ = ["ReportWriter", "write_score_file", "write_score_table"]
