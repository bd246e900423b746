"""
Service module initialization
"""

from .pipeline import PageRankTiming, PipelineResult, run_from_config, run_pipeline, run_schemes
from .report import RunEntry, append_run_entry, parse_run_entries, render_report, verify_run_entry

__all__ = [
    "PageRankTiming",
    "PipelineResult",
    "run_from_config",
    "run_pipeline",
    "run_schemes",
    "RunEntry",
    "append_run_entry",
    "parse_run_entries",
    "render_report",
    "verify_run_entry",
]
