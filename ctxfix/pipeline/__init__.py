"""Pipeline orchestration and console output."""

from .runner import FileResult, RunReport, run

__all__ = [
    "FileResult",
    "RunReport",
    "run",
]
