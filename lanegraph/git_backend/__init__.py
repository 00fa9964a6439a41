"""Commit history sources for the graph"""

from lanegraph.git_backend.commit_types import (
    GIT_LOG_FORMAT,
    CommitRecord,
    Ref,
    RefType,
    checked_out_branch,
    parse_log_output,
    parse_refs,
)
from lanegraph.git_backend.repository import HistoryRepository

__all__ = [
    "GIT_LOG_FORMAT",
    "CommitRecord",
    "HistoryRepository",
    "Ref",
    "RefType",
    "checked_out_branch",
    "parse_log_output",
    "parse_refs",
]
