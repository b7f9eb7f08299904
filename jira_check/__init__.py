"""Jira issue reference check for pull and merge requests"""

from .check import main, run_check
from .config import CheckConfig, ConfigurationError, SourceSelector
from .finder import find_jira_issues, should_skip_jira
from .patterns import build_key_pattern
from .reporter import Outcome, ReportSink, build_missing_message, report
from .sources import GitHubReviewSource, GitLabReviewSource, ReviewSource, StaticReviewSource

__all__ = [
    "CheckConfig",
    "ConfigurationError",
    "GitHubReviewSource",
    "GitLabReviewSource",
    "Outcome",
    "ReportSink",
    "ReviewSource",
    "SourceSelector",
    "StaticReviewSource",
    "build_key_pattern",
    "build_missing_message",
    "find_jira_issues",
    "main",
    "report",
    "run_check",
    "should_skip_jira",
]
