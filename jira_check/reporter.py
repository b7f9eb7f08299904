"""
Rendering of found issues and dispatch of messages, warnings and failures
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

import requests

from .config import SourceSelector

logger = logging.getLogger(__name__)

MISSING_STEM = "This PR does not contain any JIRA issue keys in the PR"
MISSING_EXAMPLE = " (e.g. KEY-123)"

MESSAGE = "message"
WARNING = "warning"
FAILURE = "failure"
NONE = "none"
SKIPPED = "skipped"


@dataclass(frozen=True)
class Outcome:
    """What the check reported: kind is message, warning, failure, none or skipped"""

    kind: str
    text: str = ""


class ReportSink(ABC):
    """Where rendered output goes"""

    @abstractmethod
    def message(self, html: str):
        ...

    @abstractmethod
    def warn(self, text: str):
        ...

    @abstractmethod
    def fail(self, text: str):
        ...

    def flush(self):
        pass


class ActionsReportSink(ReportSink):
    """Report through GitHub workflow commands and the job summary"""

    def __init__(self, summary_path: Optional[str] = None):
        self.summary_path = summary_path
        self.failed = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ActionsReportSink":
        env = os.environ if environ is None else environ
        return cls(summary_path=env.get("GITHUB_STEP_SUMMARY") or None)

    def message(self, html: str):
        print(f"::notice::{html}")
        if self.summary_path:
            with open(self.summary_path, "a") as f:
                f.write(f"{html}\n")

    def warn(self, text: str):
        print(f"::warning::{text}")

    def fail(self, text: str):
        self.failed = True
        print(f"::error::{text}")


class CommentReportSink(ReportSink):
    """Buffer every report and post them as a single pull request comment"""

    def __init__(self, comments_url: str, session: requests.Session):
        self.comments_url = comments_url
        self.session = session
        self.lines: List[str] = []

    def message(self, html: str):
        self.lines.append(html)

    def warn(self, text: str):
        self.lines.append(f":warning: {text}")

    def fail(self, text: str):
        self.lines.append(f":no_entry_sign: {text}")

    def flush(self):
        if not self.lines:
            return
        try:
            response = self.session.post(
                self.comments_url, json={"body": "\n\n".join(self.lines)}, timeout=10
            )
        except requests.RequestException as e:
            logger.error(f"Failed to post comment: {e}")
            return
        if response.status_code in [200, 201]:
            logger.info("Posted Jira check comment")
            self.lines = []
        else:
            logger.warning(f"Failed to post comment: {response.status_code} - {response.text}")


class MultiReportSink(ReportSink):
    """Fan reports out to several sinks"""

    def __init__(self, sinks: Sequence[ReportSink]):
        self.sinks = list(sinks)

    def message(self, html: str):
        for sink in self.sinks:
            sink.message(html)

    def warn(self, text: str):
        for sink in self.sinks:
            sink.warn(text)

    def fail(self, text: str):
        for sink in self.sinks:
            sink.fail(text)

    def flush(self):
        for sink in self.sinks:
            sink.flush()


def ensure_url_ends_with_slash(url: str) -> str:
    return url if url.endswith("/") else f"{url}/"


def link(href: str, issue: str) -> str:
    return f"<a href='{href}{issue}'>{issue}</a>"


def build_issue_message(issues: Sequence[str], url: str, emoji: str = ":link:") -> str:
    """Emoji followed by a comma separated list of issue links"""
    base = ensure_url_ends_with_slash(url)
    links = ", ".join(link(base, issue) for issue in issues)
    return f"{emoji} {links}"


def build_missing_message(selector: SourceSelector) -> str:
    """Name every searched source in the missing-issue message

    >>> build_missing_message(SourceSelector(title=True, body=True))
    'This PR does not contain any JIRA issue keys in the PR title, body (e.g. KEY-123)'
    """
    searched = []
    if selector.title:
        searched.append("title")
    if selector.commits:
        searched.append("commit messages")
    if selector.branch:
        searched.append("branch name")
    if selector.body:
        searched.append("body")

    msg = MISSING_STEM
    if searched:
        msg += " " + ", ".join(searched)
    return msg + MISSING_EXAMPLE


def report(
    issues: Sequence[str],
    selector: SourceSelector,
    sink: ReportSink,
    url: str,
    emoji: str = ":link:",
    fail_on_warning: bool = False,
    report_missing: bool = True,
) -> Outcome:
    """Send the outcome for a set of found issues to the sink"""
    if issues:
        html = build_issue_message(issues, url, emoji)
        sink.message(html)
        return Outcome(MESSAGE, html)

    if not report_missing:
        logger.info("No Jira issues found, reporting disabled")
        return Outcome(NONE)

    msg = build_missing_message(selector)
    logger.warning(msg)
    if fail_on_warning:
        sink.fail(msg)
        return Outcome(FAILURE, msg)
    sink.warn(msg)
    return Outcome(WARNING, msg)
