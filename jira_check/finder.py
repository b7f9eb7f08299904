"""
Issue key extraction and skip detection
"""

import logging
from typing import Iterable, List, Pattern

from .config import KeySpec, SourceSelector
from .patterns import SKIP_REGEX, build_key_pattern
from .sources import ReviewSource

logger = logging.getLogger(__name__)


def extract_keys(pattern: Pattern[str], text: str) -> List[str]:
    """All non-overlapping matches in text, left to right"""
    return pattern.findall(text or "")


def unique(keys: Iterable[str]) -> List[str]:
    """Drop repeats, keeping the first occurrence of each key"""
    return list(dict.fromkeys(keys))


def find_jira_issues(
    key: KeySpec, source: ReviewSource, selector: SourceSelector = SourceSelector()
) -> List[str]:
    """Collect issue keys from the enabled sources.

    Sources are scanned title, commits, branch, body and the result keeps the
    order in which each key was first seen. Disabled sources are never read.
    """
    pattern = build_key_pattern(key)
    found: List[str] = []

    if selector.title:
        found += extract_keys(pattern, source.get_title())

    if selector.commits:
        for message in source.get_commit_messages():
            found += extract_keys(pattern, message)

    if selector.branch:
        found += extract_keys(pattern, source.get_branch_name())

    if selector.body:
        found += extract_keys(pattern, source.get_body())

    issues = unique(found)
    logger.info(f"Found {len(issues)} Jira issue(s): {', '.join(issues) or 'none'}")
    return issues


def should_skip_jira(source: ReviewSource, search_title: bool = True) -> bool:
    """True when the title (if searched), body or branch carries a no-jira marker"""
    texts = []
    if search_title:
        texts.append(("title", source.get_title))
    texts.append(("body", source.get_body))
    texts.append(("branch name", source.get_branch_name))

    for name, read in texts:
        if SKIP_REGEX.search(read() or ""):
            logger.info(f"Found no-jira marker in PR {name}, skipping check")
            return True
    return False
