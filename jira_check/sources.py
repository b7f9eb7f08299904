"""
Review sources: the title, body, branch and commits of a pull/merge request
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

import requests

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
PER_PAGE = 100
REQUEST_TIMEOUT = 10


class ReviewSource(ABC):
    """Read access to the texts of a single change request"""

    @abstractmethod
    def get_title(self) -> str:
        ...

    @abstractmethod
    def get_body(self) -> str:
        ...

    @abstractmethod
    def get_branch_name(self) -> str:
        ...

    @abstractmethod
    def get_commit_messages(self) -> List[str]:
        ...


class StaticReviewSource(ReviewSource):
    """Review source over values that are already known"""

    def __init__(
        self,
        title: str = "",
        body: str = "",
        branch_name: str = "",
        commit_messages: Optional[List[str]] = None,
    ):
        self.title = title or ""
        self.body = body or ""
        self.branch_name = branch_name or ""
        self.commit_messages = list(commit_messages or [])

    def get_title(self) -> str:
        return self.title

    def get_body(self) -> str:
        return self.body

    def get_branch_name(self) -> str:
        return self.branch_name

    def get_commit_messages(self) -> List[str]:
        return list(self.commit_messages)


class _PaginatedCommitsMixin:
    """Lazily fetch and cache commit messages from a paginated API"""

    session: requests.Session
    _commit_messages: Optional[List[str]] = None

    def _commits_url(self) -> str:
        raise NotImplementedError

    def _message_of(self, commit: Dict[str, Any]) -> str:
        raise NotImplementedError

    def get_commit_messages(self) -> List[str]:
        if self._commit_messages is None:
            self._commit_messages = self._fetch_commit_messages()
        return list(self._commit_messages)

    def _fetch_commit_messages(self) -> List[str]:
        url = self._commits_url()
        if not url:
            logger.info("No commits URL available, treating commit list as empty")
            return []

        messages = []
        page = 1

        while True:
            params = {"per_page": PER_PAGE, "page": page}
            try:
                response = self.session.get(url, params=params, timeout=REQUEST_TIMEOUT)
            except requests.RequestException as e:
                logger.error(f"Failed to fetch commits: {e}")
                return []

            if response.status_code != 200:
                logger.error(f"Failed to fetch commits: {response.status_code}")
                return []

            batch = response.json()
            if not batch:
                break

            messages.extend(self._message_of(commit) for commit in batch)
            if len(batch) < PER_PAGE:
                break
            page += 1

        logger.debug(f"Fetched {len(messages)} commit messages")
        return messages


class GitHubReviewSource(_PaginatedCommitsMixin, ReviewSource):
    """Review source backed by a GitHub pull_request event payload"""

    def __init__(self, event: Dict[str, Any], session: Optional[requests.Session] = None):
        self.pr = event.get("pull_request") or {}
        self.session = session or requests.Session()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GitHubReviewSource":
        env = os.environ if environ is None else environ
        session = requests.Session()
        session.headers.update({"Accept": "application/vnd.github.v3+json"})
        token = env.get("GITHUB_TOKEN")
        if token:
            session.headers.update({"Authorization": f"token {token}"})
        return cls(load_github_event(env.get("GITHUB_EVENT_PATH")), session=session)

    def get_title(self) -> str:
        return self.pr.get("title") or ""

    def get_body(self) -> str:
        return self.pr.get("body") or ""

    def get_branch_name(self) -> str:
        return (self.pr.get("head") or {}).get("ref") or ""

    def _commits_url(self) -> str:
        return self.pr.get("commits_url") or ""

    def _message_of(self, commit: Dict[str, Any]) -> str:
        return (commit.get("commit") or {}).get("message") or ""


class GitLabReviewSource(_PaginatedCommitsMixin, ReviewSource):
    """Review source backed by GitLab CI merge request variables"""

    def __init__(self, environ: Mapping[str, str], session: Optional[requests.Session] = None):
        self.env = dict(environ)
        self.session = session or requests.Session()
        token = self.env.get("GITLAB_TOKEN")
        if token:
            self.session.headers.update({"PRIVATE-TOKEN": token})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GitLabReviewSource":
        return cls(os.environ if environ is None else environ)

    def get_title(self) -> str:
        return self.env.get("CI_MERGE_REQUEST_TITLE", "")

    def get_body(self) -> str:
        return self.env.get("CI_MERGE_REQUEST_DESCRIPTION", "")

    def get_branch_name(self) -> str:
        return self.env.get("CI_MERGE_REQUEST_SOURCE_BRANCH_NAME", "")

    def _commits_url(self) -> str:
        api = self.env.get("CI_API_V4_URL", "").rstrip("/")
        project = self.env.get("CI_PROJECT_ID")
        iid = self.env.get("CI_MERGE_REQUEST_IID")
        if not (api and project and iid):
            return ""
        return f"{api}/projects/{project}/merge_requests/{iid}/commits"

    def _message_of(self, commit: Dict[str, Any]) -> str:
        return commit.get("message") or ""


def load_github_event(event_path: Optional[str]) -> Dict[str, Any]:
    """Load GitHub event data from the event file"""
    if not event_path or not os.path.exists(event_path):
        logger.error("GitHub event file not found")
        return {}

    try:
        with open(event_path, "r") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load GitHub event: {e}")
        return {}


def review_source_from_env(environ: Optional[Mapping[str, str]] = None) -> ReviewSource:
    """Pick the hosting provider the job is running on"""
    env = os.environ if environ is None else environ
    if env.get("GITLAB_CI"):
        logger.debug("Using GitLab merge request source")
        return GitLabReviewSource.from_env(env)
    logger.debug("Using GitHub pull request source")
    return GitHubReviewSource.from_env(env)
