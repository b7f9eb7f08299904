"""
Configuration for the Jira reference check
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Union

logger = logging.getLogger(__name__)

KeySpec = Union[str, Sequence[str]]

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigurationError(ValueError):
    """Raised when the check is invoked without a usable configuration"""


@dataclass(frozen=True)
class SourceSelector:
    """Which review texts are scanned for issue keys"""

    title: bool = True
    commits: bool = False
    branch: bool = False
    body: bool = False


@dataclass
class CheckConfig:
    """Options recognised by the check, with their defaults"""

    key: Optional[KeySpec] = None
    url: Optional[str] = None
    emoji: str = ":link:"
    search_title: bool = True
    search_commits: bool = False
    search_branch: bool = False
    search_body: bool = False
    fail_on_warning: bool = False
    report_missing: bool = True
    skippable: bool = True

    @property
    def selector(self) -> SourceSelector:
        return SourceSelector(
            title=self.search_title,
            commits=self.search_commits,
            branch=self.search_branch,
            body=self.search_body,
        )

    @property
    def keys(self) -> List[str]:
        """Project keys as a list, splitting a comma separated string"""
        if self.key is None:
            return []
        if isinstance(self.key, str):
            return [k.strip() for k in self.key.split(",") if k.strip()]
        return [k for k in self.key if k]

    def validate(self):
        """Fail fast on missing key or url"""
        if not self.keys:
            raise ConfigurationError("'key' missing - must supply JIRA issue key")
        if not self.url:
            raise ConfigurationError("'url' missing - must supply JIRA installation URL")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CheckConfig":
        """Build a config from JIRA_* environment variables"""
        env = os.environ if environ is None else environ
        defaults = cls()

        config = cls(
            key=env.get("JIRA_PROJECT_KEYS") or None,
            url=env.get("JIRA_BASE_URL") or None,
            emoji=env.get("JIRA_EMOJI") or defaults.emoji,
            search_title=env_flag(env, "JIRA_SEARCH_TITLE", defaults.search_title),
            search_commits=env_flag(env, "JIRA_SEARCH_COMMITS", defaults.search_commits),
            search_branch=env_flag(env, "JIRA_SEARCH_BRANCH", defaults.search_branch),
            search_body=env_flag(env, "JIRA_SEARCH_BODY", defaults.search_body),
            fail_on_warning=env_flag(env, "JIRA_FAIL_ON_WARNING", defaults.fail_on_warning),
            report_missing=env_flag(env, "JIRA_REPORT_MISSING", defaults.report_missing),
            skippable=env_flag(env, "JIRA_SKIPPABLE", defaults.skippable),
        )
        logger.debug(f"Loaded configuration for project keys {config.keys}")
        return config


def env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = (env.get(name) or "").strip().lower()
    if not raw:
        return default
    if raw in TRUE_VALUES:
        return True
    if raw in FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got '{env.get(name)}'")
