"""
Issue key and skip sentinel patterns
"""

import re
from typing import Optional, Pattern

from .config import ConfigurationError, KeySpec

SKIP_REGEX = re.compile(r"no-?jira", re.IGNORECASE)


def build_key_pattern(key: Optional[KeySpec]) -> Pattern[str]:
    """Compile a case-sensitive pattern for PREFIX-123 from one or more project keys

    >>> build_key_pattern(["WEB", "DROID"]).pattern
    '(?:WEB|DROID)-[0-9]+'
    """
    if key is None:
        raise ConfigurationError("'key' missing - must supply JIRA issue key")

    keys = [key] if isinstance(key, str) else list(key)
    keys = [k for k in keys if k]
    if not keys:
        raise ConfigurationError("'key' missing - must supply JIRA issue key")

    alternation = "|".join(re.escape(k) for k in keys)
    return re.compile(f"(?:{alternation})-[0-9]+")
