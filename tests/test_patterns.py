"""Tests for issue key pattern construction."""

import pytest

from jira_check.config import ConfigurationError
from jira_check.patterns import SKIP_REGEX, build_key_pattern


def test_single_key_matches_prefix_hyphen_digits():
    pattern = build_key_pattern("WEB")
    assert pattern.findall("WEB-123") == ["WEB-123"]


def test_multiple_keys_share_the_digit_suffix():
    pattern = build_key_pattern(["WEB", "DROID"])
    assert pattern.pattern == "(?:WEB|DROID)-[0-9]+"
    assert pattern.findall("DROID-7 and WEB-1") == ["DROID-7", "WEB-1"]
    # Without the group the suffix would bind only to the last key
    assert pattern.findall("WEB") == []


@pytest.mark.parametrize("text", ["web-123", "WEB123", "WEB-", "WEB-abc"])
def test_non_matching_forms(text):
    assert build_key_pattern("WEB").findall(text) == []


def test_match_inside_punctuation():
    assert build_key_pattern("WEB").findall("[WEB-123],(WEB-9)") == ["WEB-123", "WEB-9"]


@pytest.mark.parametrize("key", [None, [], ""])
def test_missing_key_is_configuration_error(key):
    with pytest.raises(ConfigurationError):
        build_key_pattern(key)


def test_unusual_key_does_not_break_compilation():
    pattern = build_key_pattern(["A+B", "C2"])
    assert pattern.findall("A+B-1 AB-2 C2-3") == ["A+B-1", "C2-3"]


@pytest.mark.parametrize("text", ["[no-jira]", "NOJIRA", "feat/NoJira/x", "No-Jira"])
def test_skip_sentinel_variants(text):
    assert SKIP_REGEX.search(text)


def test_skip_sentinel_requires_token():
    assert SKIP_REGEX.search("no jira here") is None
