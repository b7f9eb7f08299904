"""Tests for configuration defaults, validation and environment loading."""

import pytest

from jira_check.config import CheckConfig, ConfigurationError, SourceSelector


def test_defaults():
    config = CheckConfig(key="WEB", url="https://jira")
    assert config.emoji == ":link:"
    assert config.selector == SourceSelector(title=True, commits=False, branch=False, body=False)
    assert config.fail_on_warning is False
    assert config.report_missing is True
    assert config.skippable is True


def test_missing_key_fails_validation():
    with pytest.raises(ConfigurationError, match="'key' missing"):
        CheckConfig(key=None, url="https://jira").validate()


def test_missing_url_fails_validation():
    with pytest.raises(ConfigurationError, match="'url' missing"):
        CheckConfig(key="WEB").validate()


@pytest.mark.parametrize(
    "key, expected",
    [
        ("WEB", ["WEB"]),
        ("WEB, DROID", ["WEB", "DROID"]),
        (["WEB", "DROID"], ["WEB", "DROID"]),
        (None, []),
    ],
)
def test_keys_normalised_to_list(key, expected):
    assert CheckConfig(key=key).keys == expected


def test_from_env_reads_all_options():
    env = {
        "JIRA_PROJECT_KEYS": "WEB,DROID",
        "JIRA_BASE_URL": "https://jira/browse",
        "JIRA_EMOJI": ":ticket:",
        "JIRA_SEARCH_TITLE": "false",
        "JIRA_SEARCH_COMMITS": "yes",
        "JIRA_SEARCH_BRANCH": "1",
        "JIRA_SEARCH_BODY": "ON",
        "JIRA_FAIL_ON_WARNING": "true",
        "JIRA_REPORT_MISSING": "no",
        "JIRA_SKIPPABLE": "0",
    }
    config = CheckConfig.from_env(env)
    assert config.keys == ["WEB", "DROID"]
    assert config.url == "https://jira/browse"
    assert config.emoji == ":ticket:"
    assert config.selector == SourceSelector(title=False, commits=True, branch=True, body=True)
    assert config.fail_on_warning is True
    assert config.report_missing is False
    assert config.skippable is False


def test_from_env_blank_values_use_defaults():
    config = CheckConfig.from_env({"JIRA_SEARCH_TITLE": " ", "JIRA_EMOJI": ""})
    assert config.search_title is True
    assert config.emoji == ":link:"
    assert config.key is None


def test_from_env_uses_process_environment(monkeypatch):
    monkeypatch.setenv("JIRA_PROJECT_KEYS", "OPS")
    monkeypatch.setenv("JIRA_BASE_URL", "https://jira")
    config = CheckConfig.from_env()
    assert config.keys == ["OPS"]
    config.validate()


def test_from_env_rejects_bad_boolean():
    with pytest.raises(ConfigurationError, match="JIRA_SEARCH_BODY"):
        CheckConfig.from_env({"JIRA_SEARCH_BODY": "maybe"})
