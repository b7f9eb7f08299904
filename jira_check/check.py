"""
Jira reference check for pull and merge requests
Links Jira issues mentioned in a change request and warns when none are found
"""

import logging
import os
import sys
from typing import List, Mapping, Optional

from .config import CheckConfig, ConfigurationError, env_flag
from .finder import find_jira_issues, should_skip_jira
from .reporter import (
    FAILURE,
    SKIPPED,
    ActionsReportSink,
    CommentReportSink,
    MultiReportSink,
    Outcome,
    ReportSink,
    report,
)
from .sources import GitHubReviewSource, ReviewSource, review_source_from_env

logger = logging.getLogger(__name__)


def run_check(config: CheckConfig, source: ReviewSource, sink: ReportSink) -> Outcome:
    """Skip gate, then find issues, then report them"""
    config.validate()

    if config.skippable and should_skip_jira(source, search_title=config.search_title):
        return Outcome(SKIPPED)

    selector = config.selector
    issues = find_jira_issues(config.keys, source, selector)
    return report(
        issues,
        selector,
        sink,
        url=config.url,
        emoji=config.emoji,
        fail_on_warning=config.fail_on_warning,
        report_missing=config.report_missing,
    )


def build_sink(source: ReviewSource, environ: Mapping[str, str]) -> ReportSink:
    """Workflow command output, plus a PR comment when JIRA_POST_COMMENT is set"""
    sinks: List[ReportSink] = [ActionsReportSink.from_env(environ)]

    if env_flag(environ, "JIRA_POST_COMMENT", False):
        comments_url = None
        if isinstance(source, GitHubReviewSource):
            comments_url = source.pr.get("comments_url")
        if comments_url:
            sinks.append(CommentReportSink(comments_url, source.session))
        else:
            logger.warning("JIRA_POST_COMMENT is set but no pull request comments URL is available")

    return sinks[0] if len(sinks) == 1 else MultiReportSink(sinks)


def main(environ: Optional[Mapping[str, str]] = None) -> int:
    """Main entry point"""
    env = os.environ if environ is None else environ
    logging.basicConfig(
        level=env.get("JIRA_CHECK_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        config = CheckConfig.from_env(env)
        config.validate()
        source = review_source_from_env(env)
        sink = build_sink(source, env)
        outcome = run_check(config, source, sink)
        sink.flush()
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"::error::{e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1

    logger.info(f"Jira check finished with outcome '{outcome.kind}'")
    return 1 if outcome.kind == FAILURE else 0


if __name__ == "__main__":
    sys.exit(main())
