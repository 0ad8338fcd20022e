"""
Integration tests for linting a posts directory end to end.
Tests: discovery -> parsing -> rules -> report.
"""

import pytest

from postlint.contexts.ingest.exceptions import PostsDirectoryError
from postlint.contexts.ingest.post_index import discover_posts
from postlint.contexts.linting.lint_config import LintConfig
from postlint.contexts.linting.linter import lint_directory, lint_file
from postlint.contexts.linting.report_formatter import format_text_report


@pytest.mark.integration
def test_discover_skips_hidden_and_non_posts(posts_dir):
    names = [path.name for path in discover_posts(posts_dir)]

    assert names == [
        "2014-3-7-wordpress-rewrite-rules.md",
        "2015-11-2-activerecord-scopes.md",
        "2016-1-5-broken-sql.md",
        "2016-2-1-bad-yaml.md",
    ]


@pytest.mark.integration
def test_discover_recurses_into_subdirectories(posts_dir):
    (posts_dir / "2017").mkdir()
    (posts_dir / "2017" / "2017-1-1-new-year.md").write_text("---\ntitle: x\n---\n", encoding="utf-8")

    assert posts_dir / "2017" / "2017-1-1-new-year.md" in discover_posts(posts_dir)


@pytest.mark.integration
def test_lint_directory(posts_dir):
    report = lint_directory(posts_dir)

    assert len(report.posts) == 4
    assert report.error_count == 2
    assert report.warning_count == 1
    assert report.clean_count == 1
    assert report.exit_code() == 1

    by_name = {post_report.path.name: post_report for post_report in report.posts}
    assert by_name["2014-3-7-wordpress-rewrite-rules.md"].is_clean
    assert [f.rule_id for f in by_name["2015-11-2-activerecord-scopes.md"].findings] == ["CB002"]
    broken = by_name["2016-1-5-broken-sql.md"].findings
    assert [(f.rule_id, f.line) for f in broken] == [("CB001", 9)]
    bad_yaml = by_name["2016-2-1-bad-yaml.md"]
    assert [f.rule_id for f in bad_yaml.findings] == ["FM001"]
    assert bad_yaml.post is None


@pytest.mark.integration
def test_lint_directory_with_config(posts_dir):
    config = LintConfig(disabled_rules=["CB002", "CB001"], languages=["php", "sql"])
    report = lint_directory(posts_dir, config)

    assert report.warning_count == 0
    assert report.error_count == 1


@pytest.mark.integration
def test_text_report_uses_relative_paths(posts_dir):
    text = format_text_report(lint_directory(posts_dir))

    assert "_posts/2016-1-5-broken-sql.md:9: error CB001" in text
    assert str(posts_dir.parent) not in text
    assert text.splitlines()[-1] == "4 posts checked: 2 error(s), 1 warning(s), 1 clean"


@pytest.mark.integration
def test_missing_directory(tmp_path):
    with pytest.raises(PostsDirectoryError, match="Posts directory not found"):
        lint_directory(tmp_path / "nope")


@pytest.mark.integration
def test_empty_directory(tmp_path):
    report = lint_directory(tmp_path)

    assert report.posts == []
    assert report.exit_code(strict=True) == 0


@pytest.mark.integration
def test_unreadable_post(tmp_path):
    path = tmp_path / "2016-3-1-binary.md"
    path.write_bytes(b"---\ntitle: \xff\xfe\n---\n")

    report = lint_file(path)

    assert [f.rule_id for f in report.findings] == ["IO001"]
    assert report.findings[0].message == "Cannot read post: not valid UTF-8"
    assert report.findings[0].is_error
