"""Tests for the structural linter."""

import pytest

from conftest import SWIFT_TESTING_POST, write_post
from postshelf.content import ContentStore, LintConfig, Linter, Post

VALID_POST = """\
---
title: Valid
date: 2020-05-28 12:24:03 -0600
tags: [swift]
---
Body
"""


def codes(issues):
    return [issue.code for issue in issues]


# ---------------------------------------------------------------------------
# Structural checks
# ---------------------------------------------------------------------------


class TestLinterChecks:
    """Tests for the always-on error checks."""

    def test_valid_post_has_no_issues(self):
        """A complete post with a matching filename date is clean."""
        assert Linter().lint_text(VALID_POST, "_posts/2020-05-28-valid.md") == []

    def test_example_post_has_no_issues(self):
        """The Swift example post lints clean."""
        assert Linter().lint_text(SWIFT_TESTING_POST) == []

    def test_missing_title(self):
        """A missing title is E001 without a line number."""
        text = VALID_POST.replace("title: Valid\n", "")
        issues = Linter().lint_text(text)

        assert codes(issues) == ["E001"]
        assert issues[0].is_error
        assert issues[0].line is None

    def test_empty_title_reports_line(self):
        """An empty title is E001 on the title line."""
        text = VALID_POST.replace("title: Valid", 'title: ""')
        issues = Linter().lint_text(text)

        assert codes(issues) == ["E001"]
        assert issues[0].line == 2

    @pytest.mark.parametrize(
        "date_line",
        ["date: 2020-05-28 12:24:03", "date: 2020-05-28", "date: not a date", 'date: ""'],
    )
    def test_invalid_dates(self, date_line):
        """Dates without an offset, unparsable or empty are E002."""
        text = VALID_POST.replace("date: 2020-05-28 12:24:03 -0600", date_line)
        issues = Linter().lint_text(text)

        assert codes(issues) == ["E002"]
        assert issues[0].line == 3

    def test_missing_date(self):
        """A missing date is E002."""
        text = VALID_POST.replace("date: 2020-05-28 12:24:03 -0600\n", "")
        assert codes(Linter().lint_text(text)) == ["E002"]

    def test_unclosed_fence(self):
        """An unclosed fence is E003 at its opening line."""
        text = VALID_POST + "\n```swift\nlet x = 1\n"
        issues = Linter().lint_text(text)

        assert codes(issues) == ["E003"]
        assert issues[0].line == 8
        assert "never closed" in issues[0].message

    def test_unclosed_liquid_region(self):
        """An unclosed highlight region is E003."""
        text = VALID_POST + "{% highlight swift %}\nlet x = 1\n"
        issues = Linter().lint_text(text)

        assert codes(issues) == ["E003"]
        assert "highlight region" in issues[0].message

    @pytest.mark.parametrize("value", ["1.5", "-0.1", "dark", "true"])
    def test_overlay_filter_out_of_range(self, value):
        """Overlay filters outside [0, 1] or non-numeric are E004."""
        text = VALID_POST.replace(
            "tags: [swift]\n", f"tags: [swift]\nheader:\n  overlay_filter: {value}\n"
        )
        issues = Linter().lint_text(text)

        assert codes(issues) == ["E004"]
        assert issues[0].line == 5

    @pytest.mark.parametrize("value", ["0", "1", "0.5"])
    def test_overlay_filter_in_range(self, value):
        """Boundary and mid-range overlay filters are accepted."""
        text = VALID_POST.replace(
            "tags: [swift]\n", f"tags: [swift]\nheader:\n  overlay_filter: {value}\n"
        )
        assert Linter().lint_text(text) == []

    def test_unparsable_document(self):
        """A document without a metadata block is E000."""
        issues = Linter().lint_text("just text", "_posts/x.md")

        assert codes(issues) == ["E000"]
        assert str(issues[0]) == "_posts/x.md:1: E000 document does not start with a '---' metadata block"

    def test_all_errors_reported_together(self):
        """Every error in a document is reported in one pass."""
        text = "---\ntags: [a]\nheader:\n  overlay_filter: 2\n---\n```\n"
        assert sorted(codes(Linter().lint_text(text))) == ["E001", "E002", "E003", "E004"]


# ---------------------------------------------------------------------------
# Policy rules
# ---------------------------------------------------------------------------


class TestLinterPolicy:
    """Tests for warnings and configurable rules."""

    def test_missing_tags_is_a_warning_by_default(self):
        """A post without tags gets a W001 warning."""
        text = VALID_POST.replace("tags: [swift]\n", "")
        issues = Linter().lint_text(text)

        assert codes(issues) == ["W001"]
        assert not issues[0].is_error

    def test_require_tags_makes_missing_tags_an_error(self):
        """With require_tags, W001 is an error."""
        text = VALID_POST.replace("tags: [swift]\n", "tags: []\n")
        issues = Linter(LintConfig(require_tags=True)).lint_text(text)

        assert codes(issues) == ["W001"]
        assert issues[0].is_error

    @pytest.mark.parametrize(
        "tags_line",
        ['tags: "   "', "tags: [null]", 'tags: [""]', "tags:", 'tag: ""'],
    )
    def test_blank_tags_count_as_missing(self, tags_line):
        """Tag values that parse to no labels are treated as missing tags."""
        text = VALID_POST.replace("tags: [swift]", tags_line)
        assert Post.parse(text).tags == []

        issues = Linter(LintConfig(require_tags=True)).lint_text(text)
        assert codes(issues) == ["W001"]
        assert issues[0].is_error

    def test_singular_tag_alias_counts(self):
        """A single `tag:` value satisfies the tags rule."""
        text = VALID_POST.replace("tags: [swift]", "tag: swift")
        assert Linter(LintConfig(require_tags=True)).lint_text(text) == []

    def test_filename_date_mismatch(self):
        """A filename date that disagrees with the front matter is W002."""
        issues = Linter().lint_text(VALID_POST, "_posts/2020-05-27-valid.md")
        assert codes(issues) == ["W002"]

    def test_filename_date_check_can_be_disabled(self):
        """check_filename_date=False turns W002 off."""
        linter = Linter(LintConfig(check_filename_date=False))
        assert linter.lint_text(VALID_POST, "_posts/2020-05-27-valid.md") == []

    def test_missing_header_image(self, tmp_path):
        """A local header image that does not exist is W003."""
        text = VALID_POST.replace(
            "tags: [swift]\n", "tags: [swift]\nheader:\n  overlay_image: /assets/missing.jpg\n"
        )
        issues = Linter(base_dir=tmp_path).lint_text(text)
        assert codes(issues) == ["W003"]

        write_post(tmp_path, "assets/missing.jpg", "jpg")
        assert Linter(base_dir=tmp_path).lint_text(text) == []

    def test_remote_header_image_is_not_checked(self, tmp_path):
        """Header images given as URLs are not looked up on disk."""
        text = VALID_POST.replace(
            "tags: [swift]\n",
            "tags: [swift]\nheader:\n  overlay_image: https://example.com/a.jpg\n",
        )
        assert Linter(base_dir=tmp_path).lint_text(text) == []

    def test_code_language_rule(self):
        """Fences without a language are W004 only when required."""
        text = VALID_POST + "```\nplain\n```\n"
        assert Linter().lint_text(text) == []

        issues = Linter(LintConfig(require_code_language=True)).lint_text(text)
        assert codes(issues) == ["W004"]


# ---------------------------------------------------------------------------
# Store-wide reports
# ---------------------------------------------------------------------------


class TestLintStore:
    """Tests for linting every document in a store."""

    def test_report_over_store(self, site):
        """The report counts documents and lists errors by path."""
        write_post(site, "_posts/2020-05-28-broken.md", VALID_POST.replace("title: Valid\n", ""))

        report = Linter(base_dir=site).lint_store(ContentStore(site))

        assert report.documents == 3
        assert not report.ok
        assert [i.path for i in report.errors] == ["_posts/2020-05-28-broken.md"]
        assert report.warnings == []

    def test_clean_store_is_ok(self, site):
        """A site with only valid posts produces an empty report."""
        report = Linter(base_dir=site).lint_store(ContentStore(site))
        assert report.ok
        assert report.issues == []

    def test_unreadable_bytes_are_reported(self, site):
        """Files that are not UTF-8 are reported as E000."""
        (site / "_posts/2020-01-02-binary.md").write_bytes(b"\xff\xfe")

        report = Linter().lint_store(ContentStore(site))
        assert codes(report.errors) == ["E000"]
