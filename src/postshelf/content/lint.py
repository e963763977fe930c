"""Structural lint checks for post documents.

Error codes:
    E000  document could not be parsed (delimiters, YAML, shape)
    E001  title missing or empty
    E002  date missing, unparsable or without explicit UTC offset
    E003  code region opened but never closed
    E004  header.overlay_filter not a number in [0, 1]

Warning codes (W001 becomes an error with ``require_tags``):
    W001  no tags
    W002  filename date prefix disagrees with front-matter date
    W003  header.overlay_image points at a missing local asset
    W004  code region without a language hint (``require_code_language``)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional

from .fences import scan_code_blocks
from .frontmatter import (
    FrontMatterError,
    load_metadata,
    normalize_labels,
    parse_date,
    parse_overlay_filter,
    split_front_matter,
)
from .post import date_from_filename

logger = logging.getLogger(__name__)

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"


@dataclass
class LintIssue:
    """A single problem found in a document."""

    path: str
    code: str
    severity: str  # "error" or "warning"
    message: str
    line: Optional[int] = None

    @property
    def is_error(self) -> bool:
        return self.severity == SEVERITY_ERROR

    def __str__(self) -> str:
        location = self.path if self.line is None else f"{self.path}:{self.line}"
        return f"{location}: {self.code} {self.message}"


@dataclass
class LintConfig:
    """Policy switches for optional rules."""

    require_tags: bool = False
    require_code_language: bool = False
    check_assets: bool = True
    check_filename_date: bool = True


@dataclass
class LintReport:
    """Issues collected over a set of documents."""

    issues: list[LintIssue] = field(default_factory=list)
    documents: int = 0

    @property
    def errors(self) -> list[LintIssue]:
        return [i for i in self.issues if i.is_error]

    @property
    def warnings(self) -> list[LintIssue]:
        return [i for i in self.issues if not i.is_error]

    @property
    def ok(self) -> bool:
        return not self.errors


def _find_key_line(block: str, key: str) -> Optional[int]:
    """Best-effort line number of a top-level key in the metadata block."""
    for offset, raw in enumerate(block.splitlines()):
        if raw.startswith(f"{key}:"):
            # +1 for 1-based lines, +1 for the opening delimiter
            return offset + 2
    return None


class Linter:
    """Runs structural checks over raw document text."""

    def __init__(self, config: Optional[LintConfig] = None, base_dir: Optional[Path] = None):
        self.config = config or LintConfig()
        self.base_dir = base_dir

    def lint_text(self, text: str, path: str = "<document>") -> list[LintIssue]:
        """Lint a single document and return every issue found."""
        issues: list[LintIssue] = []

        try:
            block, body, body_line = split_front_matter(text, path)
            data = load_metadata(block, path)
        except FrontMatterError as e:
            return [LintIssue(path, "E000", SEVERITY_ERROR, e.message, e.line)]

        issues.extend(self._check_title(data, block, path))
        issues.extend(self._check_date(data, block, path))
        issues.extend(self._check_header(data, block, path))
        issues.extend(self._check_tags(data, block, path))
        issues.extend(self._check_code_blocks(body, body_line, path))
        return issues

    def lint_file(self, file_path: Path, rel_path: Optional[str] = None) -> list[LintIssue]:
        """Lint a document on disk."""
        path = rel_path or file_path.as_posix()
        try:
            text = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            return [LintIssue(path, "E000", SEVERITY_ERROR, f"file is not valid UTF-8: {e}")]
        except OSError as e:
            return [LintIssue(path, "E000", SEVERITY_ERROR, f"could not read file: {e}")]
        return self.lint_text(text, path)

    def lint_store(self, store) -> LintReport:
        """Lint every candidate document in a ContentStore."""
        report = LintReport()
        for post_file in store.iter_files():
            report.documents += 1
            issues = self.lint_file(post_file.absolute_path, post_file.path)
            logger.debug(f"Linted {post_file.path}: {len(issues)} issue(s)")
            report.issues.extend(issues)
        return report

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _check_title(self, data: dict[str, Any], block: str, path: str) -> Iterable[LintIssue]:
        title = data.get("title")
        if title is None or not str(title).strip():
            line = _find_key_line(block, "title")
            yield LintIssue(path, "E001", SEVERITY_ERROR, "missing required field 'title'", line)

    def _check_date(self, data: dict[str, Any], block: str, path: str) -> Iterable[LintIssue]:
        line = _find_key_line(block, "date")
        raw = data.get("date")
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            yield LintIssue(path, "E002", SEVERITY_ERROR, "missing required field 'date'", line)
            return

        try:
            date = parse_date(raw)
        except ValueError as e:
            yield LintIssue(path, "E002", SEVERITY_ERROR, str(e), line)
            return

        if self.config.check_filename_date:
            prefix = date_from_filename(path)
            if prefix and prefix != date.strftime("%Y-%m-%d"):
                yield LintIssue(
                    path,
                    "W002",
                    SEVERITY_WARNING,
                    f"filename date {prefix} differs from front-matter date "
                    f"{date.strftime('%Y-%m-%d')}",
                    line,
                )

    def _check_header(self, data: dict[str, Any], block: str, path: str) -> Iterable[LintIssue]:
        header = data.get("header")
        if header is None:
            return
        line = _find_key_line(block, "header")
        if not isinstance(header, dict):
            yield LintIssue(path, "E000", SEVERITY_ERROR, "'header' must be a mapping", line)
            return

        if header.get("overlay_filter") is not None:
            try:
                parse_overlay_filter(header["overlay_filter"])
            except ValueError as e:
                yield LintIssue(path, "E004", SEVERITY_ERROR, str(e), line)

        image = header.get("overlay_image")
        if image and self.config.check_assets and self.base_dir is not None:
            image = str(image)
            if "://" not in image and not image.startswith("{{"):
                asset = self.base_dir / image.lstrip("/")
                if not asset.exists():
                    yield LintIssue(
                        path,
                        "W003",
                        SEVERITY_WARNING,
                        f"header image not found: {image}",
                        line,
                    )

    def _check_tags(self, data: dict[str, Any], block: str, path: str) -> Iterable[LintIssue]:
        # Same normalization as Post.from_metadata, so blank labels count as none
        if normalize_labels(data.get("tags")) or normalize_labels(data.get("tag")):
            return
        severity = SEVERITY_ERROR if self.config.require_tags else SEVERITY_WARNING
        yield LintIssue(path, "W001", severity, "post has no tags", _find_key_line(block, "tags"))

    def _check_code_blocks(self, body: str, body_line: int, path: str) -> Iterable[LintIssue]:
        for block in scan_code_blocks(body, body_line):
            if not block.closed:
                kind = "highlight region" if block.style == "liquid" else "code fence"
                yield LintIssue(
                    path,
                    "E003",
                    SEVERITY_ERROR,
                    f"{kind} opened here is never closed",
                    block.start_line,
                )
            elif self.config.require_code_language and not block.language:
                yield LintIssue(
                    path,
                    "W004",
                    SEVERITY_WARNING,
                    "code fence has no language hint",
                    block.start_line,
                )
