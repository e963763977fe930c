"""Content store for front-matter blog posts."""

from .fences import CodeBlock, scan_code_blocks
from .frontmatter import FrontMatterError
from .lint import LintConfig, Linter, LintIssue, LintReport
from .post import Post, PostHeader
from .scanner import PostFile, PostScanner
from .store import ContentStore

__all__ = [
    "CodeBlock",
    "ContentStore",
    "FrontMatterError",
    "LintConfig",
    "LintIssue",
    "LintReport",
    "Linter",
    "Post",
    "PostFile",
    "PostHeader",
    "PostScanner",
    "scan_code_blocks",
]
