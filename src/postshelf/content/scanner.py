"""Directory scanner for post documents."""

import fnmatch
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

# Extensions a static-site generator treats as posts
DEFAULT_POST_EXTENSIONS = {
    ".md",
    ".markdown",
    ".mkdown",
    ".mkd",
    ".mdown",
    ".html",
}

# Directories searched for posts, relative to base_dir
DEFAULT_POSTS_DIRS = ["_posts"]

# Directories to always ignore
DEFAULT_IGNORE_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".postshelf",
    "_site",
    ".jekyll-cache",
    ".sass-cache",
    "__pycache__",
    ".pytest_cache",
    "node_modules",
    "vendor",
    ".venv",
    "venv",
    ".idea",
    ".vscode",
}

# Files to always ignore
DEFAULT_IGNORE_FILES = {
    ".DS_Store",
    "Thumbs.db",
    "desktop.ini",
}


@dataclass
class PostFile:
    """A candidate post file found on disk."""

    path: str  # Relative path from base_dir, always with forward slashes
    absolute_path: Path
    size_bytes: int
    modified_at: str  # ISO 8601

    @property
    def is_draft(self) -> bool:
        return self.path.startswith("_drafts/") or "/_drafts/" in self.path


class PostScanner:
    """Walks post directories and yields candidate post files lazily."""

    def __init__(
        self,
        base_dir: Path,
        posts_dirs: Optional[list[str]] = None,
        extensions: Optional[set[str]] = None,
        ignore_dirs: Optional[set[str]] = None,
        ignore_files: Optional[set[str]] = None,
        ignore_patterns: Optional[list[str]] = None,
    ):
        self.base_dir = base_dir.resolve()
        self.posts_dirs = posts_dirs if posts_dirs is not None else list(DEFAULT_POSTS_DIRS)
        self.extensions = {e.lower() for e in (extensions or DEFAULT_POST_EXTENSIONS)}
        self.ignore_dirs = ignore_dirs or DEFAULT_IGNORE_DIRS
        self.ignore_files = ignore_files or DEFAULT_IGNORE_FILES
        self.ignore_patterns = ignore_patterns or []

    def scan(self) -> Iterator[PostFile]:
        """
        Yield post files in a stable order.

        Each configured posts directory is walked in turn; directories that
        don't exist are skipped. Within a directory, files are ordered by
        lowercase name, which for ``YYYY-MM-DD-`` filenames is chronological.
        """
        seen: set[Path] = set()
        for posts_dir in self.posts_dirs:
            root = (self.base_dir / posts_dir).resolve()
            if not root.is_dir():
                logger.debug(f"Posts directory not found, skipping: {root}")
                continue
            for post_file in self._walk(root):
                if post_file.absolute_path in seen:
                    continue
                seen.add(post_file.absolute_path)
                yield post_file

    def _walk(self, directory: Path) -> Iterator[PostFile]:
        try:
            entries = sorted(directory.iterdir(), key=lambda e: (e.is_dir(), e.name.lower()))
        except PermissionError:
            logger.warning(f"Permission denied reading directory: {directory}")
            return

        for entry in entries:
            if entry.is_dir():
                if entry.name in self.ignore_dirs:
                    continue
                if self._matches_ignore_pattern(entry.name):
                    continue
                yield from self._walk(entry)
            elif entry.is_file():
                if entry.name in self.ignore_files:
                    continue
                if entry.suffix.lower() not in self.extensions:
                    continue
                if self._matches_ignore_pattern(entry.name):
                    continue
                post_file = self._create_post_file(entry)
                if post_file:
                    logger.debug(f"Found post file: {post_file.path}")
                    yield post_file

    def _create_post_file(self, file_path: Path) -> Optional[PostFile]:
        """Create a PostFile for a single file."""
        try:
            stat = file_path.stat()
            try:
                rel_path = file_path.resolve().relative_to(self.base_dir).as_posix()
            except ValueError:
                rel_path = file_path.as_posix()
            modified_at = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).isoformat()
            return PostFile(
                path=rel_path,
                absolute_path=file_path.resolve(),
                size_bytes=stat.st_size,
                modified_at=modified_at,
            )
        except (PermissionError, OSError) as e:
            logger.warning(f"Skipping unreadable file {file_path}: {e}")
            return None

    def _matches_ignore_pattern(self, name: str) -> bool:
        """Check if a name matches any ignore pattern."""
        for pattern in self.ignore_patterns:
            if fnmatch.fnmatch(name, pattern):
                return True
        return False
