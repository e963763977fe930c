"""Content store: enumerate and query the posts under a site directory."""

import logging
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Union

from .frontmatter import FrontMatterError
from .post import Post
from .scanner import PostFile, PostScanner

logger = logging.getLogger(__name__)


class ContentStore:
    """
    Read-only view of the posts in a site directory.

    Supports:
    - Lazy enumeration of Post records (restartable; every call rescans disk)
    - Error-tolerant enumeration for publish-time checks
    - Lookup by slug and filtered queries by tag, category, text or date

    Nothing is cached between calls, so edits on disk are always picked up.
    """

    def __init__(
        self,
        base_dir: Path,
        posts_dirs: Optional[list[str]] = None,
        extensions: Optional[set[str]] = None,
        ignore_patterns: Optional[list[str]] = None,
    ):
        self.base_dir = base_dir.resolve()
        self.posts_dirs = posts_dirs
        self.extensions = extensions
        self.ignore_patterns = ignore_patterns or []

    @classmethod
    def from_settings(cls, settings) -> "ContentStore":
        """Create a store configured from Settings."""
        return cls(
            settings.base_dir,
            posts_dirs=settings.posts_dirs,
            extensions=set(settings.extensions) if settings.extensions else None,
            ignore_patterns=settings.ignore_patterns,
        )

    def _scanner(self) -> PostScanner:
        return PostScanner(
            self.base_dir,
            posts_dirs=self.posts_dirs,
            extensions=self.extensions,
            ignore_patterns=self.ignore_patterns,
        )

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def iter_files(self) -> Iterator[PostFile]:
        """Yield candidate post files without parsing them."""
        return self._scanner().scan()

    def load(self, post_file: PostFile) -> Post:
        """
        Read and parse a single post file.

        Raises:
            FrontMatterError: If the metadata block is malformed.
            OSError: If the file cannot be read.
        """
        text = post_file.absolute_path.read_text(encoding="utf-8")
        return Post.parse(text, path=post_file.path)

    def iter_posts(self) -> Iterator[Post]:
        """
        Yield every post, parsed, in path order.

        The sequence is lazy and finite; calling again restarts from disk.

        Raises:
            FrontMatterError: On the first malformed document.
        """
        for post_file in self.iter_files():
            yield self.load(post_file)

    def __iter__(self) -> Iterator[Post]:
        return self.iter_posts()

    def iter_documents(self) -> Iterator[tuple[PostFile, Union[Post, FrontMatterError]]]:
        """
        Yield (file, post-or-error) pairs without stopping at errors.

        Read failures and undecodable files are reported as FrontMatterError
        so a publish check can list every broken document at once.
        """
        for post_file in self.iter_files():
            try:
                yield post_file, self.load(post_file)
            except FrontMatterError as e:
                yield post_file, e
            except UnicodeDecodeError as e:
                yield post_file, FrontMatterError(f"file is not valid UTF-8: {e}", post_file.path)
            except OSError as e:
                logger.warning(f"Could not read {post_file.path}: {e}")
                yield post_file, FrontMatterError(f"could not read file: {e}", post_file.path)

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def get(self, slug: str) -> Optional[Post]:
        """Return the first post with the given slug, or None."""
        for post_file, result in self.iter_documents():
            if isinstance(result, Post) and result.slug == slug:
                return result
        return None

    def query(
        self,
        tag: Optional[str] = None,
        category: Optional[str] = None,
        text: Optional[str] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        limit: int = 50,
    ) -> list[Post]:
        """
        Query posts with multiple filters.

        Malformed documents are skipped.

        Args:
            tag: Exact tag match (case-insensitive)
            category: Exact category match (case-insensitive)
            text: Substring search in title, slug and body
            since: Only posts published at or after this time
            until: Only posts published at or before this time
            limit: Max results to return

        Returns:
            List of matching Post objects
        """
        results: list[Post] = []

        for _, post in self.iter_documents():
            if not isinstance(post, Post):
                continue
            if tag and tag.lower() not in (t.lower() for t in post.tags):
                continue
            if category and category.lower() not in (c.lower() for c in post.categories):
                continue
            if since and post.date < since:
                continue
            if until and post.date > until:
                continue
            if text:
                search_lower = text.lower()
                searchable = " ".join([post.title, post.slug, post.body]).lower()
                if search_lower not in searchable:
                    continue

            results.append(post)
            if len(results) >= limit:
                break

        return results

    def stats(self) -> dict:
        """Get summary statistics for the store."""
        tags: Counter = Counter()
        categories: Counter = Counter()
        total = 0
        invalid = 0
        first: Optional[datetime] = None
        last: Optional[datetime] = None

        for _, post in self.iter_documents():
            if not isinstance(post, Post):
                invalid += 1
                continue
            total += 1
            tags.update(post.tags)
            categories.update(post.categories)
            if first is None or post.date < first:
                first = post.date
            if last is None or post.date > last:
                last = post.date

        return {
            "total_posts": total,
            "invalid_documents": invalid,
            "tags": dict(tags.most_common()),
            "categories": dict(categories.most_common()),
            "first_published": first.isoformat() if first else None,
            "last_published": last.isoformat() if last else None,
        }
