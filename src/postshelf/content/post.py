"""Post records parsed from front-matter documents."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import PurePosixPath
from typing import Any, Optional

from .fences import CodeBlock, scan_code_blocks
from .frontmatter import (
    FrontMatterError,
    compose_document,
    format_date,
    load_metadata,
    normalize_labels,
    parse_date,
    parse_overlay_filter,
    split_front_matter,
)

# Keys interpreted by Post; everything else is carried in ``extra``
RECOGNIZED_KEYS = {"title", "date", "categories", "category", "tags", "tag", "header", "slug"}
HEADER_KEYS = {"overlay_image", "overlay_filter"}

FILENAME_DATE_RE = re.compile(r"^(?P<date>\d{4}-\d{2}-\d{2})-(?P<slug>.+)$")


def slug_from_filename(path: str) -> str:
    """Derive a slug from a Jekyll-style ``YYYY-MM-DD-slug.md`` filename."""
    stem = PurePosixPath(path.replace("\\", "/")).stem
    match = FILENAME_DATE_RE.match(stem)
    return match.group("slug") if match else stem


def date_from_filename(path: str) -> Optional[str]:
    """Return the ``YYYY-MM-DD`` filename prefix, if any."""
    stem = PurePosixPath(path.replace("\\", "/")).stem
    match = FILENAME_DATE_RE.match(stem)
    return match.group("date") if match else None


@dataclass
class PostHeader:
    """Header image settings for a post."""

    overlay_image: Optional[str] = None  # Asset path, e.g. /assets/images/swift.jpg
    overlay_filter: Optional[float] = None  # Opacity in [0, 1]
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        d: dict[str, Any] = {}
        if self.overlay_image is not None:
            d["overlay_image"] = self.overlay_image
        if self.overlay_filter is not None:
            d["overlay_filter"] = self.overlay_filter
        d.update(self.extra)
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PostHeader":
        """Deserialize from dictionary, validating the overlay filter."""
        overlay_filter = None
        if data.get("overlay_filter") is not None:
            overlay_filter = parse_overlay_filter(data["overlay_filter"])

        overlay_image = data.get("overlay_image")
        return cls(
            overlay_image=str(overlay_image) if overlay_image is not None else None,
            overlay_filter=overlay_filter,
            extra={k: v for k, v in data.items() if k not in HEADER_KEYS},
        )


@dataclass
class Post:
    """A single blog post: metadata plus marked-up body."""

    path: str  # Relative path from the store's base directory
    title: str
    date: datetime  # Publication timestamp, always offset-aware
    slug: str = ""
    categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    header: Optional[PostHeader] = None
    body: str = ""
    body_line: int = 1  # Source line where the body starts
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.slug:
            self.slug = slug_from_filename(self.path)

    @property
    def header_image(self) -> Optional[str]:
        return self.header.overlay_image if self.header else None

    @property
    def overlay_filter(self) -> Optional[float]:
        return self.header.overlay_filter if self.header else None

    @property
    def code_blocks(self) -> list[CodeBlock]:
        return scan_code_blocks(self.body, self.body_line)

    def metadata(self) -> dict[str, Any]:
        """
        Build the front-matter mapping for this post.

        Key order is fixed (title, date, categories, tags, slug, header) with
        unrecognized keys appended in their original order.
        """
        d: dict[str, Any] = {
            "title": self.title,
            "date": format_date(self.date),
        }
        if self.categories:
            d["categories"] = list(self.categories)
        if self.tags:
            d["tags"] = list(self.tags)
        if self.slug and self.slug != slug_from_filename(self.path):
            d["slug"] = self.slug
        if self.header is not None:
            header = self.header.to_dict()
            if header:
                d["header"] = header
        d.update(self.extra)
        return d

    def to_document(self) -> str:
        """Serialize the post back to a full front-matter document."""
        return compose_document(self.metadata(), self.body)

    @classmethod
    def from_metadata(
        cls,
        data: dict[str, Any],
        path: str = "",
        body: str = "",
        body_line: int = 1,
    ) -> "Post":
        """
        Build a Post from a loaded metadata mapping.

        Raises:
            FrontMatterError: If title or date are missing or invalid, or the
                header overlay filter is out of range.
        """
        title = data.get("title")
        if title is None or not str(title).strip():
            raise FrontMatterError("missing required field 'title'", path or None)

        raw_date = data.get("date")
        if raw_date is None or (isinstance(raw_date, str) and not raw_date.strip()):
            raise FrontMatterError("missing required field 'date'", path or None)
        try:
            date = parse_date(raw_date)
        except ValueError as e:
            raise FrontMatterError(str(e), path or None) from e

        categories = normalize_labels(data.get("categories"), unique=True)
        for category in normalize_labels(data.get("category")):
            if category not in categories:
                categories.append(category)

        tags = normalize_labels(data.get("tags")) + normalize_labels(data.get("tag"))

        header = None
        raw_header = data.get("header")
        if raw_header is not None:
            if not isinstance(raw_header, dict):
                raise FrontMatterError("'header' must be a mapping", path or None)
            try:
                header = PostHeader.from_dict(raw_header)
            except ValueError as e:
                raise FrontMatterError(str(e), path or None) from e

        slug = data.get("slug")
        return cls(
            path=path,
            title=str(title),
            date=date,
            slug=str(slug) if slug else "",
            categories=categories,
            tags=tags,
            header=header,
            body=body,
            body_line=body_line,
            extra={k: v for k, v in data.items() if k not in RECOGNIZED_KEYS},
        )

    @classmethod
    def parse(cls, text: str, path: str = "") -> "Post":
        """Parse a full document (metadata block and body) into a Post."""
        block, body, body_line = split_front_matter(text, path or None)
        data = load_metadata(block, path or None)
        return cls.from_metadata(data, path=path, body=body, body_line=body_line)
