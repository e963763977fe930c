"""Create new post files with front matter."""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from .post import Post

logger = logging.getLogger(__name__)

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Lower-case a title and collapse non-alphanumeric runs to hyphens."""
    return _NON_ALNUM_RE.sub("-", title.lower()).strip("-")


def new_post(
    base_dir: Path,
    title: str,
    date: Optional[datetime] = None,
    tags: Iterable[str] = (),
    categories: Iterable[str] = (),
    posts_dir: str = "_posts",
    extension: str = ".md",
) -> Path:
    """
    Write a new post skeleton to ``<posts_dir>/YYYY-MM-DD-<slug><extension>``.

    Args:
        base_dir: Site directory.
        title: Post title; also used to derive the filename slug.
        date: Publication time (default: now, in the local UTC offset).
        tags: Tag labels.
        categories: Category labels.
        posts_dir: Directory for posts, relative to base_dir.
        extension: File extension including the dot.

    Returns:
        Path to the created file.

    Raises:
        ValueError: If the title is empty or yields an empty slug.
        FileExistsError: If a post with the same filename already exists.
    """
    if not title.strip():
        raise ValueError("title must not be empty")
    slug = slugify(title)
    if not slug:
        raise ValueError(f"cannot derive a filename from title {title!r}")

    if date is None:
        date = datetime.now(timezone.utc).astimezone().replace(microsecond=0)

    rel_path = f"{posts_dir}/{date:%Y-%m-%d}-{slug}{extension}"
    target = base_dir / rel_path
    if target.exists():
        raise FileExistsError(f"post already exists: {target}")

    categories_list: list[str] = []
    for category in categories:
        if category and category not in categories_list:
            categories_list.append(category)

    post = Post(
        path=rel_path,
        title=title.strip(),
        date=date,
        categories=categories_list,
        tags=[tag for tag in tags if tag],
        body="\n",
    )

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(post.to_document(), encoding="utf-8")
    logger.info(f"Created post {rel_path}")
    return target
