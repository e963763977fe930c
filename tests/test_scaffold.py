"""Tests for creating new posts."""

from datetime import datetime, timedelta, timezone

import pytest

from postshelf.content import ContentStore
from postshelf.content.post import Post
from postshelf.content.scaffold import new_post, slugify

MDT = timezone(timedelta(hours=-6))


@pytest.mark.parametrize(
    "title,slug",
    [
        ("Unit Testing Static Methods In Swift", "unit-testing-static-methods-in-swift"),
        ("  JSON & Decodable!  ", "json-decodable"),
        ("Swift 5.2", "swift-5-2"),
    ],
)
def test_slugify(title, slug):
    """Titles collapse to lower-case hyphenated slugs."""
    assert slugify(title) == slug


def test_new_post_writes_parseable_document(tmp_path):
    """A scaffolded post parses back with the given fields."""
    date = datetime(2020, 5, 28, 12, 24, 3, tzinfo=MDT)

    path = new_post(
        tmp_path,
        "Unit Testing Static Methods In Swift",
        date=date,
        tags=["swift", "json", "decodable"],
        categories=["swift", "swift"],
    )

    assert path == tmp_path / "_posts/2020-05-28-unit-testing-static-methods-in-swift.md"
    post = Post.parse(path.read_text(encoding="utf-8"), path="_posts/" + path.name)
    assert post.title == "Unit Testing Static Methods In Swift"
    assert post.date == date
    assert post.categories == ["swift"]
    assert post.tags == ["swift", "json", "decodable"]
    assert "slug" not in post.metadata()


def test_new_post_is_found_by_store(tmp_path):
    """The store enumerates a freshly created post."""
    new_post(tmp_path, "Hello World", date=datetime(2021, 1, 2, 3, 4, 5, tzinfo=timezone.utc))

    posts = list(ContentStore(tmp_path).iter_posts())
    assert [p.slug for p in posts] == ["hello-world"]


def test_new_post_defaults_to_aware_now(tmp_path):
    """Without a date, the current time is used with an explicit offset."""
    path = new_post(tmp_path, "Now")
    post = Post.parse(path.read_text(encoding="utf-8"))

    assert post.date.utcoffset() is not None


def test_new_post_refuses_to_overwrite(tmp_path):
    """An existing post file is never overwritten."""
    date = datetime(2020, 5, 28, tzinfo=timezone.utc)
    new_post(tmp_path, "Same", date=date)

    with pytest.raises(FileExistsError):
        new_post(tmp_path, "Same", date=date)


@pytest.mark.parametrize("title", ["", "   ", "!!!"])
def test_new_post_rejects_unusable_titles(tmp_path, title):
    with pytest.raises(ValueError):
        new_post(tmp_path, title)
