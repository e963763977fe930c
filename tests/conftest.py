"""Shared fixtures for postshelf tests."""

from pathlib import Path

import pytest

from postshelf.config import reset_settings
from postshelf.display import reset_console, reset_theme

SWIFT_TESTING_POST = """\
---
title: "Unit Testing Static Methods In Swift"
date: 2020-05-28 12:24:03 -0600
categories: [swift]
tags: [swift, json, decodable]
header:
  overlay_image: /assets/images/swift-header.jpg
  overlay_filter: 0.5
---

Static methods are hard to mock.

```swift
struct Network {
    static func fetch() {}
}
```
"""

SWIFT_DECODABLE_POST = """\
---
title: "Decoding JSON With Decodable"
date: 2020-06-14 09:10:00 -0600
categories: [swift, ios]
tags: [swift, json]
layout: single
---

Decoding JSON starts with a model type.

{% highlight swift %}
struct User: Decodable {
    let name: String
}
{% endhighlight %}
"""

POSTSHELF_ENV_VARS = (
    "POSTSHELF_POSTS_DIRS",
    "POSTSHELF_CODE_THEME",
    "POSTSHELF_THEME",
    "POSTSHELF_REQUIRE_TAGS",
    "POSTSHELF_LOG_LEVEL",
)


def write_post(base_dir: Path, rel_path: str, text: str) -> Path:
    """Write a document under base_dir, creating parent directories."""
    target = base_dir / rel_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")
    return target


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep user config, env vars and singletons from leaking between tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    # setenv (not delenv) so values loaded from .env files are undone too
    for name in POSTSHELF_ENV_VARS:
        monkeypatch.setenv(name, "")
    reset_settings()
    reset_theme()
    reset_console()
    yield
    reset_settings()
    reset_theme()
    reset_console()


@pytest.fixture
def site(tmp_path) -> Path:
    """A site directory with two valid posts and some non-post files."""
    base = tmp_path / "site"
    write_post(base, "_posts/2020-05-28-unit-testing-static-methods.md", SWIFT_TESTING_POST)
    write_post(base, "_posts/2020-06-14-decoding-json.md", SWIFT_DECODABLE_POST)
    write_post(base, "_posts/notes.txt", "not a post")
    write_post(base, "_site/2020/05/28/index.html", "<html></html>")
    write_post(base, "assets/images/swift-header.jpg", "jpg")
    return base
