"""Tests for post preview rendering."""

from io import StringIO

from rich.console import Console

from conftest import SWIFT_DECODABLE_POST, SWIFT_TESTING_POST
from postshelf.content.post import Post
from postshelf.content.render import format_byline_date, render_html, render_post, render_text

NESTED_FENCE_POST = """\
---
title: Fences In Markdown
date: 2020-07-01 08:00:00 +0000
tags: [markdown]
---
{% highlight markdown %}
Example:
```swift
let x = 1
```
after
{% endhighlight %}
Tail paragraph.
"""


def test_byline_date_keeps_offset():
    """The byline shows the date in the post's own offset."""
    post = Post.parse(SWIFT_TESTING_POST)
    assert format_byline_date(post) == "May 28, 2020 12:24 -0600"


def test_render_text_includes_byline_and_body():
    """Plain-text output has the byline, header image and highlighted code."""
    text = render_text(Post.parse(SWIFT_TESTING_POST))

    assert "Unit Testing Static Methods In Swift" in text
    assert "May 28, 2020 12:24 -0600" in text
    assert "#swift #json #decodable" in text
    assert "Header image: /assets/images/swift-header.jpg (overlay 0.5)" in text
    assert "Static methods are hard to mock." in text
    assert "static func fetch() {}" in text


def test_render_text_converts_liquid_highlight():
    """Liquid highlight tags are not shown; their code is."""
    text = render_text(Post.parse(SWIFT_DECODABLE_POST))

    assert "{% highlight" not in text
    assert "{% endhighlight %}" not in text
    assert "struct User: Decodable {" in text


def test_render_text_keeps_fenced_sample_inside_liquid_region():
    """A fenced sample inside a highlight region stays part of the code block."""
    text = render_text(Post.parse(NESTED_FENCE_POST))
    lines = text.splitlines()

    # Inner fence markers are shown as code, not consumed as markup
    assert any(line.strip() == "```swift" for line in lines)
    assert any(line.strip() == "```" for line in lines)
    assert not any(line.startswith(" ") and "Tail paragraph." in line for line in lines)
    assert any(line.startswith("Tail paragraph.") for line in lines)


def test_render_text_without_header_or_tags():
    post = Post.parse("---\ntitle: Bare\ndate: 2020-05-28 12:24:03 +0000\n---\nHello\n")
    text = render_text(post)

    assert "Bare" in text
    assert "Header image" not in text
    assert "#" not in text


def test_render_html_is_standalone_document():
    """HTML export is a full document containing the post."""
    html = render_html(Post.parse(SWIFT_TESTING_POST))

    assert html.lstrip().startswith("<!DOCTYPE html>")
    assert "Unit Testing Static Methods In Swift" in html
    assert "fetch" in html


def test_render_post_to_given_console():
    """render_post writes to the console it is given."""
    buffer = StringIO()
    console = Console(file=buffer, width=80, color_system=None)

    render_post(Post.parse(SWIFT_TESTING_POST), console=console)

    assert "Unit Testing Static Methods In Swift" in buffer.getvalue()
