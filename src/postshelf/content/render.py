"""Terminal and HTML preview rendering for posts.

The published site is built by an external static-site generator; this
module renders a single post through Rich so authors can preview it. Code
regions are highlighted by their declared language hint and nothing else.
"""

import io
from typing import Optional

from rich.console import Console, Group
from rich.markdown import Markdown
from rich.rule import Rule
from rich.text import Text

from .fences import liquid_to_fences
from .post import Post

DEFAULT_CODE_THEME = "monokai"
DEFAULT_WIDTH = 100


def format_byline_date(post: Post) -> str:
    """Format a post date for the byline, keeping its own UTC offset."""
    date = post.date
    return f"{date:%B} {date.day}, {date:%Y %H:%M %z}"


def build_byline(post: Post) -> Group:
    """Build the header block: title, date, categories, tags and image."""
    parts = [Text(post.title, style="bold")]

    meta = Text(format_byline_date(post), style="dim")
    if post.categories:
        meta.append("  |  ")
        meta.append(", ".join(post.categories), style="cyan")
    parts.append(meta)

    if post.tags:
        parts.append(Text(" ".join(f"#{tag}" for tag in post.tags), style="green"))

    if post.header_image:
        image = Text("Header image: ", style="dim")
        image.append(post.header_image)
        if post.overlay_filter is not None:
            image.append(f" (overlay {post.overlay_filter:g})", style="dim")
        parts.append(image)

    parts.append(Rule(style="dim"))
    return Group(*parts)


def build_body(post: Post, code_theme: str = DEFAULT_CODE_THEME) -> Markdown:
    """Build the Markdown renderable for the post body."""
    return Markdown(liquid_to_fences(post.body), code_theme=code_theme)


def render_post(
    post: Post,
    console: Optional[Console] = None,
    code_theme: str = DEFAULT_CODE_THEME,
) -> None:
    """Print a post (byline and body) to a Rich console."""
    if console is None:
        from postshelf.display import get_console

        console = get_console()
    console.print(build_byline(post))
    console.print(build_body(post, code_theme=code_theme))


def _recording_console(width: int, color: bool) -> Console:
    return Console(
        record=True,
        file=io.StringIO(),
        width=width,
        force_terminal=color,
        color_system="truecolor" if color else None,
    )


def render_text(
    post: Post,
    width: int = DEFAULT_WIDTH,
    code_theme: str = DEFAULT_CODE_THEME,
) -> str:
    """Render a post to plain text."""
    console = _recording_console(width, color=False)
    render_post(post, console=console, code_theme=code_theme)
    return console.export_text()


def render_html(
    post: Post,
    width: int = DEFAULT_WIDTH,
    code_theme: str = DEFAULT_CODE_THEME,
    inline_styles: bool = False,
) -> str:
    """Render a post to a standalone HTML document."""
    console = _recording_console(width, color=True)
    render_post(post, console=console, code_theme=code_theme)
    return console.export_html(inline_styles=inline_styles)
