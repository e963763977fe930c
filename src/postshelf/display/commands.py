"""
Shared display functions for postshelf info commands.

Every function supports Rich formatting (interactive) and plain text
output (piping/CLI) through the ``use_rich`` flag. Lines are written as
templates with ``{name}`` placeholders; markup is stripped from the
template before values are filled in, so author text is printed verbatim.
"""

import re
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional

from rich.markup import escape

from postshelf.display.formatting import format_labels, format_timestamp

if TYPE_CHECKING:
    from rich.console import Console

    from postshelf.config import Settings
    from postshelf.content import LintReport, Post

_MARKUP_RE = re.compile(
    r"\[/?(?:bold|dim|red|green|yellow|cyan|primary|success|error|warning|info|muted"
    r"|path|title|tag|category|date)\]"
)


def _strip_rich_markup(text: str) -> str:
    """Strip only Rich markup tags used by this module."""
    return _MARKUP_RE.sub("", text)


def _printer(console: Optional["Console"], use_rich: bool) -> Callable[..., None]:
    """Return a print function for the chosen mode."""
    if use_rich and console is None:
        from postshelf.display.console import get_console

        console = get_console()

    def _print(template: str = "", **values: Any) -> None:
        if use_rich and console:
            console.print(template.format(**{k: escape(str(v)) for k, v in values.items()}))
        else:
            print(_strip_rich_markup(template).format(**values))

    return _print


def display_posts(
    posts: Iterable["Post"],
    console: Optional["Console"] = None,
    use_rich: bool = True,
) -> int:
    """
    Display a listing of posts: date, slug, title, categories and tags.

    Returns:
        Number of posts displayed
    """
    _print = _printer(console, use_rich)

    _print("\n[bold]Posts:[/bold]")
    _print("-" * 60)

    count = 0
    for post in posts:
        count += 1
        _print(
            "  [date]{date}[/date]  [title]{title}[/title]",
            date=format_timestamp(post.date),
            title=post.title,
        )
        _print("    slug: [path]{slug}[/path]  ({path})", slug=post.slug, path=post.path)
        _print(
            "    categories: [category]{categories}[/category]  tags: [tag]{tags}[/tag]",
            categories=format_labels(post.categories),
            tags=format_labels(post.tags),
        )

    if count == 0:
        _print("  No posts found")
    _print()
    return count


def display_lint_report(
    report: "LintReport",
    console: Optional["Console"] = None,
    use_rich: bool = True,
) -> None:
    """Display lint issues grouped by document, followed by totals."""
    _print = _printer(console, use_rich)

    _print("\n[bold]Lint Results:[/bold]")
    _print("-" * 60)

    by_path: dict[str, list] = {}
    for issue in report.issues:
        by_path.setdefault(issue.path, []).append(issue)

    for path in sorted(by_path):
        _print("\n  [path]{path}[/path]", path=path)
        for issue in sorted(by_path[path], key=lambda i: (i.line or 0, i.code)):
            style = "error" if issue.is_error else "warning"
            _print(
                f"    [{style}]{{code}}[/{style}] line {{line}}: {{message}}",
                code=issue.code,
                line=issue.line if issue.line is not None else "-",
                message=issue.message,
            )

    errors = len(report.errors)
    warnings = len(report.warnings)
    summary_style = "error" if errors else "success"
    _print(
        f"\n[{summary_style}]{report.documents} document(s) checked: "
        f"{errors} error(s), {warnings} warning(s)[/{summary_style}]"
    )
    _print()


def display_stats(
    stats: dict,
    console: Optional["Console"] = None,
    use_rich: bool = True,
    top: int = 20,
) -> None:
    """Display post counts plus tag and category frequencies."""
    _print = _printer(console, use_rich)

    _print("\n[bold]Content Statistics:[/bold]")
    _print("-" * 60)
    _print("  Posts:             {n}", n=stats["total_posts"])
    _print("  Invalid documents: {n}", n=stats["invalid_documents"])
    _print("  First published:   {date}", date=stats["first_published"] or "(none)")
    _print("  Last published:    {date}", date=stats["last_published"] or "(none)")

    for label, key, style in (("Categories", "categories", "category"), ("Tags", "tags", "tag")):
        counts = stats.get(key, {})
        _print(f"\n[bold]{label}:[/bold]")
        if not counts:
            _print("  (none)")
            continue
        for name, count in list(counts.items())[:top]:
            _print(f"  [{style}]{{name}}[/{style}]: {{count}}", name=name, count=count)
        if len(counts) > top:
            _print(f"  ... and {len(counts) - top} more")
    _print()


def display_config(
    settings: "Settings",
    console: Optional["Console"] = None,
    use_rich: bool = True,
) -> None:
    """
    Display configuration paths and active settings.

    Args:
        settings: Current settings
        console: Rich console for formatted output (optional)
        use_rich: Whether to use Rich formatting (False for plain text)
    """
    _print = _printer(console, use_rich)

    paths = settings.config_paths

    _print("\n[bold]Configuration Paths:[/bold]")
    _print("-" * 60)
    if paths is not None:
        _print("  Local:    {value}", value=paths.local_dir or "(none)")
        _print("  User:     {value}", value=paths.user_dir or "(none)")
        _print("  .env:     {value}", value=paths.env_file or "(none)")
        _print("  settings: {value}", value=paths.settings_file or "(none)")
    else:
        _print("  (not discovered)")

    _print("\n[bold]Active Settings:[/bold]")
    _print("-" * 60)
    _print("  Base Directory:     {value}", value=settings.base_dir)
    _print("  Posts Directories:  {value}", value=", ".join(settings.posts_dirs))
    _print("  Extensions:         {value}", value=", ".join(settings.extensions))
    _print(
        "  Ignore Patterns:    {value}",
        value=", ".join(settings.ignore_patterns) or "(none)",
    )
    _print("  Code Theme:         {value}", value=settings.code_theme)
    _print("  Console Theme:      {value}", value=settings.theme)
    _print("  Log Level:          {value}", value=settings.log_level)
    _print("\n[bold]Lint Policy:[/bold]")
    _print("-" * 60)
    _print("  Require Tags:          {value}", value=settings.lint.require_tags)
    _print("  Require Code Language: {value}", value=settings.lint.require_code_language)
    _print("  Check Assets:          {value}", value=settings.lint.check_assets)
    _print("  Check Filename Date:   {value}", value=settings.lint.check_filename_date)
    _print()
