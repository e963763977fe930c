#!/usr/bin/env python3
"""
postshelf CLI entry point.

Usage:
    postshelf --list                  # List posts (filter with --tag / --category)
    postshelf --show SLUG             # Render a post in the terminal
    postshelf --html SLUG [-o FILE]   # Export a post preview as HTML
    postshelf --lint                  # Lint every post; exit 1 on errors
    postshelf --stats                 # Tag and category frequencies
    postshelf --new "Title"           # Scaffold a new post
    postshelf --init                  # Initialize local config
    postshelf --config                # Show configuration and settings
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from postshelf.config import Settings, load_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="postshelf",
        description="postshelf - content store and linter for front-matter blog posts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Commands
    parser.add_argument(
        "--list",
        action="store_true",
        help="List posts",
    )

    parser.add_argument(
        "--show",
        type=str,
        metavar="SLUG",
        help="Render a post in the terminal",
    )

    parser.add_argument(
        "--html",
        type=str,
        metavar="SLUG",
        help="Export a post preview as standalone HTML",
    )

    parser.add_argument(
        "--lint",
        action="store_true",
        help="Lint all posts (exit code 1 if any error is found)",
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show post count and tag/category frequencies",
    )

    parser.add_argument(
        "--new",
        type=str,
        metavar="TITLE",
        help="Create a new post skeleton with the given title",
    )

    parser.add_argument(
        "--init",
        action="store_true",
        help="Initialize local configuration in .postshelf/",
    )

    parser.add_argument(
        "--config",
        action="store_true",
        help="Show configuration locations and exit",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    # Modifiers
    parser.add_argument(
        "-p",
        "--path",
        type=str,
        help="Site directory (default: current directory)",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output file for --html (default: stdout)",
    )

    parser.add_argument(
        "--tag",
        type=str,
        help="Filter --list by tag",
    )

    parser.add_argument(
        "--category",
        type=str,
        help="Filter --list by category",
    )

    parser.add_argument(
        "--tags",
        type=str,
        help="Comma-separated tags for --new",
    )

    parser.add_argument(
        "--categories",
        type=str,
        help="Comma-separated categories for --new",
    )

    parser.add_argument(
        "--plain",
        action="store_true",
        help="Plain text output without Rich formatting",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )

    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for CLI runs."""
    level_name = "DEBUG" if settings.verbose else settings.log_level
    logging.basicConfig(
        format=LOG_FORMAT,
        level=getattr(logging, level_name, logging.WARNING),
    )


def apply_args_to_settings(args: argparse.Namespace, settings: Settings) -> Settings:
    """Apply command line arguments to settings."""
    if getattr(args, "verbose", False):
        settings.verbose = True

    path_arg = getattr(args, "path", None)
    if path_arg is not None:
        settings.base_dir = Path(path_arg).resolve()

    return settings


def _split_labels(raw: Optional[str]) -> list[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def show_version() -> None:
    """Show version information."""
    from postshelf import __version__

    print(f"postshelf version {__version__}")


def run_list(
    settings: Settings,
    tag: Optional[str],
    category: Optional[str],
    use_rich: bool,
) -> int:
    """List posts, optionally filtered."""
    from postshelf.content import ContentStore
    from postshelf.display import display_posts

    store = ContentStore.from_settings(settings)
    if tag or category:
        posts = store.query(tag=tag, category=category, limit=sys.maxsize)
    else:
        posts = (post for _, post in store.iter_documents() if not isinstance(post, Exception))
    display_posts(posts, use_rich=use_rich)
    return 0


def run_lint(settings: Settings, use_rich: bool) -> int:
    """Lint every post; returns 1 if any error was found."""
    from postshelf.content import ContentStore, Linter
    from postshelf.display import display_lint_report

    store = ContentStore.from_settings(settings)
    linter = Linter(settings.lint, base_dir=settings.base_dir)
    report = linter.lint_store(store)
    logger.info(
        f"Linted {report.documents} document(s): "
        f"{len(report.errors)} error(s), {len(report.warnings)} warning(s)"
    )
    display_lint_report(report, use_rich=use_rich)
    return 0 if report.ok else 1


def run_stats(settings: Settings, use_rich: bool) -> int:
    """Show store statistics."""
    from postshelf.content import ContentStore
    from postshelf.display import display_stats

    store = ContentStore.from_settings(settings)
    display_stats(store.stats(), use_rich=use_rich)
    return 0


def run_show(settings: Settings, slug: str, use_rich: bool) -> int:
    """Render one post to the terminal."""
    from postshelf.content import ContentStore
    from postshelf.content.render import render_post, render_text

    post = ContentStore.from_settings(settings).get(slug)
    if post is None:
        print(f"Error: Post '{slug}' not found")
        return 1

    if use_rich:
        render_post(post, code_theme=settings.code_theme)
    else:
        print(render_text(post, code_theme=settings.code_theme), end="")
    return 0


def run_html(settings: Settings, slug: str, output: Optional[str]) -> int:
    """Export one post to HTML (stdout or file)."""
    from postshelf.content import ContentStore
    from postshelf.content.render import render_html

    post = ContentStore.from_settings(settings).get(slug)
    if post is None:
        print(f"Error: Post '{slug}' not found")
        return 1

    html = render_html(post, code_theme=settings.code_theme)
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        print(f"Wrote {output_path}")
    else:
        print(html)
    return 0


def run_new(settings: Settings, title: str, tags: list[str], categories: list[str]) -> int:
    """Scaffold a new post in the first posts directory."""
    from postshelf.content.scaffold import new_post

    posts_dir = settings.posts_dirs[0] if settings.posts_dirs else "_posts"
    try:
        path = new_post(
            settings.base_dir,
            title,
            tags=tags,
            categories=categories,
            posts_dir=posts_dir,
        )
    except (ValueError, FileExistsError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Created {path}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.version:
        show_version()
        return 0

    if args.init:
        from postshelf.config import init_local_config

        target = Path(args.path).resolve() if args.path else None
        return 0 if init_local_config(target) else 1

    base_dir = Path(args.path).resolve() if args.path else None
    settings = load_settings(base_dir)
    settings = apply_args_to_settings(args, settings)
    configure_logging(settings)

    use_rich = not args.plain and sys.stdout.isatty()
    if use_rich:
        from postshelf.display import reset_console, set_theme

        set_theme(settings.theme)
        reset_console()

    try:
        if args.config:
            from postshelf.display import display_config

            display_config(settings, use_rich=use_rich)
            return 0

        if args.new:
            return run_new(
                settings,
                args.new,
                _split_labels(args.tags),
                _split_labels(args.categories),
            )

        if args.lint:
            return run_lint(settings, use_rich)

        if args.stats:
            return run_stats(settings, use_rich)

        if args.show:
            return run_show(settings, args.show, use_rich)

        if args.html:
            return run_html(settings, args.html, args.output)

        if args.list or args.tag or args.category:
            return run_list(settings, args.tag, args.category, use_rich)

    except OSError as e:
        if settings.verbose:
            logger.exception("Command failed")
        print(f"Error: {e}")
        return 1

    build_parser().print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
