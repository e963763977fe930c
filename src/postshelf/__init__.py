"""
postshelf - content store and publish-time linter for front-matter blogs.

Usage:
    postshelf --list          # List posts
    postshelf --lint          # Check every post before publishing
    postshelf --show SLUG     # Preview a post in the terminal
    postshelf --init          # Initialize local config
"""

__version__ = "0.1.0"
