"""Changelog renderers."""

from .markdown import MarkdownRenderer, render_markdown
from .yaml import render_yaml

__all__ = [
    "MarkdownRenderer",
    "render_markdown",
    "render_yaml",
]
