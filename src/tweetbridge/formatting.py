"""Render status text for delivery: optional markup stripping, then soft wrap."""

from __future__ import annotations

import textwrap
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

from tweetbridge.config import WRAP_WIDTH
from tweetbridge.models import StripPolicy


def strip_html(text: str) -> str:
    """Drop tags and decode entities, keeping only the text content."""
    if "<" not in text and "&" not in text:
        return text
    with warnings.catch_warnings():
        # A bare URL tweet is valid input, not a mistaken file name.
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        soup = BeautifulSoup(text, "html.parser")
    return soup.get_text()


def should_strip(policy: StripPolicy, host_renders_html: bool) -> bool:
    if policy is StripPolicy.ALWAYS:
        return True
    if policy is StripPolicy.AUTO:
        return not host_renders_html
    return False


def word_wrap(text: str, width: int = WRAP_WIDTH) -> str:
    """Soft-wrap every line of *text* at *width* characters.

    Lines break at whitespace where possible; a run with no whitespace is
    cut at *width*.  Existing line breaks, tabs and whitespace-only lines
    are kept.
    """
    out: list[str] = []
    for line in text.split("\n"):
        if len(line) <= width:
            out.append(line)
            continue
        wrapped = textwrap.wrap(
            line,
            width=width,
            expand_tabs=False,
            break_long_words=True,
            break_on_hyphens=False,
            replace_whitespace=False,
        )
        out.extend(wrapped or [line])
    return "\n".join(out)


def format_message(
    raw_text: str,
    policy: StripPolicy = StripPolicy.AUTO,
    host_renders_html: bool = False,
    width: int = WRAP_WIDTH,
) -> str:
    text = strip_html(raw_text) if should_strip(policy, host_renders_html) else raw_text
    return word_wrap(text, width)
