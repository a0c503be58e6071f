"""Markup for question and answer text shown on the player screens.

Managers write questions in Markdown (code spans, emphasis, tables). Every
SELECT_ANSWER status carries the plain text for simple clients and the
rendered HTML for clients that display formatting. Raw HTML in the source is
escaped, never passed through.
"""

from __future__ import annotations

from functools import lru_cache

from markdown_it import MarkdownIt

_markdown = MarkdownIt("commonmark", {"html": False}).enable(["table", "strikethrough"])


@lru_cache(maxsize=256)
def render_question(text: str) -> str:
    """Render question text as block HTML, e.g. ``<p>What is <code>2 + 2</code>?</p>``."""
    return _markdown.render(text).strip()


@lru_cache(maxsize=1024)
def render_answer(text: str) -> str:
    # answers sit inside buttons, so no paragraph wrapper
    return _markdown.renderInline(text)


def render_answers(answers: list[str]) -> list[str]:
    return [render_answer(answer) for answer in answers]
