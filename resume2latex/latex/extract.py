"""Normalize a model reply into bare LaTeX source."""

from __future__ import annotations

import re

from resume2latex.errors import EmptyModelResponseError

_FENCED_BLOCK = re.compile(r"```(?:latex|tex)?\s*([\s\S]*?)```")


def extract_latex(text: str | None) -> str:
    """Return the first fenced block's contents, or the whole reply, trimmed.

    Raises EmptyModelResponseError when the reply carries no text.
    """
    if not text or not text.strip():
        raise EmptyModelResponseError()

    match = _FENCED_BLOCK.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return text.strip()
