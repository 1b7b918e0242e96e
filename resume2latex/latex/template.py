"""Loading of the LaTeX template embedded in every prompt."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_PATH = Path(__file__).resolve().parent.parent / "templates" / "resume-template.tex"


@lru_cache(maxsize=8)
def _read_template(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def load_template(path: str | Path | None = None) -> str:
    """Return the template text, or "" if it cannot be read.

    Successful reads are cached for the life of the process; failed reads
    are retried on the next call.
    """
    resolved = Path(path).expanduser().resolve() if path else DEFAULT_TEMPLATE_PATH
    try:
        return _read_template(resolved)
    except (OSError, UnicodeDecodeError):
        logger.warning("Could not read LaTeX template %s; continuing without it", resolved, exc_info=True)
        return ""


def clear_template_cache() -> None:
    _read_template.cache_clear()
