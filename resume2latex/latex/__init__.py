"""LaTeX template, prompt and response helpers."""

from resume2latex.latex.extract import extract_latex
from resume2latex.latex.prompts import (
    FORMATTING_DIRECTIVES,
    build_extracted_manifest_note,
    build_manifest_note,
    build_prompt,
    wrap_extracted_text,
)
from resume2latex.latex.template import DEFAULT_TEMPLATE_PATH, clear_template_cache, load_template

__all__ = [
    "DEFAULT_TEMPLATE_PATH",
    "FORMATTING_DIRECTIVES",
    "build_extracted_manifest_note",
    "build_manifest_note",
    "build_prompt",
    "clear_template_cache",
    "extract_latex",
    "load_template",
    "wrap_extracted_text",
]
