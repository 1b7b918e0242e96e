"""Prompt text for resume-to-LaTeX conversion."""

from __future__ import annotations

from collections.abc import Sequence

FORMATTING_DIRECTIVES = """\
You are a professional resume formatter that converts various resume formats into clean, professional LaTeX code.

GOAL: Make a clean and professional resume using the target documents pushing that data into the LaTeX template.

INSTRUCTIONS:
1. Analyze the provided resume document carefully.
2. Extract all relevant information including:
   - Contact details (name, email, phone, location, website, LinkedIn, GitHub)
   - Education history
   - Work experience
   - Skills
   - Projects
   - Certifications
   - Awards
   - Any other relevant sections
3. Use the provided LaTeX template below and fill it with the extracted information.
4. Ensure the formatting is clean, professional, and ATS-friendly.
5. Maintain the original content but improve organization and presentation.
6. Return ONLY the complete LaTeX code without any explanations or comments outside the code.
7. Keep the length to that which would make a single page pdf.

IMPORTANT:
- Use the provided template structure and commands.
- Do not change the LaTeX preamble or package imports.
- Ensure the document is complete and ready to compile.
- Optimize spacing and layout for a one-page resume when possible.
- Do not add any information that is not in the original resume.
- Do not use the provided documents for formatting at all. Only use them as information.
- Only use the provided LaTeX template as a reference for the structure and commands.
- Do not keep any template information in the final resume; the template supplies formatting, the documents supply content.
"""


def build_prompt(template: str) -> str:
    """Return the instruction block with ``template`` embedded verbatim."""
    return f"{FORMATTING_DIRECTIVES}\n\nTEMPLATE TO USE:\n```latex\n{template}\n```\n"


def _file_list(names: Sequence[str]) -> str:
    return "\n".join(f"- {name}" for name in names)


def build_manifest_note(file_names: Sequence[str]) -> str | None:
    """Listing of the attached documents, or None when no name is known."""
    names = [n for n in file_names if n]
    if not names:
        return None
    note = f"Note: The following documents have been provided:\n{_file_list(names)}\n\n"
    if len(names) > 1:
        note += (
            "Consider every attached document together; they describe the same person. "
        )
    return note + (
        "Please analyze the complete documents (including formatting and layout) "
        "and create a comprehensive, professional LaTeX resume."
    )


def build_extracted_manifest_note(file_names: Sequence[str]) -> str | None:
    """Listing used when documents were sent as extracted text."""
    names = [n for n in file_names if n]
    if not names:
        return None
    note = f"Note: The above content was extracted from:\n{_file_list(names)}\n\n"
    if len(names) > 1:
        note += (
            "Consider every document together; they describe the same person. "
        )
    return note + (
        "Please use this information to create a comprehensive, professional LaTeX resume."
    )


def wrap_extracted_text(file_name: str, text: str) -> str:
    label = file_name or "uploaded document"
    return (
        f"--- Resume Content from {label} ---\n"
        f"{text}\n"
        f"--- End of Resume Content ---"
    )
