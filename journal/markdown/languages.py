# journal/markdown/languages.py
"""
Normalisation of code fence language tags.

Authors write whatever they like after the opening fence (``js``, ``TS``,
``python title="x.py"``...). Everything downstream works with a single
canonical identifier and a human readable label for it.
"""

import re
from typing import Dict, Optional

PLAINTEXT = "plaintext"

# Free-form tag -> canonical identifier. Unknown tags pass through unchanged.
CODE_LANGUAGE_ALIASES: Dict[str, str] = {
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "sh": "bash",
    "shell": "bash",
    "bash": "bash",
    "zsh": "bash",
    "py": "python",
    "plaintext": PLAINTEXT,
    "text": PLAINTEXT,
    "jsonc": "json",
    "yml": "yaml",
    "md": "markdown",
}

LANGUAGE_LABELS: Dict[str, str] = {
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "bash": "Bash",
    "python": "Python",
    "html": "HTML",
    "css": "CSS",
    "json": "JSON",
    "sql": "SQL",
    "yaml": "YAML",
    "markdown": "Markdown",
    PLAINTEXT: "Plain Text",
}

_SEPARATOR_RE = re.compile(r"[-_]+")
_WORD_START_RE = re.compile(r"\b\w")


def resolve_language(value: Optional[str]) -> str:
    """
    Map a fence info string to its canonical language.

    Only the first whitespace-delimited word is significant, so
    ``"python title=app.py"`` resolves to ``"python"``. Empty input
    resolves to ``"plaintext"``.
    """
    base = (value or "").strip().lower()
    if not base:
        return PLAINTEXT

    first_token = base.split()[0]
    return CODE_LANGUAGE_ALIASES.get(first_token, first_token)


def language_label(language: str) -> str:
    """Human readable name shown in the code block header."""
    preset = LANGUAGE_LABELS.get(language)
    if preset:
        return preset

    formatted = _SEPARATOR_RE.sub(" ", language or "")
    formatted = _WORD_START_RE.sub(lambda match: match.group(0).upper(), formatted)

    return formatted.strip() or LANGUAGE_LABELS[PLAINTEXT]
