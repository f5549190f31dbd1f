# journal/markdown/highlighter.py
"""
Pygments adapter used by the code block renderer.

Lexers are resolved once, at first use, into an immutable registry. A
language that is not in the registry is simply not highlighted; the caller
falls back to escaped plain text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .languages import PLAINTEXT

logger = logging.getLogger(__name__)

# Canonical language -> Pygments lexer name
REGISTERED_LANGUAGES: Mapping[str, str] = MappingProxyType(
    {
        "bash": "bash",
        "css": "css",
        "javascript": "javascript",
        "json": "json",
        "markdown": "markdown",
        "python": "python",
        "sql": "sql",
        "typescript": "typescript",
        "xml": "xml",
        "html": "html",
        "yaml": "yaml",
    }
)


@dataclass(frozen=True)
class HighlighterRegistry:
    lexers: Mapping[str, Lexer]

    def get(self, language: str) -> Lexer | None:
        return self.lexers.get(language)

    def __contains__(self, language: object) -> bool:
        return language in self.lexers


def build_registry(languages: Mapping[str, str]) -> HighlighterRegistry:
    """
    Resolve a lexer for every canonical language in ``languages``.

    Lexers keep leading and trailing newlines untouched so the highlighted
    markup lines up with the source the author wrote.
    """
    lexers: dict[str, Lexer] = {}
    for language, lexer_name in languages.items():
        try:
            lexers[language] = get_lexer_by_name(lexer_name, stripnl=False, ensurenl=False)
        except ClassNotFound:
            logger.warning(
                "No Pygments lexer named %r, %s code blocks will not be highlighted",
                lexer_name,
                language,
            )

    logger.debug("Highlighter registry built for %d languages", len(lexers))
    return HighlighterRegistry(lexers=MappingProxyType(lexers))


@lru_cache(maxsize=1)
def get_registry() -> HighlighterRegistry:
    """Process-wide registry, built on first use."""
    return build_registry(REGISTERED_LANGUAGES)


def highlight_code(
    source: str, language: str, registry: HighlighterRegistry | None = None
) -> str | None:
    """
    Return Pygments span markup for ``source``, or None when it should be
    rendered as escaped plain text instead.

    The returned markup is already HTML-escaped.
    """
    if not source:
        return None

    if not language or language == PLAINTEXT:
        return None

    registry = registry or get_registry()
    lexer = registry.get(language)
    if lexer is None:
        return None

    try:
        return highlight(source, lexer, HtmlFormatter(nowrap=True))
    except Exception:
        logger.warning("Highlighting failed for %s code block", language, exc_info=True)
        return None
