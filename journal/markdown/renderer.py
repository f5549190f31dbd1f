# journal/markdown/renderer.py

import logging
from functools import lru_cache

from markdown_it import MarkdownIt

from .config import get_markdown_config
from .extensions.definition_lists import definition_list_plugin
from .extensions.task_lists import task_list_plugin
from .postprocessors import apply_postprocessors
from .render_rules import RENDER_RULES

logger = logging.getLogger(__name__)

PLUGINS = [
    definition_list_plugin,
    task_list_plugin,
]


class MarkdownRenderingError(RuntimeError):
    """The pipeline failed; no HTML was produced for the input."""


@lru_cache(maxsize=1)
def get_markdown_parser() -> MarkdownIt:
    """Build the parser once: grammar, plugins and render rule overrides."""
    config = get_markdown_config()

    md = MarkdownIt(config["preset"], config["options"]).enable(config["enable"])
    for plugin in PLUGINS:
        md.use(plugin)
    for token_type, rule in RENDER_RULES.items():
        md.add_render_rule(token_type, rule)

    logger.debug("Markdown parser ready with render overrides for %s", sorted(RENDER_RULES))
    return md


def render_markdown(text, context=None):
    """
    Main rendering function: markdown -> HTML -> sanitized HTML

    Args:
        text: Raw markdown text from the author (untrusted)
        context: Optional dict passed to postprocessors

    Returns:
        HTML safe to embed in a page as-is. Empty string for blank input.

    Raises:
        MarkdownRenderingError: if any stage fails. There is no partial output.
    """
    source = text if isinstance(text, str) else ""
    if not source.strip():
        return ""

    context = context or {}

    try:
        html = get_markdown_parser().render(source)

        # Post-processing: sanitization and link rewriting
        return apply_postprocessors(html, context)
    except Exception as exc:
        logger.error("Markdown rendering failed", exc_info=True)
        raise MarkdownRenderingError("Markdown rendering failed") from exc
