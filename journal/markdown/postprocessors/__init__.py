# journal/markdown/postprocessors/__init__.py

from .modify_external_links import modify_external_links
from .sanitizer import sanitize_html

POSTPROCESSORS = [
    sanitize_html,  # Allowlist filtering, must stay first
    modify_external_links,  # rel/target on absolute links
    # Order matters - they run sequentially
]


def apply_postprocessors(html, context):
    """Apply all postprocessors in order"""
    for processor in POSTPROCESSORS:
        html = processor(html, context)
    return html


def sanitize(html: str) -> str:
    """Run the full sanitizing chain over a standalone HTML fragment."""
    return apply_postprocessors(html, {})
