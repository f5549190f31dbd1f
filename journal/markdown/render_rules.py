# journal/markdown/render_rules.py
"""
Render rules replacing markdown-it's defaults for code blocks, task list
checkboxes and images. Every other token type keeps the stock rendering.

Code blocks come out as:

    <figure class="code-block" data-language="python">
      <figcaption class="code-block__header">
        <span class="code-block__lang">Python</span>
        <button type="button" class="code-block__copy" data-action="copy-code">Copy</button>
      </figcaption>
      <pre class="code-block__body"><code class="highlight language-python" data-language="python">...</code></pre>
    </figure>

The client-side copy handler finds the code through ``data-language``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Sequence

from markdown_it.common.utils import escapeHtml, unescapeAll

from .extensions import task_lists
from .highlighter import highlight_code
from .languages import language_label, resolve_language

if TYPE_CHECKING:
    from markdown_it.renderer import RendererHTML
    from markdown_it.token import Token
    from markdown_it.utils import EnvType, OptionsDict

COPY_BUTTON_LABEL = "Copy"

CHECKED_GLYPH = "✅"  # white heavy check mark
UNCHECKED_GLYPH = "❌"  # cross mark

IMAGE_CLASS = "markdown-image"
IMAGE_ATTRIBUTES = (
    'loading="lazy"',
    'decoding="async"',
    'referrerpolicy="no-referrer"',
    'fetchpriority="auto"',
)


def render_code_block(
    self: RendererHTML,
    tokens: Sequence[Token],
    idx: int,
    options: OptionsDict,
    env: EnvType,
) -> str:
    """Used for both fenced and indented code."""
    token = tokens[idx]
    source = token.content
    if source.endswith("\n"):
        source = source[:-1]

    language = resolve_language(unescapeAll(token.info) if token.info else "")
    language_attr = escapeHtml(language)
    label = escapeHtml(language_label(language))

    highlighted = highlight_code(source, language)
    # Pygments output is already escaped
    body = highlighted if highlighted is not None else escapeHtml(source)

    code_classes = " ".join(escapeHtml(name) for name in ("highlight", f"language-{language}"))

    return (
        f'<figure class="code-block" data-language="{language_attr}">'
        f'<figcaption class="code-block__header">'
        f'<span class="code-block__lang">{label}</span>'
        f'<button type="button" class="code-block__copy" data-action="copy-code">{COPY_BUTTON_LABEL}</button>'
        f"</figcaption>"
        f'<pre class="code-block__body"><code class="{code_classes}" data-language="{language_attr}">{body}</code></pre>'
        f"</figure>\n"
    )


def render_checkbox(
    self: RendererHTML,
    tokens: Sequence[Token],
    idx: int,
    options: OptionsDict,
    env: EnvType,
) -> str:
    checked = bool(tokens[idx].meta.get("checked"))
    state = "true" if checked else "false"
    glyph = CHECKED_GLYPH if checked else UNCHECKED_GLYPH
    return f'<span class="task-checkbox" data-checked="{state}" aria-hidden="true">{glyph}</span>'


def render_image(
    self: RendererHTML,
    tokens: Sequence[Token],
    idx: int,
    options: OptionsDict,
    env: EnvType,
) -> str:
    token = tokens[idx]
    source = str(token.attrGet("src") or "").strip()
    alt_text = self.renderInlineAsText(token.children or [], options, env).strip()
    title = str(token.attrGet("title") or "").strip()

    attributes = [f'src="{escapeHtml(source)}"', f'alt="{escapeHtml(alt_text)}"']
    if title:
        attributes.append(f'title="{escapeHtml(title)}"')
    attributes.extend(IMAGE_ATTRIBUTES)
    attributes.append(f'class="{IMAGE_CLASS}"')

    return f"<img {' '.join(attributes)}>"


# Token type -> render function. Anything missing here renders with the defaults.
RENDER_RULES: Dict[str, Callable[..., str]] = {
    "fence": render_code_block,
    "code_block": render_code_block,
    task_lists.TOKEN_TYPE: render_checkbox,
    "image": render_image,
}
