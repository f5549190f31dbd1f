# journal/markdown/extensions/definition_lists.py
"""
markdown-it plugin adding definition lists.

Syntax:

    Term
    : First definition
    : Second definition

    Another term
    : Its definition

- A term is a single non-blank line that does not start with ``:``.
- Every line directly below it that starts with ``:`` and whitespace is one
  of its definitions. The marker is removed from the rendered text.
- Entries separated by blank lines belong to the same list.
- A term with no definition underneath is not a definition list; the rule
  declines and the line is parsed as an ordinary paragraph.

Terms and definitions accept inline markup (emphasis, links, code spans).

Rendered as:

    <dl><dt>Term</dt><dd>First definition</dd><dd>Second definition</dd>...</dl>
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

from markdown_it.rules_core import StateCore, linkify, text_join
from markdown_it.token import Token

if TYPE_CHECKING:
    from markdown_it import MarkdownIt
    from markdown_it.renderer import RendererHTML
    from markdown_it.rules_block import StateBlock
    from markdown_it.utils import EnvType, OptionsDict

TOKEN_TYPE = "definition_list"

# Applied to the line content with its indentation already removed
_DEFINITION_RE = re.compile(r"^:[ \t]+(.*)$")


@dataclass(frozen=True)
class DefinitionListEntry:
    term: Token
    descriptions: tuple[Token, ...]


def _line_content(state: StateBlock, line: int) -> str:
    return state.src[state.bMarks[line] + state.tShift[line] : state.eMarks[line]]


def _is_block_line(state: StateBlock, line: int, end_line: int) -> bool:
    """Non-blank, inside the current container and not an indented code line."""
    if line >= end_line or state.isEmpty(line):
        return False
    if state.sCount[line] < state.blkIndent:
        return False
    return state.sCount[line] - state.blkIndent < 4


def _term_at(state: StateBlock, line: int, end_line: int) -> Optional[str]:
    if not _is_block_line(state, line, end_line):
        return None
    content = _line_content(state, line)
    if content.startswith((":", "```", "~~~")):
        return None
    return content.strip()


def _definition_at(state: StateBlock, line: int, end_line: int) -> Optional[str]:
    if not _is_block_line(state, line, end_line):
        return None
    match = _DEFINITION_RE.match(_line_content(state, line))
    if not match:
        return None
    return match.group(1).strip()


def starts_definition_list(state: StateBlock, line: int, end_line: int) -> bool:
    """
    Cheap check run at every block position: a term line directly followed
    by a definition line. Nothing else is scanned unless this passes.
    """
    return (
        _term_at(state, line, end_line) is not None
        and _definition_at(state, line + 1, end_line) is not None
    )


def _inline_token(content: str, line: int) -> Token:
    return Token(
        "inline", "", 0, content=content, map=[line, line + 1], children=[], block=True
    )


def definition_list_rule(
    state: StateBlock, start_line: int, end_line: int, silent: bool
) -> bool:
    if not starts_definition_list(state, start_line, end_line):
        return False

    if silent:
        return True

    entries: list[DefinitionListEntry] = []
    line = start_line

    while True:
        term = _term_at(state, line, end_line)
        if term is None:
            break

        cursor = line + 1
        descriptions: list[Token] = []
        while True:
            definition = _definition_at(state, cursor, end_line)
            if definition is None:
                break
            descriptions.append(_inline_token(definition, cursor))
            cursor += 1

        if not descriptions:
            # Term without definitions; leave it for the paragraph rule
            break

        entries.append(
            DefinitionListEntry(term=_inline_token(term, line), descriptions=tuple(descriptions))
        )

        line = min(state.skipEmptyLines(cursor), end_line)

    # starts_definition_list guarantees at least one entry
    token = state.push(TOKEN_TYPE, "dl", 0)
    token.map = [start_line, line]
    token.content = state.getLines(start_line, line, state.blkIndent, False)
    token.meta = {"entries": tuple(entries)}

    state.line = line
    return True


def definition_list_inline(state: StateCore) -> None:
    """
    Parse term and definition text with the inline grammar.

    Runs after the core ``inline`` rule so link references defined anywhere
    in the document are known. The entry tokens sit in ``meta`` rather than
    the token stream, so the later core passes (autolinking bare URLs,
    joining text runs) are applied to them here.
    """
    entry_tokens: list[Token] = []
    for token in state.tokens:
        if token.type != TOKEN_TYPE:
            continue
        for entry in token.meta["entries"]:
            for inline in (entry.term, *entry.descriptions):
                state.md.inline.parse(inline.content, state.md, state.env, inline.children)
                entry_tokens.append(inline)

    if not entry_tokens:
        return

    entry_state = StateCore(state.src, state.md, state.env, entry_tokens)
    linkify(entry_state)
    text_join(entry_state)


def render_definition_list(
    self: RendererHTML,
    tokens: Sequence[Token],
    idx: int,
    options: OptionsDict,
    env: EnvType,
) -> str:
    parts = ["<dl>"]
    for entry in tokens[idx].meta["entries"]:
        parts.append(f"<dt>{self.renderInline(entry.term.children, options, env)}</dt>")
        for description in entry.descriptions:
            parts.append(f"<dd>{self.renderInline(description.children, options, env)}</dd>")
    parts.append("</dl>\n")
    return "".join(parts)


def definition_list_plugin(md: MarkdownIt) -> None:
    # Ahead of every default block rule, and allowed to end a running paragraph
    md.block.ruler.before(
        "table", TOKEN_TYPE, definition_list_rule, {"alt": ["paragraph"]}
    )
    md.core.ruler.after("inline", "definition_list_inline", definition_list_inline)
    md.add_render_rule(TOKEN_TYPE, render_definition_list)
