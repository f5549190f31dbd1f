# journal/markdown/extensions/task_lists.py
"""
GitHub-style task list items:

    - [x] done
    - [ ] not yet

The ``[ ]`` / ``[x]`` marker at the start of a list item's first paragraph is
removed and replaced by a ``task_checkbox`` token carrying the checked state.
How the checkbox looks is up to the renderer rule for that token type.

``mdit_py_plugins.tasklists`` is not used: it writes the checkbox as an
``html_inline`` ``<input type="checkbox">`` string, which the render rule
table cannot restyle and which the sanitizer would strip. Emitting a token of
our own lets ``render_rules.render_checkbox`` draw a read-only glyph instead.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, List

from markdown_it.token import Token

if TYPE_CHECKING:
    from markdown_it import MarkdownIt
    from markdown_it.rules_core import StateCore

TOKEN_TYPE = "task_checkbox"

_TASK_MARKER_RE = re.compile(r"^\[([ xX])\][ \t]")
_LIST_OPEN_TYPES = ("bullet_list_open", "ordered_list_open")


def _add_class(token: Token, class_name: str) -> None:
    classes = str(token.attrGet("class") or "").split()
    if class_name not in classes:
        token.attrJoin("class", class_name)


def _parent_list(tokens: List[Token], item_index: int) -> Token | None:
    level = tokens[item_index].level - 1
    for index in range(item_index - 1, -1, -1):
        token = tokens[index]
        if token.type in _LIST_OPEN_TYPES and token.level == level:
            return token
    return None


def task_list_rule(state: StateCore) -> None:
    tokens = state.tokens
    for index in range(2, len(tokens)):
        token = tokens[index]
        if token.type != "inline":
            continue
        if tokens[index - 1].type != "paragraph_open" or tokens[index - 2].type != "list_item_open":
            continue
        if not token.children or token.children[0].type != "text":
            continue

        first = token.children[0]
        match = _TASK_MARKER_RE.match(first.content)
        if not match:
            continue

        checkbox = Token(TOKEN_TYPE, "span", 0, meta={"checked": match.group(1) in "xX"})
        first.content = first.content[3:]
        token.content = token.content[3:]
        token.children.insert(0, checkbox)

        _add_class(tokens[index - 2], "task-list-item")
        parent = _parent_list(tokens, index - 2)
        if parent is not None:
            _add_class(parent, "contains-task-list")


def task_list_plugin(md: MarkdownIt) -> None:
    md.core.ruler.after("inline", "task_lists", task_list_rule)
