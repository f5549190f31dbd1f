# journal/markdown/postprocessors/sanitizer.py

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import FrozenSet, Mapping
from urllib.parse import urlparse

import bleach
from bs4 import BeautifulSoup, NavigableString

logger = logging.getLogger(__name__)

# Attributes whose value is a URL and therefore subject to scheme checks
URL_ATTRIBUTES = frozenset({"href", "src"})

_URL_NOISE_RE = re.compile(r"[\x00-\x20]+")


@dataclass(frozen=True)
class SanitizePolicy:
    tags: FrozenSet[str]
    attributes: Mapping[str, FrozenSet[str]]
    protocols: FrozenSet[str]
    protocols_by_tag: Mapping[str, FrozenSet[str]]

    def protocols_for(self, tag: str) -> FrozenSet[str]:
        return self.protocols_by_tag.get(tag, self.protocols)

    @property
    def all_protocols(self) -> FrozenSet[str]:
        merged = set(self.protocols)
        for protocols in self.protocols_by_tag.values():
            merged.update(protocols)
        return frozenset(merged)

    def allows_attribute(self, tag: str, name: str, value: str) -> bool:
        """
        bleach attribute filter. Also enforces per-tag URL schemes, which
        bleach itself only knows globally.
        """
        if name not in self.attributes.get(tag, frozenset()):
            return False

        if name in URL_ATTRIBUTES:
            scheme = _url_scheme(value)
            if scheme and scheme not in self.protocols_for(tag):
                return False

        return True


def _url_scheme(value: str) -> str:
    normalized = _URL_NOISE_RE.sub("", value or "").lower()
    try:
        return urlparse(normalized).scheme
    except ValueError:
        # Unparseable; treat as a scheme nobody allows
        return "invalid"


@lru_cache(maxsize=1)
def get_sanitize_policy() -> SanitizePolicy:
    """Allowlist applied to every rendered document. Built once."""
    allowed_tags = frozenset(
        {
            # sections
            "address",
            "article",
            "aside",
            "footer",
            "header",
            "hgroup",
            "main",
            "nav",
            "section",
            # headings
            "h1",
            "h2",
            "h3",
            "h4",
            "h5",
            "h6",
            # text blocks
            "blockquote",
            "div",
            "p",
            "pre",
            "hr",
            "figure",
            "figcaption",
            "details",
            "summary",
            # lists
            "ul",
            "ol",
            "li",
            "dl",
            "dt",
            "dd",
            # inline
            "a",
            "abbr",
            "b",
            "bdi",
            "bdo",
            "br",
            "cite",
            "code",
            "data",
            "del",
            "dfn",
            "em",
            "i",
            "kbd",
            "mark",
            "q",
            "rb",
            "rp",
            "rt",
            "rtc",
            "ruby",
            "s",
            "samp",
            "small",
            "span",
            "strong",
            "sub",
            "sup",
            "time",
            "u",
            "var",
            "wbr",
            # tables
            "caption",
            "col",
            "colgroup",
            "table",
            "tbody",
            "td",
            "tfoot",
            "th",
            "thead",
            "tr",
            # media
            "img",
            # code block copy control
            "button",
        }
    )

    allowed_attrs = {
        "a": ["href", "name", "target", "rel", "title"],
        "img": [
            "src",
            "alt",
            "title",
            "width",
            "height",
            "class",
            "loading",
            "decoding",
            "referrerpolicy",
            "fetchpriority",
            "srcset",
            "sizes",
        ],
        "figure": ["class", "data-language"],
        "figcaption": ["class"],
        "pre": ["class"],
        "code": ["class", "data-language"],
        "span": ["class", "aria-hidden", "data-checked"],
        "button": ["type", "class", "data-action", "data-state"],
        "ul": ["class"],
        "ol": ["class", "start"],
        "li": ["class"],
    }

    return SanitizePolicy(
        tags=allowed_tags,
        attributes=MappingProxyType({tag: frozenset(attrs) for tag, attrs in allowed_attrs.items()}),
        protocols=frozenset({"http", "https", "mailto"}),
        protocols_by_tag=MappingProxyType({"img": frozenset({"http", "https", "data"})}),
    )


def _restore_pre_newlines(html):
    """
    html5lib drops the first newline after ``<pre>`` when parsing, so a
    ``<pre>`` whose text still starts with one had two in the input. Double
    it back so the serialized form parses to the same text again.
    """
    soup = BeautifulSoup(html, "html.parser")

    for pre in soup.find_all("pre"):
        first = pre.contents[0] if pre.contents else None
        if isinstance(first, NavigableString) and first.startswith("\n"):
            first.replace_with(NavigableString("\n" + str(first)))

    return str(soup)


def sanitize_html(html, context):
    """
    Filter rendered HTML against the allowlist.

    This is the FIRST post-processor: everything before it is treated as
    untrusted. Disallowed tags are stripped (their text is kept), disallowed
    attributes and URLs with disallowed schemes are dropped, comments removed.
    """
    policy = get_sanitize_policy()

    cleaned = bleach.clean(
        html,
        tags=policy.tags,
        attributes=policy.allows_attribute,
        protocols=policy.all_protocols,
        strip=True,
        strip_comments=True,
    )

    return _restore_pre_newlines(cleaned)
