import re

from bs4 import BeautifulSoup

_ABSOLUTE_URL_RE = re.compile(r"^https?://", re.IGNORECASE)

REQUIRED_REL = ("noopener", "noreferrer")
DEFAULT_TARGET = "_blank"


def modify_external_links(html, context):
    """
    Make absolute http(s) links safe to open from the page.

    rel always ends up containing noopener and noreferrer, merged with
    whatever the author wrote. target defaults to a new tab but an explicit
    target is kept. Relative and in-page links are left alone.
    Runs AFTER sanitization, on allowlisted markup only.
    """
    soup = BeautifulSoup(html, "html.parser")

    for link in soup.find_all("a", href=True):
        href = link["href"].strip()
        if not _ABSOLUTE_URL_RE.match(href):
            continue

        rel = link.get("rel", [])
        if isinstance(rel, str):
            rel = rel.split()
        link["rel"] = list(dict.fromkeys([*rel, *REQUIRED_REL]))

        if not link.get("target"):
            link["target"] = DEFAULT_TARGET

    return str(soup)
