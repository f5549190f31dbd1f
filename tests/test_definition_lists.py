"""
Unit tests for the definition list block rule.

Rendering is checked on the raw markdown-it output (before sanitization) so
failures point at the grammar rather than the allowlist.
"""

from bs4 import BeautifulSoup

from journal.markdown.extensions.definition_lists import TOKEN_TYPE
from journal.markdown.renderer import get_markdown_parser


def to_html(text):
    return get_markdown_parser().render(text)


class TestDefinitionListTokens:
    """Test the token produced for a definition list."""

    def test_single_entry_token(self):
        tokens = get_markdown_parser().parse("Term\n: First def\n: Second def")

        assert tokens[0].type == TOKEN_TYPE
        assert tokens[0].map == [0, 3]
        assert tokens[0].content == "Term\n: First def\n: Second def"

        entries = tokens[0].meta["entries"]
        assert len(entries) == 1
        assert entries[0].term.content == "Term"
        assert [d.content for d in entries[0].descriptions] == ["First def", "Second def"]

    def test_entries_are_inline_parsed(self):
        tokens = get_markdown_parser().parse("*Term*\n: has `code`")
        entry = tokens[0].meta["entries"][0]

        assert [child.type for child in entry.term.children] == ["em_open", "text", "em_close"]
        assert "code_inline" in [child.type for child in entry.descriptions[0].children]

    def test_blank_separated_entries_share_one_token(self):
        tokens = get_markdown_parser().parse("Alpha\n: first\n\nBeta\n: second\n")
        lists = [token for token in tokens if token.type == TOKEN_TYPE]

        assert len(lists) == 1
        assert [entry.term.content for entry in lists[0].meta["entries"]] == ["Alpha", "Beta"]


class TestDefinitionListRendering:
    """Test the HTML emitted for definition lists."""

    def test_one_term_two_definitions(self):
        html = to_html("Term\n: First def\n: Second def")

        assert html == "<dl><dt>Term</dt><dd>First def</dd><dd>Second def</dd></dl>\n"

    def test_definitions_keep_source_order(self):
        soup = BeautifulSoup(to_html("Term\n: one\n: two\n: three"), "html.parser")

        assert [dd.get_text() for dd in soup.find_all("dd")] == ["one", "two", "three"]

    def test_inline_markup_inside_terms_and_definitions(self):
        html = to_html("**Bold** term\n: a [link](https://example.com) and `code`")
        soup = BeautifulSoup(html, "html.parser")

        assert soup.dt.strong.get_text() == "Bold"
        assert soup.dd.a["href"] == "https://example.com"
        assert soup.dd.code.get_text() == "code"

    def test_reference_links_defined_later_resolve(self):
        html = to_html("Term\n: see [the docs]\n\n[the docs]: https://example.com/docs")
        soup = BeautifulSoup(html, "html.parser")

        assert soup.dd.a["href"] == "https://example.com/docs"

    def test_blank_line_separated_entries_merge(self):
        soup = BeautifulSoup(to_html("Alpha\n: first\n\nBeta\n: second"), "html.parser")

        assert len(soup.find_all("dl")) == 1
        assert [dt.get_text() for dt in soup.find_all("dt")] == ["Alpha", "Beta"]

    def test_marker_whitespace_is_stripped(self):
        soup = BeautifulSoup(to_html("Term\n:\t  padded definition  "), "html.parser")

        assert soup.dd.get_text() == "padded definition"

    def test_interrupts_a_running_paragraph(self):
        soup = BeautifulSoup(to_html("Intro line\nTerm\n: definition"), "html.parser")

        assert soup.p.get_text() == "Intro line"
        assert soup.dt.get_text() == "Term"

    def test_inside_blockquote(self):
        soup = BeautifulSoup(to_html("> Term\n> : definition"), "html.parser")

        assert soup.blockquote.dl is not None
        assert soup.blockquote.dd.get_text() == "definition"


class TestDefinitionListBacktracking:
    """Test inputs that must not become definition lists."""

    def test_term_without_definition_is_a_paragraph(self):
        html = to_html("Term\nNot a definition")

        assert "<dl>" not in html
        assert html.startswith("<p>Term")
        assert "Not a definition</p>" in html

    def test_trailing_term_without_definition_becomes_paragraph(self):
        soup = BeautifulSoup(to_html("Alpha\n: first\nBeta"), "html.parser")

        assert [dt.get_text() for dt in soup.find_all("dt")] == ["Alpha"]
        assert soup.p.get_text() == "Beta"

    def test_blank_line_between_term_and_marker(self):
        html = to_html("Term\n\n: not attached")

        assert "<dl>" not in html

    def test_colon_without_space_is_not_a_marker(self):
        html = to_html("Term\n:nospace")

        assert "<dl>" not in html

    def test_fenced_code_is_left_alone(self):
        html = to_html("```\n: inside a fence\n```")

        assert "<dl>" not in html
        assert ": inside a fence" in html

    def test_indented_code_is_left_alone(self):
        html = to_html("    Term\n    : definition")

        assert "<dl>" not in html


class TestDefinitionListAutolinks:
    """Test that bare URLs in entries are linked like they are in paragraphs."""

    def test_bare_url_in_definition(self):
        soup = BeautifulSoup(to_html("Term\n: see www.example.com here"), "html.parser")

        assert soup.dd.a["href"] == "http://www.example.com"
        assert soup.dd.get_text() == "see www.example.com here"

    def test_bare_url_in_term(self):
        soup = BeautifulSoup(to_html("https://example.com/a\n: a page"), "html.parser")

        assert soup.dt.a["href"] == "https://example.com/a"

    def test_entry_text_is_joined(self):
        tokens = get_markdown_parser().parse("Term\n: 1 \\* 2")
        children = tokens[0].meta["entries"][0].descriptions[0].children

        assert [child.type for child in children] == ["text"]
        assert children[0].content == "1 * 2"
