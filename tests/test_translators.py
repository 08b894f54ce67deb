"""Tests for the per-tag translators, exercised through translate()."""

import pytest
from chatdown import MissingAttributeError, translate
from chatdown.models import ImageRef

ZWSP = "\u200b"


def md(html: str) -> str:
    return translate(html).markdown


class TestInlineWrappers:
    """Tests for emphasis, code and other wrapping translators."""

    def test_bold(self):
        """Test bold-family tags."""
        for tag in ("b", "strong", "mark"):
            assert md(f"<{tag}>x</{tag}>") == "**x**"

    def test_nested_bold_is_not_doubled(self):
        """Test inner bold markers are stripped before re-wrapping."""
        assert md("<b>x <strong>y</strong></b>") == "**x y**"

    def test_italic(self):
        """Test italic-family tags."""
        for tag in ("i", "em", "cite", "dfn", "small"):
            assert md(f"<{tag}>x</{tag}>") == "*x*"

    def test_nested_italic_is_not_doubled(self):
        """Test inner italic markers are stripped before re-wrapping."""
        assert md("<em>a <i>b</i></em>") == "*a b*"

    def test_italic_keeps_nested_bold(self):
        """Test bold inside italics survives."""
        assert "**x**" in md("<em><b>x</b></em>")

    def test_strikethrough(self):
        """Test deleted text tags."""
        for tag in ("del", "s", "strike"):
            assert md(f"<{tag}>x</{tag}>") == "~~x~~"

    def test_underline(self):
        """Test underline tags."""
        assert md("<u>x</u>") == "__x__"
        assert md("<ins>x</ins>") == "__x__"

    def test_inline_code(self):
        """Test code-family tags."""
        for tag in ("code", "kbd", "samp", "var"):
            assert md(f"<{tag}>x</{tag}>") == "`x`"

    def test_inline_code_content_is_literal(self):
        """Test markup inside code is not interpreted."""
        assert md("<code><b>x</b></code>") == "`<b>x<\\/b>`"

    def test_span_is_trimmed(self):
        """Test spans contribute their trimmed content."""
        assert md("<span>  padded  </span>") == "padded"

    def test_abbreviation_with_title(self):
        """Test abbreviations append their expansion."""
        assert md('<abbr title="HyperText Markup Language">HTML</abbr>') == "HTML (HyperText Markup Language)"

    def test_abbreviation_without_title(self):
        """Test a missing title is simply omitted."""
        assert md("<abbr>HTML</abbr>") == "HTML"

    def test_inline_quote(self):
        """Test inline quotes render as code with optional source."""
        assert md("<q>hi</q>") == "`hi`"
        assert md('<q cite="http://c">hi</q>') == "`hi` ([Source](http://c))"

    def test_address_and_figcaption(self):
        """Test captions render italic with nested italics flattened."""
        assert md("<address>Written by <em>me</em></address>") == "*Written by me*"
        assert md("<figcaption> Figure 1 </figcaption>") == "*Figure 1*"


class TestAnchors:
    """Tests for AnchorTranslator."""

    def test_named_anchor(self):
        """Test anchors with text."""
        assert md('<a href="http://x">click</a>') == "[click](http://x)"

    def test_url_only_anchor(self):
        """Test anchors without text show their href."""
        assert md('<a href="http://x"></a>') == "[http://x](http://x)"

    def test_anchor_without_href(self):
        """Test anchors without href render their text only."""
        assert md('<a name="top">Top</a>') == "Top"

    def test_anchor_text_is_escaped(self):
        """Test literal link text is escaped."""
        assert md('<a href="http://x">a_b</a>') == "[a\\_b](http://x)"


class TestBlocks:
    """Tests for paragraph, heading, code and quote translators."""

    def test_paragraph(self):
        """Test paragraphs with inline content."""
        assert md("<p>Hello <b>world</b></p>") == "Hello **world**"

    def test_paragraphs_are_separated(self):
        """Test consecutive paragraphs land on separate lines."""
        assert md("<p>a</p><p>b</p>") == "a\nb"

    def test_heading(self):
        """Test headings render bold behind a zero-width space."""
        for level in range(1, 7):
            assert md(f"<h{level}>Title</h{level}>") == f"{ZWSP}**Title**"

    def test_heading_strips_nested_bold(self):
        """Test bold inside headings is flattened."""
        assert md("<h2>A <b>B</b></h2>") == f"{ZWSP}**A B**"

    def test_heading_then_paragraph(self):
        """Test a block after a heading starts on a new line."""
        assert md("<h1>NAME</h1><p>ls - list</p>") == f"{ZWSP}**NAME**\nls - list"

    def test_line_break(self):
        """Test line breaks and rules become newlines."""
        assert md("<p>a<br>b</p>") == "a \nb"
        assert md("<p>a<hr>b</p>") == "a \nb"

    def test_block_code_preserves_whitespace(self):
        """Test preformatted text is fenced verbatim."""
        assert md("<pre>  a\n    b\n</pre>") == "```\na\n    b\n```"

    def test_block_code_language_from_pre(self):
        """Test the language comes from the pre element."""
        assert md('<pre lang="py"><code>print(1)\n</code></pre>') == "```py\nprint(1)\n```"

    def test_block_code_language_from_nested_code(self):
        """Test a nested code element's language wins."""
        assert md('<pre lang="sh"><code lang="bash">ls -la</code></pre>') == "```bash\nls -la\n```"

    def test_block_code_is_not_escaped(self):
        """Test code blocks keep special characters and decode entities."""
        assert md("<pre>a_b &lt; (c)</pre>") == "```\na_b < (c)\n```"

    def test_blockquote(self):
        """Test block quotes prefix each non-blank line."""
        html = "<blockquote>line one\n  line two\n\n\n</blockquote>"
        assert md(html) == "> line one\n> line two"

    def test_blockquote_with_citation(self):
        """Test block quotes link their citation."""
        html = '<blockquote cite="http://s">quoted</blockquote>'
        assert md(html) == "> quoted\n[Source](http://s)"


class TestLists:
    """Tests for list translators."""

    def test_ordered_list(self):
        """Test ordered list numbering."""
        assert md("<ol><li>a</li><li>b</li></ol>") == "1. a\n2. b"

    def test_ordered_list_counts_element_children_only(self):
        """Test whitespace between items does not advance the index."""
        html = "<ol>\n  <li>a</li>\n  <li>b</li>\n  <li>c</li>\n</ol>"
        assert md(html) == "1. a\n2. b\n3. c"

    def test_ordered_list_indices_are_one_to_n(self):
        """Test N items are numbered exactly 1..N."""
        items = "".join("<li>item</li>" for _ in range(12))
        lines = md(f"<ol>{items}</ol>").split("\n")

        assert [line.split(".", 1)[0] for line in lines] == [str(n) for n in range(1, 13)]

    def test_ordered_list_without_end_tags(self):
        """Test items with omitted end tags are numbered separately."""
        assert md("<ol><li>a<li>b</ol>") == "1. a\n2. b"

    def test_unordered_list(self):
        """Test bullets are prefixed to trimmed items."""
        assert md("<p>x</p><ul><li>a</li><li> <b>b</b> </li></ul>") == "x\n • a\n • **b**"

    def test_unordered_list_at_start_is_trimmed(self):
        """Test the final trim removes the first bullet's leading space."""
        assert md("<ul><li>a</li><li>b</li></ul>") == "• a\n • b"

    def test_description_list(self):
        """Test terms render bold and details as quotes."""
        html = "<dl><dt>term</dt><dd>line one<br>line two</dd></dl>"
        assert md(html) == "**term**\n> line one\n> line two"

    def test_description_list_without_end_tags(self):
        """Test terms and details with omitted end tags."""
        assert md("<dl><dt>term<dd>detail</dl>") == "**term**\n> detail"

    def test_description_list_term_bold_not_doubled(self):
        """Test nested bold in terms is flattened into the term's own markers."""
        lines = md("<dl><dt><b>-l</b></dt><dd>long format</dd></dl>").split("\n")

        assert lines == ["** -l**", "> long format"]


class TestTables:
    """Tests for TableTranslator."""

    @staticmethod
    def grid_lines(markdown: str) -> list[str]:
        lines = markdown.split("\n")
        assert lines[0] == "```"
        assert lines[-1] == "```"
        return lines[1:-1]

    def test_caption_becomes_centered_header(self):
        """Test a caption is rendered centered above the grid."""
        html = "<table><caption>Fruits</caption><tr><td>Apple</td></tr></table>"
        lines = self.grid_lines(md(html))

        assert lines[0].strip() == "Fruits"
        assert lines[1].startswith("╔")
        cell_line = next(line for line in lines if "Apple" in line)
        assert cell_line == "║ Apple ║"

        width = len(lines[1])
        left = len(lines[0]) - len(lines[0].lstrip())
        right = width - left - len("Fruits")
        assert abs(left - right) <= 1

    def test_no_header_without_caption(self):
        """Test tables without a caption have no title line."""
        lines = self.grid_lines(md("<table><tr><td>Apple</td></tr></table>"))

        assert all(line[0] in "╔║╟╚" for line in lines)
        assert "Apple" in "\n".join(lines)

    def test_rows_from_head_and_body_groups(self):
        """Test rows inside thead and tbody are collected in order."""
        html = (
            "<table>"
            "<thead><tr><th>Name</th><th>Qty</th></tr></thead>"
            "<tbody><tr><td>Apple</td><td>\n  3  </td></tr></tbody>"
            "<tfoot><tr><td>Total</td><td>3</td></tr></tfoot>"
            "</table>"
        )
        lines = self.grid_lines(md(html))

        name_row = lines.index(next(line for line in lines if "Name" in line))
        apple_row = lines.index(next(line for line in lines if "Apple" in line))
        total_row = lines.index(next(line for line in lines if "Total" in line))
        assert name_row < apple_row < total_row
        assert "Qty" in lines[name_row]
        assert "│" in lines[apple_row]

    def test_cell_whitespace_is_collapsed(self):
        """Test cell text is trimmed and collapsed."""
        lines = self.grid_lines(md("<table><tr><td>  a \n  b  </td></tr></table>"))

        assert "║ a b ║" in lines

    def test_cell_text_is_not_interpreted_as_markup(self):
        """Test brackets in cells are rendered literally."""
        lines = self.grid_lines(md("<table><tr><td>[bold]x[/bold]</td></tr></table>"))

        assert "║ [bold]x[/bold] ║" in lines

    def test_cells_without_end_tags_stay_separate(self):
        """Test omitted cell end tags still produce separate columns."""
        lines = self.grid_lines(md("<table><tr><td>a<td>b</tr></table>"))

        assert "║ a │ b ║" in lines

    def test_table_without_cells_contributes_nothing(self):
        """Test empty tables produce no output."""
        assert md("<p>a</p><table></table><p>b</p>") == "a\nb"

    def test_table_is_a_block(self):
        """Test surrounding paragraphs sit on their own lines."""
        markdown = md("<p>before</p><table><tr><td>x</td></tr></table><p>after</p>")

        assert markdown.startswith("before\n```\n")
        assert markdown.endswith("\n```\nafter")


class TestImages:
    """Tests for ImageTranslator."""

    def test_image_goes_to_side_channel(self):
        """Test images produce no text, only an ImageRef."""
        result = translate('<p>See <img src="a.png" alt="A"></p>')

        assert result.markdown == "See"
        assert result.images == [ImageRef(src="a.png", alt="A")]

    def test_alt_is_optional(self):
        """Test images without alt text."""
        result = translate('<img src="a.png">')

        assert result.images == [ImageRef(src="a.png")]
        assert result.images[0].to_dict() == {"src": "a.png"}

    def test_missing_source_fails(self):
        """Test an image without src fails the whole call."""
        with pytest.raises(MissingAttributeError) as exc_info:
            translate("<img>")

        assert exc_info.value.tag == "img"
        assert exc_info.value.attribute == "src"

    def test_nested_missing_source_fails(self):
        """Test the failure propagates from deep inside the tree."""
        with pytest.raises(MissingAttributeError):
            translate('<ul><li><p>ok <img alt="no source"></p></li></ul>')

    def test_images_in_lists_keep_order(self):
        """Test list and description list images are passed through."""
        html = (
            '<ol><li><img src="1"></li><li><img src="2"></li></ol>'
            '<dl><dt><img src="3"></dt><dd><img src="4"></dd></dl>'
            '<h1><img src="5"></h1>'
        )

        result = translate(html)

        assert [image.src for image in result.images] == ["1", "2", "3", "4", "5"]
