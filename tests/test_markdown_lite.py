"""
Tests for the markdown-lite rule pipeline and block output.
"""

import pytest

from study_frontend.misc.schemas import Bold, Break, Heading, ListItem, Text
from study_frontend.render.markdown_lite import (
    BlankLine,
    BoldRule,
    BreakRule,
    HeadingRule,
    ListItemRule,
    MarkdownLiteRenderer,
    render_markdown,
)
from study_frontend.render.output import blocks_to_html, blocks_to_text, group_lines


class TestRulesIndividually:
    def test_heading_rule_matches_only_its_prefix_at_line_start(self):
        rule = HeadingRule(2)

        assert rule.match(Text(text="## Title"), starts_line=True)
        assert not rule.match(Text(text="## Title"), starts_line=False)
        assert not rule.match(Text(text="# Title"), starts_line=True)

    def test_heading_rule_transform(self):
        assert HeadingRule(3).transform(Text(text="### Cells", line=4)) == [Heading(level=3, text="Cells", line=4)]

    def test_bold_rule_splits_spans(self):
        pieces = BoldRule().transform(Text(text="a **b** c **d**", line=1))

        assert pieces == [
            Text(text="a ", line=1),
            Bold(text="b", line=1),
            Text(text=" c ", line=1),
            Bold(text="d", line=1),
        ]

    def test_bold_rule_ignores_unclosed_markers(self):
        assert not BoldRule().match(Text(text="2 ** 3 is eight"), starts_line=True)

    def test_list_item_rule(self):
        rule = ListItemRule()

        assert rule.match(Text(text="- milk"), starts_line=True)
        assert not rule.match(Text(text="-milk"), starts_line=True)
        assert rule.transform(Text(text="  - milk", line=2)) == [ListItem(text="milk", line=2)]

    def test_break_rule_collapses_and_trims(self):
        a, b = Text(text="a", line=0), Text(text="b", line=1)

        tokens = BreakRule().apply([BlankLine(), a, BlankLine(), BlankLine(), b, BlankLine()])

        assert tokens == [a, Break(), b]


class TestRender:
    def test_headings_longest_prefix_first(self):
        blocks = render_markdown("# One\n## Two\n### Three")

        assert blocks == [
            Heading(level=1, text="One", line=0),
            Heading(level=2, text="Two", line=1),
            Heading(level=3, text="Three", line=2),
        ]

    def test_deeper_headings_clamp_to_three(self):
        assert render_markdown("#### Deep") == [Heading(level=3, text="Deep", line=0)]

    def test_bold_inside_heading_is_not_rematched(self):
        assert render_markdown("## **Key** idea") == [Heading(level=2, text="**Key** idea", line=0)]

    def test_list_items_with_bold(self):
        blocks = render_markdown("- **Mitosis**: division\n- Meiosis")

        assert blocks == [
            ListItem(text="", line=0),
            Bold(text="Mitosis", line=0),
            Text(text=": division", line=0),
            ListItem(text="Meiosis", line=1),
        ]

    def test_dash_after_bold_is_not_a_list_item(self):
        blocks = render_markdown("**Note** - read twice")

        assert blocks == [Bold(text="Note", line=0), Text(text=" - read twice", line=0)]

    def test_paragraph_breaks(self):
        blocks = render_markdown("First para\nstill first\n\n\nSecond para")

        assert blocks == [
            Text(text="First para", line=0),
            Text(text="still first", line=1),
            Break(),
            Text(text="Second para", line=2),
        ]

    def test_ansi_sequences_are_stripped(self):
        blocks = render_markdown("\x1b[1m# Title\x1b[0m\n\x1b[32m- green item\x1b[0m")

        assert blocks == [Heading(level=1, text="Title", line=0), ListItem(text="green item", line=1)]

    @pytest.mark.parametrize("text", ["", "\n\n  \n", None])
    def test_empty_input(self, text):
        assert render_markdown(text) == []

    def test_custom_rule_list(self):
        renderer = MarkdownLiteRenderer(rules=[ListItemRule()])

        assert renderer.render("# not a heading\n\n- item") == [
            Text(text="# not a heading", line=0),
            ListItem(text="item", line=1),
        ]

    def test_summary_document(self):
        summary = "# Summary\n\nThe **cell** is the unit of life.\n\n## Parts\n- Nucleus\n- **Membrane** (outer)"

        blocks = render_markdown(summary)

        assert [type(b).__name__ for b in blocks] == [
            "Heading", "Break", "Text", "Bold", "Text", "Break", "Heading", "ListItem", "ListItem", "Bold", "Text",
        ]


class TestPlainTextStability:
    @pytest.mark.parametrize(
        "text",
        [
            "just words",
            "line one\nline two\n\nparagraph two",
            "\n\nleading blanks\n\n\n\ntrailing blanks\n\n",
        ],
    )
    def test_rendering_its_own_output_is_stable(self, text):
        first = render_markdown(text)
        second = render_markdown(blocks_to_text(first))

        assert second == first
        assert all(isinstance(b, (Text, Break)) for b in first)

    def test_markdown_round_trip_is_stable(self):
        text = "# T\n\n- **a**: b\n- c\n\nplain **bold** end"
        blocks = render_markdown(text)

        assert render_markdown(blocks_to_text(blocks)) == blocks


class TestOutput:
    def test_group_lines(self):
        blocks = render_markdown("- **a**: b\nplain\n\n## H")

        groups = list(group_lines(blocks))

        assert groups[0] == (ListItem(text="", line=0), [Bold(text="a", line=0), Text(text=": b", line=0)])
        assert groups[1] == (None, [Text(text="plain", line=1)])
        assert groups[2] == (Break(), [])
        assert groups[3] == (Heading(level=2, text="H", line=2), [])

    def test_blocks_to_html(self):
        html = blocks_to_html(render_markdown("### Top\n- **x** & y\n\n<script>"))

        assert html == "<h3>Top</h3>\n<li><b>x</b> &amp; y</li>\n<br><br>\n&lt;script&gt;"

    def test_blocks_to_text(self):
        assert blocks_to_text(render_markdown("##  Spaced\n-   item")) == "## Spaced\n- item"
