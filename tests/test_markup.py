"""Tests for escaping and the constrained markdown formatter."""

import re

from rendering.escaping import escape_html, unescape_html
from rendering.markup import MarkupFormatter, format_markup


class TestEscaping:
    """Tests for escape_html / unescape_html."""

    def test_escapes_all_reserved_characters(self):
        """Should replace each of & < > " ' with its entity."""
        assert escape_html("&<>\"'") == "&amp;&lt;&gt;&quot;&#39;"

    def test_non_string_yields_empty(self):
        """Should return an empty string for None and non-strings."""
        assert escape_html(None) == ""
        assert escape_html(42) == ""
        assert unescape_html(None) == ""

    def test_round_trip(self):
        """unescape(escape(s)) should give back s."""
        text = 'if (a < b && c > "d") { return \'x\'; }'
        assert unescape_html(escape_html(text)) == text

    def test_escaped_entity_survives_round_trip(self):
        """A literal entity in the source should come back unchanged."""
        assert unescape_html(escape_html("&lt;")) == "&lt;"
        assert escape_html("&lt;") == "&amp;lt;"


class TestFencedCode:
    """Tests for fenced code block handling."""

    def test_single_fence_becomes_pre_block(self):
        """Should emit one language-tagged code block between paragraphs."""
        result = format_markup("Intro\n```python\nx = 1 < 2\n```\nOutro")
        assert result == (
            "<p>Intro</p>"
            '<pre><code class="language-python">x = 1 &lt; 2</code></pre>'
            "<p>Outro</p>"
        )

    def test_fence_count_matches_blocks(self):
        """Each fenced block should produce exactly one <pre>."""
        text = "```js\na();\n```\ntext\n```js\nb();\n```"
        assert format_markup(text).count("<pre>") == 2

    def test_missing_language_defaults_to_text(self):
        """A fence without a language tag should be tagged as text."""
        assert format_markup("```\ncode\n```") == '<pre><code class="language-text">code</code></pre>'

    def test_unterminated_fence_runs_to_end(self):
        """An unclosed fence should still produce a block with the rest of the text."""
        assert format_markup("```js\nlet a;") == '<pre><code class="language-js">let a;</code></pre>'

    def test_code_content_is_preserved(self):
        """Unescaping the block content should give the original code back."""
        code = 'if (a < b && c > "d") {\n  return \'**not bold**\';\n}'
        result = format_markup(f"```js\n{code}\n```")
        inner = re.search(r"<code[^>]*>(.*)</code>", result, re.DOTALL).group(1)
        assert unescape_html(inner) == code
        assert "<strong>" not in result

    def test_no_break_after_code_block(self):
        """A blank line directly after a code block should not emit <br>."""
        result = format_markup("```\nx\n```\n\nAfter")
        assert result == '<pre><code class="language-text">x</code></pre><p>After</p>'


class TestLists:
    """Tests for list coalescing."""

    def test_consecutive_items_share_one_list(self):
        """Adjacent list lines should become one <ul>."""
        assert format_markup("- one\n- two\nafter") == (
            "<ul><li>one</li><li>two</li></ul><p>after</p>"
        )

    def test_numbered_and_lettered_items(self):
        """Numbered and lettered markers should also be list items."""
        assert format_markup("1. first\n2. second") == "<ul><li>first</li><li>second</li></ul>"
        assert format_markup("a. alpha") == "<ul><li>alpha</li></ul>"

    def test_marker_without_space_is_text(self):
        """A marker not followed by whitespace should stay a paragraph."""
        assert format_markup("-dash") == "<p>-dash</p>"

    def test_list_item_inline_markup(self):
        """List items should get inline formatting."""
        assert format_markup("* use `map`") == "<ul><li>use <code>map</code></li></ul>"


class TestInline:
    """Tests for bold, inline code, breaks and escaping."""

    def test_bold_span(self):
        """Should wrap **text** in <strong>."""
        assert format_markup("plain **bold** text") == "<p>plain <strong>bold</strong> text</p>"

    def test_leading_bold_is_callout(self):
        """A paragraph starting with bold should be a callout box."""
        assert format_markup("**Key:** rest") == (
            '<p class="callout-box"><strong>Key:</strong> rest</p>'
        )

    def test_inline_code_is_escaped_and_not_bolded(self):
        """Inline code should be escaped and shielded from bold."""
        assert format_markup("Use `a < b` here") == "<p>Use <code>a &lt; b</code> here</p>"
        assert format_markup("`**x**`") == "<p><code>**x**</code></p>"

    def test_blank_line_between_paragraphs(self):
        """A blank line between paragraphs should become <br>."""
        assert format_markup("A\n\nB") == "<p>A</p><br><p>B</p>"

    def test_leading_blank_line_is_dropped(self):
        """A blank line before any content should emit nothing."""
        assert format_markup("\nA") == "<p>A</p>"

    def test_html_is_escaped(self):
        """Raw markup in prose should be escaped."""
        assert format_markup("<script>alert(1)</script>") == (
            "<p>&lt;script&gt;alert(1)&lt;/script&gt;</p>"
        )

    def test_unmatched_delimiters_stay_literal(self):
        """Unclosed bold or code markers should be left as text."""
        assert format_markup("**open and `tick") == "<p>**open and `tick</p>"

    def test_empty_input(self):
        """Empty and None input should give an empty fragment."""
        formatter = MarkupFormatter()
        assert formatter.format("") == ""
        assert formatter.format(None) == ""

    def test_nul_characters_are_stripped(self):
        """Placeholder delimiters in the input should not leak through."""
        assert format_markup("a\x00BLOCK0\x00b") == "<p>aBLOCK0b</p>"
