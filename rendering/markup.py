"""Constrained markdown formatting for explanation prose.

Supported syntax:
- fenced code blocks delimited by triple backticks with an optional language tag
- list lines starting with ``-``, ``*``, ``1.`` or ``a.`` followed by whitespace
- ``**bold**`` and ```inline code``` spans
- blank lines as breaks

Everything else is plain escaped text. There are no tables, links or nested
lists, and malformed delimiters are left as literal text.
"""

import re

from rendering.escaping import escape_html

FENCE_PATTERN = re.compile(r"```(\w*)\n(.*?)(?:```|\Z)", re.DOTALL)
LIST_ITEM_PATTERN = re.compile(r"^\s*([-*]|\d+\.|[a-z]\.)\s+(.+)$")
BOLD_PATTERN = re.compile(r"\*\*([^*]+)\*\*")
INLINE_CODE_PATTERN = re.compile(r"`([^`]+)`")

# NUL never survives input cleanup, so these tokens cannot collide with text.
_BLOCK_TOKEN = "\x00BLOCK{}\x00"
_BLOCK_TOKEN_PATTERN = re.compile(r"\x00BLOCK(\d+)\x00")
_INLINE_TOKEN = "\x00INLINE{}\x00"
_INLINE_TOKEN_PATTERN = re.compile(r"\x00INLINE(\d+)\x00")


class MarkupFormatter:
    """Converts constrained markdown text into an HTML fragment.

    The formatter keeps no state between calls; one instance can be shared.
    """

    CALLOUT_CLASS = "callout-box"

    def format(self, text: str | None) -> str:
        if not text:
            return ""

        text = text.replace("\x00", "").replace("\r\n", "\n")

        # Fenced blocks come out first so inline scanning never touches code.
        code_blocks: list[tuple[str, str]] = []

        def _extract(match: re.Match) -> str:
            code_blocks.append((match.group(1), match.group(2)))
            return _BLOCK_TOKEN.format(len(code_blocks) - 1)

        body = FENCE_PATTERN.sub(_extract, text)

        blocks: list[str] = []
        in_list = False

        for line in body.split("\n"):
            if _BLOCK_TOKEN_PATTERN.search(line):
                in_list = self._close_list(blocks, in_list)
                parts = _BLOCK_TOKEN_PATTERN.split(line)
                for position, part in enumerate(parts):
                    if position % 2:
                        lang, code = code_blocks[int(part)]
                        blocks.append(self._code_block(lang, code))
                    elif part.strip():
                        blocks.append(self._paragraph(part))
                continue

            list_match = LIST_ITEM_PATTERN.match(line)
            if list_match:
                if not in_list:
                    blocks.append("<ul>")
                    in_list = True
                blocks.append(f"<li>{self.format_inline(list_match.group(2))}</li>")
                continue

            in_list = self._close_list(blocks, in_list)

            if not line.strip():
                # No break at the very start or straight after a code block.
                if blocks and not blocks[-1].startswith("<pre>"):
                    blocks.append("<br>")
                continue

            blocks.append(self._paragraph(line))

        self._close_list(blocks, in_list)
        return "".join(blocks)

    def format_inline(self, text: str) -> str:
        """Escape a single line and apply inline code and bold spans."""
        spans: list[str] = []

        def _stash(match: re.Match) -> str:
            spans.append(f"<code>{match.group(1)}</code>")
            return _INLINE_TOKEN.format(len(spans) - 1)

        escaped = escape_html(text)
        escaped = INLINE_CODE_PATTERN.sub(_stash, escaped)
        escaped = BOLD_PATTERN.sub(r"<strong>\1</strong>", escaped)
        return _INLINE_TOKEN_PATTERN.sub(lambda m: spans[int(m.group(1))], escaped)

    def _paragraph(self, line: str) -> str:
        processed = self.format_inline(line.strip())
        if processed.startswith("<strong>"):
            return f'<p class="{self.CALLOUT_CLASS}">{processed}</p>'
        return f"<p>{processed}</p>"

    @staticmethod
    def _code_block(lang: str, code: str) -> str:
        return (
            f'<pre><code class="language-{lang or "text"}">'
            f"{escape_html(code.strip())}</code></pre>"
        )

    @staticmethod
    def _close_list(blocks: list[str], in_list: bool) -> bool:
        if in_list:
            blocks.append("</ul>")
        return False


_default_formatter = MarkupFormatter()


def format_markup(text: str | None) -> str:
    """Format text with a shared :class:`MarkupFormatter`."""
    return _default_formatter.format(text)
