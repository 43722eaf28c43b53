"""Minimal markdown to HTML conversion for chat bubbles.

Supports: bold, italic, inline code, code blocks, links, headings, lists.
Anything else is shown as escaped text.
"""

import html
import re

_LIST_KINDS = (
    (re.compile(r"^[-*]\s+"), '<ul class="list-disc list-inside my-2 space-y-1">', "</ul>"),
    (re.compile(r"^\d+\.\s+"), '<ol class="list-decimal list-inside my-2 space-y-1">', "</ol>"),
)


def escape_html(text: str) -> str:
    return html.escape(text, quote=True)


def plain_to_html(text: str) -> str:
    """Render user text: escaped, newlines kept."""
    return escape_html(text).replace("\n", "<br>")


def _wrap_lists(text: str, pattern: re.Pattern[str], opening: str, closing: str) -> str:
    result: list[str] = []
    in_list = False
    for line in text.split("\n"):
        stripped = line.strip()
        if pattern.match(stripped):
            if not in_list:
                result.append(opening)
                in_list = True
            result.append(f"<li>{pattern.sub('', stripped)}</li>")
            continue
        if in_list:
            result.append(closing)
            in_list = False
        result.append(line)
    if in_list:
        result.append(closing)
    return "\n".join(result)


def markdown_to_html(text: str) -> str:
    """Convert assistant markdown to HTML for chat display."""
    text = escape_html(text)

    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs">'
        r"<code>\2</code></pre>",
        text,
    )
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )

    text = re.sub(r"^#{1,6}\s+(.+)$", r'<p class="font-semibold">\1</p>', text, flags=re.MULTILINE)

    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)
    text = re.sub(r"(?<![\w*])\*([^*\n]+)\*", r"<em>\1</em>", text)
    text = re.sub(r"(?<!\w)_([^_\n]+)_(?!\w)", r"<em>\1</em>", text)

    # Only http(s) targets become links, anything else stays as text
    text = re.sub(
        r"\[([^\]]+)\]\((https?://[^\s)]+)\)",
        r'<a href="\2" class="text-blue-600 underline" target="_blank">\1</a>',
        text,
    )

    for pattern, opening, closing in _LIST_KINDS:
        text = _wrap_lists(text, pattern, opening, closing)

    return text.replace("\n", "<br>")
