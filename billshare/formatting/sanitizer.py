"""
Reduce a rendered bill's HTML to an ordered sequence of trimmed text lines.

Malformed markup never raises; it only produces noisier lines.
"""

import re

_STYLE_BLOCK = re.compile(r"<style[^>]*>[\s\S]*?</style>", re.IGNORECASE)
_SCRIPT_BLOCK = re.compile(r"<script[^>]*>[\s\S]*?</script>", re.IGNORECASE)

# Tags that start a new visual line in a rendered bill.
_BLOCK_TAG = re.compile(
    r"</?(?:br|p|div|h[1-6]|tr|li|ul|ol|table|thead|tbody|tfoot|section|header|footer|hr)\b[^>]*>",
    re.IGNORECASE,
)
_ANY_TAG = re.compile(r"<[^>]*>")

ENTITIES: dict[str, str] = {
    "&nbsp;": " ",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&apos;": "'",
    "&hellip;": "...",
    "&mdash;": "—",
    "&ndash;": "–",
}
_ENTITY = re.compile("|".join(re.escape(entity) for entity in ENTITIES))


def strip_markup(html: str) -> str:
    text: str = _STYLE_BLOCK.sub("", html)
    text = _SCRIPT_BLOCK.sub("", text)
    text = _BLOCK_TAG.sub("\n", text)
    return _ANY_TAG.sub(" ", text)


def decode_entities(text: str) -> str:
    """Decode the fixed entity set; anything else is left untouched."""
    return _ENTITY.sub(lambda match: ENTITIES[match.group(0)], text)


def collapse_whitespace(text: str) -> str:
    text = re.sub(r"\r\n?", "\n", text)
    text = re.sub(r"[ \t\f\v]+", " ", text)
    text = re.sub(r"\n[ \t]+", "\n", text)
    text = re.sub(r"[ \t]+\n", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def sanitize(html: str) -> list[str]:
    text: str = collapse_whitespace(decode_entities(strip_markup(html)))
    return [line.strip() for line in text.split("\n") if line.strip()]
