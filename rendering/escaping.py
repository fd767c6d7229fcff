"""Escaping helpers for the five reserved markup characters."""

_ESCAPES = [
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
]

# Line breaks inside attribute values must not split a rendered code line.
_ATTRIBUTE_ESCAPES = [
    ("\r", "&#13;"),
    ("\n", "&#10;"),
]


def escape_html(text: str | None) -> str:
    """Escape ``& < > " '`` so text can sit inside element content or a
    double-quoted attribute. Non-string input yields an empty string."""
    if not isinstance(text, str):
        return ""
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def escape_attribute(text: str | None) -> str:
    """Like :func:`escape_html`, but also encodes line breaks so the value
    stays on one physical line."""
    text = escape_html(text)
    for char, entity in _ATTRIBUTE_ESCAPES:
        text = text.replace(char, entity)
    return text


def unescape_html(text: str | None) -> str:
    """Inverse of :func:`escape_html` and :func:`escape_attribute`.

    ``&amp;`` is decoded last so that an escaped entity such as ``&amp;lt;``
    comes back as the literal ``&lt;``.
    """
    if not isinstance(text, str):
        return ""
    for char, entity in _ATTRIBUTE_ESCAPES:
        text = text.replace(entity, char)
    for char, entity in reversed(_ESCAPES):
        text = text.replace(entity, char)
    return text
