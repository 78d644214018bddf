"""Clean untrusted Markdown before it is parsed."""

from __future__ import annotations

import re

_SCRIPT_RE = re.compile(r"<script[^>]*>[\s\S]*?</script>", re.IGNORECASE)
_IFRAME_RE = re.compile(r"<iframe[^>]*>[\s\S]*?</iframe>", re.IGNORECASE)
_JS_SCHEME_RE = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"\bon\w+\s*=", re.IGNORECASE)
_EXCESS_BLANK_LINES_RE = re.compile(r"\n{3,}")


def sanitize_markdown(content: str, *, strip_dangerous_html: bool = True) -> str:
    """Return *content* cleaned for parsing.

    Parameters
    ----------
    content:
        Raw Markdown.
    strip_dangerous_html:
        Remove ``<script>`` and ``<iframe>`` elements, ``javascript:``
        URL schemes and inline ``on*=`` event handler attributes.

    Returns
    -------
    str
        The text with line endings normalised to ``\\n``, runs of more
        than one blank line collapsed to one, and surrounding whitespace
        trimmed.
    """
    cleaned = content
    if strip_dangerous_html:
        cleaned = _SCRIPT_RE.sub("", cleaned)
        cleaned = _IFRAME_RE.sub("", cleaned)
        cleaned = _JS_SCHEME_RE.sub("", cleaned)
        cleaned = _EVENT_HANDLER_RE.sub("", cleaned)

    cleaned = cleaned.replace("\r\n", "\n").replace("\r", "\n")
    cleaned = _EXCESS_BLANK_LINES_RE.sub("\n\n", cleaned)
    return cleaned.strip()
