"""Turn browser-serialized HTML into markup that can live inside XHTML."""

import re

VOID_TAGS = ("br", "hr", "img", "input", "link", "meta")

# "&" that does not already start an entity like "&amp;" or "&#38;"
_BARE_AMPERSAND = re.compile(r"&(?![a-zA-Z#0-9]+;)")
_OPEN_VOID_TAGS = {
    tag: re.compile(rf"<{tag}\b([^>]*)(?<!/)>", re.IGNORECASE) for tag in VOID_TAGS
}


def fix_xhtml(html: str) -> str:
    """Escape bare ampersands and self-close void tags.

    Regex based, so a ``>`` inside an attribute value can confuse it.
    Applying it twice gives the same result as applying it once.
    """
    fixed = _BARE_AMPERSAND.sub("&amp;", html)
    for tag, pattern in _OPEN_VOID_TAGS.items():
        fixed = pattern.sub(rf"<{tag}\1 />", fixed)
    return fixed
