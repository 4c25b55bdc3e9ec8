"""
Empty-content predicate shared by the editor and the server.

Both tiers import this module, so a block the editor drops before saving is
exactly a block the server would refuse to persist.
"""
import re

# Markup an editable region leaves behind once all its text is deleted
EMPTY_MARKUP = frozenset({
    "<br>",
    "<div><br></div>",
    "<p><br></p>",
    "<p></p>",
})

# Image references that only live in the browser until uploaded
TRANSIENT_SCHEMES = ("data:", "blob:")

_TAG_RE = re.compile(r"<[^>]*>")


def strip_tags(html: str) -> str:
    return _TAG_RE.sub("", html)


def is_text_empty(html: str | None) -> bool:
    if html is None:
        return True

    trimmed = html.strip()
    if not trimmed or trimmed in EMPTY_MARKUP:
        return True

    return not strip_tags(trimmed).strip()


def is_transient_reference(src: str | None) -> bool:
    if not src:
        return False
    return src.strip().lower().startswith(TRANSIENT_SCHEMES)


def is_image_empty(src: str | None) -> bool:
    if src is None or not src.strip():
        return True
    return is_transient_reference(src)
