"""
Output sanitization for bookmark text fields.

Stored rows keep the bytes the client sent. On the way out, text fields go
through a whitelist HTML cleaner: markup outside the whitelist is escaped to
entities (`<script>` -> `&lt;script&gt;`), attributes outside the whitelist are
removed (`onerror` on `<img>`), and whitelisted presentational tags such as
`<strong>` pass through. Bare ampersands are left as they are, so urls with
query strings and plain text like "Tom & Jerry" come back unchanged. Apply
exactly once per response.
"""
import re
from html.entities import html5

from bleach.sanitizer import Cleaner

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkResponse


ALLOWED_TAGS = frozenset({
    "a", "abbr", "b", "blockquote", "br", "code", "em", "i", "img",
    "li", "ol", "p", "pre", "s", "strong", "sub", "sup", "u", "ul",
})

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title"],
    "abbr": ["title"],
    "img": ["src", "alt", "title", "width", "height"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})

# Escape (strip=False) rather than drop disallowed markup so content stays visible.
_CLEANER = Cleaner(
    tags=ALLOWED_TAGS,
    attributes=ALLOWED_ATTRIBUTES,
    protocols=ALLOWED_PROTOCOLS,
    strip=False,
    strip_comments=True,
)

# An ampersand plus the character reference that may follow it.
_AMPERSAND = re.compile(r"&(#[0-9]+;|#[xX][0-9a-fA-F]+;|[A-Za-z][A-Za-z0-9]*;)?")

# Private-use code point that stands in for a bare "&" while bleach runs.
_AMPERSAND_MARKER = "\ue000"


def _is_character_reference(reference: str | None) -> bool:
    if not reference:
        return False
    return reference.startswith("#") or reference in html5


def _mark_bare_ampersands(value: str) -> str:
    """Replace every "&" that does not start a character reference with the marker."""
    def replace(match: re.Match[str]) -> str:
        if _is_character_reference(match.group(1)):
            return match.group(0)
        return _AMPERSAND_MARKER + (match.group(1) or "")

    return _AMPERSAND.sub(replace, value)


def clean_text(value: str) -> str:
    """
    Escape or remove script-capable markup in a single text value.

    bleach escapes every bare "&" to "&amp;". That is not markup, so bare
    ampersands are swapped for a marker before cleaning and restored after.
    Existing character references (`&lt;`, `&#60;`) are passed to bleach as-is.
    """
    if _AMPERSAND_MARKER in value:
        return _CLEANER.clean(value)
    cleaned = _CLEANER.clean(_mark_bare_ampersands(value))
    return cleaned.replace(_AMPERSAND_MARKER, "&")


def sanitize_bookmark(bookmark: Bookmark) -> BookmarkResponse:
    """Build the outbound representation of a bookmark with sanitized text fields."""
    return BookmarkResponse(
        id=bookmark.id,
        title=clean_text(bookmark.title),
        url=clean_text(bookmark.url),
        description=clean_text(bookmark.description),
        rating=bookmark.rating,
    )
