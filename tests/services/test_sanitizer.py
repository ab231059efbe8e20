"""Tests for output sanitization."""
from models.bookmark import Bookmark
from services.sanitizer import clean_text, sanitize_bookmark


class TestCleanText:
    """Tests for the whitelist cleaner."""

    def test_plain_text_unchanged(self) -> None:
        assert clean_text("Just a normal title") == "Just a normal title"

    def test_url_unchanged(self) -> None:
        assert clean_text("https://example.com/path?page=2") == "https://example.com/path?page=2"

    def test_url_with_several_query_parameters_unchanged(self) -> None:
        url = "https://example.com/search?q=python&page=2&sort=asc"
        assert clean_text(url) == url

    def test_script_tag_escaped(self) -> None:
        assert clean_text('<script>alert("xss");</script>') == (
            '&lt;script&gt;alert("xss");&lt;/script&gt;'
        )

    def test_event_handler_attribute_removed(self) -> None:
        assert clean_text('<img src="https://example.com/a.png" onerror="alert(1)">') == (
            '<img src="https://example.com/a.png">'
        )

    def test_whitelisted_tags_kept(self) -> None:
        assert clean_text("<strong>bold</strong> and <em>italic</em>") == (
            "<strong>bold</strong> and <em>italic</em>"
        )

    def test_javascript_href_removed(self) -> None:
        assert clean_text('<a href="javascript:alert(1)">click</a>') == "<a>click</a>"

    def test_iframe_escaped(self) -> None:
        assert clean_text('<iframe src="https://evil.example"></iframe>') == (
            '&lt;iframe src="https://evil.example"&gt;&lt;/iframe&gt;'
        )

    def test_bare_ampersand_unchanged(self) -> None:
        assert clean_text("Tom & Jerry") == "Tom & Jerry"

    def test_character_reference_kept(self) -> None:
        assert clean_text("5 &lt; 6 &amp; 7") == "5 &lt; 6 &amp; 7"

    def test_ampersand_next_to_escaped_markup(self) -> None:
        assert clean_text("R&D <script>x</script>") == "R&D &lt;script&gt;x&lt;/script&gt;"


class TestSanitizeBookmark:
    """Tests for building the outbound representation."""

    def test_all_text_fields_cleaned(self) -> None:
        bookmark = Bookmark(
            id=7,
            title="<script>t</script>",
            url="<script>u</script>",
            description="<script>d</script>",
            rating=3,
        )
        result = sanitize_bookmark(bookmark)

        assert result.id == 7
        assert result.title == "&lt;script&gt;t&lt;/script&gt;"
        assert result.url == "&lt;script&gt;u&lt;/script&gt;"
        assert result.description == "&lt;script&gt;d&lt;/script&gt;"
        assert result.rating == 3

    def test_source_record_not_modified(self) -> None:
        """Sanitization produces a copy; the row keeps its original text."""
        bookmark = Bookmark(id=1, title="<script>x</script>", url="u", description="d", rating=1)
        sanitize_bookmark(bookmark)
        assert bookmark.title == "<script>x</script>"
