# tests/test_extractor.py
"""Tests for the HTML metadata extractor."""

from ogcheck.extractor import decode_html_entities, extract_tags


class TestDecodeHtmlEntities:
    """Test cases for decode_html_entities."""

    def test_decodes_supported_entities(self):
        """Test each supported entity becomes its literal character."""
        text = "&amp; &lt; &gt; &quot; &#39; &#x27; &#x2F; &nbsp;"
        assert decode_html_entities(text) == "& < > \" ' ' /  "

    def test_double_encoded_ampersand_decoded_once(self):
        """Test &amp;amp; only loses one level of encoding."""
        assert decode_html_entities("&amp;amp;") == "&amp;"

    def test_ampersand_output_feeds_later_entities(self):
        """Test &amp;lt; ends up as < because &amp; is replaced first."""
        assert decode_html_entities("&amp;lt;") == "<"

    def test_unknown_entities_untouched(self):
        """Test entities outside the supported set are left as-is."""
        assert decode_html_entities("&copy; 2024 &#8212;") == "&copy; 2024 &#8212;"


class TestExtractTags:
    """Test cases for extract_tags."""

    def test_extracts_og_title(self):
        """Test a plain og:title meta tag."""
        tags = extract_tags('<meta property="og:title" content="Hello World">')
        assert tags["og:title"] == "Hello World"

    def test_og_title_is_entity_decoded(self):
        """Test meta content is entity-decoded."""
        tags = extract_tags('<meta property="og:title" content="Tom &amp; Jerry">')
        assert tags["og:title"] == "Tom & Jerry"

    def test_full_document(self, complete_html, complete_tags):
        """Test a realistic head section yields every tag."""
        tags = extract_tags(complete_html)

        for key, value in complete_tags.items():
            assert tags[key] == value
        assert tags["favicon"] == "/favicon.ico"

    def test_single_quotes_and_case_insensitive(self):
        """Test single-quoted attributes and upper-case markup."""
        tags = extract_tags("<META PROPERTY='OG:Image' CONTENT='https://example.com/a.png'>")
        assert tags["og:image"] == "https://example.com/a.png"

    def test_self_closing_meta(self):
        """Test self-closing meta elements."""
        tags = extract_tags('<meta name="twitter:card" content="summary" />')
        assert tags["twitter:card"] == "summary"

    def test_content_before_property(self):
        """Test content written ahead of property is still matched."""
        tags = extract_tags('<meta content="Reordered" property="og:title">')
        assert tags["og:title"] == "Reordered"

    def test_last_occurrence_wins(self):
        """Test a repeated key keeps the last value."""
        html = """
        <meta property="og:title" content="First">
        <meta property="og:title" content="Second">
        """
        assert extract_tags(html)["og:title"] == "Second"

    def test_meta_without_key_skipped(self):
        """Test meta elements with no property/name are ignored."""
        tags = extract_tags('<meta charset="utf-8"><meta http-equiv="refresh" content="5">')
        assert tags == {}

    def test_meta_without_content_skipped(self):
        """Test meta elements with a key but no content are ignored."""
        tags = extract_tags('<meta property="og:title">')
        assert "og:title" not in tags

    def test_empty_content_kept(self):
        """Test an empty content attribute is stored as an empty string."""
        tags = extract_tags('<meta property="og:title" content="">')
        assert tags["og:title"] == ""

    def test_title_trimmed_and_decoded(self):
        """Test the title is trimmed and entity-decoded."""
        tags = extract_tags('<title data-x="1">\n  Fish &amp; Chips  \n</title>')
        assert tags["title"] == "Fish & Chips"

    def test_first_title_wins(self):
        """Test only the first title element is used."""
        tags = extract_tags("<title>One</title><svg><title>Two</title></svg>")
        assert tags["title"] == "One"

    def test_description_content_before_name(self):
        """Test the description fallback handles content-before-name."""
        tags = extract_tags('<meta content="Reversed description" name="description">')
        assert tags["description"] == "Reversed description"

    def test_description_with_extra_attributes(self):
        """Test the description fallback when other attributes come first."""
        tags = extract_tags('<meta itemprop="x" name="description" content="Described &amp; done">')
        assert tags["description"] == "Described & done"

    def test_canonical_both_orders(self):
        """Test canonical links with rel before and after href."""
        assert extract_tags(
            '<link rel="canonical" href="https://example.com/a">'
        )["canonical"] == "https://example.com/a"
        assert extract_tags(
            '<link href="https://example.com/b" rel="canonical" />'
        )["canonical"] == "https://example.com/b"

    def test_canonical_not_entity_decoded(self):
        """Test link hrefs are stored raw."""
        tags = extract_tags('<link rel="canonical" href="https://example.com/?a=1&amp;b=2">')
        assert tags["canonical"] == "https://example.com/?a=1&amp;b=2"

    def test_shortcut_icon_favicon(self):
        """Test the legacy shortcut icon rel value."""
        tags = extract_tags('<link rel="shortcut icon" href="/favicon.png">')
        assert tags["favicon"] == "/favicon.png"

    def test_apple_touch_icon_is_not_favicon(self):
        """Test other icon rel values are not treated as favicons."""
        tags = extract_tags('<link rel="apple-touch-icon" href="/apple.png">')
        assert "favicon" not in tags

    def test_malformed_html_does_not_raise(self):
        """Test broken markup yields an empty or partial map."""
        assert extract_tags("<meta property=") == {}
        assert extract_tags("<title>Unclosed") == {}
        assert extract_tags("") == {}

    def test_keys_are_lower_cased(self):
        """Test keys are normalized to lower case."""
        tags = extract_tags('<meta name="Twitter:Title" content="Mixed">')
        assert tags == {"twitter:title": "Mixed"}
