from __future__ import annotations

from bodyparser.parser.body import BodyParser
from bodyparser.parser.elements import BodyElement
from bodyparser.parser.formatters import clean_summary_text, format_body, format_summary, non_url_text
from bodyparser.parser.rules import FieldFilter, FilterScope

FIRST = "The first sentence talks about the new builds."
SECOND = "The second sentence covers the latest changes."
THIRD = "The third sentence describes the next roadmap."


def _elements(markup: str):
    parser = BodyParser()
    parser.parse_html(markup)
    return parser.elements


def _list_item(text: str, list_type: str) -> BodyElement:
    element = BodyElement("li", text)
    element.list_type = list_type
    return element


def test_list_runs_share_one_wrapper() -> None:
    body = format_body(_elements("<ul><li>One</li><li>Two</li></ul><ol><li>Three</li></ol><p>After.</p>"))
    assert body == "<p><ul>\n<li>One\n<li>Two\n</ul></p>\n<p><ol>\n<li>Three\n</ol></p>\n<p>After.</p>"
    assert body.count("<ul>") == 1


def test_list_wrapper_closes_when_list_type_changes() -> None:
    elements = [_list_item("a", "ul"), _list_item("b", "ol"), _list_item("c", "ul")]
    assert format_body(elements) == (
        "<p><ul>\n<li>a\n</ul></p>\n<p><ol>\n<li>b\n</ol></p>\n<p><ul>\n<li>c\n</ul></p>"
    )


def test_titles_keep_their_heading_tag() -> None:
    assert format_body(_elements("<h3>Section</h3><p>Text.</p>")) == "<h3>Section</h3>\n<p>Text.</p>"


def test_body_escapes_text_and_links_urls() -> None:
    body = format_body(_elements("<p>Fish &amp; chips at https://example.com/menu?x=1</p>"))
    assert body == (
        '<p>Fish &amp; chips at <a href="https://example.com/menu?x=1" target="_blank" '
        'rel="nofollow">https://example.com/menu</a></p>'
    )


def test_body_keeps_break_markers() -> None:
    assert format_body(_elements("<p>Line one<br>Line two</p>")) == "<p>Line one\n<br> Line two</p>"


def test_escaped_break_text_stays_escaped() -> None:
    assert format_body(_elements("<p>a &lt;br&gt; b</p>")) == "<p>a &lt;br&gt; b</p>"
    assert format_body(_elements("<p>a &lt;br&gt; b<br>c</p>")) == "<p>a &lt;br&gt; b\n<br> c</p>"


def test_body_filters_skip_and_stop() -> None:
    elements = _elements("<p>Keep.</p><p>Advert here</p><p>Also keep.</p><p>Related reading</p><p>Lost.</p>")
    filters = [
        FieldFilter("Advert.*", scope=FilterScope.BODY),
        FieldFilter("Related.*", scope=FilterScope.BODY, stop=True),
        FieldFilter("Keep.", scope=FilterScope.SUMMARY),
    ]
    assert format_body(elements, filters) == "<p>Keep.</p>\n<p>Also keep.</p>"


def test_summary_stops_after_minimum_and_never_exceeds_maximum() -> None:
    paragraph = f"{FIRST} {SECOND} {THIRD}"
    assert len(paragraph) == 140

    summary = format_summary(_elements(f"<p>{paragraph}</p>"), min_length=50, max_length=100)
    assert summary == f"{FIRST} {SECOND}"
    assert 50 < len(summary) <= 100


def test_summary_collects_elements_until_minimum() -> None:
    elements = _elements(f"<p>{FIRST}</p><p>{SECOND}</p><p>{THIRD}</p>")
    assert format_summary(elements, min_length=50, max_length=400) == f"{FIRST} {SECOND}"
    assert format_summary(elements, min_length=10, max_length=400) == FIRST


def test_summary_does_not_add_element_past_maximum() -> None:
    elements = _elements(f"<p>{FIRST}</p><p>A second paragraph with no sentence break at all</p>")
    assert format_summary(elements, min_length=60, max_length=80) == FIRST


def test_summary_replaces_trailing_colon() -> None:
    elements = _elements("<p>Our latest release was announced by Acme Inc:</p><ul><li>Faster</li></ul>")
    summary = format_summary(elements, min_length=100, max_length=400)
    assert summary == "Our latest release was announced by Acme Inc."


def test_summary_skips_leading_titles_and_stops_at_later_ones() -> None:
    elements = _elements("<h1>Headline</h1><p>Intro paragraph.</p><h2>Section</h2><p>More.</p>")
    assert format_summary(elements, min_length=100, max_length=400) == "Intro paragraph."


def test_summary_skips_non_prose_elements() -> None:
    elements = _elements(
        "<blockquote>Quoted words</blockquote><pre>code()</pre><p>10:00 - Doors open</p>"
        "<ul><li>Item</li></ul><p>#hashtag line</p><p>=====</p><p>Real text.</p>"
    )
    assert format_summary(elements, min_length=100, max_length=400) == "Real text."


def test_summary_drops_sentences_with_urls() -> None:
    elements = _elements("<p>Read more at https://example.com/post. This part stays</p>")
    summary = format_summary(elements, min_length=100, max_length=400)
    assert summary == "This part stays."
    assert "http" not in summary


def test_summary_skips_element_made_only_of_urls() -> None:
    elements = _elements("<p>https://example.com/only</p><p>Text.</p>")
    assert format_summary(elements, min_length=100, max_length=400) == "Text."


def test_summary_filters_skip_and_stop() -> None:
    elements = _elements("<p>Photo: credit</p><p>Kept.</p><p>Subscribe now</p><p>Lost.</p>")
    filters = [
        FieldFilter("Photo:.*", scope=FilterScope.SUMMARY),
        FieldFilter("Subscribe.*", stop=True),
    ]
    assert format_summary(elements, filters, min_length=100, max_length=400) == "Kept."


def test_clean_summary_text() -> None:
    assert clean_summary_text("Line one\n<br> Line two") == "Line one Line two"
    assert clean_summary_text("Fact[1] and [note] more") == "Fact and  more"
    assert clean_summary_text("Rule ____ here") == "Rule  here"


def test_non_url_text() -> None:
    assert non_url_text("See www.example.com. Stay here. And here.") == "Stay here. And here."
    assert non_url_text("www.example.com") is None
