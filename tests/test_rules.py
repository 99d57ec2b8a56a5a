from __future__ import annotations

import pytest

from bodyparser.parser.links import extract_url, replace_urls
from bodyparser.parser.nodes import parse_document
from bodyparser.parser.rules import (
    FieldExclude,
    FieldFilter,
    FilterResult,
    FilterScope,
    apply_excludes,
    apply_filters,
)


def test_exclude_expression_grammar() -> None:
    assert FieldExclude.parse("script") == FieldExclude(tag="script")
    assert FieldExclude.parse("div.share") == FieldExclude(tag="div", css_class="share")
    assert FieldExclude.parse("span#ad") == FieldExclude(tag="span", element_id="ad")
    assert FieldExclude.parse(".promo") == FieldExclude(css_class="promo")
    with pytest.raises(ValueError):
        FieldExclude.parse("  ")


def test_exclude_matches_elements_only() -> None:
    body = parse_document('<div class="share buttons">x</div><div id="ad">y</div>tail text')
    share, advert, tail = body.children()

    assert FieldExclude.parse("div.share").matches(share)
    assert not FieldExclude.parse("div.share").matches(advert)
    assert FieldExclude.parse("div#ad").matches(advert)
    assert FieldExclude.parse(".buttons").matches(share)
    assert not FieldExclude.parse("div").matches(tail)

    rules = [FieldExclude.parse("p"), FieldExclude.parse("div#ad")]
    assert apply_excludes(rules, advert)
    assert not apply_excludes(rules, share)


def test_filter_must_match_whole_text() -> None:
    advert = FieldFilter("Advert.*")
    assert advert.apply("Advertisement here") is FilterResult.SKIP
    assert advert.apply("Advert\nover two lines") is FilterResult.SKIP
    assert advert.apply("An Advert") is FilterResult.PASS
    assert FieldFilter("Advert.*", stop=True).apply("Advert") is FilterResult.STOP


def test_first_non_pass_filter_wins() -> None:
    filters = [FieldFilter("Zed.*"), FieldFilter("A.*"), FieldFilter("Ab.*", stop=True)]
    assert apply_filters(filters, "Abc", FilterScope.BODY) is FilterResult.SKIP
    assert apply_filters(filters, "Other", FilterScope.BODY) is FilterResult.PASS
    assert apply_filters([], "Abc", FilterScope.SUMMARY) is FilterResult.PASS


def test_filter_scopes() -> None:
    body_only = FieldFilter("x", scope="body")
    assert body_only.applies(FilterScope.BODY)
    assert not body_only.applies(FilterScope.SUMMARY)
    assert FieldFilter("x").applies(FilterScope.SUMMARY)
    assert apply_filters([body_only], "x", FilterScope.SUMMARY) is FilterResult.PASS


def test_filter_from_mapping_and_predicate() -> None:
    built = FieldFilter.from_mapping({"expr": "Photo:.*", "scope": "SUMMARY", "stop": True})
    assert built.scope is FilterScope.SUMMARY
    assert built.stop
    assert built.apply("Photo: credit") is FilterResult.STOP

    short = FieldFilter(predicate=lambda text: len(text) < 3)
    assert short.apply("ab") is FilterResult.SKIP
    assert short.apply("abc") is FilterResult.PASS

    preferred = FieldFilter("never", predicate=lambda text: True)
    assert preferred.matches("anything")

    with pytest.raises(ValueError):
        FieldFilter()
    with pytest.raises(ValueError):
        FieldFilter.from_mapping({"expr": "x", "scope": "sidebar"})


def test_extract_url() -> None:
    assert extract_url("see https://example.com/a?b=1 now") == "https://example.com/a?b=1"
    assert extract_url("Visit www.example.com.") == "www.example.com"
    assert extract_url("no links here") is None
    assert extract_url("") is None


def test_replace_urls_drops_query_from_label() -> None:
    assert replace_urls("Go to https://example.com/a?b=1 today") == (
        'Go to <a href="https://example.com/a?b=1" target="_blank" rel="nofollow">'
        "https://example.com/a</a> today"
    )
    assert replace_urls("nothing") == "nothing"


def test_replace_urls_adds_scheme_to_www_links() -> None:
    assert replace_urls("Visit www.example.com today") == (
        'Visit <a href="http://www.example.com" target="_blank" rel="nofollow">www.example.com</a> today'
    )


def test_replace_urls_keeps_escaped_text_and_breaks() -> None:
    markup = "Fish &amp; chips &lt;br&gt; here\n<br> more"
    assert replace_urls(markup) == markup
