# DEPENDENCIES
import pytest

from services.keyword_search import KeywordSpotlightSearch


@pytest.fixture
def search():
    return KeywordSpotlightSearch()


def test_no_analyzed_text_gives_placeholder(search):
    for text in ("", None):
        hits = search.search(text, "termination")

        assert len(hits) == 1
        assert hits[0].is_placeholder
        assert hits[0].label == "Analyze a contract first."
        assert hits[0].context_snippet == "—"


def test_no_match_gives_placeholder(search):
    hits = search.search("The supplier delivers goods.", "termination clause")

    assert len(hits) == 1
    assert hits[0].is_placeholder
    assert hits[0].label == "No matching clause found."


def test_short_words_are_ignored(search):
    hits = search.search("The fee is due on day one.", "fee due day")

    assert hits[0].label == "No matching clause found."


def test_hit_carries_trailing_and_leading_context(search):
    text = ("x" * 100) + " Termination " + ("y" * 200)
    hits = search.search(text, "termination")

    assert len(hits) == 1
    assert hits[0].keyword == "termination"
    assert hits[0].label == 'Clause found: "termination"'
    assert hits[0].context_snippet == "Termination " + ("y" * 119)
    assert hits[0].leading_context == ("x" * 59) + " "


def test_every_occurrence_is_reported(search):
    hits = search.search("Renewal is automatic. Renewal may be refused.", "renewal")

    assert [hit.context_snippet[:7] for hit in hits] == ["Renewal", "Renewal"]


def test_hits_follow_keyword_order(search):
    hits = search.search("Liability is capped. Termination requires notice.", "termination liability")

    assert [hit.keyword for hit in hits] == ["termination", "liability"]


def test_keywords_are_literal(search):
    hits = search.search("Fees (including taxes) apply.", "(including")

    assert hits[0].keyword == "(including"
    assert hits[0].context_snippet.startswith("(including taxes)")


def test_hit_payload_includes_leading_context(search):
    hit = search.search("Article 12. Confidentiality survives termination.", "confidentiality")[0]

    assert hit.to_dict() == {"clause"         : "Confidentiality survives termination.",
                             "summary"        : 'Clause found: "confidentiality"',
                             "leadingContext" : "Article 12. ",
                            }
