import pytest

from fakes import ScriptedLLM
from shopassist.application.exceptions import CompletionError, InvalidInputError, QueryExtractionError
from shopassist.application.services.search_query_extractor import SearchQueryExtractor, parse_search_query


def test_query_and_category_are_extracted():
    llm = ScriptedLLM('{"searchQuery": "wireless headphones under 100", "category": "electronics"}')

    query = SearchQueryExtractor(llm).extract("I want wireless headphones under $100")

    assert query.search_query == "wireless headphones under 100"
    assert query.category == "electronics"
    assert llm.calls[0]["force_json"] is True


def test_category_is_optional():
    query = parse_search_query('{"searchQuery": "desk lamp"}')
    assert query.search_query == "desk lamp"
    assert query.category is None


def test_json_inside_prose_is_recovered():
    query = parse_search_query('Here it is: {"searchQuery": "yoga mat", "category": ""} done')
    assert query.search_query == "yoga mat"
    assert query.category is None


@pytest.mark.parametrize(
    "response",
    ['{"category": "toys"}', '{"searchQuery": "   "}', "not json", CompletionError("timeout")],
)
def test_failure_without_keywords_raises(response):
    with pytest.raises(QueryExtractionError):
        SearchQueryExtractor(ScriptedLLM(response)).extract("something nice for my desk")


@pytest.mark.parametrize("transcript", ["Stuff for my son's BIRTHDAY", "planning a party this weekend"])
def test_keyword_fallback_on_failure(transcript):
    query = SearchQueryExtractor(ScriptedLLM('{"category": "x"}')).extract(transcript)

    assert query.search_query == "birthday party supplies"
    assert query.category == "party supplies"


def test_keyword_fallback_only_used_on_failure():
    query = SearchQueryExtractor(ScriptedLLM('{"searchQuery": "party hats"}')).extract("party stuff")
    assert query.search_query == "party hats"


def test_invalid_transcript_is_rejected():
    with pytest.raises(InvalidInputError):
        SearchQueryExtractor(ScriptedLLM()).extract("  ")


def test_wire_alias():
    query = parse_search_query('{"searchQuery": "mug"}')
    assert query.model_dump(by_alias=True) == {"searchQuery": "mug", "category": None}
