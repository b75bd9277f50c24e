import pytest
from conftest import NOW, make_product
from app.models.search_response import SearchResult
from search.suggestions import generate_suggestions, MAX_SUGGESTIONS


def result(**fields):
    return SearchResult.from_product(make_product(**fields), 1, NOW)


@pytest.fixture
def results():
    return [
        result(title="Panjabi Collection 2025", brand="StyleCo",
               category={"_id": "c1", "name": "Ethnic Wear", "slug": "ethnic-wear"},
               keywords=["Eid Panjabi", "cotton", "panjabi set"]),
        result(title="Kids Panjabi", brand="StyleCo",
               category={"_id": "c1", "name": "Ethnic Wear", "slug": "ethnic-wear"},
               keywords=["kids panjabi"]),
    ]


def test_blank_query_or_no_results_gives_nothing(results):
    assert generate_suggestions("", results) == []
    assert generate_suggestions("   ", results) == []
    assert generate_suggestions(None, results) == []
    assert generate_suggestions("panjabi", []) == []


def test_order_and_deduplication(results):
    suggestions = generate_suggestions("panjabi", results)
    assert suggestions == [
        "Ethnic Wear",
        "StyleCo",
        "Eid Panjabi",
        "panjabi set",
        "kids panjabi",
        "Punjabi Dress",
        "Salwar Kameez",
        "Traditional Wear",
        "Ethnic Dress",
    ]


def test_cap_at_ten():
    many = [result(title=f"Shirt {i}", brand=f"Brand {i}") for i in range(20)]
    suggestions = generate_suggestions("shirt", many)
    assert len(suggestions) == MAX_SUGGESTIONS
    assert len(set(suggestions)) == len(suggestions)


def test_uncategorized_placeholder_is_a_category_name():
    suggestions = generate_suggestions("widget", [result(title="Widget")])
    assert suggestions == ["Uncategorized"]


def test_keyword_match_is_case_insensitive():
    suggestions = generate_suggestions("HONEY", [result(keywords=["Raw Honey", "jar"])], related={})
    assert "Raw Honey" in suggestions
    assert "jar" not in suggestions


def test_related_terms_match_substrings_of_the_query(results):
    related = {"eid": ["Eid Special"], "xmas": ["Christmas"]}
    suggestions = generate_suggestions("Eid gifts", results, related=related)
    assert "Eid Special" in suggestions
    assert "Christmas" not in suggestions


def test_duplicates_are_case_sensitive():
    suggestions = generate_suggestions(
        "shirt",
        [result(brand="Shirt Co", keywords=["shirt co"])],
        related={},
    )
    assert suggestions == ["Uncategorized", "Shirt Co", "shirt co"]
