import pytest
from conftest import make_product
from search.matcher import compile_predicate, field_values
from search.predicate import (
    AvailabilityClause,
    BrandClause,
    CategoryClause,
    Predicate,
    PriceClause,
    TextClause,
)

CATEGORY = {"_id": "66a1f0c2e4b0a1b2c3d4e001", "name": "Ethnic Wear", "slug": "ethnic-wear"}


@pytest.fixture
def product():
    return make_product(
        title="Panjabi Collection 2025",
        description="Hand-stitched cotton",
        brand="StyleCo",
        product_code="PJ-2025-01",
        category=CATEGORY,
        prices=[{"currency": "BDT", "amount": 3200}, {"currency": "USD", "amount": 27}],
        availability="InStock",
        keywords=["eid panjabi"],
        sizes=[{"name": "XL", "quantity": 3}],
        specifications=[{"name": "Fabric", "value": "Muslin"}],
        faqs=[{"question": "Washable?", "answer": "Dry clean only"}],
    )


def text(*tokens):
    return Predicate((TextClause(tokens=tokens),))


def test_empty_predicate_matches_everything(product):
    assert compile_predicate(Predicate())(product)


@pytest.mark.parametrize("token", [
    "panjabi",     # title
    "stitched",    # description
    "styleco",     # brand
    "eid",         # keywords
    "pj-2025",     # product code
    "xl",          # size name
    "fabric",      # specification name
    "muslin",      # specification value
    "washable",    # faq question
    "dry clean",   # faq answer
    "ethnic",      # category name
])
def test_any_field_can_match(product, token):
    assert compile_predicate(text(token))(product)


def test_any_token_is_enough(product):
    assert compile_predicate(text("nothing", "elsewhere", "muslin"))(product)
    assert not compile_predicate(text("nothing", "elsewhere"))(product)


def test_regex_metacharacters_are_literal(product):
    assert not compile_predicate(text("pj.2025"))(product)
    assert compile_predicate(text("pj-2025-01"))(product)


def test_category_clause(product):
    assert compile_predicate(Predicate((CategoryClause(CATEGORY["_id"]),)))(product)
    assert not compile_predicate(Predicate((CategoryClause("66a1f0c2e4b0a1b2c3d4e999"),)))(product)
    assert not compile_predicate(Predicate((CategoryClause(CATEGORY["_id"]),)))(make_product())


def test_price_clause_only_looks_at_bdt(product):
    assert compile_predicate(Predicate((PriceClause(min_amount=3000, max_amount=3200),)))(product)
    # the USD amount (27) is inside this range but does not count
    assert not compile_predicate(Predicate((PriceClause(min_amount=20, max_amount=30),)))(product)


def test_unbounded_price_clause_requires_a_bdt_price(product):
    clause = PriceClause()
    usd_only = make_product(prices=[{"currency": "USD", "amount": 10}])

    assert compile_predicate(Predicate((clause,)))(product)
    assert not compile_predicate(Predicate((clause,)))(usd_only)


def test_availability_and_brand(product):
    assert compile_predicate(Predicate((AvailabilityClause("InStock"), BrandClause("style"))))(product)
    assert not compile_predicate(Predicate((AvailabilityClause("PreOrder"),)))(product)
    assert not compile_predicate(Predicate((BrandClause("acme"),)))(product)


def test_clauses_are_anded(product):
    predicate = Predicate((TextClause(tokens=("panjabi",)), BrandClause("acme")))
    assert not compile_predicate(predicate)(product)


def test_unknown_field_is_rejected(product):
    with pytest.raises(KeyError):
        field_values(product, "weirdfield")
