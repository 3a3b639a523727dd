from urllib.parse import quote

import pytest

from fakes import make_raw_products
from shopassist.application.exceptions import InvalidProductDataError, NoProductsAvailableError
from shopassist.utils.formatters import (
    DEFAULT_SEARCH_URL,
    NOT_AVAILABLE,
    NOT_RATED,
    TOP_MATCH_REASON,
    format_rating,
    normalize_products,
)


@pytest.mark.parametrize("value", [None, {}, "products", 3])
def test_non_list_input_is_rejected(value):
    with pytest.raises(InvalidProductDataError):
        normalize_products(value, 3)


def test_empty_list_is_rejected():
    with pytest.raises(NoProductsAvailableError):
        normalize_products([], 3)


@pytest.mark.parametrize("count,limit", [(5, 3), (2, 3), (5, 5), (12, 10), (1, 10)])
def test_output_length_and_ranks(count, limit):
    products = normalize_products(make_raw_products(count), limit)

    expected = min(count, limit)
    assert len(products) == expected
    assert [p.rank for p in products] == list(range(1, expected + 1))


def test_input_order_is_preserved():
    raw = make_raw_products(4)
    raw.reverse()

    products = normalize_products(raw, 3)

    assert [p.title for p in products] == ["Headphones 4", "Headphones 3", "Headphones 2"]


def test_complete_record_is_mapped():
    product = normalize_products(make_raw_products(1), 3)[0]

    assert product.title == "Headphones 1"
    assert product.price == "$19.99"
    assert product.link == "https://www.amazon.com/dp/B001"
    assert product.image == "https://m.media-amazon.com/images/1.jpg"
    assert product.shipping == "FREE delivery Tue, Oct 21"
    assert product.rating == "4.5/5 (121 reviews)"
    assert product.reason == TOP_MATCH_REASON
    assert product.asin == "B001"


def test_missing_fields_get_sentinels_and_search_link():
    title = "Kids Party Hats & Balloons"

    product = normalize_products([{"product_title": title}], 3)[0]

    assert product.image == NOT_AVAILABLE
    assert product.price == NOT_AVAILABLE
    assert product.shipping == NOT_AVAILABLE
    assert product.asin == NOT_AVAILABLE
    assert product.rating == NOT_RATED
    assert product.link == DEFAULT_SEARCH_URL + quote(title, safe="")
    assert "Kids%20Party%20Hats%20%26%20Balloons" in product.link


def test_non_mapping_record_is_fully_defaulted():
    product = normalize_products([None], 3)[0]

    assert product.title == NOT_AVAILABLE
    assert product.link == DEFAULT_SEARCH_URL + "N%2FA"
    assert product.rating == NOT_RATED


def test_custom_search_url():
    product = normalize_products([{"product_title": "desk lamp"}], 1, "https://shop.example/find?q=")[0]
    assert product.link == "https://shop.example/find?q=desk%20lamp"


def test_numeric_price_is_stringified():
    product = normalize_products([{"product_title": "mug", "product_price": 12.5}], 1)[0]
    assert product.price == "12.5"


@pytest.mark.parametrize(
    "stars,count,expected",
    [
        ("4.2", 10, "4.2/5 (10 reviews)"),
        (3.9, None, "3.9/5 (0 reviews)"),
        (None, 10, NOT_RATED),
        ("", 5, NOT_RATED),
        (0, 12, NOT_RATED),
        (0.0, None, NOT_RATED),
    ],
)
def test_format_rating(stars, count, expected):
    assert format_rating(stars, count) == expected


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        normalize_products(make_raw_products(2), 0)


def test_zero_star_rating_is_unrated():
    product = normalize_products([{"product_title": "x", "product_star_rating": 0}], 1)[0]
    assert product.rating == NOT_RATED
