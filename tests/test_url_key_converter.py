import pytest

from product_import.services.url_key_converter import NameToUrlKeyConverter, FALLBACK_URL_KEY


@pytest.fixture
def converter():
    return NameToUrlKeyConverter()


@pytest.mark.parametrize("name, expected", [
    ("Shoes", "shoes"),
    ("Men's Shoes", "mens-shoes"),
    ("Café Crème", "cafe-creme"),
    ("  T-Shirts & Tops  ", "t-shirts-tops"),
    ("AC/DC", "acdc"),
])
def test_create_url_key_from_name(converter, name, expected):
    assert converter.create_url_key_from_name(name) == expected


def test_non_latin_names_keep_their_characters(converter):
    assert converter.create_url_key_from_name("남성 신발") == "남성-신발"


def test_names_without_usable_characters_get_fallback(converter):
    assert converter.create_url_key_from_name("!!!") == FALLBACK_URL_KEY


def test_unique_url_key_is_unchanged_when_free(converter):
    assert converter.create_unique_url_key_from_name("Sale", {"shoes"}) == "sale"


def test_unique_url_key_appends_counter(converter):
    assert converter.create_unique_url_key_from_name("Sale", {"sale"}) == "sale-1"
    assert converter.create_unique_url_key_from_name("Sale", {"sale", "sale-1", "sale-2"}) == "sale-3"


def test_unique_url_key_ignores_gaps(converter):
    assert converter.create_unique_url_key_from_name("Sale", {"sale", "sale-2"}) == "sale-1"
