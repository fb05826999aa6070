import pytest
from pydantic import ValidationError

from product_import.schemas.bundle import BundlePriceType, BundleProductSelection


def make_selection(**overrides):
    values = {
        "sku": "shoe-lace-red",
        "is_default": True,
        "price_type": 0,
        "price_value": "2.50",
        "quantity": "1",
        "can_change_quantity": False,
    }
    values.update(overrides)
    return BundleProductSelection(**values)


def test_price_type_is_coerced():
    assert make_selection().price_type is BundlePriceType.FIXED
    assert make_selection(price_type=1).price_type is BundlePriceType.PERCENT


def test_unknown_price_type_is_rejected():
    with pytest.raises(ValidationError):
        make_selection(price_type=2)


def test_product_id_is_resolved_later():
    selection = make_selection()
    assert selection.product_id is None

    selection.set_product_id(42)

    assert selection.product_id == 42


def test_prices_and_quantities_stay_strings():
    selection = make_selection(price_value="10.0000", quantity="2.5")

    assert selection.price_value == "10.0000"
    assert selection.quantity == "2.5"
