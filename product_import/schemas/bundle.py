from enum import IntEnum
from typing import Optional

from pydantic import BaseModel


class BundlePriceType(IntEnum):
    FIXED = 0
    PERCENT = 1


class BundleProductSelection(BaseModel):
    """One selectable product inside a bundle option."""
    sku: str
    is_default: bool
    price_type: BundlePriceType
    price_value: str
    quantity: str
    can_change_quantity: bool
    # resolved from the sku during import
    product_id: Optional[int] = None

    def set_product_id(self, product_id: int) -> None:
        self.product_id = product_id
