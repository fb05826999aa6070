from product_import.schemas.category import (
    EavAttributeInfo,
    CategoryInfo,
    UrlRewriteRecord,
    CategoryUrl,
    CategoryPathResult,
)
from product_import.schemas.bundle import BundlePriceType, BundleProductSelection

__all__ = [
    "EavAttributeInfo",
    "CategoryInfo",
    "UrlRewriteRecord",
    "CategoryUrl",
    "CategoryPathResult",
    "BundlePriceType",
    "BundleProductSelection",
]
