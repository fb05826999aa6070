from product_import.models.category import CategoryEntity, CategoryEntityVarchar, CategoryEntityInt, UrlRewrite
from product_import.models.eav import EavEntityType, EavAttribute, CoreConfigData

__all__ = [
    "CategoryEntity",
    "CategoryEntityVarchar",
    "CategoryEntityInt",
    "UrlRewrite",
    "EavEntityType",
    "EavAttribute",
    "CoreConfigData",
]
