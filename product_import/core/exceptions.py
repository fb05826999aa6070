"""Errors raised while importing catalog data."""


class ProductImportError(Exception):
    """Base class for all import errors"""


class ConfigurationError(ProductImportError):
    """The store metadata does not match what the importer needs. Not recoverable."""


class MetaDataError(ConfigurationError):
    pass


class UnknownAttributeCodeError(ConfigurationError):
    def __init__(self, attribute_code: str):
        self.attribute_code = attribute_code
        super().__init__(f"Category attribute not found: {attribute_code}")


class CategoryNotFoundError(ProductImportError):
    def __init__(self, category_name: str):
        self.category_name = category_name
        super().__init__(f"category not found: {category_name}")


class InvalidCategoryPathError(ProductImportError):
    def __init__(self, name_path: str):
        self.name_path = name_path
        super().__init__(f"invalid category path: {name_path!r}")
