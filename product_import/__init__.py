"""Direct-to-database catalog import for Magento 2."""

__version__ = "0.1.0"
