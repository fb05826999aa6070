from typing import AbstractSet

from django.utils.text import slugify

FALLBACK_URL_KEY = "category"


class NameToUrlKeyConverter:
    """Turns category and product names into url keys"""

    def create_url_key_from_name(self, name: str) -> str:
        url_key = slugify(name)
        if not url_key:
            # names without any latin characters
            url_key = slugify(name, allow_unicode=True)
        return url_key or FALLBACK_URL_KEY

    def create_unique_url_key_from_name(self, name: str, used_url_keys: AbstractSet[str]) -> str:
        """
        Returns a url key for `name` that does not occur in `used_url_keys`.
        Collisions are resolved by appending -1, -2, ...
        """
        url_key = self.create_url_key_from_name(name)
        candidate = url_key
        suffix = 0
        while candidate in used_url_keys:
            suffix += 1
            candidate = f"{url_key}-{suffix}"
        return candidate
