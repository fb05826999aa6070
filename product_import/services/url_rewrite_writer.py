import logging
from typing import AbstractSet, Optional

from product_import.schemas.category import CATEGORY_TARGET_PATH, CategoryUrl, UrlRewriteRecord
from product_import.services.category_repository import CategoryRepository, DEFAULT_STORE_ID
from product_import.services.metadata import MetaData
from product_import.services.url_key_converter import NameToUrlKeyConverter

logger = logging.getLogger(__name__)


class CategoryUrlRewriteWriter:
    """Derives the url key and url path of a new category and stores its url rewrite."""

    def __init__(self, repository: CategoryRepository, metadata: MetaData, url_key_converter: NameToUrlKeyConverter):
        self.repository = repository
        self.metadata = metadata
        self.url_key_converter = url_key_converter

    def compose(
        self,
        category_id: int,
        name: str,
        parent_url_path: Optional[str],
        used_url_keys: AbstractSet[str],
    ) -> CategoryUrl:
        url_key = self.url_key_converter.create_unique_url_key_from_name(name, used_url_keys)
        url_path = f"{parent_url_path}/{url_key}" if parent_url_path else url_key

        rewrite = UrlRewriteRecord(
            entity_id=category_id,
            request_path=url_path + self.metadata.category_url_suffix,
            target_path=CATEGORY_TARGET_PATH.format(category_id=category_id),
            store_id=DEFAULT_STORE_ID,
        )
        return CategoryUrl(url_key=url_key, url_path=url_path, rewrite=rewrite)

    def write(self, category_id: int, parent_id: int, name: str, parent_is_tree_root: bool) -> CategoryUrl:
        """
        Url keys only need to be unique among the siblings of the new category.
        Children of the tree root get their url key as url path.
        """
        used_url_keys = self.metadata.get_existing_category_url_keys(parent_id, DEFAULT_STORE_ID)
        parent_url_path = None if parent_is_tree_root else self.repository.get_url_path(parent_id)

        category_url = self.compose(category_id, name, parent_url_path, used_url_keys)
        self.repository.insert_url_rewrite(category_url.rewrite)

        logger.debug("Category url rewrite written.", extra={
            "category_id": category_id,
            "request_path": category_url.rewrite.request_path,
        })
        return category_url
