import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from product_import.config.database import DbConnection
from product_import.schemas.category import UrlRewriteRecord
from product_import.services.metadata import MetaData

logger = logging.getLogger(__name__)

DEFAULT_STORE_ID = 0


class CategoryRepository(ABC):
    """Storage operations the category importer is built on."""

    @abstractmethod
    def get_child_id_by_name(self, parent_id: int, name: str) -> Optional[int]:
        """Id of the direct child of `parent_id` whose default store name is `name`."""

    @abstractmethod
    def increment_children_count(self, category_id: int) -> None:
        pass

    @abstractmethod
    def get_next_position(self, parent_path: str, child_level: int) -> int:
        """Position for a new child: one past the highest sibling position, or 1."""

    @abstractmethod
    def create_entity(self, parent_id: int, position: int, level: int) -> int:
        """Inserts a category without a path and returns its new id."""

    @abstractmethod
    def set_path(self, category_id: int, path: str) -> None:
        pass

    @abstractmethod
    def get_url_path(self, category_id: int) -> Optional[str]:
        pass

    @abstractmethod
    def insert_url_rewrite(self, record: UrlRewriteRecord) -> None:
        pass

    @abstractmethod
    def set_attribute(self, category_id: int, attribute_code: str, value: Any, store_id: int = DEFAULT_STORE_ID) -> None:
        pass


class EavCategoryRepository(CategoryRepository):
    """CategoryRepository on top of the Magento 2 EAV tables."""

    def __init__(self, db: DbConnection, metadata: MetaData):
        self.db = db
        self.metadata = metadata

    @property
    def entity_table(self) -> str:
        return self.metadata.category_entity_table

    def get_child_id_by_name(self, parent_id: int, name: str) -> Optional[int]:
        name_attribute = self.metadata.get_attribute_info("name")

        child_id = self.db.fetch_single_cell(f"""
            SELECT E.entity_id
            FROM {self.entity_table} E
            INNER JOIN {self.entity_table}_{name_attribute.backend_type} A
                ON A.entity_id = E.entity_id AND A.attribute_id = :attribute_id AND A.store_id = :store_id
            WHERE E.parent_id = :parent_id AND A.value = :name
            ORDER BY E.entity_id
        """, {
            "attribute_id": name_attribute.attribute_id,
            "store_id": DEFAULT_STORE_ID,
            "parent_id": parent_id,
            "name": name,
        })

        return None if child_id is None else int(child_id)

    def increment_children_count(self, category_id: int) -> None:
        self.db.execute(f"""
            UPDATE {self.entity_table}
            SET children_count = children_count + 1
            WHERE entity_id = :entity_id
        """, {"entity_id": category_id})

    def get_next_position(self, parent_path: str, child_level: int) -> int:
        position = self.db.fetch_single_cell(f"""
            SELECT MAX(position)
            FROM {self.entity_table}
            WHERE path LIKE :path_prefix AND level = :level
        """, {"path_prefix": f"{parent_path}/%", "level": child_level})

        return 1 if position is None else int(position) + 1

    def create_entity(self, parent_id: int, position: int, level: int) -> int:
        self.db.execute(f"""
            INSERT INTO {self.entity_table} (attribute_set_id, parent_id, path, position, level, children_count)
            VALUES (:attribute_set_id, :parent_id, '', :position, :level, 0)
        """, {
            "attribute_set_id": self.metadata.default_category_attribute_set_id,
            "parent_id": parent_id,
            "position": position,
            "level": level,
        })
        return self.db.get_last_insert_id()

    def set_path(self, category_id: int, path: str) -> None:
        self.db.execute(f"""
            UPDATE {self.entity_table}
            SET path = :path
            WHERE entity_id = :entity_id
        """, {"path": path, "entity_id": category_id})

    def get_url_path(self, category_id: int) -> Optional[str]:
        url_path_attribute = self.metadata.get_attribute_info("url_path")

        return self.db.fetch_single_cell(f"""
            SELECT value
            FROM {self.entity_table}_{url_path_attribute.backend_type}
            WHERE entity_id = :entity_id AND attribute_id = :attribute_id AND store_id = :store_id
        """, {
            "entity_id": category_id,
            "attribute_id": url_path_attribute.attribute_id,
            "store_id": DEFAULT_STORE_ID,
        })

    def insert_url_rewrite(self, record: UrlRewriteRecord) -> None:
        self.db.execute(f"""
            INSERT INTO {self.metadata.url_rewrite_table}
                (entity_type, entity_id, request_path, target_path, redirect_type, store_id,
                 description, is_autogenerated, metadata)
            VALUES
                (:entity_type, :entity_id, :request_path, :target_path, :redirect_type, :store_id,
                 NULL, :is_autogenerated, NULL)
        """, record.model_dump())

    def set_attribute(self, category_id: int, attribute_code: str, value: Any, store_id: int = DEFAULT_STORE_ID) -> None:
        # raises UnknownAttributeCodeError before anything is written
        attribute = self.metadata.get_attribute_info(attribute_code)

        self.db.execute(f"""
            INSERT INTO {self.entity_table}_{attribute.backend_type} (entity_id, attribute_id, store_id, value)
            VALUES (:entity_id, :attribute_id, :store_id, :value)
        """, {
            "entity_id": category_id,
            "attribute_id": attribute.attribute_id,
            "store_id": store_id,
            "value": value,
        })
