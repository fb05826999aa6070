import logging
from typing import Dict, List, Mapping, Optional, Set

from product_import.config.database import DbConnection
from product_import.core.exceptions import MetaDataError, UnknownAttributeCodeError
from product_import.schemas.category import CategoryInfo, EavAttributeInfo

logger = logging.getLogger(__name__)

CATEGORY_ENTITY_TYPE_CODE = "catalog_category"
CATEGORY_URL_SUFFIX_CONFIG_PATH = "catalog/seo/category_url_suffix"
ID_PATH_SEPARATOR = "/"


class MetaData:
    """
    Read-only facts about the store that the importers need: table names,
    category attribute ids and backend types, the default attribute set and
    the category url suffix. It also keeps the id path and url keys of every
    known category, and is told about each category created during the run.
    """

    def __init__(
        self,
        category_entity_table: str,
        url_rewrite_table: str,
        category_attribute_info: Mapping[str, EavAttributeInfo],
        default_category_attribute_set_id: int,
        category_url_suffix: str,
        category_info: Optional[Mapping[int, CategoryInfo]] = None,
    ):
        self.category_entity_table = category_entity_table
        self.url_rewrite_table = url_rewrite_table
        self.category_attribute_info: Dict[str, EavAttributeInfo] = dict(category_attribute_info)
        self.default_category_attribute_set_id = default_category_attribute_set_id
        self.category_url_suffix = category_url_suffix

        self._category_info: Dict[int, CategoryInfo] = {}
        self._children: Dict[int, Set[int]] = {}
        for info in (category_info or {}).values():
            self._remember(info)

    @property
    def category_attribute_map(self) -> Dict[str, int]:
        return {code: info.attribute_id for code, info in self.category_attribute_info.items()}

    def get_attribute_info(self, attribute_code: str) -> EavAttributeInfo:
        info = self.category_attribute_info.get(attribute_code)
        if info is None:
            logger.critical("Category attribute missing from metadata.", extra={"attribute_code": attribute_code})
            raise UnknownAttributeCodeError(attribute_code)
        return info

    def get_category_info(self, category_id: int) -> Optional[CategoryInfo]:
        return self._category_info.get(category_id)

    def get_existing_category_url_keys(self, parent_id: int, store_id: int) -> Set[str]:
        """Url keys used by the direct children of `parent_id` in the given store view."""
        url_keys = set()
        for child_id in self._children.get(parent_id, ()):
            url_key = self._category_info[child_id].url_keys.get(store_id)
            if url_key is not None:
                url_keys.add(url_key)
        return url_keys

    def add_category_info(self, category_id: int, id_path: List[int], url_keys_by_store: Mapping[int, str]) -> None:
        self._remember(CategoryInfo(category_id=category_id, id_path=list(id_path), url_keys=dict(url_keys_by_store)))

    def _remember(self, info: CategoryInfo) -> None:
        self._category_info[info.category_id] = info
        if info.parent_id is not None:
            self._children.setdefault(info.parent_id, set()).add(info.category_id)

    @classmethod
    def load(cls, db: DbConnection, table_prefix: str = "", default_url_suffix: str = ".html") -> "MetaData":
        entity_type_table = f"{table_prefix}eav_entity_type"
        attribute_table = f"{table_prefix}eav_attribute"
        config_table = f"{table_prefix}core_config_data"
        category_entity_table = f"{table_prefix}catalog_category_entity"

        entity_types = db.fetch_all(f"""
            SELECT entity_type_id, default_attribute_set_id
            FROM {entity_type_table}
            WHERE entity_type_code = :code
        """, {"code": CATEGORY_ENTITY_TYPE_CODE})
        if not entity_types:
            raise MetaDataError(f"Entity type not found: {CATEGORY_ENTITY_TYPE_CODE}")
        entity_type = entity_types[0]

        attribute_rows = db.fetch_all(f"""
            SELECT attribute_id, attribute_code, backend_type
            FROM {attribute_table}
            WHERE entity_type_id = :entity_type_id
        """, {"entity_type_id": entity_type["entity_type_id"]})
        attribute_info = {
            row["attribute_code"]: EavAttributeInfo(
                attribute_id=row["attribute_id"],
                attribute_code=row["attribute_code"],
                backend_type=row["backend_type"],
            )
            for row in attribute_rows
        }

        url_suffix = db.fetch_single_cell(f"""
            SELECT value
            FROM {config_table}
            WHERE scope = 'default' AND scope_id = 0 AND path = :path
        """, {"path": CATEGORY_URL_SUFFIX_CONFIG_PATH})
        if url_suffix is None:
            url_suffix = default_url_suffix

        category_info = cls._load_category_info(db, category_entity_table, attribute_info.get("url_key"))

        logger.info("Metadata loaded.", extra={
            "category_attribute_count": len(attribute_info),
            "category_count": len(category_info),
            "category_url_suffix": url_suffix,
        })

        return cls(
            category_entity_table=category_entity_table,
            url_rewrite_table=f"{table_prefix}url_rewrite",
            category_attribute_info=attribute_info,
            default_category_attribute_set_id=int(entity_type["default_attribute_set_id"]),
            category_url_suffix=url_suffix,
            category_info=category_info,
        )

    @staticmethod
    def _load_category_info(
        db: DbConnection, category_entity_table: str, url_key_attribute: Optional[EavAttributeInfo]
    ) -> Dict[int, CategoryInfo]:
        paths = db.fetch_map(f"SELECT entity_id, path FROM {category_entity_table}")

        url_keys: Dict[int, Dict[int, str]] = {}
        if url_key_attribute is not None:
            rows = db.fetch_all(f"""
                SELECT entity_id, store_id, value
                FROM {category_entity_table}_{url_key_attribute.backend_type}
                WHERE attribute_id = :attribute_id
            """, {"attribute_id": url_key_attribute.attribute_id})
            for row in rows:
                if row["value"] is None:
                    continue
                url_keys.setdefault(int(row["entity_id"]), {})[int(row["store_id"])] = row["value"]

        category_info = {}
        for entity_id, path in paths.items():
            if not path:
                # created by another process and not yet given its path
                continue
            category_id = int(entity_id)
            category_info[category_id] = CategoryInfo(
                category_id=category_id,
                id_path=[int(part) for part in path.split(ID_PATH_SEPARATOR)],
                url_keys=url_keys.get(category_id, {}),
            )
        return category_info
