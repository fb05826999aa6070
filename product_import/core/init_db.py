import logging
from typing import Dict

from sqlalchemy import MetaData as SchemaMetaData
from sqlalchemy.engine import Engine

from product_import.config.database import Base, DbConnection
from product_import.schemas.category import EavAttributeInfo
from product_import.services.metadata import CATEGORY_ENTITY_TYPE_CODE, CATEGORY_URL_SUFFIX_CONFIG_PATH
import product_import.models  # noqa: F401  registers the tables on Base.metadata

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_ATTRIBUTE_SET_ID = 3
DEFAULT_CATEGORY_ID = 2

VARCHAR = EavAttributeInfo.TYPE_VARCHAR
INTEGER = EavAttributeInfo.TYPE_INTEGER

# attribute code -> (attribute id, backend type), as in a fresh Magento 2 install
CATEGORY_ATTRIBUTES: Dict[str, tuple] = {
    "name": (45, VARCHAR),
    "is_active": (46, INTEGER),
    "display_mode": (52, VARCHAR),
    "is_anchor": (54, INTEGER),
    "include_in_menu": (69, INTEGER),
    "custom_use_parent_settings": (70, INTEGER),
    "custom_apply_to_products": (71, INTEGER),
    "url_key": (119, VARCHAR),
    "url_path": (120, VARCHAR),
}


def prefixed_schema(table_prefix: str = "") -> SchemaMetaData:
    """The catalog tables with `table_prefix` in front of every table name."""
    if not table_prefix:
        return Base.metadata

    schema = SchemaMetaData()
    for table in Base.metadata.sorted_tables:
        prefixed_table = table.to_metadata(schema, name=f"{table_prefix}{table.name}")
        # index names are database wide on some backends
        for index in prefixed_table.indexes:
            index.name = f"{table_prefix}{index.name}"
    return schema


def create_schema(engine: Engine, table_prefix: str = "") -> None:
    """Creates the catalog tables that do not exist yet."""
    schema = prefixed_schema(table_prefix)
    schema.create_all(engine, checkfirst=True)
    logger.info("Tables created or already exist.", extra={"tables": sorted(schema.tables)})


def initialize_catalog(db: DbConnection, category_url_suffix: str = ".html", table_prefix: str = "") -> None:
    """
    Seeds the category entity type, its attributes, the tree root (id 1) and
    the default root category (id 2) into the tables named with
    `table_prefix`. Does nothing when the tree root exists.
    """
    entity_table = f"{table_prefix}catalog_category_entity"

    existing = db.fetch_single_cell(f"SELECT entity_id FROM {entity_table} WHERE entity_id = 1")
    if existing is not None:
        logger.info("Catalog already initialized, skipping.", extra={"table_prefix": table_prefix})
        return

    db.execute(f"""
        INSERT INTO {table_prefix}eav_entity_type (entity_type_id, entity_type_code, entity_table, default_attribute_set_id)
        VALUES (3, :code, :entity_table, :attribute_set_id)
    """, {
        "code": CATEGORY_ENTITY_TYPE_CODE,
        "entity_table": entity_table,
        "attribute_set_id": DEFAULT_CATEGORY_ATTRIBUTE_SET_ID,
    })

    for attribute_code, (attribute_id, backend_type) in CATEGORY_ATTRIBUTES.items():
        db.execute(f"""
            INSERT INTO {table_prefix}eav_attribute (attribute_id, entity_type_id, attribute_code, backend_type)
            VALUES (:attribute_id, 3, :attribute_code, :backend_type)
        """, {"attribute_id": attribute_id, "attribute_code": attribute_code, "backend_type": backend_type})

    db.execute(f"""
        INSERT INTO {table_prefix}core_config_data (scope, scope_id, path, value)
        VALUES ('default', 0, :path, :value)
    """, {"path": CATEGORY_URL_SUFFIX_CONFIG_PATH, "value": category_url_suffix})

    # tree root + default category
    db.execute(f"""
        INSERT INTO {entity_table} (entity_id, attribute_set_id, parent_id, path, position, level, children_count)
        VALUES (1, :attribute_set_id, 0, '1', 0, 0, 1)
    """, {"attribute_set_id": DEFAULT_CATEGORY_ATTRIBUTE_SET_ID})
    db.execute(f"""
        INSERT INTO {entity_table} (entity_id, attribute_set_id, parent_id, path, position, level, children_count)
        VALUES (:entity_id, :attribute_set_id, 1, :path, 1, 1, 0)
    """, {
        "entity_id": DEFAULT_CATEGORY_ID,
        "attribute_set_id": DEFAULT_CATEGORY_ATTRIBUTE_SET_ID,
        "path": f"1/{DEFAULT_CATEGORY_ID}",
    })
    _insert_value(db, entity_table, 1, "name", "Root Catalog")
    for attribute_code, value in (("name", "Default Category"), ("is_active", 1), ("is_anchor", 1)):
        _insert_value(db, entity_table, DEFAULT_CATEGORY_ID, attribute_code, value)

    logger.info("Catalog initialized successfully.", extra={
        "default_category_id": DEFAULT_CATEGORY_ID,
        "table_prefix": table_prefix,
    })


def _insert_value(db: DbConnection, entity_table: str, entity_id: int, attribute_code: str, value) -> None:
    attribute_id, backend_type = CATEGORY_ATTRIBUTES[attribute_code]
    db.execute(f"""
        INSERT INTO {entity_table}_{backend_type} (entity_id, attribute_id, store_id, value)
        VALUES (:entity_id, :attribute_id, 0, :value)
    """, {"entity_id": entity_id, "attribute_id": attribute_id, "value": value})
