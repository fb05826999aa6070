from product_import.core.init_db import CATEGORY_ATTRIBUTES


def write_statements(statements):
    return [s for s in statements if s.lstrip().upper().startswith(("INSERT", "UPDATE", "DELETE"))]


def get_category_row(db, category_id):
    rows = db.fetch_all(
        "SELECT entity_id, parent_id, path, position, level, children_count, attribute_set_id "
        "FROM catalog_category_entity WHERE entity_id = :id",
        {"id": category_id},
    )
    return rows[0] if rows else None


def get_attribute_value(db, category_id, attribute_code):
    attribute_id, backend_type = CATEGORY_ATTRIBUTES[attribute_code]
    return db.fetch_single_cell(
        f"SELECT value FROM catalog_category_entity_{backend_type} "
        "WHERE entity_id = :id AND attribute_id = :attribute_id AND store_id = 0",
        {"id": category_id, "attribute_id": attribute_id},
    )


def count_rows(db, table):
    return db.fetch_single_cell(f"SELECT COUNT(*) FROM {table}")
