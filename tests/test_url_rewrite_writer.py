from typing import Any, Dict, List, Optional

import pytest

from product_import.schemas.category import CategoryInfo, EavAttributeInfo, UrlRewriteRecord
from product_import.services.category_repository import CategoryRepository
from product_import.services.metadata import MetaData
from product_import.services.url_key_converter import NameToUrlKeyConverter
from product_import.services.url_rewrite_writer import CategoryUrlRewriteWriter


class InMemoryCategoryRepository(CategoryRepository):
    """Keeps url paths and rewrites in dicts; everything else is unused here."""

    def __init__(self, url_paths: Optional[Dict[int, str]] = None):
        self.url_paths = dict(url_paths or {})
        self.rewrites: List[UrlRewriteRecord] = []

    def get_child_id_by_name(self, parent_id: int, name: str) -> Optional[int]:
        return None

    def increment_children_count(self, category_id: int) -> None:
        pass

    def get_next_position(self, parent_path: str, child_level: int) -> int:
        return 1

    def create_entity(self, parent_id: int, position: int, level: int) -> int:
        raise NotImplementedError

    def set_path(self, category_id: int, path: str) -> None:
        pass

    def get_url_path(self, category_id: int) -> Optional[str]:
        return self.url_paths.get(category_id)

    def insert_url_rewrite(self, record: UrlRewriteRecord) -> None:
        self.rewrites.append(record)

    def set_attribute(self, category_id: int, attribute_code: str, value: Any, store_id: int = 0) -> None:
        pass


@pytest.fixture
def metadata():
    return MetaData(
        category_entity_table="catalog_category_entity",
        url_rewrite_table="url_rewrite",
        category_attribute_info={
            "url_key": EavAttributeInfo(attribute_id=119, attribute_code="url_key", backend_type="varchar"),
        },
        default_category_attribute_set_id=3,
        category_url_suffix=".html",
        category_info={
            10: CategoryInfo(category_id=10, id_path=[1, 10], url_keys={0: "men"}),
            11: CategoryInfo(category_id=11, id_path=[1, 10, 11], url_keys={0: "shoes"}),
        },
    )


@pytest.fixture
def repository():
    return InMemoryCategoryRepository({10: "men", 11: "men/shoes"})


@pytest.fixture
def writer(repository, metadata):
    return CategoryUrlRewriteWriter(repository, metadata, NameToUrlKeyConverter())


class TestCompose:

    def test_url_path_extends_parent_url_path(self, writer):
        category_url = writer.compose(12, "Running Shoes", "men", set())

        assert category_url.url_key == "running-shoes"
        assert category_url.url_path == "men/running-shoes"
        assert category_url.rewrite == UrlRewriteRecord(
            entity_type="category",
            entity_id=12,
            request_path="men/running-shoes.html",
            target_path="catalog/category/view/id/12",
            redirect_type=0,
            store_id=0,
            is_autogenerated=1,
        )

    def test_without_parent_url_path(self, writer):
        category_url = writer.compose(12, "Kids", None, set())

        assert category_url.url_path == "kids"
        assert category_url.rewrite.request_path == "kids.html"

    def test_used_url_keys_are_avoided(self, writer):
        category_url = writer.compose(12, "Shoes", "men", {"shoes"})

        assert category_url.url_key == "shoes-1"
        assert category_url.rewrite.request_path == "men/shoes-1.html"

    def test_empty_suffix(self, writer, metadata):
        metadata.category_url_suffix = ""

        assert writer.compose(12, "Kids", None, set()).rewrite.request_path == "kids"


class TestWrite:

    def test_checks_sibling_url_keys(self, writer, repository):
        category_url = writer.write(12, 10, "Shoes", parent_is_tree_root=False)

        assert category_url.url_key == "shoes-1"
        assert category_url.url_path == "men/shoes-1"
        assert repository.rewrites == [category_url.rewrite]

    def test_child_of_tree_root_does_not_read_parent_url_path(self, writer, repository):
        repository.url_paths[1] = "root-catalog"

        category_url = writer.write(12, 1, "Women", parent_is_tree_root=True)

        assert category_url.url_path == "women"
        assert category_url.rewrite.request_path == "women.html"

    def test_child_of_tree_root_avoids_top_level_keys(self, writer):
        assert writer.write(12, 1, "Men", parent_is_tree_root=True).url_key == "men-1"
