import logging
from typing import Iterable, List, Optional, Tuple

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from product_import.config.database import DbConnection
from product_import.core.config import Settings, get_settings
from product_import.core.exceptions import CategoryNotFoundError, InvalidCategoryPathError
from product_import.schemas.category import CategoryPathResult
from product_import.services.category_cache import CategoryPathCache
from product_import.services.category_repository import CategoryRepository, EavCategoryRepository, DEFAULT_STORE_ID
from product_import.services.metadata import MetaData, ID_PATH_SEPARATOR
from product_import.services.url_key_converter import NameToUrlKeyConverter
from product_import.services.url_rewrite_writer import CategoryUrlRewriteWriter

logger = logging.getLogger(__name__)

TREE_ROOT_ID = 1
DISPLAY_MODE_PRODUCTS = "PRODUCTS"


class CategoryImporter:
    """
    Resolves category name paths like "Men/Shoes" to category ids, creating
    the missing categories when asked to.

    Nothing is rolled back: when a path fails halfway, the categories created
    for its first segments stay in the store. Position and children_count are
    computed read-then-write, so only one import process may create
    categories at a time.
    """

    def __init__(
        self,
        repository: CategoryRepository,
        metadata: MetaData,
        url_rewrite_writer: CategoryUrlRewriteWriter,
        cache: Optional[CategoryPathCache] = None,
        tracer: Optional[trace.Tracer] = None,
    ):
        self.repository = repository
        self.metadata = metadata
        self.url_rewrite_writer = url_rewrite_writer
        # owned by the caller when passed in, one per import run
        self.cache = cache if cache is not None else CategoryPathCache()
        self.tracer = tracer or trace.get_tracer(
            "product_import.services.category_importer.CategoryImporter", "0.1.0"
        )

    @classmethod
    def create(
        cls,
        db: DbConnection,
        settings: Optional[Settings] = None,
        cache: Optional[CategoryPathCache] = None,
        tracer: Optional[trace.Tracer] = None,
    ) -> "CategoryImporter":
        settings = settings or get_settings()
        metadata = MetaData.load(db, settings.TABLE_PREFIX, settings.CATEGORY_URL_SUFFIX)
        repository = EavCategoryRepository(db, metadata)
        url_rewrite_writer = CategoryUrlRewriteWriter(repository, metadata, NameToUrlKeyConverter())
        return cls(repository, metadata, url_rewrite_writer, cache=cache, tracer=tracer)

    def import_category_paths(
        self, category_paths: Iterable[str], auto_create: bool, separator: str
    ) -> List[CategoryPathResult]:
        """
        Resolves every path independently and returns one result per path, in
        input order. Configuration and storage errors are not caught.
        """
        results = []
        for name_path in category_paths:
            try:
                category_id = self.import_category_path(name_path, auto_create, separator)
            except (CategoryNotFoundError, InvalidCategoryPathError) as e:
                logger.warning("Category path not imported.", extra={"name_path": name_path, "error": str(e)})
                results.append(CategoryPathResult.failure(name_path, str(e)))
            else:
                results.append(CategoryPathResult.success(name_path, category_id))
        return results

    def import_category_ids(
        self, category_paths: Iterable[str], auto_create: bool, separator: str
    ) -> Tuple[List[int], str]:
        """
        All-or-nothing variant: returns the ids and an empty error, or no ids
        and the error of the first path that failed. Paths after the failing
        one are not processed.
        """
        ids = []
        for name_path in category_paths:
            try:
                ids.append(self.import_category_path(name_path, auto_create, separator))
            except (CategoryNotFoundError, InvalidCategoryPathError) as e:
                return [], str(e)
        return ids, ""

    def import_category_path(self, name_path: str, auto_create: bool, separator: str) -> int:
        """
        Walks the path from the tree root and returns the id of its last category.

        Raises:
            CategoryNotFoundError: a segment does not exist and auto_create is off
            InvalidCategoryPathError: the path is empty or has an empty segment
        """
        category_id = self.cache.get(name_path, separator)
        if category_id is not None:
            return category_id

        with self.tracer.start_as_current_span("CategoryImporter.import_category_path") as span:
            span.set_attribute("app.category.name_path", name_path)
            span.set_attribute("app.category.auto_create", auto_create)
            try:
                category_names = self.split_name_path(name_path, separator)

                id_path = [TREE_ROOT_ID]
                for category_name in category_names:
                    category_id = self.repository.get_child_id_by_name(id_path[-1], category_name)

                    if category_id is None:
                        if not auto_create:
                            raise CategoryNotFoundError(category_name)
                        category_id = self.import_child_category(id_path, category_name)

                    id_path.append(category_id)
            except Exception as e:
                if span.is_recording():
                    span.record_exception(e)
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                raise

            category_id = id_path[-1]
            span.set_attribute("app.category.id", category_id)
            span.set_status(Status(StatusCode.OK))

        self.cache.store(name_path, category_id, separator)
        return category_id

    @staticmethod
    def split_name_path(name_path: str, separator: str) -> List[str]:
        if not separator:
            raise InvalidCategoryPathError(name_path)
        category_names = name_path.split(separator)
        if any(name == "" for name in category_names):
            raise InvalidCategoryPathError(name_path)
        return category_names

    def import_child_category(self, id_path: List[int], category_name: str) -> int:
        """
        Creates category `category_name` below the last id of `id_path` and
        returns its id. `id_path` starts with the tree root, which has level 0.
        """
        parent_id = id_path[-1]
        parent_path = ID_PATH_SEPARATOR.join(str(category_id) for category_id in id_path)
        child_level = len(id_path)

        with self.tracer.start_as_current_span("CategoryImporter.import_child_category") as span:
            span.set_attribute("app.category.name", category_name)
            span.set_attribute("app.category.parent_id", parent_id)

            # update parent data
            self.repository.increment_children_count(parent_id)
            position = self.repository.get_next_position(parent_path, child_level)

            # the new row has an empty path and no name until the writes below
            category_id = self.repository.create_entity(parent_id, position, child_level)
            self.repository.set_path(category_id, f"{parent_path}{ID_PATH_SEPARATOR}{category_id}")

            category_url = self.url_rewrite_writer.write(
                category_id, parent_id, category_name, parent_is_tree_root=len(id_path) == 1
            )

            attribute_values = [
                ("name", category_name),
                ("display_mode", DISPLAY_MODE_PRODUCTS),
                ("url_key", category_url.url_key),
                ("url_path", category_url.url_path),
                ("is_active", 1),
                ("is_anchor", 1),
                ("include_in_menu", 1),
                ("custom_use_parent_settings", 0),
                ("custom_apply_to_products", 0),
            ]
            for attribute_code, value in attribute_values:
                self.repository.set_attribute(category_id, attribute_code, value, DEFAULT_STORE_ID)

            # later url key checks and path lookups in this run must see the new category
            self.metadata.add_category_info(category_id, id_path + [category_id], {DEFAULT_STORE_ID: category_url.url_key})

            span.set_attribute("app.category.id", category_id)
            logger.info("Category created.", extra={
                "category_id": category_id,
                "category_name": category_name,
                "parent_id": parent_id,
                "category_level": child_level,
                "position": position,
                "url_path": category_url.url_path,
            })
            return category_id
