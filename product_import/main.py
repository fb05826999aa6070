"""
Command line entry point: resolves category name paths against the
configured store and prints one line per path.

    product-import-categories "Men/Shoes" "Women/Dresses"
    cat paths.txt | product-import-categories --no-create
"""

import argparse
import json
import sys
from typing import List, Optional

from opentelemetry import trace

from product_import.config.database import create_db_engine, DbConnection
from product_import.config.logging import initialize_logging, get_configured_logger
from product_import.config.otel import setup_tracing, shutdown_tracing
from product_import.core.config import get_settings
from product_import.core.init_db import create_schema, initialize_catalog
from product_import.services.category_importer import CategoryImporter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="product-import-categories",
        description="Resolve (and create) catalog categories from name paths",
    )
    parser.add_argument("paths", nargs="*", help="Category name paths; read from stdin when omitted")
    parser.add_argument("--separator", help="Separator between category names (default from settings)")
    create_group = parser.add_mutually_exclusive_group()
    create_group.add_argument("--create", dest="auto_create", action="store_true", default=None,
                              help="Create missing categories")
    create_group.add_argument("--no-create", dest="auto_create", action="store_false",
                              help="Report missing categories instead of creating them")
    parser.add_argument("--init-db", action="store_true",
                        help="Create the catalog tables and seed the root categories first")
    return parser


def read_paths(args: argparse.Namespace) -> List[str]:
    if args.paths:
        return list(args.paths)
    return [line.rstrip("\n") for line in sys.stdin if line.strip()]


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    initialize_logging(settings.LOG_LEVEL)
    logger = get_configured_logger(__name__)

    separator = args.separator or settings.CATEGORY_NAME_PATH_SEPARATOR
    auto_create = settings.AUTO_CREATE_CATEGORIES if args.auto_create is None else args.auto_create

    engine = create_db_engine(settings.database_url)
    setup_tracing(settings, engine=engine)
    tracer = trace.get_tracer("product_import.main")
    db = DbConnection.from_engine(engine)

    try:
        if args.init_db:
            create_schema(engine, settings.TABLE_PREFIX)
            initialize_catalog(db, settings.CATEGORY_URL_SUFFIX, settings.TABLE_PREFIX)

        paths = read_paths(args)
        with tracer.start_as_current_span("import_categories") as span:
            span.set_attribute("app.category.path_count", len(paths))
            importer = CategoryImporter.create(db, settings)
            results = importer.import_category_paths(paths, auto_create, separator)

        for result in results:
            print(json.dumps(result.model_dump(), ensure_ascii=False))

        failed = [result for result in results if not result.ok]
        logger.info("Category import finished.", extra={
            "path_count": len(results),
            "failed_count": len(failed),
            "auto_create": auto_create,
        })
        return 1 if failed else 0
    finally:
        db.close()
        engine.dispose()
        shutdown_tracing()


if __name__ == "__main__":
    sys.exit(main())
