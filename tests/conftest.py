import pytest
from sqlalchemy import event

from product_import.config.database import create_db_engine, DbConnection
from product_import.core.config import Settings
from product_import.core.init_db import create_schema, initialize_catalog
from product_import.services.category_importer import CategoryImporter


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def sql_log():
    """Every statement sent to the database, in order."""
    return []


@pytest.fixture
def settings(tmp_path):
    return Settings(_env_file=None, DATABASE_URL=f"sqlite:///{tmp_path / 'catalog.db'}")


@pytest.fixture
def engine(settings, sql_log):
    engine = create_db_engine(settings.database_url)

    @event.listens_for(engine, "before_cursor_execute")
    def record_statement(conn, cursor, statement, parameters, context, executemany):
        sql_log.append(statement)

    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def empty_db(engine):
    db = DbConnection.from_engine(engine)
    yield db
    db.close()


@pytest.fixture
def db(empty_db):
    initialize_catalog(empty_db)
    return empty_db


@pytest.fixture
def importer(db, settings):
    return CategoryImporter.create(db, settings)
