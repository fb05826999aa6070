import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(database_url: str, **kwargs) -> Engine:
    """Create the engine used for the import run."""
    options = {"pool_pre_ping": True, "pool_recycle": 3600, "echo": False}
    options.update(kwargs)
    engine = create_engine(database_url, **options)
    logger.info("Database engine created.", extra={"dialect": engine.dialect.name})
    return engine


class DbConnection:
    """
    Thin wrapper around a SQLAlchemy connection that executes parameterized
    statements. Values are always passed as bound parameters; only table
    names coming from the store metadata are formatted into the statements.
    """

    def __init__(self, connection: Connection):
        self.connection = connection
        self._last_insert_id: Optional[int] = None

    @classmethod
    def from_engine(cls, engine: Engine, autocommit: bool = True) -> "DbConnection":
        connection = engine.connect()
        if autocommit:
            # every statement is its own unit of work
            connection = connection.execution_options(isolation_level="AUTOCOMMIT")
        return cls(connection)

    def execute(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> int:
        """Runs a write statement and returns the number of affected rows."""
        result = self.connection.execute(text(sql), dict(params or {}))
        if sql.lstrip().upper().startswith("INSERT") and result.lastrowid:
            self._last_insert_id = int(result.lastrowid)
        return result.rowcount

    def fetch_single_cell(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Returns the first column of the first row, or None when there is no row."""
        row = self.connection.execute(text(sql), dict(params or {})).first()
        return None if row is None else row[0]

    def fetch_map(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Dict[Any, Any]:
        """Maps the first column of each row to its second column."""
        result = self.connection.execute(text(sql), dict(params or {}))
        return {row[0]: row[1] for row in result}

    def fetch_all(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        result = self.connection.execute(text(sql), dict(params or {}))
        return [dict(row) for row in result.mappings()]

    def get_last_insert_id(self) -> int:
        if self._last_insert_id is None:
            raise RuntimeError("No row has been inserted on this connection")
        return self._last_insert_id

    def close(self) -> None:
        self.connection.close()
