"""Database span source for the spanreplay application.

This module reads captured spans from the ``pg_tracing_consume_spans``
relation (or any relation exposing the same columns) using SQLAlchemy.
Reading that relation consumes the capture buffer on the server side.
"""

import re
from collections.abc import Iterator

from sqlalchemy import DateTime, create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from spanreplay.config import SourceConfig
from spanreplay.exceptions import (
    ConfigurationError,
    SourceConnectionError,
    SourceQueryError,
)
from spanreplay.log import logger
from spanreplay.models import SPAN_COLUMNS, SpanRecord
from spanreplay.source.base import SpanSource
from spanreplay.utils import normalize_database_url

_RELATION_PATTERN = re.compile(
    r"^[A-Za-z_][A-Za-z0-9_$]*(\.[A-Za-z_][A-Za-z0-9_$]*)?$"
)


def build_query(relation: str) -> str:
    """Build the single span query against the capture relation.

    Args:
        relation: Plain or schema-qualified relation name

    Returns:
        The SQL text selecting every span column ordered by start time

    Raises:
        ConfigurationError: If the relation is not a plain identifier
    """
    if not _RELATION_PATTERN.match(relation):
        raise ConfigurationError(
            f"Invalid relation name: {relation!r}",
            "Use a plain or schema-qualified identifier such as "
            "pg_tracing_consume_spans",
        )
    columns = ", ".join(SPAN_COLUMNS)
    return f"SELECT {columns} FROM {relation} ORDER BY span_start"


class DatabaseSpanSource(SpanSource):
    """
    Span source backed by a SQL database reachable through SQLAlchemy.

    The connection URL is handed to SQLAlchemy as is, apart from the
    ``postgres://`` scheme rewrite. A connection is opened by connect()
    and released by close().
    """

    def __init__(self, config: SourceConfig):
        """
        Initialize the database span source.

        Args:
            config (SourceConfig): Source configuration.
        """
        self.config = config
        self.query = build_query(config.relation)
        self._engine: Engine | None = None
        self._connection: Connection | None = None

    def connect(self) -> None:
        """Open the connection to the source database.

        Raises:
            SourceConnectionError: If the engine cannot be created or the
                database cannot be reached
        """
        if not self.config.database_url:
            raise SourceConnectionError(
                "No database URL configured",
                "Set source.database_url in the config or DATABASE_URL",
            )
        url = normalize_database_url(self.config.database_url)
        try:
            parsed = make_url(url)
            connect_args = {}
            if parsed.get_backend_name() == "postgresql":
                connect_args["connect_timeout"] = self.config.connect_timeout
            self._engine = create_engine(url, connect_args=connect_args)
            logger.debug(
                f"Connecting to {parsed.render_as_string(hide_password=True)}"
            )
            self._connection = self._engine.connect()
        except ArgumentError as e:
            raise SourceConnectionError(
                f"Invalid database URL: {e}",
                "Use a URL such as postgresql://user@localhost:5432/postgres",
            ) from e
        except (SQLAlchemyError, ImportError) as e:
            raise SourceConnectionError(
                f"Cannot connect to the source database: {e}",
                "Verify the database URL and that the server is running",
            ) from e
        logger.info("Connected to the source database")

    def read(self) -> Iterator[SpanRecord]:
        """
        Drain the capture relation once.

        Runs the span query and yields one SpanRecord per row, in start
        time order. Any row that cannot be decoded aborts the iteration.

        Returns:
            Iterator[SpanRecord]: Lazily decoded span records.

        Raises:
            SourceQueryError: If the query fails
            RecordDecodeError: If a row cannot be decoded
        """
        if self._connection is None:
            self.connect()
        # connect() either sets _connection or raises
        if self._connection is None:
            raise RuntimeError("_connection must be set after connect()")

        logger.info(f"Query: {self.query}")
        statement = text(self.query).columns(span_start=DateTime(timezone=True))
        try:
            result = self._connection.execution_options(
                stream_results=True
            ).execute(statement)
            for row in result:
                yield SpanRecord.from_row(row._mapping)
        except SQLAlchemyError as e:
            raise SourceQueryError(
                f"Span query failed: {e}",
                f"Check that {self.config.relation} exists and is readable",
            ) from e

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
