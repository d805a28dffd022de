"""SQLAlchemy-backed unit of work for supplier inventory.

The adapter keeps one process-wide engine. ``startup`` binds it (running the
Alembic migrations first), ``shutdown`` disposes it, and every
``SqlAlchemyInventoryUnitOfWork`` opens a fresh session from it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from stockrecon.adapters.sqlalchemy.mappings import start_mappers
from stockrecon.adapters.sqlalchemy.migrations import upgrade_head
from stockrecon.adapters.sqlalchemy.repositories import SqlAlchemyInventoryRepository
from stockrecon.config.storage import get_database_uri
from stockrecon.domain.ports.unit_of_work import InventoryRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the inventory store is used before ``startup`` or configured twice."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine | None) -> None:
        self.engine = engine
        self.sessions = (
            sessionmaker(bind=engine, expire_on_commit=False) if engine is not None else None
        )

    def require_sessions(self) -> sessionmaker[Session]:
        if self.sessions is None:
            raise StartupError(
                "Inventory store is not initialised; call startup() before opening a unit of work"
            )
        return self.sessions


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the inventory store to ``engine`` (or a new engine for ``database_uri``).

    Falls back to ``DATABASE_URI`` / the local data directory when neither is given.
    The schema is migrated to head before the engine becomes available.
    """

    if _STATE.engine is not None and not force:
        raise StartupError("Inventory store already initialised; pass force=True to rebind")

    resolved = engine or create_engine(database_uri or get_database_uri(), future=True)
    start_mappers()
    upgrade_head(engine=resolved)
    _STATE.bind(resolved)
    log.info("Inventory store bound to %s", resolved.url.render_as_string(hide_password=True))


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.bind(None)


class SqlAlchemyInventoryUnitOfWork:
    """One transaction over the inventory table.

    Leaving the ``with`` block closes the session; an exception inside it rolls
    back first. Nothing is committed unless ``commit`` is called.
    """

    def __init__(self) -> None:
        self._sessions = _STATE.require_sessions()
        self._session: Session | None = None
        self._repositories: InventoryRepositories | None = None

    def __enter__(self) -> SqlAlchemyInventoryUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work is already open")
        self._session = self._sessions()
        self._repositories = InventoryRepositories(
            inventory=SqlAlchemyInventoryRepository(self._session)
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work is not open")
        return self._session

    @property
    def repositories(self) -> InventoryRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work is not open")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from stockrecon.domain.ports.unit_of_work import InventoryUnitOfWork

    _uow_check: InventoryUnitOfWork = SqlAlchemyInventoryUnitOfWork()
