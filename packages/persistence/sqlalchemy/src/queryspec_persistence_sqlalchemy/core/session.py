"""
Read session scope: owns (or borrows) an ``AsyncSession`` for queries.

Supports the two session patterns of the write-side unit of work:

1. **Caller-managed session**::

       async with SQLAlchemyReadSession(session=session) as reads:
           source = reads.query(CategoryModel)

2. **Self-managed session**::

       factory = async_sessionmaker(engine, expire_on_commit=False)
       async with SQLAlchemyReadSession(session_factory=factory) as reads:
           page = await executor.execute(reads.query(CategoryModel), spec, 1, 10)

Reads never commit. A session created by the scope is closed on exit,
which detaches the fetched rows with their loaded state intact; a
borrowed session is left untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from ..exceptions import SessionManagementError
from .query_source import SQLAlchemyQuerySource

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from sqlalchemy.ext.asyncio import AsyncSession

    from ..specifications.strategy import SQLAlchemyOperatorRegistry

    AsyncSessionFactory = Callable[[], AsyncSession]

M = TypeVar("M")


class SQLAlchemyReadSession:
    """
    Async context manager handing out :class:`SQLAlchemyQuerySource` objects.

    **Important:** Exactly one of ``session`` or ``session_factory`` must be
    provided.
    """

    def __init__(
        self,
        session: AsyncSession | None = None,
        session_factory: AsyncSessionFactory | None = None,
        *,
        registry: SQLAlchemyOperatorRegistry | None = None,
    ) -> None:
        if session is not None and session_factory is not None:
            raise SessionManagementError(
                "Cannot provide both 'session' and 'session_factory'."
            )
        if session is None and session_factory is None:
            raise SessionManagementError(
                "Must provide either 'session' or 'session_factory'."
            )
        self._session = session
        self._session_factory = session_factory
        self._owns_session = session is None
        self._registry = registry

    @property
    def session(self) -> AsyncSession:
        """Get the active session. Raises if session not yet created."""
        if self._session is None:
            raise SessionManagementError(
                "Session not yet created. Ensure __aenter__ was called."
            )
        return self._session

    def query(self, model: type[M]) -> SQLAlchemyQuerySource[M]:
        """Return an unfiltered source over ``model``."""
        return SQLAlchemyQuerySource(self.session, model, registry=self._registry)

    async def __aenter__(self) -> SQLAlchemyReadSession:
        if self._owns_session and self._session_factory is not None:
            try:
                self._session = self._session_factory()
            except Exception as e:  # noqa: BLE001
                raise SessionManagementError(f"Failed to create session: {e}") from e
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._owns_session and self._session is not None:
            try:
                await self._session.close()
            finally:
                self._session = None

    def __repr__(self) -> str:
        state = "open" if self._session is not None else "closed"
        return f"SQLAlchemyReadSession({state})"
