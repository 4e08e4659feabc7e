"""Request-scoped store, clock and state dependencies."""

from datetime import date
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.utils import today
from ...database import get_db
from ..portfolio.state import PortfolioState
from .snapshot import load_state
from .store import DocumentStore, SqlDocumentStore


async def get_store(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DocumentStore:
    return SqlDocumentStore(db)


def get_today() -> date:
    """Clock used for every days-left computation in a request."""
    return today()


async def get_state(
    store: Annotated[DocumentStore, Depends(get_store)],
    current_date: Annotated[date, Depends(get_today)],
) -> PortfolioState:
    """Current snapshot with derived fields computed against today."""
    state = await load_state(store)
    return state.refresh_derived(current_date)


# Type aliases for dependency injection
Store = Annotated[DocumentStore, Depends(get_store)]
Today = Annotated[date, Depends(get_today)]
State = Annotated[PortfolioState, Depends(get_state)]
