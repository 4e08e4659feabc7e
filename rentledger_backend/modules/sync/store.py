"""Whole-document persistence for the console's collections."""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import ExternalServiceError
from .models import AppDocument

logger = logging.getLogger(__name__)

STORE_NAME = "document-store"


class DocumentStore(ABC):
    """Loads and overwrites named JSON documents. Last write wins."""

    @abstractmethod
    async def load(self, name: str) -> Any | None:
        """Return the stored document, or None if it was never written."""

    @abstractmethod
    async def save(self, name: str, data: Any) -> None:
        """Replace the named document with ``data``."""


class SqlDocumentStore(DocumentStore):
    """Documents kept in the ``app_documents`` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def load(self, name: str) -> Any | None:
        try:
            document = await self.session.get(AppDocument, name)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load document '{name}': {e}")
            raise ExternalServiceError(STORE_NAME, f"load {name}") from e
        return None if document is None else document.data

    async def save(self, name: str, data: Any) -> None:
        try:
            document = await self.session.get(AppDocument, name)
            if document is None:
                self.session.add(AppDocument(name=name, data=data))
            else:
                document.data = data
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to save document '{name}': {e}")
            raise ExternalServiceError(STORE_NAME, f"save {name}") from e
        logger.info(f"Saved document '{name}'")


class InMemoryDocumentStore(DocumentStore):
    """Process-local store; documents are copied in and out."""

    def __init__(self, documents: dict[str, Any] | None = None):
        self._documents = copy.deepcopy(documents or {})

    async def load(self, name: str) -> Any | None:
        return copy.deepcopy(self._documents.get(name))

    async def save(self, name: str, data: Any) -> None:
        self._documents[name] = copy.deepcopy(data)
