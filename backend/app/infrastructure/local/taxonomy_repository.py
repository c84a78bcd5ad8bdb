"""
SQLite implementation of taxonomy repository (tags and categories).
"""

from __future__ import annotations

from typing import Union

from sqlalchemy import select

from app.infrastructure.local.database import (
    CategoryORM,
    TagORM,
    get_session_factory,
    translate_db_errors,
)
from app.interfaces.taxonomy_repository import ITaxonomyRepository
from app.models.blog import TaxonomyCreate, TaxonomyTerm
from app.utils.datetime_utils import ensure_utc, now_utc
from app.utils.ids import new_id

TermORM = Union[type[TagORM], type[CategoryORM]]


class SqliteTaxonomyRepository(ITaxonomyRepository):
    """
    SQLite implementation of taxonomy repository.

    One instance per table: pass TagORM or CategoryORM.
    """

    def __init__(self, orm_class: TermORM, session_factory=None):
        self._orm_class = orm_class
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm) -> TaxonomyTerm:
        return TaxonomyTerm(id=orm.id, name=orm.name, created_at=ensure_utc(orm.created_at))

    @translate_db_errors
    async def create(self, term: TaxonomyCreate) -> TaxonomyTerm:
        async with self._session_factory() as session:
            orm = self._orm_class(id=new_id(), name=term.name, created_at=now_utc())
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    @translate_db_errors
    async def list(self) -> list[TaxonomyTerm]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(self._orm_class).order_by(self._orm_class.name.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]


class SqliteTagRepository(SqliteTaxonomyRepository):
    """Tags table."""

    def __init__(self, session_factory=None):
        super().__init__(TagORM, session_factory)


class SqliteCategoryRepository(SqliteTaxonomyRepository):
    """Categories table."""

    def __init__(self, session_factory=None):
        super().__init__(CategoryORM, session_factory)
