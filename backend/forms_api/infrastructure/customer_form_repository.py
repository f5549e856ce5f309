"""SQL Customer Form Repository: CustomerFormRepository over an AsyncSession.

Invariants:
    - get/update/delete return None for an unknown id
    - Every statement runs inside translate_db_errors: callers see DatabaseError only
    - Writes commit immediately; one repository per request session
"""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from forms_api.core.domain_types import (
    CustomerFormId, CustomerFormSortField, SortOrder,
)
from forms_api.core.repository_protocols import CustomerFormFilters
from forms_api.infrastructure.database import translate_db_errors
from forms_api.models.customer_form import CustomerForm


def _apply_filters(query, filters: CustomerFormFilters):
    if filters.status is not None:
        query = query.where(CustomerForm.status == filters.status.value)
    if filters.is_eligible is not None:
        query = query.where(CustomerForm.is_eligible == filters.is_eligible)
    return query


class SqlCustomerFormRepository:
    """Customer form persistence backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, fields: dict[str, Any]) -> CustomerForm:
        form = CustomerForm(**fields)
        async with translate_db_errors(self.db, "create"):
            self.db.add(form)
            await self.db.commit()
            await self.db.refresh(form)
        return form

    async def find_many(
        self,
        filters: CustomerFormFilters,
        *,
        offset: int,
        limit: int,
        sort_by: CustomerFormSortField,
        sort_order: SortOrder,
    ) -> list[CustomerForm]:
        column = getattr(CustomerForm, sort_by.column)
        ordering = column.asc() if sort_order == SortOrder.ASC else column.desc()
        query = (
            _apply_filters(select(CustomerForm), filters)
            .order_by(ordering)
            .offset(offset)
            .limit(limit)
        )
        async with translate_db_errors(self.db, "find_many"):
            result = await self.db.execute(query)
            return list(result.scalars().all())

    async def count(self, filters: CustomerFormFilters) -> int:
        query = _apply_filters(
            select(func.count()).select_from(CustomerForm), filters,
        )
        async with translate_db_errors(self.db, "count"):
            result = await self.db.execute(query)
            return result.scalar_one()

    async def get(self, form_id: CustomerFormId) -> CustomerForm | None:
        async with translate_db_errors(self.db, "get", str(form_id)):
            return await self.db.get(CustomerForm, form_id)

    async def update(
        self, form_id: CustomerFormId, fields: dict[str, Any],
    ) -> CustomerForm | None:
        async with translate_db_errors(self.db, "update", str(form_id)):
            form = await self.db.get(CustomerForm, form_id)
            if form is None:
                return None
            for name, value in fields.items():
                setattr(form, name, value)
            await self.db.commit()
            await self.db.refresh(form)
        return form

    async def delete(self, form_id: CustomerFormId) -> CustomerForm | None:
        async with translate_db_errors(self.db, "delete", str(form_id)):
            form = await self.db.get(CustomerForm, form_id)
            if form is None:
                return None
            await self.db.delete(form)
            await self.db.commit()
        return form
