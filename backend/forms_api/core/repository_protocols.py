"""Boundary Protocols: contracts between services and persistence.

Invariants:
    - Services NEVER import the SQLAlchemy repository directly; they receive one
    - get/update/delete return None for an unknown id (not-found is not a fault)
    - Persistence faults surface as DatabaseError (core/errors.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, the in-memory test fake needs no base class
    - Async in Protocol: implementations do IO
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from forms_api.core.domain_types import (
    CustomerFormId, CustomerFormSortField, CustomerFormStatus, SortOrder,
)


class CustomerFormLike(Protocol):
    """Structural contract for stored forms (ORM rows or test doubles)."""
    id: UUID
    basic_information: dict
    business_details: dict
    services_needed: dict
    client_screening: dict
    additional_details: dict
    is_eligible: bool
    status: str
    notes: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class CustomerFormFilters:
    """Equality filters for listing; None means unfiltered."""
    status: CustomerFormStatus | None = None
    is_eligible: bool | None = None


class CustomerFormRepository(Protocol):
    """Contract for customer form persistence, implemented in infrastructure/."""
    async def create(self, fields: dict[str, Any]) -> CustomerFormLike: ...
    async def find_many(
        self,
        filters: CustomerFormFilters,
        *,
        offset: int,
        limit: int,
        sort_by: CustomerFormSortField,
        sort_order: SortOrder,
    ) -> list[CustomerFormLike]: ...
    async def count(self, filters: CustomerFormFilters) -> int: ...
    async def get(self, form_id: CustomerFormId) -> CustomerFormLike | None: ...
    async def update(
        self, form_id: CustomerFormId, fields: dict[str, Any],
    ) -> CustomerFormLike | None: ...
    async def delete(self, form_id: CustomerFormId) -> CustomerFormLike | None: ...
