"""In-memory CustomerFormRepository for service tests.

Set `fault` to make every subsequent call raise it (e.g. a DatabaseError).
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID, uuid4

from forms_api.core.domain_types import SortOrder

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


@dataclass
class StoredForm:
    basic_information: dict
    business_details: dict
    services_needed: dict
    client_screening: dict
    additional_details: dict
    created_at: datetime
    updated_at: datetime
    is_eligible: bool = True
    status: str = "pending"
    notes: str | None = None
    id: UUID = field(default_factory=uuid4)


class InMemoryCustomerFormRepository:

    def __init__(self):
        self.forms: dict[UUID, StoredForm] = {}
        self.fault: Exception | None = None
        self._ticks = 0

    def _now(self) -> datetime:
        # strictly increasing, so sort order is deterministic
        self._ticks += 1
        return _EPOCH + timedelta(seconds=self._ticks)

    def _check_fault(self):
        if self.fault is not None:
            raise self.fault

    def _matching(self, filters):
        forms = list(self.forms.values())
        if filters.status is not None:
            forms = [f for f in forms if f.status == filters.status.value]
        if filters.is_eligible is not None:
            forms = [f for f in forms if f.is_eligible == filters.is_eligible]
        return forms

    async def create(self, fields: dict[str, Any]) -> StoredForm:
        self._check_fault()
        now = self._now()
        form = StoredForm(**fields, created_at=now, updated_at=now)
        self.forms[form.id] = form
        return form

    async def find_many(self, filters, *, offset, limit, sort_by, sort_order):
        self._check_fault()
        forms = sorted(
            self._matching(filters),
            key=lambda f: getattr(f, sort_by.column),
            reverse=sort_order == SortOrder.DESC,
        )
        return forms[offset:offset + limit]

    async def count(self, filters) -> int:
        self._check_fault()
        return len(self._matching(filters))

    async def get(self, form_id):
        self._check_fault()
        return self.forms.get(form_id)

    async def update(self, form_id, fields):
        self._check_fault()
        form = self.forms.get(form_id)
        if form is None:
            return None
        for name, value in fields.items():
            setattr(form, name, value)
        form.updated_at = self._now()
        return form

    async def delete(self, form_id):
        self._check_fault()
        return self.forms.pop(form_id, None)
