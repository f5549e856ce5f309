"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - CustomerFormId wraps UUID
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

CustomerFormId = NewType("CustomerFormId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class CustomerFormStatus(str, Enum):
    """Review lifecycle of a submitted form. Maps to DB `status` column."""
    PENDING = "pending"
    IN_REVIEW = "in_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class CustomerFormSortField(str, Enum):
    """Sortable columns, keyed by their wire (camelCase) name."""
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"

    @property
    def column(self) -> str:
        return {"createdAt": "created_at", "updatedAt": "updated_at"}[self.value]


class Environment(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"
