"""Customer Form Service: business operations returning ServiceResponse values.

Invariants:
    - Every public method returns exactly one ServiceResponse; none raises for
      expected conditions (missing id, constraint violation, database fault)
    - Missing id -> failure(..., 404); integrity violation -> failure(..., 400)
    - Any other DatabaseError -> exception(..., 500, error); error stays server-side
    - Faults that are not DatabaseError propagate to the route's fault barrier

Design Decisions:
    - Repository injected through the constructor: the in-memory fake in tests
      satisfies the same CustomerFormRepository protocol
"""

import logging
import math
from typing import Any

from fastapi import status

from forms_api.core.domain_types import (
    CustomerFormId, CustomerFormSortField, CustomerFormStatus, SortOrder,
)
from forms_api.core.errors import DatabaseError, IntegrityConstraintError
from forms_api.core.repository_protocols import (
    CustomerFormFilters, CustomerFormRepository,
)
from forms_api.core.service_response import (
    UNSET, ServiceResponse, Unset, exception, failure, success,
)
from forms_api.schemas.customer_form import (
    CreateCustomerFormBody, CustomerFormPage, CustomerFormRead, Pagination,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20


def _not_found(form_id: CustomerFormId) -> ServiceResponse:
    return failure(
        f"Customer form with id {form_id} not found",
        status.HTTP_404_NOT_FOUND,
    )


class CustomerFormService:
    """CRUD over customer forms, classified for the HTTP layer."""

    def __init__(self, repository: CustomerFormRepository):
        self.repository = repository

    async def create_form(self, body: CreateCustomerFormBody) -> ServiceResponse:
        try:
            form = await self.repository.create(body.to_fields())
        except IntegrityConstraintError:
            return failure(
                "Failed to create customer form", status.HTTP_400_BAD_REQUEST,
            )
        except DatabaseError as e:
            return exception(
                "An unexpected error occurred while creating customer form",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                e,
            )
        logger.info("Customer form created", extra={"form_id": str(form.id)})
        return success(
            CustomerFormRead.model_validate(form),
            "Customer form created successfully",
            status.HTTP_201_CREATED,
        )

    async def get_forms(
        self,
        *,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        status_filter: CustomerFormStatus | None = None,
        is_eligible: bool | None = None,
        sort_by: CustomerFormSortField = CustomerFormSortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.DESC,
    ) -> ServiceResponse:
        """Page through forms. totalPages = ceil(total / limit)."""
        filters = CustomerFormFilters(status=status_filter, is_eligible=is_eligible)
        try:
            forms = await self.repository.find_many(
                filters,
                offset=(page - 1) * limit,
                limit=limit,
                sort_by=sort_by,
                sort_order=sort_order,
            )
            total = await self.repository.count(filters)
        except DatabaseError as e:
            return exception(
                "Failed to fetch customer forms",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                e,
            )
        return success(CustomerFormPage(
            forms=[CustomerFormRead.model_validate(f) for f in forms],
            pagination=Pagination(
                total=total, page=page, limit=limit,
                total_pages=math.ceil(total / limit),
            ),
        ))

    async def get_form_by_id(self, form_id: CustomerFormId) -> ServiceResponse:
        try:
            form = await self.repository.get(form_id)
        except DatabaseError as e:
            return exception(
                "Failed to fetch customer form",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                e,
            )
        if form is None:
            return _not_found(form_id)
        return success(CustomerFormRead.model_validate(form))

    async def update_form_status(
        self,
        form_id: CustomerFormId,
        new_status: CustomerFormStatus,
        notes: str | None | Unset = UNSET,
        is_eligible: bool | None = None,
    ) -> ServiceResponse:
        """Move a form to `new_status`. Stored notes are kept unless `notes` is passed."""
        fields: dict[str, Any] = {"status": new_status.value}
        if notes is not UNSET:
            fields["notes"] = notes
        if is_eligible is not None:
            fields["is_eligible"] = is_eligible
        try:
            form = await self.repository.update(form_id, fields)
        except IntegrityConstraintError:
            return failure("Failed to update customer form")
        except DatabaseError as e:
            return exception(
                "An unexpected error occurred while updating customer form",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                e,
            )
        if form is None:
            return _not_found(form_id)
        logger.info(
            f"Customer form moved to {new_status.value}",
            extra={"form_id": str(form_id)},
        )
        return success(
            CustomerFormRead.model_validate(form),
            "Customer form updated successfully",
        )

    async def delete_form(self, form_id: CustomerFormId) -> ServiceResponse:
        try:
            form = await self.repository.delete(form_id)
        except IntegrityConstraintError:
            return failure("Failed to delete customer form")
        except DatabaseError as e:
            return exception(
                "An unexpected error occurred while deleting customer form",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                e,
            )
        if form is None:
            return _not_found(form_id)
        logger.info("Customer form deleted", extra={"form_id": str(form_id)})
        return success(
            CustomerFormRead.model_validate(form),
            "Customer form deleted successfully",
        )
