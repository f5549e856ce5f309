"""Customer Forms: CRUD routes composed with create_route_handler.

Invariants:
    - Every route declares a RequestSchema; controllers see parsed facets only
    - Controllers return ServiceResponse values, never raise for expected outcomes
    - Route-level messages/status codes override the service defaults on success

Design Decisions:
    - CustomerFormService injected per request as the route context
      (session-scoped repository, no module-level DB client)
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from forms_api.api.request_validation import ValidatedRequest
from forms_api.api.route_handler import create_route_handler
from forms_api.core.domain_types import CustomerFormId
from forms_api.core.service_response import UNSET, ServiceResponse, success
from forms_api.infrastructure.customer_form_repository import (
    SqlCustomerFormRepository,
)
from forms_api.infrastructure.database import get_db
from forms_api.schemas.customer_form import (
    create_customer_form_schema,
    delete_customer_form_schema,
    get_customer_form_schema,
    list_customer_forms_schema,
    update_customer_form_schema,
)
from forms_api.services.customer_form_service import (
    DEFAULT_LIMIT, DEFAULT_PAGE, CustomerFormService,
)

router = APIRouter(prefix="/api/v1/customer-forms", tags=["customer-forms"])


async def get_customer_form_service(
    db: AsyncSession = Depends(get_db),
) -> CustomerFormService:
    """FastAPI dependency: service bound to the request's DB session."""
    return CustomerFormService(SqlCustomerFormRepository(db))


# ─── Controllers ────────────────────────────────────────────────

async def submit_customer_form(req: ValidatedRequest) -> ServiceResponse:
    """Submit a new customer form."""
    service: CustomerFormService = req.context
    created = await service.create_form(req.body)
    if created.is_unsuccessful():
        return created
    return success(
        created.data, "Form submitted successfully", status.HTTP_201_CREATED,
    )


async def list_customer_forms(req: ValidatedRequest) -> ServiceResponse:
    """List customer forms with pagination, filters and sorting."""
    service: CustomerFormService = req.context
    query = req.query
    forms = await service.get_forms(
        page=query.page or DEFAULT_PAGE,
        limit=query.limit or DEFAULT_LIMIT,
        status_filter=query.status,
        is_eligible=query.is_eligible,
        sort_by=query.sort_by,
        sort_order=query.sort_order,
    )
    if forms.is_unsuccessful():
        return forms
    return success(forms.data, "Customer forms fetched successfully")


async def get_customer_form(req: ValidatedRequest) -> ServiceResponse:
    """Get one customer form."""
    service: CustomerFormService = req.context
    form = await service.get_form_by_id(CustomerFormId(req.params.id))
    if form.is_unsuccessful():
        return form
    return success(form.data, "Customer form fetched successfully")


async def update_customer_form(req: ValidatedRequest) -> ServiceResponse:
    """Change a form's review status, with an optional note."""
    service: CustomerFormService = req.context
    body = req.body
    # an explicit null clears the note; an omitted key leaves it alone
    notes = body.notes if "notes" in body.model_fields_set else UNSET
    updated = await service.update_form_status(
        CustomerFormId(req.params.id),
        body.status,
        notes=notes,
        is_eligible=body.is_eligible,
    )
    if updated.is_unsuccessful():
        return updated
    return success(updated.data, "Customer form updated successfully")


async def delete_customer_form(req: ValidatedRequest) -> ServiceResponse:
    """Delete a customer form and return it."""
    service: CustomerFormService = req.context
    deleted = await service.delete_form(CustomerFormId(req.params.id))
    if deleted.is_unsuccessful():
        return deleted
    return success(deleted.data, "Customer form deleted successfully")


# ─── Routes ─────────────────────────────────────────────────────

router.add_api_route(
    "",
    create_route_handler(
        schema=create_customer_form_schema,
        controller=submit_customer_form,
        dependency=get_customer_form_service,
    ),
    methods=["POST"],
    status_code=status.HTTP_201_CREATED,
)
router.add_api_route(
    "",
    create_route_handler(
        schema=list_customer_forms_schema,
        controller=list_customer_forms,
        dependency=get_customer_form_service,
    ),
    methods=["GET"],
)
router.add_api_route(
    "/{id}",
    create_route_handler(
        schema=get_customer_form_schema,
        controller=get_customer_form,
        dependency=get_customer_form_service,
    ),
    methods=["GET"],
)
router.add_api_route(
    "/{id}",
    create_route_handler(
        schema=update_customer_form_schema,
        controller=update_customer_form,
        dependency=get_customer_form_service,
    ),
    methods=["PUT"],
)
router.add_api_route(
    "/{id}",
    create_route_handler(
        schema=delete_customer_form_schema,
        controller=delete_customer_form,
        dependency=get_customer_form_service,
    ),
    methods=["DELETE"],
)
