"""Customer Form Schemas: request facet models and response shapes.

Invariants:
    - Each route's RequestSchema is built here once, at import time
    - Create body requires all five questionnaire sections; isEligible defaults to true
    - List query: page/limit positive ints, sortBy createdAt|updatedAt, sortOrder asc|desc
    - Ids are UUIDs; anything else fails the Params facet

Design Decisions:
    - Sections stored as submitted (camelCase JSON): CustomerFormRead echoes them verbatim
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import ConfigDict, EmailStr, Field

from forms_api.api.request_validation import RequestSchema
from forms_api.core.domain_types import (
    CustomerFormSortField, CustomerFormStatus, SortOrder,
)
from forms_api.schemas.common import (
    BooleanParam, CamelModel, NonEmptyStr, NonNegativeInt, PaginationQuery,
)


# --- Questionnaire sections ---------------------------------------------------

class BasicInformation(CamelModel):
    full_legal_name: NonEmptyStr
    business_name: NonEmptyStr
    business_address: NonEmptyStr
    city: NonEmptyStr
    state: str = Field(min_length=2, max_length=2)
    email_address: EmailStr
    phone_number: str = Field(min_length=10)


class BusinessDetails(CamelModel):
    business_structure: NonEmptyStr
    llc_type: str | None = None
    s_corp_election: bool | None = None
    has_operating_agreement: bool | None = None
    number_of_members: NonNegativeInt | None = None
    number_of_employees: NonNegativeInt
    annual_revenue: NonEmptyStr
    primary_business_goal: NonEmptyStr


class ServicesNeeded(CamelModel):
    services: list[str]
    needs_ein: bool = Field(alias="needsEIN")
    needs_bank_account: bool
    needs_payroll: bool
    payroll_employees: NonNegativeInt | None = None


class ClientScreening(CamelModel):
    business_description: NonEmptyStr
    business_type: str | None = None
    business_challenges: list[str]
    biggest_pain_point: NonEmptyStr


class AdditionalDetails(CamelModel):
    has_financial_advisor: str
    wants_professional_connection: bool


# --- Request facets -----------------------------------------------------------

class CreateCustomerFormBody(CamelModel):
    """Full questionnaire submitted by a prospective customer."""
    basic_information: BasicInformation
    business_details: BusinessDetails
    services_needed: ServicesNeeded
    client_screening: ClientScreening
    additional_details: AdditionalDetails
    is_eligible: bool = True

    def to_fields(self) -> dict[str, Any]:
        """Column values for a new row; sections keep their wire (camelCase) keys."""
        return {
            "basic_information": self.basic_information.model_dump(by_alias=True),
            "business_details": self.business_details.model_dump(by_alias=True),
            "services_needed": self.services_needed.model_dump(by_alias=True),
            "client_screening": self.client_screening.model_dump(by_alias=True),
            "additional_details": self.additional_details.model_dump(by_alias=True),
            "is_eligible": self.is_eligible,
        }


class ListCustomerFormsQuery(PaginationQuery):
    status: CustomerFormStatus | None = None
    is_eligible: BooleanParam | None = None
    sort_by: CustomerFormSortField = CustomerFormSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC


class CustomerFormIdParams(CamelModel):
    id: UUID


class UpdateCustomerFormBody(CamelModel):
    """Review decision: new status, optional note and eligibility override."""
    status: CustomerFormStatus
    notes: str | None = None
    is_eligible: bool | None = None


create_customer_form_schema = RequestSchema(body=CreateCustomerFormBody)
list_customer_forms_schema = RequestSchema(query=ListCustomerFormsQuery)
get_customer_form_schema = RequestSchema(params=CustomerFormIdParams)
update_customer_form_schema = RequestSchema(
    params=CustomerFormIdParams, body=UpdateCustomerFormBody,
)
delete_customer_form_schema = RequestSchema(params=CustomerFormIdParams)


# --- Responses ----------------------------------------------------------------

class CustomerFormRead(CamelModel):
    """Public representation of a stored form."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    basic_information: dict[str, Any]
    business_details: dict[str, Any]
    services_needed: dict[str, Any]
    client_screening: dict[str, Any]
    additional_details: dict[str, Any]
    is_eligible: bool
    status: CustomerFormStatus
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


class Pagination(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


class CustomerFormPage(CamelModel):
    forms: list[CustomerFormRead]
    pagination: Pagination
