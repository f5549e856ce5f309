"""Common Schemas: reusable field types and base models for request facets.

Invariants:
    - Path and query values arrive as strings; these types coerce them
    - Wire names are camelCase; Python attributes are snake_case
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class CamelModel(BaseModel):
    """Base for all API schemas: camelCase on the wire, snake_case in code."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def parse_positive_int(value: Any) -> int:
    """Accept "12", " 12 " or 12; reject zero, negatives and non-integers."""
    if isinstance(value, str):
        value = value.strip()
    if isinstance(value, bool):
        value = None
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = 0
    if number <= 0 or (isinstance(value, float) and not value.is_integer()):
        raise PydanticCustomError(
            "positive_integer", "Value must be a positive integer",
        )
    return number


def parse_boolean_param(value: Any) -> bool:
    """Accept "true" / "false" (as sent in query strings) or a real boolean."""
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    raise PydanticCustomError("boolean_param", "Value must be true or false")


PositiveIntParam = Annotated[int, BeforeValidator(parse_positive_int)]
BooleanParam = Annotated[bool, BeforeValidator(parse_boolean_param)]
NonEmptyStr = Annotated[str, Field(min_length=1)]
NonNegativeInt = Annotated[int, Field(ge=0)]


MAX_PAGE = 1_000_000
MAX_LIMIT = 100


class PaginationQuery(CamelModel):
    """Optional page/limit fields shared by list endpoints."""
    page: Annotated[PositiveIntParam, Field(le=MAX_PAGE)] | None = None
    limit: Annotated[PositiveIntParam, Field(le=MAX_LIMIT)] | None = None
