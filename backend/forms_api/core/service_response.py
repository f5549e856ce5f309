"""Service Responses: the three-valued outcome every business operation returns.

Invariants:
    - Exactly one of ServiceSuccess / ServiceFailure / ServiceException per value
    - is_success() and is_unsuccessful() are mutually exclusive and jointly exhaustive
    - `data` is UNSET unless a payload was passed; a falsy payload (0, [], None) is still a payload
    - ServiceException.error is for logs only: excluded from repr, never serialized
    - Instances are frozen; a response is built once and consumed once

Design Decisions:
    - Explicit `kind` discriminator + exhaustive match over subclass inspection
    - Expected conditions (not found, conflict) are returned as data, never raised
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final, Generic, TypeVar, assert_never

from fastapi import status

T = TypeVar("T")

DEFAULT_SUCCESS_MESSAGE: Final = "Operation successful"


class Unset:
    """Sentinel type for "no value was passed"."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = Unset()


def has_payload(data: Any) -> bool:
    return data is not UNSET


class ResponseKind(str, Enum):
    """Discriminator for the service response union."""
    SUCCESS = "success"
    FAILURE = "failure"
    EXCEPTION = "exception"


class _Classified:
    """Predicates shared by all variants. Only these may inspect `kind`."""

    kind: ResponseKind

    def is_success(self) -> bool:
        match self.kind:
            case ResponseKind.SUCCESS:
                return True
            case ResponseKind.FAILURE | ResponseKind.EXCEPTION:
                return False
            case _:
                assert_never(self.kind)

    def is_unsuccessful(self) -> bool:
        return not self.is_success()

    def is_failure(self) -> bool:
        match self.kind:
            case ResponseKind.FAILURE:
                return True
            case ResponseKind.SUCCESS | ResponseKind.EXCEPTION:
                return False
            case _:
                assert_never(self.kind)

    def is_exception(self) -> bool:
        match self.kind:
            case ResponseKind.EXCEPTION:
                return True
            case ResponseKind.SUCCESS | ResponseKind.FAILURE:
                return False
            case _:
                assert_never(self.kind)


@dataclass(frozen=True)
class ServiceSuccess(_Classified, Generic[T]):
    """Operation completed; `data` is the payload sent to the client."""
    data: T | Unset = UNSET
    message: str = DEFAULT_SUCCESS_MESSAGE
    status_code: int = status.HTTP_200_OK
    kind: ResponseKind = field(default=ResponseKind.SUCCESS, init=False)


@dataclass(frozen=True)
class ServiceFailure(_Classified, Generic[T]):
    """Anticipated business-rule rejection (not found, conflict, bad transition)."""
    message: str
    status_code: int = status.HTTP_400_BAD_REQUEST
    data: T | Unset = UNSET
    kind: ResponseKind = field(default=ResponseKind.FAILURE, init=False)


@dataclass(frozen=True)
class ServiceException(_Classified, Generic[T]):
    """Unanticipated fault that business logic caught and converted to data."""
    message: str
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: BaseException | None = field(default=None, repr=False)
    data: T | Unset = UNSET
    kind: ResponseKind = field(default=ResponseKind.EXCEPTION, init=False)


ServiceResponse = ServiceSuccess[Any] | ServiceFailure[Any] | ServiceException[Any]


def success(
    data: T | Unset = UNSET,
    message: str | None = None,
    status_code: int | None = None,
) -> ServiceSuccess[T]:
    """Build a success response. Defaults: "Operation successful", 200."""
    return ServiceSuccess(
        data,
        message if message is not None else DEFAULT_SUCCESS_MESSAGE,
        status_code if status_code is not None else status.HTTP_200_OK,
    )


def failure(
    message: str, status_code: int | None = None, data: T | Unset = UNSET,
) -> ServiceFailure[T]:
    """Build a failure response. Default status: 400."""
    return ServiceFailure(
        message,
        status_code if status_code is not None else status.HTTP_400_BAD_REQUEST,
        data,
    )


def exception(
    message: str,
    status_code: int | None = None,
    error: BaseException | None = None,
    data: T | Unset = UNSET,
) -> ServiceException[T]:
    """Build an exception response. Default status: 500.

    `error` is attached only when the caller passes one.
    """
    return ServiceException(
        message,
        (
            status_code if status_code is not None
            else status.HTTP_500_INTERNAL_SERVER_ERROR
        ),
        error,
        data,
    )
