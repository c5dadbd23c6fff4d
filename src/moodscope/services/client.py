"""Structured backend calls with contract validation."""

import logging
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from ..core.contracts import ContractViolation, validate_payload
from ..core.errors import BackendError, BackendFailure
from .backend import GenerativeBackend
from .prompts import BackendRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    payload: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    failure: BackendFailure

    @property
    def ok(self) -> bool:
        return False


InvokeResult = Union[Ok, Err]


class StructuredClient:
    """Sends requests to a backend and validates the responses.

    Transport errors, malformed JSON and contract violations are all returned
    as ``Err(BackendFailure)``; nothing is retried here.
    """

    def __init__(self, backend: GenerativeBackend):
        self.backend = backend

    def invoke(self, request: BackendRequest) -> InvokeResult:
        try:
            raw = self.backend.generate(request.messages, request.output_schema)
        except BackendError as e:
            return self._failed(request, str(e), e)

        try:
            payload = validate_payload(request.kind, raw)
        except ContractViolation as e:
            return self._failed(request, e.reason, e)

        logger.debug(f"{request.kind.value} payload accepted")
        return Ok(payload)

    def _failed(self, request: BackendRequest, reason: str, cause: BaseException) -> Err:
        logger.warning(f"Backend {request.kind.value} call failed: {reason}")
        return Err(BackendFailure(request.kind, reason, cause))
