"""Common shape of the dflow orchestration services.

A service is called with a request model and returns an outcome. Expected
failures travel as ``DflowError``; the CLI turns them into an error line and
exit status 1.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .. import log
from ..errors import DflowError

RequestT = TypeVar("RequestT")
OutcomeT = TypeVar("OutcomeT")


class BaseService(ABC, Generic[RequestT, OutcomeT]):
    """Run ``_run`` and route ``DflowError`` through ``_handle_failure``."""

    def __call__(self, request: RequestT) -> OutcomeT:
        log.trace(f"{type(self).__name__}: {request!r}")
        try:
            return self._run(request)
        except DflowError as error:
            log.debug(f"{type(self).__name__} failed ({error.code})")
            return self._handle_failure(error)

    @abstractmethod
    def _run(self, request: RequestT) -> OutcomeT: ...

    def _handle_failure(self, error: DflowError) -> OutcomeT:
        """Re-raise by default; git state already changed is left as is."""
        raise error
