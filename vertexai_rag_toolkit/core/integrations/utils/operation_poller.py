"""
Polling for Vertex AI long-running operations.

The poller is an explicit finite-state loop:

    INITIAL -> POLLING -> SUCCEEDED | FAILED | TIMED_OUT | CANCELLED

It waits a fixed interval before each poll and gives up after a fixed number
of polls. Transport, status and decoding failures during a poll abort the
loop at once and propagate unchanged.
"""
import enum
import logging
import threading
import time
from typing import Callable, Optional

from ....exceptions import (
    ApiError,
    OperationCancelledError,
    OperationFailedError,
    OperationTimeoutError,
)
from ...models import FailedOperation, Operation, PendingOperation, SucceededOperation, parse_operation
from ...settings import POLL_INTERVAL_SECONDS, POLL_MAX_ATTEMPTS
from .endpoint_resolver import resolve_url
from .vertex_rest_client import VertexRESTClient

logger = logging.getLogger(__name__)


class PollState(enum.Enum):
    INITIAL = "initial"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


class OperationPoller:
    """Blocks until an operation is terminal or the poll budget is spent."""

    def __init__(self,
                 client: VertexRESTClient,
                 region: str,
                 max_attempts: int = POLL_MAX_ATTEMPTS,
                 interval_seconds: float = POLL_INTERVAL_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self._client = client
        self._region = region
        self._max_attempts = max_attempts
        self._interval_seconds = interval_seconds
        self._clock = clock
        self.state = PollState.INITIAL
        self.attempts = 0

    def _fetch(self, name: str) -> Operation:
        response = self._client.get(resolve_url(self._region, name))
        if response.status_code != 200:
            raise ApiError(response.status_code, response.reason, response.body)
        return parse_operation(response.json())

    def _check_cancelled(self, name: str, cancel_event: Optional[threading.Event], deadline: Optional[float]):
        if cancel_event is not None and cancel_event.is_set():
            self.state = PollState.CANCELLED
            raise OperationCancelledError(f"Polling of operation {name} was cancelled")
        if deadline is not None and self._clock() >= deadline:
            self.state = PollState.CANCELLED
            raise OperationCancelledError(f"Deadline passed while polling operation {name}")

    def _sleep(self, cancel_event: Optional[threading.Event]):
        if cancel_event is not None:
            cancel_event.wait(self._interval_seconds)
        else:
            time.sleep(self._interval_seconds)

    def wait(self,
             operation: Operation,
             cancel_event: Optional[threading.Event] = None,
             deadline: Optional[float] = None) -> SucceededOperation:
        """
        Drive an operation to completion.

        Args:
            operation: Operation as returned by the mutating call; may already be done
            cancel_event: Optional event that aborts polling when set
            deadline: Optional time.monotonic() value after which polling is aborted

        Returns:
            The succeeded operation

        Raises:
            OperationFailedError: The operation finished with an error
            OperationTimeoutError: Still pending after max_attempts polls
            OperationCancelledError: Cancelled or past the deadline
        """
        self.state = PollState.INITIAL
        self.attempts = 0
        name = operation.name

        while isinstance(operation, PendingOperation) and self.attempts < self._max_attempts:
            self._check_cancelled(name, cancel_event, deadline)
            self.state = PollState.POLLING
            self._sleep(cancel_event)
            self._check_cancelled(name, cancel_event, deadline)

            self.attempts += 1
            logger.debug(f"Polling operation {name} (attempt {self.attempts}/{self._max_attempts})")
            operation = self._fetch(name)

        if isinstance(operation, FailedOperation):
            self.state = PollState.FAILED
            error = operation.error_dict()
            logger.error(f"Operation {name} failed: {error}")
            raise OperationFailedError(name, error)

        if isinstance(operation, PendingOperation):
            self.state = PollState.TIMED_OUT
            logger.error(f"Operation {name} timed out after {self.attempts} polls")
            raise OperationTimeoutError(name, self.attempts)

        self.state = PollState.SUCCEEDED
        logger.info(f"Operation {name} completed after {self.attempts} polls")
        return operation
