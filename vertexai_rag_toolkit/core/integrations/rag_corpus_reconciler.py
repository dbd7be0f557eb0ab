"""
Lifecycle reconciliation for Vertex AI RAG corpora.

Turns a desired RagCorpusState into the wire calls that converge the remote
corpus to it, and maps the observed corpus back into state. Every failure is
raised as a RagToolkitError and is terminal for the call; no partial state is
returned.
"""
import logging
import threading
import time
from typing import List, Optional, Tuple

from ...exceptions import (
    ApiError,
    MissingFieldError,
    OperationCancelledError,
    OperationFailedError,
    ValidationError,
)
from ..config import ProviderConfig
from ..models import (
    CreateRagCorpusRequest,
    FailedOperation,
    PendingOperation,
    RagCorpusResponse,
    RagCorpusState,
    UpdateRagCorpusRequest,
    is_operation_envelope,
    parse_operation,
)
from .source_api_processors.vertex_rag_api_processor import VertexRagApiProcessor
from .utils.operation_poller import OperationPoller
from .utils.vertex_rest_client import RawResponse, VertexRESTClient

logger = logging.getLogger(__name__)


def _raise_for_status(response: RawResponse, *accepted: int):
    if response.status_code not in (accepted or (200,)):
        raise ApiError(response.status_code, response.reason, response.body)


def _require_identity(state: RagCorpusState) -> str:
    identity = state.identity
    if not identity:
        raise ValidationError("RAG corpus has no identity; create or import it first")
    return identity


class RagCorpusReconciler:
    """Create, Read, Update, Delete and Import for a single RAG corpus."""

    def __init__(self,
                 config: ProviderConfig,
                 client: Optional[VertexRESTClient] = None,
                 poller: Optional[OperationPoller] = None):
        config.validate()
        self.config = config
        self.client = client or VertexRESTClient(config.access_token)
        self.processor = VertexRagApiProcessor(self.client, config.project, config.region)
        self.poller = poller or OperationPoller(self.client, config.region)

    @staticmethod
    def _check_cancelled(cancel_event: Optional[threading.Event], deadline: Optional[float]):
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelledError("Reconciliation was cancelled")
        if deadline is not None and time.monotonic() >= deadline:
            raise OperationCancelledError("Reconciliation deadline passed")

    def create(self,
               desired: RagCorpusState,
               cancel_event: Optional[threading.Event] = None,
               deadline: Optional[float] = None) -> RagCorpusState:
        """Create the corpus and wait for its operation; returns desired state with the new identity."""
        payload = CreateRagCorpusRequest.from_state(desired).to_dict()

        self._check_cancelled(cancel_event, deadline)
        response = self.processor.create_rag_corpus(payload)
        _raise_for_status(response)

        operation = parse_operation(response.json())
        if isinstance(operation, FailedOperation):
            raise OperationFailedError(operation.name, operation.error_dict())
        if isinstance(operation, PendingOperation):
            operation = self.poller.wait(operation, cancel_event=cancel_event, deadline=deadline)

        result = operation.response_dict()
        name = result.get('name')
        if not isinstance(name, str) or not name:
            raise MissingFieldError('response.name', result)

        logger.info(f"Created RAG Corpus {name}")
        return desired.with_identity(name)

    def read_with_drift(self,
                        state: RagCorpusState,
                        cancel_event: Optional[threading.Event] = None,
                        deadline: Optional[float] = None) -> Tuple[Optional[RagCorpusState], List[str]]:
        """
        Refresh state from the server and report drift that update cannot correct.

        Returns (None, []) when the corpus no longer exists; the caller should
        stop tracking it. Server values replace local ones for the mutable
        fields. A locally unknown embedding model is filled in from the server;
        a differing one is kept and reported.
        """
        identity = _require_identity(state)

        self._check_cancelled(cancel_event, deadline)
        response = self.processor.get_rag_corpus(identity)
        if response.status_code == 404:
            logger.warning(f"RAG Corpus {identity} not found, removing from state")
            return None, []
        _raise_for_status(response)

        observed = RagCorpusResponse.from_dict(response.json())
        if observed.name and observed.name != identity:
            raise ValidationError(f"Server returned corpus {observed.name} for {identity}")

        drift: List[str] = []
        local_config = state.embedding_model_config
        observed_config = observed.embedding_model_config
        if local_config is None:
            local_config = observed_config
        elif observed_config is not None and observed_config.publisher_model != local_config.publisher_model:
            message = (
                f"RAG Corpus {identity} embedding model is {observed_config.publisher_model} on the server "
                f"but {local_config.publisher_model} locally; it cannot be changed by update"
            )
            logger.warning(message)
            drift.append(message)

        refreshed = RagCorpusState(
            id=identity,
            name=identity,
            display_name=observed.display_name,
            description=observed.description,
            embedding_model_config=local_config,
        )
        return refreshed, drift

    def read(self,
             state: RagCorpusState,
             cancel_event: Optional[threading.Event] = None,
             deadline: Optional[float] = None) -> Optional[RagCorpusState]:
        """Refresh state from the server; None means the corpus is gone."""
        refreshed, _ = self.read_with_drift(state, cancel_event=cancel_event, deadline=deadline)
        return refreshed

    def update(self,
               desired: RagCorpusState,
               prior: RagCorpusState,
               cancel_event: Optional[threading.Event] = None,
               deadline: Optional[float] = None) -> RagCorpusState:
        """Apply display_name and description; waits on the operation if the server returns one."""
        identity = _require_identity(prior)
        target = desired.with_identity(identity)

        if target.embedding_model_config != prior.embedding_model_config:
            logger.warning(
                f"RAG Corpus {identity} embedding_model_config cannot be updated in place; change ignored"
            )

        payload = UpdateRagCorpusRequest.from_state(target).to_dict()

        self._check_cancelled(cancel_event, deadline)
        response = self.processor.update_rag_corpus(identity, payload)
        _raise_for_status(response)

        body = response.json()
        if body and is_operation_envelope(body):
            operation = parse_operation(body)
            if isinstance(operation, FailedOperation):
                raise OperationFailedError(operation.name, operation.error_dict())
            if isinstance(operation, PendingOperation):
                self.poller.wait(operation, cancel_event=cancel_event, deadline=deadline)

        logger.info(f"Updated RAG Corpus {identity}")
        return target

    def delete(self,
               state: RagCorpusState,
               cancel_event: Optional[threading.Event] = None,
               deadline: Optional[float] = None) -> None:
        """Delete the corpus. A corpus that is already gone counts as deleted."""
        identity = _require_identity(state)

        self._check_cancelled(cancel_event, deadline)
        response = self.processor.delete_rag_corpus(identity)
        _raise_for_status(response, 200, 404)
        if response.status_code == 404:
            logger.info(f"RAG Corpus {identity} already deleted")
        else:
            logger.info(f"Deleted RAG Corpus {identity}")

    def import_state(self, external_id: str) -> RagCorpusState:
        """Seed state from an existing corpus name; the next read fills in the rest."""
        if not external_id:
            raise ValidationError("Import requires a RAG corpus name")
        return RagCorpusState(name=external_id)
