"""
RAG corpus lifecycle SDK

Exposes the five lifecycle entry points an orchestration host calls:
create, read, update, delete and import. Errors from the reconciler are
turned into diagnostics; on error no state is returned.
"""

import logging
from typing import Optional, Tuple

from ...exceptions import RagToolkitError
from ..config import ProviderConfig
from ..diagnostics import Diagnostics
from ..integrations.rag_corpus_reconciler import RagCorpusReconciler
from ..models import RagCorpusState

logger = logging.getLogger(__name__)


class RagCorpusSDK:
    """
    RAG corpus SDK implementation
    Wraps RagCorpusReconciler with the host-facing (state, diagnostics) contract
    """

    def __init__(self, config: ProviderConfig, reconciler: Optional[RagCorpusReconciler] = None):
        self.config = config
        self.reconciler = reconciler or RagCorpusReconciler(config)

    def create(self, desired: RagCorpusState, **kwargs) -> Tuple[Optional[RagCorpusState], Diagnostics]:
        """
        Create a RAG corpus

        Args:
            desired: Desired attributes (display_name required)
            **kwargs: cancel_event / deadline forwarded to the reconciler

        Returns:
            (created state, diagnostics); state is None if any error occurred
        """
        diagnostics = Diagnostics()
        try:
            return self.reconciler.create(desired, **kwargs), diagnostics
        except RagToolkitError as e:
            logger.error(f"RAG corpus create failed: {e}")
            diagnostics.add_exception(e)
            return None, diagnostics

    def read(self, state: RagCorpusState, **kwargs) -> Tuple[Optional[RagCorpusState], Diagnostics]:
        """
        Refresh a RAG corpus

        Returns:
            (refreshed state, diagnostics). A None state without error
            diagnostics means the corpus is gone and should be dropped.
        """
        diagnostics = Diagnostics()
        try:
            refreshed, drift = self.reconciler.read_with_drift(state, **kwargs)
        except RagToolkitError as e:
            logger.error(f"RAG corpus read failed: {e}")
            diagnostics.add_exception(e)
            return None, diagnostics
        for message in drift:
            diagnostics.add_warning("Immutable attribute drifted", message)
        return refreshed, diagnostics

    def update(self, desired: RagCorpusState, prior: RagCorpusState,
               **kwargs) -> Tuple[Optional[RagCorpusState], Diagnostics]:
        """Update display_name and description of an existing RAG corpus"""
        diagnostics = Diagnostics()
        if desired.embedding_model_config != prior.embedding_model_config:
            diagnostics.add_warning(
                "Immutable attribute changed",
                "embedding_model_config cannot be updated; recreate the corpus to change it",
            )
        try:
            return self.reconciler.update(desired, prior, **kwargs), diagnostics
        except RagToolkitError as e:
            logger.error(f"RAG corpus update failed: {e}")
            diagnostics.add_exception(e)
            return None, diagnostics

    def delete(self, state: RagCorpusState, **kwargs) -> Diagnostics:
        """Delete a RAG corpus; an already missing corpus is not an error"""
        diagnostics = Diagnostics()
        try:
            self.reconciler.delete(state, **kwargs)
        except RagToolkitError as e:
            logger.error(f"RAG corpus delete failed: {e}")
            diagnostics.add_exception(e)
        return diagnostics

    def import_state(self, external_id: str) -> RagCorpusState:
        """Seed state from an existing RAG corpus name"""
        return self.reconciler.import_state(external_id)
