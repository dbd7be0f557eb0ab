"""
Vertex AI RAG toolkit

Reconciles Vertex AI RAG corpora against the Vertex AI REST API: create,
read, update, delete and import, with long-running operation polling.
"""

from .exceptions import (
    RagToolkitError,
    ConfigurationError,
    ValidationError,
    ApiError,
    TransportError,
    OperationFailedError,
    OperationTimeoutError,
)
from .core.models import EmbeddingModelConfig, RagCorpusState
from .sdk import VertexRagSDK

__version__ = "1.0.0"
__all__ = [
    "VertexRagSDK", "RagCorpusState", "EmbeddingModelConfig",
    "RagToolkitError", "ConfigurationError", "ValidationError", "ApiError",
    "TransportError", "OperationFailedError", "OperationTimeoutError",
]
