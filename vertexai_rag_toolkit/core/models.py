"""
Resource state model and wire records for RAG corpora.

Local attribute names are snake_case. The API accepts snake_case in request
bodies and answers in camelCase:

    display_name                  <- displayName
    description                   <- description
    embedding_model_config.model  -> embedding_model_config.publisher_model

Operation payloads (`response`, `error`) are opaque to the toolkit and are
carried as protobuf Struct envelopes.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Union

from google.protobuf import json_format
from google.protobuf.struct_pb2 import Struct

from ..exceptions import DecodingError, MissingFieldError, ValidationError
from .settings import PUBLISHER_MODEL_PREFIX


# Only these fields can be changed after creation, and the mask must match the PATCH body exactly
UPDATE_MASK = "display_name,description"


@dataclass(frozen=True)
class EmbeddingModelConfig:
    """Embedding model used by the corpus. Immutable after creation."""
    model: Optional[str] = None

    @property
    def publisher_model(self) -> Optional[str]:
        if not self.model:
            return None
        if self.model.startswith("publishers/"):
            return self.model
        return f"{PUBLISHER_MODEL_PREFIX}{self.model}"

    @classmethod
    def from_publisher_model(cls, publisher_model: str) -> "EmbeddingModelConfig":
        if publisher_model.startswith(PUBLISHER_MODEL_PREFIX):
            return cls(model=publisher_model[len(PUBLISHER_MODEL_PREFIX):])
        return cls(model=publisher_model)


@dataclass(frozen=True)
class RagCorpusState:
    """
    Desired or observed attributes of a RAG corpus.

    `name` is the server-assigned identity (projects/P/locations/R/ragCorpora/ID).
    It is None until the first successful create and never changes afterwards.
    `id` mirrors `name` for hosts that track a separate id attribute.
    """
    id: Optional[str] = None
    name: Optional[str] = None
    display_name: Optional[str] = None
    description: Optional[str] = None
    embedding_model_config: Optional[EmbeddingModelConfig] = None

    @property
    def identity(self) -> Optional[str]:
        return self.name or self.id

    def with_identity(self, name: str) -> "RagCorpusState":
        """Return a copy carrying the server-assigned identity."""
        if not name:
            raise ValidationError("Cannot assign an empty identity")
        current = self.identity
        if current and current != name:
            raise ValidationError(f"Identity is immutable: {current} cannot become {name}")
        return replace(self, id=name, name=name)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'name': self.name,
            'display_name': self.display_name,
            'description': self.description,
            'embedding_model_config': None,
        }
        if self.embedding_model_config is not None:
            data['embedding_model_config'] = {'model': self.embedding_model_config.model}
        return data


@dataclass(frozen=True)
class CreateRagCorpusRequest:
    display_name: str
    description: str = ""
    embedding_model_config: Optional[EmbeddingModelConfig] = None

    @classmethod
    def from_state(cls, state: RagCorpusState) -> "CreateRagCorpusRequest":
        if not state.display_name:
            raise ValidationError("display_name is required")
        return cls(
            display_name=state.display_name,
            description=state.description or "",
            embedding_model_config=state.embedding_model_config,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            'display_name': self.display_name,
            'description': self.description,
        }
        if self.embedding_model_config is not None and self.embedding_model_config.publisher_model:
            payload['embedding_model_config'] = {
                'publisher_model': self.embedding_model_config.publisher_model,
            }
        return payload


@dataclass(frozen=True)
class UpdateRagCorpusRequest:
    """PATCH body. Carries exactly the fields named in UPDATE_MASK."""
    display_name: str
    description: str = ""

    @classmethod
    def from_state(cls, state: RagCorpusState) -> "UpdateRagCorpusRequest":
        if not state.display_name:
            raise ValidationError("display_name is required")
        return cls(display_name=state.display_name, description=state.description or "")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'display_name': self.display_name,
            'description': self.description,
        }


def _optional_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodingError(f"Field '{key}' must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class RagCorpusResponse:
    """A RAG corpus as returned by GET."""
    display_name: str
    name: Optional[str] = None
    description: str = ""
    embedding_model_config: Optional[EmbeddingModelConfig] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RagCorpusResponse":
        display_name = _optional_str(data, 'displayName')
        if display_name is None:
            raise MissingFieldError('displayName', data)

        embedding_model_config = None
        model_config = data.get('embeddingModelConfig')
        if isinstance(model_config, dict):
            publisher_model = _optional_str(model_config, 'publisherModel')
            if publisher_model:
                embedding_model_config = EmbeddingModelConfig.from_publisher_model(publisher_model)

        return cls(
            display_name=display_name,
            name=_optional_str(data, 'name'),
            # proto3 JSON omits empty strings, so an absent description is an empty one
            description=_optional_str(data, 'description') or "",
            embedding_model_config=embedding_model_config,
        )


# Long-running operations

def _to_struct(value: Any, key: str) -> Struct:
    if not isinstance(value, dict):
        raise DecodingError(f"Operation field '{key}' must be an object, got {type(value).__name__}")
    struct = Struct()
    try:
        json_format.ParseDict(value, struct)
    except json_format.ParseError as e:
        raise DecodingError(f"Operation field '{key}' is not valid JSON: {e}")
    return struct


@dataclass(frozen=True)
class PendingOperation:
    name: str


@dataclass(frozen=True)
class SucceededOperation:
    name: str
    response: Struct

    def response_dict(self) -> Dict[str, Any]:
        return json_format.MessageToDict(self.response)


@dataclass(frozen=True)
class FailedOperation:
    name: str
    error: Struct
    # Struct stores numbers as doubles; keep the decoded JSON so codes stay integers
    raw_error: Dict[str, Any] = field(default_factory=dict, compare=False)

    def error_dict(self) -> Dict[str, Any]:
        if self.raw_error:
            return dict(self.raw_error)
        return json_format.MessageToDict(self.error)


Operation = Union[PendingOperation, SucceededOperation, FailedOperation]


def is_operation_envelope(data: Dict[str, Any]) -> bool:
    """True if a response body is an Operation rather than a resource."""
    name = data.get('name')
    return 'done' in data or (isinstance(name, str) and '/operations/' in name)


def parse_operation(data: Dict[str, Any]) -> Operation:
    """Turn an Operation JSON envelope into Pending, Succeeded or Failed."""
    name = data.get('name')
    if not isinstance(name, str) or not name:
        raise MissingFieldError('name', data)

    if data.get('done') is not True:
        return PendingOperation(name=name)
    if 'error' in data:
        return FailedOperation(name=name, error=_to_struct(data['error'], 'error'), raw_error=data['error'])
    if 'response' not in data:
        raise MissingFieldError('response', data)
    return SucceededOperation(name=name, response=_to_struct(data['response'], 'response'))
