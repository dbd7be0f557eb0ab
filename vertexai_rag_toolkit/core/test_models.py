import unittest

from vertexai_rag_toolkit.exceptions import DecodingError, MissingFieldError, ValidationError
from vertexai_rag_toolkit.core.models import (
    CreateRagCorpusRequest,
    EmbeddingModelConfig,
    FailedOperation,
    PendingOperation,
    RagCorpusResponse,
    RagCorpusState,
    SucceededOperation,
    UPDATE_MASK,
    UpdateRagCorpusRequest,
    is_operation_envelope,
    parse_operation,
)

CORPUS = "projects/p/locations/r/ragCorpora/123"


class TestRagCorpusState(unittest.TestCase):

    def test_identity_assigned_once(self):
        state = RagCorpusState(display_name="A").with_identity(CORPUS)
        self.assertEqual((state.id, state.name), (CORPUS, CORPUS))

        # Same identity again is allowed
        self.assertEqual(state.with_identity(CORPUS), state)

        with self.assertRaises(ValidationError):
            state.with_identity("projects/p/locations/r/ragCorpora/999")

    def test_identity_falls_back_to_id(self):
        self.assertEqual(RagCorpusState(id=CORPUS).identity, CORPUS)
        self.assertIsNone(RagCorpusState().identity)


class TestWireRecords(unittest.TestCase):

    def test_publisher_model_mapping(self):
        config = EmbeddingModelConfig("text-embedding-004")
        self.assertEqual(config.publisher_model, "publishers/google/models/text-embedding-004")
        self.assertEqual(
            EmbeddingModelConfig.from_publisher_model("publishers/google/models/text-embedding-004"),
            config
        )
        self.assertIsNone(EmbeddingModelConfig().publisher_model)

    def test_create_request_omits_empty_embedding_config(self):
        request = CreateRagCorpusRequest.from_state(
            RagCorpusState(display_name="A", embedding_model_config=EmbeddingModelConfig())
        )
        self.assertNotIn('embedding_model_config', request.to_dict())

    def test_update_request_matches_mask(self):
        state = RagCorpusState(
            display_name="A", description="d", embedding_model_config=EmbeddingModelConfig("m")
        )
        payload = UpdateRagCorpusRequest.from_state(state).to_dict()
        self.assertEqual(sorted(payload), sorted(UPDATE_MASK.split(",")))

    def test_corpus_response_decoding(self):
        corpus = RagCorpusResponse.from_dict({"name": CORPUS, "displayName": "A"})
        self.assertEqual(corpus.display_name, "A")
        self.assertEqual(corpus.description, "")

        with self.assertRaises(MissingFieldError):
            RagCorpusResponse.from_dict({"name": CORPUS})
        with self.assertRaises(DecodingError):
            RagCorpusResponse.from_dict({"displayName": 7})


class TestParseOperation(unittest.TestCase):

    def test_pending(self):
        self.assertEqual(parse_operation({"name": "op"}), PendingOperation("op"))
        self.assertEqual(parse_operation({"name": "op", "done": False}), PendingOperation("op"))

    def test_succeeded(self):
        operation = parse_operation({"name": "op", "done": True, "response": {"name": CORPUS}})
        self.assertIsInstance(operation, SucceededOperation)
        self.assertEqual(operation.response_dict(), {"name": CORPUS})

    def test_failed(self):
        operation = parse_operation({"name": "op", "done": True, "error": {"message": "nope"}})
        self.assertIsInstance(operation, FailedOperation)
        self.assertEqual(operation.error_dict(), {"message": "nope"})

    def test_failed_error_code_stays_integer(self):
        operation = parse_operation({"name": "op", "done": True, "error": {"code": 3, "message": "x"}})
        code = operation.error_dict()["code"]
        self.assertEqual(code, 3)
        self.assertIsInstance(code, int)

    def test_done_without_payload(self):
        with self.assertRaises(MissingFieldError):
            parse_operation({"name": "op", "done": True})

    def test_missing_name(self):
        with self.assertRaises(MissingFieldError):
            parse_operation({"done": True, "response": {}})

    def test_non_object_response(self):
        with self.assertRaises(DecodingError):
            parse_operation({"name": "op", "done": True, "response": "text"})

    def test_envelope_detection(self):
        self.assertTrue(is_operation_envelope({"name": f"{CORPUS}/operations/1"}))
        self.assertTrue(is_operation_envelope({"name": "x", "done": True}))
        self.assertFalse(is_operation_envelope({"name": CORPUS, "displayName": "A"}))


if __name__ == '__main__':
    unittest.main()
