import unittest
from unittest.mock import Mock, patch

import requests

from vertexai_rag_toolkit.exceptions import DecodingError, RequestConstructionError, TransportError
from vertexai_rag_toolkit.core.integrations.utils.vertex_rest_client import RawResponse, VertexRESTClient


class TestVertexRESTClient(unittest.TestCase):
    """Unit tests for the bearer-token JSON transport."""

    def setUp(self):
        self.client = VertexRESTClient("token-123")
        self.http_response = Mock(status_code=200, reason="OK", text='{"name": "x"}')

    def tearDown(self):
        self.client.close()

    def test_post_sends_bearer_token_json_body_and_timeout(self):
        with patch.object(self.client._session, 'request', return_value=self.http_response) as mock_request:
            result = self.client.post("https://example/v1beta1/things", json_body={"display_name": "A"})

        kwargs = mock_request.call_args.kwargs
        self.assertEqual(kwargs['method'], "POST")
        self.assertEqual(kwargs['headers']['Authorization'], "Bearer token-123")
        self.assertEqual(kwargs['headers']['Content-Type'], "application/json")
        self.assertEqual(kwargs['data'], '{"display_name": "A"}')
        self.assertEqual(kwargs['timeout'], 60)
        self.assertEqual(result, RawResponse(200, "OK", '{"name": "x"}'))

    def test_get_has_no_body_or_content_type(self):
        with patch.object(self.client._session, 'request', return_value=self.http_response) as mock_request:
            self.client.get("https://example/v1beta1/things/1")

        kwargs = mock_request.call_args.kwargs
        self.assertIsNone(kwargs['data'])
        self.assertNotIn('Content-Type', kwargs['headers'])

    def test_error_status_is_returned_not_raised(self):
        error_response = Mock(status_code=500, reason="Internal Server Error", text="boom")
        with patch.object(self.client._session, 'request', return_value=error_response):
            result = self.client.delete("https://example/v1beta1/things/1")

        self.assertEqual(result.status_code, 500)
        self.assertEqual(result.body, "boom")

    def test_network_failure_raises_transport_error(self):
        with patch.object(self.client._session, 'request', side_effect=requests.ConnectionError("dns")):
            with self.assertRaises(TransportError) as context:
                self.client.get("https://example/v1beta1/things/1")
        self.assertIn("dns", str(context.exception))

    def test_timeout_raises_transport_error(self):
        with patch.object(self.client._session, 'request', side_effect=requests.Timeout("slow")):
            with self.assertRaises(TransportError):
                self.client.get("https://example/v1beta1/things/1")

    def test_unserializable_body_raises_construction_error(self):
        with patch.object(self.client._session, 'request') as mock_request:
            with self.assertRaises(RequestConstructionError):
                self.client.post("https://example/v1beta1/things", json_body={"bad": object()})
        mock_request.assert_not_called()

    def test_raw_response_json(self):
        self.assertEqual(RawResponse(200, "OK", '{"a": 1}').json(), {"a": 1})
        self.assertEqual(RawResponse(200, "OK", "").json(), {})
        with self.assertRaises(DecodingError):
            RawResponse(200, "OK", "not json").json()
        with self.assertRaises(DecodingError):
            RawResponse(200, "OK", "[1, 2]").json()


if __name__ == '__main__':
    unittest.main()
