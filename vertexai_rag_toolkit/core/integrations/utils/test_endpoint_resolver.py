import unittest

from vertexai_rag_toolkit.exceptions import RequestConstructionError
from vertexai_rag_toolkit.core.integrations.utils.endpoint_resolver import (
    collection_path,
    resolve_host,
    resolve_url,
)


class TestEndpointResolver(unittest.TestCase):
    """Unit tests for region-aware host and URL resolution."""

    def test_default_region_uses_global_host(self):
        self.assertEqual(resolve_host("us-central1"), "aiplatform.googleapis.com")

    def test_other_regions_are_prefixed(self):
        for region in ("europe-west1", "asia-northeast1", "us-east4"):
            host = resolve_host(region)
            self.assertTrue(host.startswith(f"{region}-"))
            self.assertEqual(host, f"{region}-aiplatform.googleapis.com")

    def test_resolve_url_for_resource(self):
        url = resolve_url("europe-west1", "projects/p/locations/europe-west1/ragCorpora/123")
        self.assertEqual(
            url,
            "https://europe-west1-aiplatform.googleapis.com/v1beta1/projects/p/locations/europe-west1/ragCorpora/123"
        )

    def test_resolve_url_strips_leading_slash(self):
        url = resolve_url("us-central1", "/projects/p/locations/us-central1/operations/9")
        self.assertEqual(url, "https://aiplatform.googleapis.com/v1beta1/projects/p/locations/us-central1/operations/9")

    def test_collection_path(self):
        self.assertEqual(collection_path("p", "us-central1"), "projects/p/locations/us-central1/ragCorpora")

    def test_missing_inputs_raise(self):
        with self.assertRaises(RequestConstructionError):
            resolve_host("")
        with self.assertRaises(RequestConstructionError):
            resolve_url("us-central1", "")
        with self.assertRaises(RequestConstructionError):
            collection_path("", "us-central1")


if __name__ == '__main__':
    unittest.main()
