import os
import tempfile
import unittest

from vertexai_rag_toolkit.exceptions import ConfigurationError
from vertexai_rag_toolkit.core.config import ProviderConfig, load_provider_config

ENVIRON = {
    "GOOGLE_PROJECT": "env-project",
    "GOOGLE_REGION": "env-region",
    "GOOGLE_ACCESS_TOKEN": "env-token",
}


class TestLoadProviderConfig(unittest.TestCase):
    """Unit tests for configuration precedence."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, content: str) -> str:
        path = os.path.join(self.tmpdir.name, "credentials.yaml")
        with open(path, "w") as f:
            f.write(content)
        return path

    def test_environment_used_when_nothing_explicit(self):
        config = load_provider_config(environ=ENVIRON)
        self.assertEqual(config, ProviderConfig("env-project", "env-region", "env-token"))

    def test_explicit_values_win(self):
        config = load_provider_config(project="p", region="us-central1", environ=ENVIRON)
        self.assertEqual(config.project, "p")
        self.assertEqual(config.region, "us-central1")
        self.assertEqual(config.access_token, "env-token")

    def test_credentials_file_beats_environment(self):
        path = self._write("vertexairag:\n  project: file-project\n  region: europe-west1\n")

        config = load_provider_config(credentials_file_path=path, environ=ENVIRON)

        self.assertEqual(config.project, "file-project")
        self.assertEqual(config.region, "europe-west1")
        self.assertEqual(config.access_token, "env-token")

    def test_absent_values_stay_none(self):
        config = load_provider_config(environ={})
        self.assertEqual(config, ProviderConfig())
        with self.assertRaises(ConfigurationError) as context:
            config.validate()
        self.assertIn("project", str(context.exception))

    def test_missing_file(self):
        with self.assertRaises(ConfigurationError):
            load_provider_config(credentials_file_path=os.path.join(self.tmpdir.name, "nope.yaml"), environ={})

    def test_invalid_yaml(self):
        path = self._write("vertexairag: [unclosed\n")
        with self.assertRaises(ConfigurationError):
            load_provider_config(credentials_file_path=path, environ={})

    def test_repr_hides_token(self):
        self.assertNotIn("secret", repr(ProviderConfig("p", "r", "secret")))


if __name__ == '__main__':
    unittest.main()
