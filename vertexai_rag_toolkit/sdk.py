"""
Vertex AI RAG toolkit SDK - top-level entry point
"""

import logging
from typing import Mapping, Optional

from .core.config import ProviderConfig, load_provider_config
from .core.sources.rag_corpus_sdk import RagCorpusSDK

logger = logging.getLogger(__name__)


class VertexRagSDK:
    """
    Main SDK class for Vertex AI RAG resources
    Resolves provider configuration once and hands it to every resource SDK
    """

    def __init__(self,
                 project: Optional[str] = None,
                 region: Optional[str] = None,
                 access_token: Optional[str] = None,
                 credentials_file_path: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None):
        """
        Initialize the SDK

        Args:
            project: Google Cloud project ID (overrides file and environment)
            region: Google Cloud region (overrides file and environment)
            access_token: OAuth2 access token (overrides file and environment)
            credentials_file_path: Optional path to a YAML credentials file
            environ: Environment mapping, defaults to os.environ
        """
        self.config: ProviderConfig = load_provider_config(
            project=project,
            region=region,
            access_token=access_token,
            credentials_file_path=credentials_file_path,
            environ=environ,
        )
        self.config.validate()
        self._rag_corpus: Optional[RagCorpusSDK] = None

    @property
    def rag_corpus(self) -> RagCorpusSDK:
        """RAG corpus lifecycle SDK, created on first use"""
        if self._rag_corpus is None:
            self._rag_corpus = RagCorpusSDK(self.config)
            logger.info(f"Initialized rag_corpus SDK for {self.config.project}/{self.config.region}")
        return self._rag_corpus

    def close(self):
        if self._rag_corpus is not None:
            self._rag_corpus.reconciler.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
