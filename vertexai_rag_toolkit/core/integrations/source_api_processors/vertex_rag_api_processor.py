import logging
from typing import Dict, Any

from ...models import UPDATE_MASK
from ..utils.endpoint_resolver import collection_path, resolve_url
from ..utils.vertex_rest_client import RawResponse, VertexRESTClient

logger = logging.getLogger(__name__)


class VertexRagApiProcessor:
    """Wire calls for the ragCorpora collection. Status handling is left to the caller."""

    def __init__(self, client: VertexRESTClient, project: str, region: str):
        self.__client = client
        self.project = project
        self.region = region

    def create_rag_corpus(self, payload: Dict[str, Any]) -> RawResponse:
        url = resolve_url(self.region, collection_path(self.project, self.region))
        logger.info(f"Creating RAG Corpus: {url}")
        return self.__client.post(url, json_body=payload)

    def get_rag_corpus(self, name: str) -> RawResponse:
        url = resolve_url(self.region, name)
        logger.info(f"Reading RAG Corpus: {url}")
        return self.__client.get(url)

    def update_rag_corpus(self, name: str, payload: Dict[str, Any]) -> RawResponse:
        # Query string kept verbatim so the mask reads display_name,description on the wire
        url = f"{resolve_url(self.region, name)}?updateMask={UPDATE_MASK}"
        logger.info(f"Updating RAG Corpus: {url}")
        return self.__client.patch(url, json_body=payload)

    def delete_rag_corpus(self, name: str) -> RawResponse:
        url = resolve_url(self.region, name)
        logger.info(f"Deleting RAG Corpus: {url}")
        return self.__client.delete(url)
