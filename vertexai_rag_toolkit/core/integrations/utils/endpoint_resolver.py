"""
Endpoint resolution for the Vertex AI REST API.

The default region is served by the global host. Every other region is
served by a region-prefixed host. All call sites (create, poll, read,
update, delete) go through resolve_url so the rule stays in one place.
"""
from ....exceptions import RequestConstructionError
from ...settings import API_VERSION, DEFAULT_REGION, SERVICE_HOST


def resolve_host(region: str) -> str:
    """Return the API host serving the given region."""
    if not region:
        raise RequestConstructionError("Region is required to resolve the API host")
    if region == DEFAULT_REGION:
        return SERVICE_HOST
    return f"{region}-{SERVICE_HOST}"


def resolve_url(region: str, path: str) -> str:
    """Return the absolute URL for a resource, operation or collection path."""
    if not path or not path.strip("/"):
        raise RequestConstructionError("Resource path is required to build a URL")
    return f"https://{resolve_host(region)}/{API_VERSION}/{path.lstrip('/')}"


def collection_path(project: str, region: str) -> str:
    """Path of the RAG corpus collection for a project and region."""
    if not project or not region:
        raise RequestConstructionError("Project and region are required to build the collection path")
    return f"projects/{project}/locations/{region}/ragCorpora"
