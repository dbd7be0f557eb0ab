"""
Settings and configuration constants for the Vertex AI RAG toolkit.

This module contains global configuration constants used throughout the toolkit.
"""

# External API call timeout in seconds, applied to every HTTP request
EXTERNAL_CALL_TIMEOUT = 60

# Long-running operation polling: fixed budget, fixed delay, no backoff
POLL_MAX_ATTEMPTS = 10
POLL_INTERVAL_SECONDS = 2

# Vertex AI endpoints
SERVICE_HOST = "aiplatform.googleapis.com"
API_VERSION = "v1beta1"

# The default region is served by the global host, every other region by "<region>-<host>"
DEFAULT_REGION = "us-central1"

PUBLISHER_MODEL_PREFIX = "publishers/google/models/"

# Environment variables read once by core.config.load_provider_config
ENV_PROJECT = "GOOGLE_PROJECT"
ENV_REGION = "GOOGLE_REGION"
ENV_ACCESS_TOKEN = "GOOGLE_ACCESS_TOKEN"

# Section of the YAML credentials file holding provider settings
CREDENTIALS_SECTION = "vertexairag"
