"""Python client for the Devfolio API."""

from devfolio.client.api import ApiClient, ApiError
from devfolio.client.cache import ResponseCache
from devfolio.client.loading import LoadingState
from devfolio.client.resources import Devfolio

__all__ = ["ApiClient", "ApiError", "Devfolio", "LoadingState", "ResponseCache"]
