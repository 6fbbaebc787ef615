"""A simple wrapper around the curl command-line interface."""

from .config import CurlConfig, load_config
from .curl import Curl, CurlBuilder, CurlResult, Method, execute_curl
from .errors import CurlError, CurlNotFoundError, CurlStartError, CurlTimeoutError
from .response import CurlResponse, parse_response

__all__ = [
    "Curl",
    "CurlBuilder",
    "CurlConfig",
    "CurlError",
    "CurlNotFoundError",
    "CurlResponse",
    "CurlResult",
    "CurlStartError",
    "CurlTimeoutError",
    "Method",
    "execute_curl",
    "load_config",
    "parse_response",
]
