class CurlError(Exception):
    """Base exception for curl_wrapper."""


class CurlStartError(CurlError):
    """The curl binary could not be started."""


class CurlNotFoundError(CurlStartError):
    """The curl binary was not found."""


class CurlTimeoutError(CurlError):
    """curl did not exit before the timeout."""
