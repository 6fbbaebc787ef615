"""Curl wrapper for building requests and executing them."""

import logging
import os
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import CurlConfig
from .errors import CurlNotFoundError, CurlStartError, CurlTimeoutError
from .response import CurlResponse, parse_response

logger = logging.getLogger(__name__)


class Method(Enum):
    """HTTP methods passed to curl with -X."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass
class CurlResult:
    """Result from curl execution."""
    stdout: bytes
    return_code: int
    stderr: str
    timed_out: bool = False
    # Set when the process could not be started; not_found implies start_failed
    start_failed: bool = False
    not_found: bool = False


def execute_curl(
    args: list[str],
    env: Optional[dict[str, str]] = None,
    timeout: Optional[float] = 300,
) -> CurlResult:
    """Run a curl argument vector and capture its output.

    ``env`` is merged over the current environment. A timeout or a failure
    to start the binary is reported as return_code -1 with the reason in
    stderr and the matching flag set; this function does not raise.
    """
    final_env = None if env is None else {**os.environ, **env}
    logger.debug("Running %s", args)

    try:
        result = subprocess.run(
            args,
            capture_output=True,
            env=final_env,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning("curl timed out after %ss", timeout)
        return CurlResult(stdout=b"", return_code=-1, stderr="Request timed out", timed_out=True)
    except FileNotFoundError:
        logger.warning("%s not found in PATH", args[0])
        return CurlResult(
            stdout=b"",
            return_code=-1,
            stderr=f"{args[0]} not found in PATH",
            start_failed=True,
            not_found=True,
        )
    except OSError as e:
        logger.warning("Could not start %s: %s", args[0], e)
        return CurlResult(
            stdout=b"",
            return_code=-1,
            stderr=f"Could not start {args[0]}: {e}",
            start_failed=True,
        )

    stderr = result.stderr.decode("utf-8", errors="replace")
    if result.returncode != 0:
        logger.debug("curl exited with %d: %s", result.returncode, stderr.strip())

    return CurlResult(
        stdout=result.stdout,
        return_code=result.returncode,
        stderr=stderr,
    )


class CurlBuilder:
    """Collects request settings and sends them through curl.

    Setters return the builder so calls can be chained::

        response = (
            Curl.new("https://example.com")
            .method(Method.POST)
            .set_header("Accept: application/json")
            .set_body("name=test")
            .redirects(True)
            .send()
        )
    """

    def __init__(self, url: str, config: Optional[CurlConfig] = None):
        config = config or CurlConfig()
        self._url = url
        self._method: Optional[Method] = None
        self._headers: list[str] = list(config.headers)
        self._body: Optional[str] = None
        self._proxy = config.proxy
        self._redirects = config.redirects
        self._compressed = config.compressed
        self._interface = config.interface
        self._curl_path = config.curl_path
        self._timeout = config.timeout

    @property
    def url(self) -> str:
        return self._url

    @property
    def headers(self) -> list[str]:
        return list(self._headers)

    def method(self, method: Method) -> "CurlBuilder":
        self._method = method
        return self

    def set_header(self, header: str) -> "CurlBuilder":
        """Add a raw header line such as ``"Accept: text/html"``."""
        self._headers.append(header)
        return self

    def set_headers(self, headers: list[str]) -> "CurlBuilder":
        self._headers.extend(headers)
        return self

    def set_body(self, body: str) -> "CurlBuilder":
        self._body = body
        return self

    def set_proxy(self, proxy: str) -> "CurlBuilder":
        self._proxy = proxy
        return self

    def redirects(self, follow: bool) -> "CurlBuilder":
        """Follow redirects (curl -L)."""
        self._redirects = follow
        return self

    def compressed(self, compress: bool) -> "CurlBuilder":
        self._compressed = compress
        return self

    def interface(self, interface: str) -> "CurlBuilder":
        """Send from the named network interface."""
        self._interface = interface
        return self

    def timeout(self, seconds: Optional[float]) -> "CurlBuilder":
        self._timeout = seconds
        return self

    def build_args(self) -> list[str]:
        """Build the curl argument vector for this request."""
        cmd = [self._curl_path, "--silent", "--include"]

        if self._interface:
            cmd.extend(["--interface", self._interface])

        if self._redirects:
            cmd.append("-L")

        method = self._method or Method.GET
        cmd.extend(["-X", method.value])

        if self._proxy:
            cmd.extend(["--proxy", self._proxy])

        cmd.append(self._url)

        for header in self._headers:
            cmd.extend(["-H", header])

        if self._body is not None:
            cmd.extend(["-d", self._body])

        if self._compressed:
            cmd.append("--compressed")

        return cmd

    def send(self, env: Optional[dict[str, str]] = None) -> CurlResponse:
        """Execute the request and parse curl's output.

        A nonzero curl exit status is not an error; whatever was written to
        stdout is parsed and a status_code of 0 means nothing was recognized.

        Raises:
            CurlNotFoundError: the curl binary was not found.
            CurlStartError: curl could not be started for another reason.
            CurlTimeoutError: curl did not finish within the timeout.
        """
        result = execute_curl(self.build_args(), env=env, timeout=self._timeout)
        if result.timed_out:
            raise CurlTimeoutError(result.stderr)
        if result.not_found:
            raise CurlNotFoundError(result.stderr)
        if result.start_failed:
            raise CurlStartError(result.stderr)
        return parse_response(result.stdout)


class Curl:
    """Entry point for building curl requests."""

    @staticmethod
    def new(url: str, config: Optional[CurlConfig] = None) -> CurlBuilder:
        """Create a builder for ``url`` with defaults from ``config``."""
        return CurlBuilder(url, config=config)
