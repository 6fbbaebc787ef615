"""Parse the captured output of ``curl --include`` into a response."""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

# Separates headers from body, and one message from the next when -L is used
BLOCK_SEPARATOR = "\r\n\r\n"

STATUS_LINE_RE = re.compile(r"HTTP/.*?\s([0-9]{3})")


@dataclass(frozen=True)
class CurlResponse:
    """Final response extracted from curl output."""
    status_code: int = 0
    headers: tuple[str, ...] = ()
    body: str = ""

    @classmethod
    def from_stdout(cls, stdout: bytes) -> "CurlResponse":
        """Create a response from the raw stdout of a curl run."""
        return parse_response(stdout)

    @property
    def ok(self) -> bool:
        """True if a final status line was recognized."""
        return self.status_code != 0


def _lines(block: str) -> Iterator[str]:
    """Split on LF, dropping the CR of a CRLF ending."""
    for line in block.split("\n"):
        yield line[:-1] if line.endswith("\r") else line


def _status_code(block: str) -> Optional[str]:
    match = STATUS_LINE_RE.search(block)
    if match is None:
        return None
    return match.group(1)


def _header_lines(block: str) -> tuple[str, ...]:
    """Lines after the status line, up to the first empty line."""
    headers = []
    lines = _lines(block)
    next(lines, None)
    for line in lines:
        if not line:
            break
        headers.append(line.strip())
    return tuple(headers)


def parse_response(stdout: bytes) -> CurlResponse:
    """Parse curl stdout into a CurlResponse.

    With redirects followed, curl writes one full message per hop. Blocks
    carrying a 3xx status are skipped and the first other status block
    supplies the code and headers. The body is always the last block, since
    that is the content after the final separator. Never raises; a capture
    with no usable status line gives status_code 0 and no headers.
    """
    text = stdout.decode("utf-8", errors="replace")
    blocks = text.split(BLOCK_SEPARATOR)

    status_code = 0
    headers: tuple[str, ...] = ()

    for index, block in enumerate(blocks):
        code = _status_code(block)
        if code is None:
            continue
        if code.startswith("3"):
            logger.debug("Skipping redirect block %d (status %s)", index, code)
            continue
        status_code = int(code)
        headers = _header_lines(block)
        logger.debug("Selected block %d of %d (status %s)", index, len(blocks), code)
        break
    else:
        logger.debug("No final status line in %d block(s)", len(blocks))

    return CurlResponse(
        status_code=status_code,
        headers=headers,
        body=blocks[-1].strip(),
    )
