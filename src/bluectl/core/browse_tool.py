"""Service browsing tool lookup and invocation.

Discovery shells out to a DNS-SD browser (``avahi-browse`` by default)
instead of speaking mDNS itself. The tool is located on ``PATH`` or taken
from a configured absolute path.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from bluectl.api.protocol import RequestTimeoutError, ToolNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_BROWSE_TOOL = "avahi-browse"

# BluOS players advertise this DNS-SD service type
SERVICE_TYPE = "_musc._tcp"

# Exit after the cache is exhausted, machine-readable output, resolve
# addresses, skip the service-name database
BROWSE_ARGS: tuple[str, ...] = (
    "--terminate",
    "--parsable",
    "--resolve",
    "--no-db-lookup",
    SERVICE_TYPE,
)

# Seconds to wait for the tool before giving up
BROWSE_TIMEOUT = 30.0


def find_browse_tool(tool: str = DEFAULT_BROWSE_TOOL) -> Path:
    """Locate the browsing tool.

    Args:
        tool: Command name looked up on PATH, or a path to the executable.

    Returns:
        Path to the executable.

    Raises:
        ToolNotFoundError: If the tool cannot be found.
    """
    candidate = Path(tool)
    if candidate.is_absolute() or candidate.parent != Path("."):
        if candidate.is_file():
            logger.debug("Using configured browse tool: %s", candidate)
            return candidate
        raise ToolNotFoundError(f"Browse tool not found: {tool}")

    found = shutil.which(tool)
    if found is None:
        raise ToolNotFoundError(f"'{tool}' is not installed or not on PATH")
    logger.debug("Found browse tool in PATH: %s", found)
    return Path(found)


def run_browse_tool(
    tool: str = DEFAULT_BROWSE_TOOL,
    timeout: float = BROWSE_TIMEOUT,
) -> str:
    """Run the browsing tool and return its standard output.

    A non-zero exit status is logged but the output is still returned, since
    the tool may report partial results.

    Args:
        tool: Command name or path.
        timeout: Seconds to wait for the tool to finish.

    Returns:
        The tool's standard output.

    Raises:
        ToolNotFoundError: If the tool is missing or not executable.
        RequestTimeoutError: If the tool does not finish in time.
    """
    path = find_browse_tool(tool)
    cmd = [str(path), *BROWSE_ARGS]
    logger.debug("Running %s", " ".join(cmd))

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (FileNotFoundError, PermissionError) as e:
        raise ToolNotFoundError(f"Browse tool not executable: {path}") from e
    except subprocess.TimeoutExpired as e:
        raise RequestTimeoutError(f"'{tool}' did not finish within {timeout:g}s") from e

    if result.returncode != 0:
        logger.warning(
            "%s exited with status %d: %s",
            path.name,
            result.returncode,
            (result.stderr or "").strip(),
        )
    return result.stdout or ""
