"""JSON-RPC readiness probing for the local blockchain node."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import httpx

logger = logging.getLogger(__name__)

# Timeout for a single probe request
PROBE_TIMEOUT = 2.0  # seconds


def _rpc_call(rpc_url: str, method: str, timeout: float = PROBE_TIMEOUT) -> object:
    """Make one JSON-RPC call and return its result field."""
    with httpx.Client(timeout=timeout) as client:
        response = client.post(
            rpc_url,
            json={"jsonrpc": "2.0", "method": method, "params": [], "id": 1},
        )
        response.raise_for_status()
        payload = response.json()

    if not isinstance(payload, dict):
        raise ValueError(f"{method} returned a non JSON-RPC reply")
    if "error" in payload:
        raise ValueError(f"{method} failed: {payload['error']}")
    return payload["result"]


def get_chain_id(rpc_url: str, timeout: float = PROBE_TIMEOUT) -> int | None:
    """Return the node's chain id, or None if it cannot be reached."""
    try:
        result = _rpc_call(rpc_url, "eth_chainId", timeout=timeout)
        return int(str(result), 16)
    except (httpx.HTTPError, ValueError, KeyError) as e:
        logger.debug(f"Chain id probe against {rpc_url} failed: {e}")
        return None


def check_rpc_health(rpc_url: str, timeout: float = PROBE_TIMEOUT) -> bool:
    """Check if the node is accepting JSON-RPC requests."""
    return get_chain_id(rpc_url, timeout=timeout) is not None


def wait_for_rpc(
    rpc_url: str,
    attempts: int,
    interval: float,
    is_alive: Callable[[], bool] | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Poll the node until it answers or the attempts run out.

    Args:
        rpc_url: JSON-RPC endpoint of the node
        attempts: Maximum number of probes
        interval: Seconds between probes
        is_alive: Optional check on the node process; polling stops once it is False
        sleep: Sleep function

    Returns:
        True once the node answers, False if it died or never answered
    """
    for attempt in range(1, attempts + 1):
        if is_alive is not None and not is_alive():
            logger.error("Node process exited before accepting connections")
            return False

        if check_rpc_health(rpc_url):
            logger.info(f"Node ready at {rpc_url} after {attempt} probe(s)")
            return True

        logger.debug(f"Node not ready yet ({attempt}/{attempts})")
        if attempt < attempts:
            sleep(interval)

    logger.error(f"Node at {rpc_url} did not become ready after {attempts} probes")
    return False
