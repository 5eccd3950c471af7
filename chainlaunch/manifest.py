"""Deployment manifest discovery and contract address resolution."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import ValidationError

from chainlaunch.schemas import ADDRESS_PATTERN, DeploymentManifest

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_DIR = "deployment"
AGENT_NFT_CONTRACT = "AIAgentNFT"


class ConfigurationError(Exception):
    """Raised when required external configuration is missing or invalid."""

    pass


def _manifest_timestamp(path: Path, network: str) -> int:
    """Extract the millisecond suffix from <network>-<millis>.json."""
    suffix = path.stem[len(network) + 1:]
    return int(suffix) if suffix.isdigit() else -1


def find_latest_manifest(directory: Path | str, network: str) -> Path | None:
    """Find the newest deployment manifest for a network.

    Args:
        directory: Directory the deploy script writes manifests to
        network: Network name used as the file prefix

    Returns:
        Path to the newest manifest, or None if there is none
    """
    directory = Path(directory)
    if not directory.is_dir():
        return None

    candidates = [
        p for p in directory.glob(f"{network}-*.json")
        if _manifest_timestamp(p, network) >= 0
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda p: _manifest_timestamp(p, network))


def load_manifest(path: Path | str) -> DeploymentManifest:
    """Load and validate a deployment manifest."""
    return DeploymentManifest.model_validate_json(Path(path).read_text())


def resolve_contract_address(
    explicit: str | None,
    manifest_dir: Path | str,
    network: str,
    contract: str = AGENT_NFT_CONTRACT,
) -> str:
    """Pick the contract address to use.

    An explicitly supplied address wins; otherwise the newest manifest for
    the network is consulted.

    Raises:
        ConfigurationError: If no valid address can be found.
    """
    if explicit:
        if not re.match(ADDRESS_PATTERN, explicit):
            raise ConfigurationError(f"Invalid contract address: {explicit!r}")
        return explicit

    path = find_latest_manifest(manifest_dir, network)
    if path is None:
        raise ConfigurationError(
            f"No {contract} address supplied and no '{network}' deployment manifest "
            f"found in {manifest_dir}. Pass --contract-address or set AGENT_NFT_ADDRESS."
        )

    try:
        manifest = load_manifest(path)
    except ValidationError as e:
        raise ConfigurationError(f"{path} is not a valid deployment manifest: {e}") from e

    record = manifest.contracts.get(contract)
    if record is None:
        raise ConfigurationError(f"{path} has no {contract} entry")

    logger.info(f"Using {contract} at {record.address} from {path}")
    return record.address
