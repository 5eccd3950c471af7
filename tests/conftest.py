"""Pytest configuration and fixtures for chainlaunch tests."""

import json

import pytest
from pathlib import Path

from chainlaunch.config import LaunchConfig

AGENT_NFT_ADDRESS = "0x342b37DeFD122d9E421f75895fd091900b792969"
MIND_TOKEN_ADDRESS = "0x6eaE6fE16708Ad36c38DAf73f1DEe3dad9BeC2ed"


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create a fake Hardhat project with a frontend directory."""
    root = tmp_path / "project"
    (root / "frontend").mkdir(parents=True)
    (root / "scripts").mkdir()
    (root / "scripts" / "deploy-basic.js").write_text("// deploy\n")
    return root


@pytest.fixture
def launch_config(project_root: Path) -> LaunchConfig:
    """Config with short delays for pipeline tests."""
    return LaunchConfig(
        project_root=project_root,
        startup_delay=3.0,
        readiness_attempts=2,
        readiness_interval=0.5,
    )


@pytest.fixture
def manifest_dir(tmp_path: Path) -> Path:
    """Directory with two localhost manifests and one sepolia manifest."""
    directory = tmp_path / "deployment"
    directory.mkdir()

    def write(name: str, nft_address: str, network: str = "localhost") -> None:
        (directory / name).write_text(json.dumps({
            "network": network,
            "deployer": "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
            "timestamp": "2024-01-01T00:00:00.000Z",
            "contracts": {
                "ConsciousCoin": {
                    "address": MIND_TOKEN_ADDRESS,
                    "constructorArgs": [],
                },
                "AIAgentNFT": {
                    "address": nft_address,
                    "constructorArgs": [MIND_TOKEN_ADDRESS],
                },
            },
        }))

    write("localhost-1700000000000.json", "0x" + "1" * 40)
    write("localhost-1700000009999.json", AGENT_NFT_ADDRESS)
    write("sepolia-1800000000000.json", "0x" + "2" * 40, network="sepolia")
    return directory
