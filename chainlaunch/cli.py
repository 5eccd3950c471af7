"""CLI for chainlaunch - local dev environment and demo agent minting."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from chainlaunch import __version__
from chainlaunch.config import (
    DEFAULT_DEPLOY_SCRIPT,
    DEFAULT_FRONTEND_URL,
    DEFAULT_NETWORK,
    DEFAULT_READINESS_ATTEMPTS,
    DEFAULT_READINESS_INTERVAL,
    DEFAULT_RPC_URL,
    DEFAULT_STARTUP_DELAY,
    HARDHAT_CHAIN_ID,
)
from chainlaunch.manifest import DEFAULT_MANIFEST_DIR


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@click.group()
@click.version_option(version=__version__, prog_name="chainlaunch")
def main() -> None:
    """chainlaunch - AgentChains local development tooling.

    Boot a local Hardhat node with contracts and frontend, or mint demo agents.
    """
    pass


@main.command("start-dev")
@click.option(
    "--project-root", "-r",
    default=".",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, resolve_path=True),
    help="Hardhat project root (defaults to current directory)",
)
@click.option(
    "--frontend-dir",
    default=None,
    type=click.Path(file_okay=False, dir_okay=True, resolve_path=True),
    help="Frontend directory (defaults to <project-root>/frontend)",
)
@click.option("--network", default=DEFAULT_NETWORK, help="Hardhat network to deploy to")
@click.option("--deploy-script", default=DEFAULT_DEPLOY_SCRIPT, help="Deployment script to run")
@click.option("--rpc-url", default=DEFAULT_RPC_URL, help="Node JSON-RPC endpoint")
@click.option("--frontend-url", default=DEFAULT_FRONTEND_URL, help="Frontend URL shown when ready")
@click.option("--startup-delay", default=DEFAULT_STARTUP_DELAY, type=float, help="Seconds to wait before probing the node")
@click.option("--readiness-attempts", default=DEFAULT_READINESS_ATTEMPTS, type=int, help="Maximum node readiness probes")
@click.option("--readiness-interval", default=DEFAULT_READINESS_INTERVAL, type=float, help="Seconds between readiness probes")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def start_dev(
    project_root: str,
    frontend_dir: str | None,
    network: str,
    deploy_script: str,
    rpc_url: str,
    frontend_url: str,
    startup_delay: float,
    readiness_attempts: int,
    readiness_interval: float,
    verbose: bool,
) -> None:
    """Start the local blockchain, deploy contracts and run the frontend.

    Press Ctrl+C to shut the blockchain node down.

    \b
    Example:
        chainlaunch start-dev
        chainlaunch start-dev --deploy-script scripts/deploy.js
    """
    from chainlaunch.config import LaunchConfig
    from chainlaunch.pipeline import DevEnvironment

    _configure_logging(verbose)

    config = LaunchConfig(
        project_root=Path(project_root),
        frontend_dir=Path(frontend_dir) if frontend_dir else None,
        network=network,
        deploy_script=deploy_script,
        rpc_url=rpc_url,
        frontend_url=frontend_url,
        chain_id=HARDHAT_CHAIN_ID,
        startup_delay=startup_delay,
        readiness_attempts=readiness_attempts,
        readiness_interval=readiness_interval,
    )

    result = DevEnvironment(config).run()
    sys.exit(result.exit_code)


@main.command("mint-demo")
@click.option(
    "--contract-address", "-a",
    default=None,
    envvar="AGENT_NFT_ADDRESS",
    help="Deployed AIAgentNFT address (env: AGENT_NFT_ADDRESS)",
)
@click.option(
    "--manifest-dir",
    default=DEFAULT_MANIFEST_DIR,
    type=click.Path(file_okay=False, dir_okay=True),
    help="Where to look for deployment manifests when no address is given",
)
@click.option("--network", default=DEFAULT_NETWORK, help="Network name of the deployment manifest")
@click.option("--rpc-url", default=DEFAULT_RPC_URL, help="Node JSON-RPC endpoint")
@click.option("--owner", default=None, help="Owner of the minted agents (defaults to the node's first account)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def mint_demo(
    contract_address: str | None,
    manifest_dir: str,
    network: str,
    rpc_url: str,
    owner: str | None,
    verbose: bool,
) -> None:
    """Mint the demo AI agents through the deployed AIAgentNFT contract.

    Agents are minted one at a time. A failed mint is reported and the
    remaining agents are still attempted.

    \b
    Example:
        chainlaunch mint-demo
        AGENT_NFT_ADDRESS=0x... chainlaunch mint-demo
    """
    from chainlaunch.contract import AgentNFTContract
    from chainlaunch.manifest import resolve_contract_address
    from chainlaunch.minting import mint_agents

    _configure_logging(verbose)

    address = resolve_contract_address(contract_address, manifest_dir, network)
    contract = AgentNFTContract.connect(rpc_url, address)
    owner = owner or contract.default_signer()

    report = mint_agents(contract, owner)
    if report.failed:
        click.echo(f"Failed: {', '.join(report.failed)}")


@main.command("check-node")
@click.option("--rpc-url", default=DEFAULT_RPC_URL, help="Node JSON-RPC endpoint")
def check_node(rpc_url: str) -> None:
    """Probe the blockchain node once and report its chain id."""
    from chainlaunch.readiness import get_chain_id

    chain_id = get_chain_id(rpc_url)
    if chain_id is None:
        click.echo(f"⛓️ {rpc_url}: unreachable")
        sys.exit(1)

    click.echo(f"⛓️ {rpc_url}: healthy (chain id {chain_id})")
    if chain_id != HARDHAT_CHAIN_ID:
        click.echo(f"Note: expected the Hardhat chain id {HARDHAT_CHAIN_ID}")


if __name__ == "__main__":
    main()
