"""Sequential development environment pipeline.

Node -> readiness -> contract deployment -> frontend install -> frontend start.
Each one-shot step only runs if the previous one exited 0; a failure halts
the pipeline without running later stages.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import click

from chainlaunch.config import LaunchConfig
from chainlaunch.process import ManagedProcess, launch, run_step
from chainlaunch.readiness import wait_for_rpc
from chainlaunch.schemas import PipelineResult, Stage

logger = logging.getLogger(__name__)

# Steps run to completion, in order, after the node is ready
ONE_SHOT_STAGES = [
    (Stage.DEPLOYING, "2️⃣ Deploying Smart Contracts..."),
    (Stage.INSTALLING_DEPS, "3️⃣ Installing Frontend Dependencies..."),
]


def connection_instructions(config: LaunchConfig) -> list[str]:
    """Operator-facing lines printed once the environment is up."""
    return [
        "",
        "🎉 Development environment is ready!",
        f"📱 Frontend: {config.frontend_url}",
        f"⛓️ Blockchain: {config.rpc_url}",
        "",
        "💡 Make sure to:",
        f"1. Add Hardhat network to MetaMask (Chain ID: {config.chain_id})",
        "2. Import a test account with private key from Hardhat output",
        "3. Connect your wallet to the frontend",
    ]


class DevEnvironment:
    """Runs the development environment pipeline."""

    def __init__(
        self,
        config: LaunchConfig,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self._sleep = sleep
        self.node: ManagedProcess | None = None
        self.app: ManagedProcess | None = None

    def run(self) -> PipelineResult:
        """Run every stage, then block on the node until it exits or Ctrl+C.

        The node is terminated on the way out however the run ends.
        """
        result = PipelineResult()

        click.echo("🚀 Starting Development Environment...\n")
        click.echo("1️⃣ Starting Hardhat Local Blockchain...")

        try:
            self.node = launch(self.config.step(Stage.NODE_STARTING))
            self._advance(result)
            if result.completed:
                result.node_exit_code = self.node.await_exit()
                logger.info(f"Node exited with code {result.node_exit_code}")
        except KeyboardInterrupt:
            click.echo("\n🛑 Shutting down development environment...")
            result.interrupted = True
        finally:
            if self.node is not None:
                self.node.terminate()

        return result

    def _advance(self, result: PipelineResult) -> None:
        """Walk the stages after node launch, stopping at the first failure."""
        self._sleep(self.config.startup_delay)

        ready = wait_for_rpc(
            self.config.rpc_url,
            attempts=self.config.readiness_attempts,
            interval=self.config.readiness_interval,
            is_alive=lambda: self.node is not None and self.node.running,
            sleep=self._sleep,
        )
        if not ready:
            click.echo(f"\n❌ Blockchain node at {self.config.rpc_url} never became ready")
            return
        result.node_ready = True

        for stage, banner in ONE_SHOT_STAGES:
            result.stage = stage
            click.echo(f"\n{banner}")
            step_result = run_step(self.config.step(stage))
            result.steps.append(step_result)
            if not step_result.succeeded:
                logger.warning(f"Pipeline halted at {stage.value} (exit code {step_result.exit_code})")
                return

        result.stage = Stage.APP_STARTING
        click.echo("\n4️⃣ Starting React Frontend...")
        self.app = launch(self.config.step(Stage.APP_STARTING))

        result.stage = Stage.RUNNING
        result.completed = True
        for line in connection_instructions(self.config):
            click.echo(line)
