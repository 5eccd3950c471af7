"""Launch configuration and per-stage command definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from chainlaunch.schemas import Stage

# Local Hardhat network
DEFAULT_RPC_URL = "http://127.0.0.1:8545"
HARDHAT_CHAIN_ID = 31337
DEFAULT_NETWORK = "localhost"

# Frontend dev server
DEFAULT_FRONTEND_URL = "http://localhost:3000"
DEFAULT_FRONTEND_DIR = "frontend"

DEFAULT_DEPLOY_SCRIPT = "scripts/deploy-basic.js"

# Readiness: fixed delay after launch, then bounded polling
DEFAULT_STARTUP_DELAY = 2.0  # seconds
DEFAULT_READINESS_ATTEMPTS = 30
DEFAULT_READINESS_INTERVAL = 1.0  # seconds


@dataclass
class StepCommand:
    """A command to run for one pipeline stage."""

    stage: Stage
    description: str
    argv: list[str]
    cwd: Path


@dataclass
class LaunchConfig:
    """Settings for a development environment run."""

    project_root: Path = field(default_factory=Path.cwd)
    frontend_dir: Path | None = None
    network: str = DEFAULT_NETWORK
    deploy_script: str = DEFAULT_DEPLOY_SCRIPT
    rpc_url: str = DEFAULT_RPC_URL
    frontend_url: str = DEFAULT_FRONTEND_URL
    chain_id: int = HARDHAT_CHAIN_ID
    startup_delay: float = DEFAULT_STARTUP_DELAY
    readiness_attempts: int = DEFAULT_READINESS_ATTEMPTS
    readiness_interval: float = DEFAULT_READINESS_INTERVAL

    def __post_init__(self) -> None:
        self.project_root = Path(self.project_root).resolve()
        if self.frontend_dir is None:
            self.frontend_dir = self.project_root / DEFAULT_FRONTEND_DIR
        else:
            self.frontend_dir = Path(self.frontend_dir).resolve()

    def steps(self) -> dict[Stage, StepCommand]:
        """Commands for every stage that spawns a process."""
        return {
            Stage.NODE_STARTING: StepCommand(
                stage=Stage.NODE_STARTING,
                description="Hardhat local blockchain",
                argv=["npx", "hardhat", "node"],
                cwd=self.project_root,
            ),
            Stage.DEPLOYING: StepCommand(
                stage=Stage.DEPLOYING,
                description="Smart contract deployment",
                argv=["npx", "hardhat", "run", self.deploy_script, "--network", self.network],
                cwd=self.project_root,
            ),
            Stage.INSTALLING_DEPS: StepCommand(
                stage=Stage.INSTALLING_DEPS,
                description="Frontend dependency install",
                argv=["npm", "install"],
                cwd=self.frontend_dir,
            ),
            Stage.APP_STARTING: StepCommand(
                stage=Stage.APP_STARTING,
                description="React frontend",
                argv=["npm", "start"],
                cwd=self.frontend_dir,
            ),
        }

    def step(self, stage: Stage) -> StepCommand:
        """Get the command for a stage."""
        return self.steps()[stage]
