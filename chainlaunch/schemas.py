"""Pydantic schemas for pipeline results, agent descriptors and deployment manifests."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"


class Stage(str, Enum):
    """Stages of the development environment pipeline, in order."""

    NODE_STARTING = "node_starting"
    DEPLOYING = "deploying"
    INSTALLING_DEPS = "installing_deps"
    APP_STARTING = "app_starting"
    RUNNING = "running"


# --- Pipeline Results ---


class StepResult(BaseModel):
    """Exit status of a one-shot pipeline step."""

    stage: Stage
    command: list[str]
    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class PipelineResult(BaseModel):
    """Outcome of a development environment run."""

    stage: Stage = Stage.NODE_STARTING
    node_ready: bool = False
    completed: bool = False
    interrupted: bool = False
    steps: list[StepResult] = Field(default_factory=list)
    node_exit_code: int | None = None

    @property
    def failed_step(self) -> StepResult | None:
        """First step that exited non-zero, if any."""
        for step in self.steps:
            if not step.succeeded:
                return step
        return None

    @property
    def exit_code(self) -> int:
        """Process exit status for the whole run."""
        if self.interrupted:
            return 0
        failed = self.failed_step
        if failed is not None:
            return failed.exit_code if failed.exit_code > 0 else 1
        if not self.node_ready:
            return 1
        if self.node_exit_code:
            return self.node_exit_code if self.node_exit_code > 0 else 1
        return 0


# --- Minting ---


class AgentDescriptor(BaseModel):
    """An AI agent to mint: a name plus ordered capability tags."""

    name: str = Field(..., min_length=1)
    capabilities: list[str] = Field(default_factory=list)


class MintOutcome(BaseModel):
    """Result of minting a single agent."""

    name: str
    capabilities: list[str] = Field(default_factory=list)
    succeeded: bool
    error: str | None = None


class MintReport(BaseModel):
    """Ordered outcomes of a minting run."""

    outcomes: list[MintOutcome] = Field(default_factory=list)

    @property
    def minted(self) -> list[str]:
        return [o.name for o in self.outcomes if o.succeeded]

    @property
    def failed(self) -> list[str]:
        return [o.name for o in self.outcomes if not o.succeeded]


# --- Deployment Manifest ---


class ContractRecord(BaseModel):
    """A deployed contract as recorded by the deploy script."""

    model_config = ConfigDict(populate_by_name=True)

    address: str = Field(..., pattern=ADDRESS_PATTERN)
    constructor_args: list[Any] = Field(default_factory=list, alias="constructorArgs")


class DeploymentManifest(BaseModel):
    """Deployment file written to deployment/<network>-<millis>.json."""

    network: str
    deployer: str | None = None
    timestamp: str | None = None
    contracts: dict[str, ContractRecord] = Field(default_factory=dict)
