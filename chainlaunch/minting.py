"""Demo agent minting driver."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import click

from chainlaunch.schemas import AgentDescriptor, MintOutcome, MintReport

logger = logging.getLogger(__name__)

DEMO_AGENTS: list[AgentDescriptor] = [
    AgentDescriptor(
        name="TranslatorBot",
        capabilities=["translation", "language_processing", "communication"],
    ),
    AgentDescriptor(
        name="DataAnalyst",
        capabilities=["data_analysis", "pattern_recognition", "statistics", "reporting"],
    ),
    AgentDescriptor(
        name="CreativeAI",
        capabilities=["content_creation", "image_generation", "writing", "design"],
    ),
    AgentDescriptor(
        name="CodeMaster",
        capabilities=["code_generation", "debugging", "code_review", "optimization"],
    ),
    AgentDescriptor(
        name="ResearchBot",
        capabilities=["research", "information_gathering", "fact_checking", "summarization"],
    ),
]


class PendingTransaction(Protocol):
    def wait(self) -> Any: ...


class AgentMinter(Protocol):
    def mint_agent(self, owner: str, name: str, capabilities: list[str]) -> PendingTransaction: ...


def mint_agents(
    minter: AgentMinter,
    owner: str,
    agents: list[AgentDescriptor] | None = None,
) -> MintReport:
    """Mint agents one at a time, in order.

    Each transaction is confirmed before the next one is submitted so the
    sending account's nonces stay in order. A failure for one agent is
    logged and recorded; the remaining agents are still attempted.

    Args:
        minter: Contract client exposing mint_agent
        owner: Address that will own the minted agents
        agents: Agents to mint (defaults to DEMO_AGENTS)

    Returns:
        MintReport with one outcome per agent
    """
    agents = DEMO_AGENTS if agents is None else agents
    report = MintReport()

    click.echo("Minting demo AI agents...")

    for agent in agents:
        capabilities = list(agent.capabilities)
        try:
            tx = minter.mint_agent(owner, agent.name, capabilities)
            tx.wait()
        except Exception as e:
            logger.error(f"Failed to mint {agent.name}: {e}")
            click.echo(f"❌ Failed to mint {agent.name}: {e}", err=True)
            report.outcomes.append(
                MintOutcome(name=agent.name, capabilities=capabilities, succeeded=False, error=str(e))
            )
            continue

        click.echo(f"✅ Minted {agent.name} with capabilities: {', '.join(capabilities)}")
        report.outcomes.append(MintOutcome(name=agent.name, capabilities=capabilities, succeeded=True))

    click.echo(f"\nMinted {len(report.minted)} of {len(agents)} demo agents.")
    return report
