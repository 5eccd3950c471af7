"""chainlaunch - local development tooling for the AgentChains demo.

Boots a local Hardhat node, deploys the contracts, starts the frontend,
and mints a set of demo AI-agent NFTs against the deployed contract.
"""

__version__ = "0.1.0"
