"""web3.py binding for the AIAgentNFT contract's minting call."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

# Seconds to wait for a mint transaction to be mined
RECEIPT_TIMEOUT = 120.0

# Seconds per JSON-RPC request
RPC_TIMEOUT = 30.0

AGENT_NFT_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "mintAgent",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "name", "type": "string"},
            {"name": "capabilities", "type": "string[]"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]


class SignerUnavailableError(Exception):
    """Raised when the node exposes no account to send transactions from."""

    pass


class MintFailedError(Exception):
    """Raised when a mint transaction is mined but reverted."""

    pass


class PendingMint:
    """A submitted mint transaction awaiting confirmation."""

    def __init__(self, w3: Any, tx_hash: Any, timeout: float = RECEIPT_TIMEOUT):
        self._w3 = w3
        self.tx_hash = tx_hash
        self._timeout = timeout

    def wait(self) -> Any:
        """Block until the transaction is mined and return its receipt.

        Raises:
            MintFailedError: If the transaction reverted.
        """
        receipt = self._w3.eth.wait_for_transaction_receipt(self.tx_hash, timeout=self._timeout)
        if receipt["status"] != 1:
            raise MintFailedError(f"transaction {self._w3.to_hex(self.tx_hash)} reverted")
        return receipt


class AgentNFTContract:
    """Minting client for a deployed AIAgentNFT contract."""

    def __init__(self, w3: Any, address: str, sender: str | None = None):
        self._w3 = w3
        self.address = w3.to_checksum_address(address)
        self.sender = sender
        self._contract = w3.eth.contract(address=self.address, abi=AGENT_NFT_ABI)

    @classmethod
    def connect(cls, rpc_url: str, address: str, sender: str | None = None) -> AgentNFTContract:
        """Create a client over an HTTP JSON-RPC provider."""
        from web3 import Web3

        w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": RPC_TIMEOUT}))
        logger.info(f"Connecting to AIAgentNFT at {address} via {rpc_url}")
        return cls(w3, address, sender=sender)

    def default_signer(self) -> str:
        """Return the node's first unlocked account.

        Raises:
            SignerUnavailableError: If the node has no unlocked accounts.
        """
        accounts = self._w3.eth.accounts
        if not accounts:
            raise SignerUnavailableError("node has no unlocked accounts to sign with")
        return accounts[0]

    def mint_agent(self, owner: str, name: str, capabilities: list[str]) -> PendingMint:
        """Submit mintAgent(owner, name, capabilities)."""
        owner = self._w3.to_checksum_address(owner)
        tx_hash = self._contract.functions.mintAgent(owner, name, capabilities).transact(
            {"from": self.sender or owner}
        )
        logger.debug(f"Submitted mintAgent for {name}: {self._w3.to_hex(tx_hash)}")
        return PendingMint(self._w3, tx_hash)
