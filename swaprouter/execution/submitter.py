"""Transaction submission for planned swaps.

Signing, simulation and broadcasting live behind TransactionSubmitter so
the planner stays free of RPC and key handling.
"""

from __future__ import annotations

from typing import Protocol

import structlog

from swaprouter.constants import UNIVERSAL_ROUTER
from swaprouter.errors import SubmissionError

logger = structlog.get_logger()

# Gas limit = estimate * (100 + buffer) / 100
GAS_BUFFER_PERCENT = 20


class TransactionSubmitter(Protocol):
    """Protocol for wallets that can approve and submit router calls."""

    @property
    def address(self) -> str:
        """Address of the account submitting transactions."""
        ...

    def balance_of(self, token: str) -> int:
        """Token balance of the submitting account."""
        ...

    def approve(self, token: str, amount: int) -> bool:
        """Ensure the router may spend `amount` of `token`.

        Returns:
            True if an approval transaction was sent, False if the existing
            allowance already covered the amount
        """
        ...

    def submit(self, commands: str, inputs: list[str]) -> str:
        """Submit execute(commands, inputs) and wait for it to be mined.

        Returns:
            Transaction hash

        Raises:
            SubmissionError: If the transaction fails or reverts
        """
        ...


ERC20_ABI = [
    {
        "name": "approve",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "name": "allowance",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "balanceOf",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]

UNIVERSAL_ROUTER_ABI = [
    {
        "name": "execute",
        "type": "function",
        "stateMutability": "payable",
        "inputs": [
            {"name": "commands", "type": "bytes"},
            {"name": "inputs", "type": "bytes[]"},
        ],
        "outputs": [],
    },
]


class Web3TransactionSubmitter:
    """Submitter that signs with a local private key over RPC."""

    def __init__(
        self,
        web3_provider: str,
        private_key: str,
        router_address: str = UNIVERSAL_ROUTER,
        receipt_timeout: float = 120,
    ):
        """Initialize the submitter.

        Args:
            web3_provider: HTTP RPC URL
            private_key: Hex private key of the trading account
            router_address: Universal router receiving approvals and calls
            receipt_timeout: Seconds to wait for each receipt
        """
        from web3 import Web3

        self.w3 = Web3(Web3.HTTPProvider(web3_provider))
        self.account = self.w3.eth.account.from_key(private_key)
        self.router_address = Web3.to_checksum_address(router_address)
        self.router = self.w3.eth.contract(address=self.router_address, abi=UNIVERSAL_ROUTER_ABI)
        self.receipt_timeout = receipt_timeout

    @property
    def address(self) -> str:
        return str(self.account.address).lower()

    def _token(self, token: str):  # type: ignore[no-untyped-def]
        from web3 import Web3

        return self.w3.eth.contract(address=Web3.to_checksum_address(token), abi=ERC20_ABI)

    def balance_of(self, token: str) -> int:
        return int(self._token(token).functions.balanceOf(self.account.address).call())

    def _send(self, tx: dict) -> str:  # type: ignore[type-arg]
        tx.setdefault("from", self.account.address)
        tx.setdefault("nonce", self.w3.eth.get_transaction_count(self.account.address))
        tx.setdefault("chainId", self.w3.eth.chain_id)
        estimate = self.w3.eth.estimate_gas(tx)  # type: ignore[arg-type]
        tx["gas"] = estimate * (100 + GAS_BUFFER_PERCENT) // 100
        signed = self.account.sign_transaction(tx)
        tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        if receipt["status"] != 1:
            raise SubmissionError(f"Transaction {self.w3.to_hex(tx_hash)} reverted")
        return str(self.w3.to_hex(tx_hash))

    def approve(self, token: str, amount: int) -> bool:
        contract = self._token(token)
        try:
            allowance = int(
                contract.functions.allowance(self.account.address, self.router_address).call()
            )
            if allowance >= amount:
                logger.info("allowance_sufficient", token=token, allowance=allowance)
                return False

            tx = contract.functions.approve(self.router_address, amount).build_transaction(
                {"from": self.account.address}
            )
            tx_hash = self._send(tx)
        except SubmissionError:
            raise
        except Exception as e:
            raise SubmissionError(f"Approval of {token} failed: {e}") from e

        logger.info("approval_sent", token=token, amount=amount, tx_hash=tx_hash)
        return True

    def submit(self, commands: str, inputs: list[str]) -> str:
        try:
            tx = self.router.functions.execute(
                bytes.fromhex(commands[2:]),
                [bytes.fromhex(blob[2:]) for blob in inputs],
            ).build_transaction({"from": self.account.address, "value": 0})
            tx_hash = self._send(tx)
        except SubmissionError:
            raise
        except Exception as e:
            raise SubmissionError(f"Swap submission failed: {e}") from e

        logger.info("swap_submitted", tx_hash=tx_hash, commands=commands)
        return tx_hash


__all__ = [
    "ERC20_ABI",
    "GAS_BUFFER_PERCENT",
    "TransactionSubmitter",
    "UNIVERSAL_ROUTER_ABI",
    "Web3TransactionSubmitter",
]
