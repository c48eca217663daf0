"""
Read access and the single admin signer for the target chain.

All write transactions are signed by one admin account. They are submitted
one at a time under a process-wide lock and each call blocks until the
receipt is available, so nonces are never assigned concurrently.
"""
import logging
import threading
from typing import Any, List, Optional, Sequence

from eth_account import Account
from web3 import Web3
from web3.logs import DISCARD
from web3.types import TxReceipt

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class ChainError(Exception):
    """Raised when a submitted transaction does not produce the expected receipt."""


class TransactionReverted(ChainError):
    def __init__(self, tx_hash: str):
        super().__init__(f"Transaction reverted: {tx_hash}")
        self.tx_hash = tx_hash


def tx_hash_of(receipt: TxReceipt) -> str:
    return Web3.to_hex(receipt["transactionHash"])


class ChainClient:
    def __init__(
        self,
        rpc_url: str,
        private_key: str,
        chain_id: int,
        receipt_timeout: int = 120,
        w3: Optional[Web3] = None,
    ):
        self.w3 = w3 or Web3(Web3.HTTPProvider(rpc_url))
        self.account = Account.from_key(private_key)
        self.chain_id = chain_id
        self.receipt_timeout = receipt_timeout
        self._tx_lock = threading.Lock()

    @property
    def admin_address(self) -> str:
        return self.account.address

    def contract(self, address: str, abi: Sequence[dict]):
        return self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    def read(self, address: str, abi: Sequence[dict], fn_name: str, *args: Any) -> Any:
        fn = getattr(self.contract(address, abi).functions, fn_name)
        return fn(*args).call()

    def simulate(self, address: str, abi: Sequence[dict], fn_name: str, *args: Any) -> Any:
        """eth_call a state-changing function as the admin to preview its return value."""
        fn = getattr(self.contract(address, abi).functions, fn_name)
        return fn(*args).call({"from": self.admin_address})

    def transact(self, address: str, abi: Sequence[dict], fn_name: str, *args: Any, value: int = 0) -> TxReceipt:
        fn = getattr(self.contract(address, abi).functions, fn_name)(*args)
        with self._tx_lock:
            tx = fn.build_transaction(self._tx_params(value))
            logger.info(f"Submitting {fn_name} to {address}")
            return self._send(tx)

    def deploy(self, abi: Sequence[dict], bytecode: str, *args: Any) -> TxReceipt:
        factory = self.w3.eth.contract(abi=abi, bytecode=bytecode)
        with self._tx_lock:
            tx = factory.constructor(*args).build_transaction(self._tx_params(0))
            receipt = self._send(tx)
        if not receipt.get("contractAddress"):
            raise ChainError(f"No contract address in deployment receipt (tx: {tx_hash_of(receipt)})")
        return receipt

    def events(self, address: str, abi: Sequence[dict], event_name: str, receipt: TxReceipt) -> List[Any]:
        event = getattr(self.contract(address, abi).events, event_name)
        return list(event().process_receipt(receipt, errors=DISCARD))

    def _tx_params(self, value: int) -> dict:
        return {
            "from": self.admin_address,
            "nonce": self.w3.eth.get_transaction_count(self.admin_address, "pending"),
            "chainId": self.chain_id,
            "value": value,
        }

    def _send(self, tx: dict) -> TxReceipt:
        signed = self.account.sign_transaction(tx)
        tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        if receipt["status"] != 1:
            raise TransactionReverted(Web3.to_hex(tx_hash))
        logger.info(f"Confirmed {Web3.to_hex(tx_hash)} in block {receipt['blockNumber']}")
        return receipt
