"""Tagged results returned by every chain adapter call."""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")

# Err kinds
ADAPTER_UNAVAILABLE = "AdapterUnavailable"
TRANSACTION_REVERTED = "TransactionReverted"
NOT_CONFIGURED = "NotConfigured"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    kind: str
    message: str


Result = Union[Ok[T], Err]
