import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from move.scripts.errors import TransactionFailedError

PACKAGE_KEY = "Package"


@dataclass(frozen=True)
class PackageBuild:
    """
    Output of `sui move build --dump-bytecode-as-base64`.
    """

    package_path: Path
    modules: List[str]
    dependencies: List[str]
    digest: List[int]

    @property
    def digest_hex(self) -> str:
        return bytes(self.digest).hex()


@dataclass
class TransactionResult:
    digest: str
    created_objects: Dict[str, str] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict)


def object_role(object_type: str) -> str:
    # "0xabc::bridge::BridgeCap<0x2::sui::SUI>" -> "BridgeCap"
    without_generics = re.sub(r"<.*>$", "", object_type)
    return without_generics.split("::")[-1]


def get_created_object_ids(object_changes: List[Dict[str, Any]]) -> Dict[str, str]:
    objects = {}
    for change in object_changes or []:
        if change.get("type") == "published":
            objects[PACKAGE_KEY] = change["packageId"]
        elif change.get("type") == "created":
            objects[object_role(change["objectType"])] = change["objectId"]
    return objects


def validate_transaction_success(response: Dict[str, Any]):
    status = ((response.get("effects") or {}).get("status")) or {}
    if status.get("status") != "success":
        raise TransactionFailedError(
            f"Transaction {response.get('digest', '<unknown>')} failed: "
            f"{status.get('error', status.get('status', 'no effects returned'))}"
        )


def to_transaction_result(response: Dict[str, Any]) -> TransactionResult:
    validate_transaction_success(response)
    return TransactionResult(
        digest=response["digest"],
        created_objects=get_created_object_ids(response.get("objectChanges")),
        raw=response,
    )


class BridgeClient(ABC):
    """
    One method per on-chain bridge action. Every call submits a single transaction and
    returns its TransactionResult once executed, or raises a ScriptError.
    """

    @abstractmethod
    async def publish(self, build: PackageBuild) -> TransactionResult:
        pass

    @abstractmethod
    async def upgrade(
        self, package_id: str, upgrade_cap: str, package_path: Path
    ) -> TransactionResult:
        """
        Upgrades package_id from the Move package at package_path. Implementations must
        refuse an UpgradeCap that does not govern package_id.
        """

    @abstractmethod
    async def initialize_bridge(
        self, public_keys: List[bytes], quorum: int, bridge_safe: str, bridge_cap: str
    ) -> TransactionResult:
        pass

    @abstractmethod
    async def initialize_safe(self, from_coin_cap: str) -> TransactionResult:
        pass

    @abstractmethod
    async def init_supply(self, token_type: str, amount: int, sender: str) -> TransactionResult:
        pass

    @abstractmethod
    async def whitelist_token(
        self,
        token_type: str,
        min_amount: int,
        max_amount: int,
        is_native: bool,
        is_locked: bool,
    ) -> TransactionResult:
        pass

    @abstractmethod
    async def remove_token_from_whitelist(self, token_type: str) -> TransactionResult:
        pass

    @abstractmethod
    async def set_batch_size(self, batch_size: int) -> TransactionResult:
        pass

    @abstractmethod
    async def set_batch_timeout(self, timeout_ms: int) -> TransactionResult:
        pass

    @abstractmethod
    async def set_quorum(self, quorum: int) -> TransactionResult:
        pass

    @abstractmethod
    async def unpause_bridge(self) -> TransactionResult:
        pass
