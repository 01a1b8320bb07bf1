import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from move.scripts.client import BridgeClient, PackageBuild, TransactionResult
from move.scripts.config import ScriptConfig

NETWORK = "testnet"
ADMIN_ADDRESS = "0x" + "ad" * 32
PACKAGE_ID = "0x" + "01" * 32
NEW_PACKAGE_ID = "0x" + "02" * 32
UPGRADE_CAP_ID = "0x" + "0c" * 32
BRIDGE_ID = "0x" + "b1" * 32
BRIDGE_SAFE_ID = "0x" + "5a" * 32
BRIDGE_CAP_ID = "0x" + "ca" * 32
REWARD_COIN_TYPE = "0x" + "ee" * 32 + "::reward::REWARD"


def deployment_record(deployment_id: int = 1, **overrides) -> Dict[str, Any]:
    record = {
        "id": deployment_id,
        "createdAt": "2024-01-01T00:00:00.000Z",
        "active": True,
        "Package": PACKAGE_ID,
        "Objects": {
            "UpgradeCap": UPGRADE_CAP_ID,
            "Bridge": BRIDGE_ID,
            "BridgeSafe": BRIDGE_SAFE_ID,
            "BridgeCap": BRIDGE_CAP_ID,
        },
        "Operators": {"Admin": ADMIN_ADDRESS},
        "digest": "DeployDigest",
        "whitelistedTokens": {},
    }
    record.update(overrides)
    return record


def write_json(path: Path, content: Dict[str, Any]):
    path.write_text(json.dumps(content, indent=2))


def read_json(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text())


def make_config(ledger_path: Path, deployment: Optional[Dict[str, Any]] = None, **overrides):
    params = dict(
        network=NETWORK,
        admin_address=ADMIN_ADDRESS,
        ledger_path=ledger_path,
        deployment=deployment if deployment is not None else {},
        package_path=ledger_path.parent,
        settle_delay=0,
        submit_delay=0,
        coin_types={"reward": REWARD_COIN_TYPE},
    )
    params.update(overrides)
    return ScriptConfig(**params)


def make_build(package_path: Path) -> PackageBuild:
    return PackageBuild(
        package_path=package_path,
        modules=["bW9kdWxl"],
        dependencies=["0x1", "0x2"],
        digest=[1, 2, 3, 255],
    )


class StubBridgeClient(BridgeClient):
    """
    Records every call and answers with a successful TransactionResult. Objects listed in
    created_objects[method_name] are reported as created by that call.
    """

    def __init__(self, created_objects: Optional[Dict[str, Dict[str, str]]] = None):
        self.created_objects = created_objects or {}
        self.calls: List[Tuple[str, tuple]] = []

    def _result(self, method: str, *args) -> TransactionResult:
        self.calls.append((method, args))
        return TransactionResult(
            digest=f"{method}Digest",
            created_objects=dict(self.created_objects.get(method, {})),
        )

    @property
    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    async def publish(self, build):
        return self._result("publish", build)

    async def upgrade(self, package_id, upgrade_cap, package_path):
        return self._result("upgrade", package_id, upgrade_cap, package_path)

    async def initialize_bridge(self, public_keys, quorum, bridge_safe, bridge_cap):
        return self._result("initialize_bridge", public_keys, quorum, bridge_safe, bridge_cap)

    async def initialize_safe(self, from_coin_cap):
        return self._result("initialize_safe", from_coin_cap)

    async def init_supply(self, token_type, amount, sender):
        return self._result("init_supply", token_type, amount, sender)

    async def whitelist_token(self, token_type, min_amount, max_amount, is_native, is_locked):
        return self._result(
            "whitelist_token", token_type, min_amount, max_amount, is_native, is_locked
        )

    async def remove_token_from_whitelist(self, token_type):
        return self._result("remove_token_from_whitelist", token_type)

    async def set_batch_size(self, batch_size):
        return self._result("set_batch_size", batch_size)

    async def set_batch_timeout(self, timeout_ms):
        return self._result("set_batch_timeout", timeout_ms)

    async def set_quorum(self, quorum):
        return self._result("set_quorum", quorum)

    async def unpause_bridge(self):
        return self._result("unpause_bridge")
