import os
from functools import partial
from typing import List

from move.scripts.client import BridgeClient, TransactionResult
from move.scripts.config import ScriptConfig, load_environment
from move.scripts.deploy_lib import (
    env_list,
    parse_positive_int,
    print_deployer,
    report_transaction,
    require_active_deployment,
    require_object,
    run_script,
)
from move.scripts.errors import ConfigurationError
from move.scripts.ledger import merge_objects, update_deployment

# --- PARAMS ---
# Environment variables of the same name override these.
RELAYER_PUBLIC_KEYS = [
    "0x30815d22b6d19ecc6df7f3f87ee9671177fdbf2dafbd79728baf5b75f6fe6f0e",
    "0xdd3105f3a5688568409413d86449b2a8ad0e1021d52846f6eef84f0e07e6d282",
    "0x4522dc62ca8996891787bfbba5222673a33da8f53876742cfa376e3b8ec34b6b",
    "0x23a37497010da8bf45ae139d00f06548ef42256b1bae0480f1c6f97ac9019a90",
    "0xedc03209ddb03f93b7c96a6ce5e0d322de4626d75f01507e02a862d13068b982",
]
QUORUM = "3"
# ----------------------

MIN_QUORUM = 3


def public_key_bytes(public_key: str) -> bytes:
    hex_key = public_key[2:] if public_key.startswith("0x") else public_key
    try:
        return bytes.fromhex(hex_key)
    except ValueError:
        raise ConfigurationError(f"Relayer public key {public_key} is not valid hex")


def validate_quorum(quorum: int, relayer_count: int):
    if quorum < MIN_QUORUM:
        raise ConfigurationError(f"Quorum must be at least {MIN_QUORUM}")
    if quorum > relayer_count:
        raise ConfigurationError(
            f"Quorum ({quorum}) cannot be greater than number of relayers ({relayer_count})"
        )


async def init_bridge(
    config: ScriptConfig,
    client: BridgeClient,
    relayer_public_keys: List[str] = RELAYER_PUBLIC_KEYS,
    quorum=QUORUM,
) -> TransactionResult:
    print_deployer(config)
    require_active_deployment(config)
    if not relayer_public_keys:
        raise ConfigurationError(
            "No relayer public keys provided",
            hints=["Set RELAYER_PUBLIC_KEYS or update the list in move/scripts/init_bridge.py"],
        )
    quorum = parse_positive_int(quorum, "QUORUM")
    validate_quorum(quorum, len(relayer_public_keys))
    bridge_safe = require_object(config, "BridgeSafe")
    bridge_cap = require_object(config, "BridgeCap")
    public_keys = [public_key_bytes(key) for key in relayer_public_keys]

    print("\nBridge Initialization Configuration:")
    print(f"Package: {config.deployment['Package']}")
    print(f"BridgeSafe: {bridge_safe}")
    print(f"BridgeCap: {bridge_cap}")
    print(f"Number of relayers: {len(relayer_public_keys)}")
    print(f"Quorum: {quorum}")
    print("\nRelayer Public Keys:")
    for i, key in enumerate(relayer_public_keys, start=1):
        print(f"  {i}. {key}")

    print("\nInitializing bridge...")
    result = await client.initialize_bridge(public_keys, quorum, bridge_safe, bridge_cap)
    await report_transaction(config, "Bridge initialization successful!", result)

    print("\nSaving bridge initialization details...")
    update_deployment(
        config.ledger_path,
        config.network,
        config.deployment_id,
        lambda record: merge_objects(record, result.created_objects),
    )
    print("\nBridge initialization details saved to deployment.json")
    return result


def main():
    load_environment()
    run_script(
        partial(
            init_bridge,
            relayer_public_keys=env_list("RELAYER_PUBLIC_KEYS", RELAYER_PUBLIC_KEYS),
            quorum=os.environ.get("QUORUM", QUORUM),
        )
    )


if __name__ == "__main__":
    main()
