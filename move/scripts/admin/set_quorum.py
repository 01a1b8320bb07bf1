import os
from functools import partial

from move.scripts.client import BridgeClient, TransactionResult
from move.scripts.config import ScriptConfig, load_environment
from move.scripts.deploy_lib import (
    parse_positive_int,
    print_deployer,
    report_transaction,
    require_active_deployment,
    require_value,
    run_script,
    wait_before_submit,
)
from move.scripts.errors import ConfigurationError
from move.scripts.init_bridge import MIN_QUORUM

# --- PARAMS ---
# Overridden by the NEW_QUORUM environment variable.
NEW_QUORUM = "4"
# ----------------------


async def set_quorum(
    config: ScriptConfig, client: BridgeClient, quorum=NEW_QUORUM
) -> TransactionResult:
    print_deployer(config)
    require_active_deployment(config)
    quorum = parse_positive_int(
        require_value(quorum, "NEW_QUORUM", "admin/set_quorum"), "NEW_QUORUM"
    )
    # The relayer count lives on chain; only the lower bound is checked here.
    if quorum < MIN_QUORUM:
        raise ConfigurationError(f"Quorum must be at least {MIN_QUORUM}")

    print("\nSet Quorum Configuration:")
    print(f"Package: {config.deployment['Package']}")
    print(f"Bridge: {config.objects.get('Bridge')}")
    print(f"BridgeCap: {config.objects.get('BridgeCap')}")
    print(f"New Quorum: {quorum}")

    print("\nSetting quorum...")
    await wait_before_submit(config)
    result = await client.set_quorum(quorum)
    await report_transaction(config, "Quorum set successfully!", result)
    return result


def main():
    load_environment()
    run_script(partial(set_quorum, quorum=os.environ.get("NEW_QUORUM", NEW_QUORUM)))


if __name__ == "__main__":
    main()
