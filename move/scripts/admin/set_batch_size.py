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

# --- PARAMS ---
# Overridden by the NEW_BATCH_SIZE environment variable.
NEW_BATCH_SIZE = "100"
# ----------------------


async def set_batch_size(
    config: ScriptConfig, client: BridgeClient, batch_size=NEW_BATCH_SIZE
) -> TransactionResult:
    print_deployer(config)
    require_active_deployment(config)
    batch_size = parse_positive_int(
        require_value(batch_size, "NEW_BATCH_SIZE", "admin/set_batch_size"), "NEW_BATCH_SIZE"
    )

    print("\nSet Batch Size Configuration:")
    print(f"Package: {config.deployment['Package']}")
    print(f"BridgeSafe: {config.objects.get('BridgeSafe')}")
    print(f"BridgeCap: {config.objects.get('BridgeCap')}")
    print(f"New Batch Size: {batch_size}")

    print("\nSetting batch size...")
    await wait_before_submit(config)
    result = await client.set_batch_size(batch_size)
    await report_transaction(config, "Batch size set successfully!", result)
    return result


def main():
    load_environment()
    run_script(
        partial(set_batch_size, batch_size=os.environ.get("NEW_BATCH_SIZE", NEW_BATCH_SIZE))
    )


if __name__ == "__main__":
    main()
