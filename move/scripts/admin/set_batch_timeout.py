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

# --- CONFIGURATION ---
# Milliseconds, e.g. 60000 = 60 seconds. Overridden by the TIMEOUT_MS environment variable.
TIMEOUT_MS = "60000"
# ----------------------


async def set_batch_timeout(
    config: ScriptConfig, client: BridgeClient, timeout_ms=TIMEOUT_MS
) -> TransactionResult:
    print_deployer(config)
    require_active_deployment(config)
    timeout_ms = parse_positive_int(
        require_value(timeout_ms, "TIMEOUT_MS", "admin/set_batch_timeout"), "TIMEOUT_MS"
    )

    print("\nSet Batch Timeout Configuration:")
    print(f"Package: {config.deployment['Package']}")
    print(f"BridgeSafe: {config.objects.get('BridgeSafe')}")
    print(f"BridgeCap: {config.objects.get('BridgeCap')}")
    print(f"Timeout: {timeout_ms} ms")

    print("\nSetting batch timeout...")
    await wait_before_submit(config)
    result = await client.set_batch_timeout(timeout_ms)
    await report_transaction(config, "Batch timeout set successfully!", result)
    return result


def main():
    load_environment()
    run_script(
        partial(set_batch_timeout, timeout_ms=os.environ.get("TIMEOUT_MS", TIMEOUT_MS))
    )


if __name__ == "__main__":
    main()
