from move.scripts.client import BridgeClient, TransactionResult
from move.scripts.config import ScriptConfig, load_environment
from move.scripts.deploy_lib import (
    print_deployer,
    report_transaction,
    require_active_deployment,
    run_script,
    wait_before_submit,
)


async def unpause_bridge(config: ScriptConfig, client: BridgeClient) -> TransactionResult:
    print_deployer(config)
    require_active_deployment(config)

    print("\nUnpause Bridge Configuration:")
    print(f"Package: {config.deployment['Package']}")
    print(f"Bridge: {config.objects.get('Bridge')}")
    print(f"BridgeSafe: {config.objects.get('BridgeSafe')}")

    print("\nUnpausing bridge...")
    await wait_before_submit(config)
    result = await client.unpause_bridge()
    await report_transaction(config, "Bridge unpaused successfully!", result)
    return result


def main():
    load_environment()
    run_script(unpause_bridge)


if __name__ == "__main__":
    main()
