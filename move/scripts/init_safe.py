from move.scripts.client import BridgeClient, TransactionResult
from move.scripts.config import ScriptConfig, load_environment
from move.scripts.deploy_lib import report_transaction, require_active_deployment, run_script
from move.scripts.errors import ConfigurationError
from move.scripts.ledger import merge_objects, update_deployment


async def init_safe(config: ScriptConfig, client: BridgeClient) -> TransactionResult:
    require_active_deployment(config)
    from_coin_cap = config.capabilities.get("fromCoinCap")
    if not from_coin_cap:
        raise ConfigurationError(
            "FromCoinCap not found in deployment",
            hints=["Set FROM_COIN_CAP to the id of the FromCoinCap object."],
        )

    print(f"Package: {config.deployment['Package']}")
    print(f"FromCoinCap: {from_coin_cap}")

    print("Initializing safe...")
    result = await client.initialize_safe(from_coin_cap)
    await report_transaction(config, "Safe initialization successful!", result)

    print("\nSaving safe initialization details...")
    update_deployment(
        config.ledger_path,
        config.network,
        config.deployment_id,
        lambda record: merge_objects(record, result.created_objects),
    )
    print("\nSafe initialization details saved to deployment.json")
    return result


def main():
    load_environment()
    run_script(init_safe)


if __name__ == "__main__":
    main()
