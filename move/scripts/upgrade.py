from move.scripts.client import PACKAGE_KEY, BridgeClient, TransactionResult
from move.scripts.config import ScriptConfig, load_environment
from move.scripts.deploy_lib import (
    DEPLOY_HINTS,
    build_package,
    print_deployer,
    report_transaction,
    run_script,
)
from move.scripts.errors import ConfigurationError, TransactionFailedError
from move.scripts.ledger import record_upgrade, update_deployment


async def upgrade(config: ScriptConfig, client: BridgeClient) -> TransactionResult:
    """
    Upgrades the active deployment's package with the current build, authorized by the
    deployment's UpgradeCap, and points the ledger record at the new package.
    """
    print_deployer(config)
    package = config.deployment.get("Package")
    upgrade_cap = config.objects.get("UpgradeCap")
    if not package or not upgrade_cap:
        raise ConfigurationError(
            "No active deployment found or UpgradeCap missing", hints=DEPLOY_HINTS
        )

    build = build_package(config.package_path)
    print(f"Built {len(build.modules)} modules, digest {build.digest_hex}")

    result = await client.upgrade(package, upgrade_cap, build.package_path)
    await report_transaction(config, "Upgrade successful!", result)

    print("Saving upgrade details...")
    new_package = result.created_objects.get(PACKAGE_KEY)
    if not new_package:
        raise TransactionFailedError("No new package ID found in upgrade result")

    old_package = update_deployment(
        config.ledger_path,
        config.network,
        config.deployment_id,
        lambda record: record_upgrade(record, new_package, result.digest),
    )
    print("Upgrade details saved.")
    print(f"Deployment ID: {config.deployment_id}")
    print(f"Old Package: {old_package}")
    print(f"New Package: {new_package}\n")
    return result


def main():
    load_environment()
    run_script(upgrade)


if __name__ == "__main__":
    main()
