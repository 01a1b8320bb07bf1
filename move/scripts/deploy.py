from move.scripts.client import PACKAGE_KEY, BridgeClient, TransactionResult
from move.scripts.config import ScriptConfig, load_environment
from move.scripts.deploy_lib import (
    build_package,
    print_deployer,
    report_transaction,
    run_script,
    wait_before_submit,
)
from move.scripts.ledger import add_deployment


async def deploy(config: ScriptConfig, client: BridgeClient) -> TransactionResult:
    """
    Publishes the Move package and records the new deployment (inactive) in the ledger.
    The UpgradeCap created by the publish transaction is kept with the other objects.
    """
    print_deployer(config)
    build = build_package(config.package_path)
    print(f"Built {len(build.modules)} modules, digest {build.digest_hex}")

    print("Deploying")
    await wait_before_submit(config)
    result = await client.publish(build)
    await report_transaction(config, "Deployment successful!", result)

    print("Saving deployment details...")
    objects = dict(result.created_objects)
    package = objects.pop(PACKAGE_KEY, None)
    record = add_deployment(
        config.ledger_path,
        config.network,
        package=package,
        objects=objects,
        admin=config.admin_address,
        digest=result.digest,
    )
    print("Deployment saved to:", config.ledger_path)

    print(f"\nDeployment ID: {record['id']}")
    print(f"Network: {config.network}")
    print(f"Created at: {record['createdAt']}")
    print(f"Package: {package or 'N/A'}")
    print("\nTo make this deployment active, run the following command:\n")
    print(f"DEPLOYMENT_ID={record['id']} python -m move.scripts.mark_active\n")
    return result


def main():
    load_environment()
    run_script(deploy)


if __name__ == "__main__":
    main()
