import os

from move.scripts.config import ScriptConfig, load_environment
from move.scripts.deploy_lib import run_script
from move.scripts.errors import ConfigurationError
from move.scripts.ledger import (
    find_deployment,
    get_deployments,
    read_ledger,
    set_active,
    write_ledger,
)


async def mark_active(config: ScriptConfig, client=None, deployment_id=None) -> dict:
    """
    Flags one ledger record as the active deployment of the network; every other record of
    that network is flagged inactive. No transaction is submitted.
    """
    if deployment_id is None:
        deployment_id = os.environ.get("DEPLOYMENT_ID")
    if not deployment_id:
        raise ConfigurationError(
            "DEPLOYMENT_ID not configured",
            hints=["Usage: DEPLOYMENT_ID=<id> python -m move.scripts.mark_active"],
        )
    try:
        deployment_id = int(deployment_id)
    except ValueError:
        raise ConfigurationError(f"DEPLOYMENT_ID must be an integer, got {deployment_id!r}")

    ledger = read_ledger(config.ledger_path)
    record = find_deployment(ledger, config.network, deployment_id)
    set_active(get_deployments(ledger, config.network), deployment_id)
    write_ledger(ledger, config.ledger_path)

    print(f"Deployment #{deployment_id} is now active on {config.network}")
    print(f"Package: {record.get('Package', 'N/A')}")
    return record


def main():
    load_environment()
    # Only the ledger is touched.
    run_script(mark_active, with_client=False)


if __name__ == "__main__":
    main()
