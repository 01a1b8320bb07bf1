import os
from functools import partial
from typing import Optional

from move.scripts.client import BridgeClient, TransactionResult
from move.scripts.config import ScriptConfig, load_environment
from move.scripts.deploy_lib import (
    report_transaction,
    require_active_deployment,
    run_script,
    wait_before_submit,
)
from move.scripts.errors import ConfigurationError
from move.scripts.ledger import remove_whitelisted_token, update_deployment
from move.scripts.whitelist_token import COIN_TYPE_HINT

# --- CONFIGURATION ---
# Overridden by the TOKEN_TYPE environment variable. None defaults to the reward coin type.
TOKEN_TYPE = None
# ----------------------


async def remove_whitelist(
    config: ScriptConfig, client: BridgeClient, token_type: Optional[str] = TOKEN_TYPE
) -> TransactionResult:
    require_active_deployment(config)
    token_type = token_type or config.coin_types.get("reward")
    if not token_type:
        raise ConfigurationError(
            "TOKEN_TYPE not configured",
            hints=["Set TOKEN_TYPE in the environment.", COIN_TYPE_HINT],
        )

    print("\nRemoving Token from Whitelist:")
    print(f"Package: {config.deployment['Package']}")
    print(f"BridgeSafe: {config.objects.get('BridgeSafe')}")
    print(f"Token Type: {token_type}")

    print("\nRemoving token from whitelist...")
    await wait_before_submit(config)
    result = await client.remove_token_from_whitelist(token_type)
    await report_transaction(config, "Token removed from whitelist successfully!", result)

    print("\nSaving removal details...")
    removed = update_deployment(
        config.ledger_path,
        config.network,
        config.deployment_id,
        lambda record: remove_whitelisted_token(record, token_type),
    )
    if removed:
        print(f"\nToken {token_type} removed from whitelistedTokens")
    else:
        print(f"\nWarning: Token {token_type} was not found in whitelistedTokens")
    print("\nRemoval details saved to deployment.json")
    return result


def main():
    load_environment()
    run_script(partial(remove_whitelist, token_type=os.environ.get("TOKEN_TYPE", TOKEN_TYPE)))


if __name__ == "__main__":
    main()
