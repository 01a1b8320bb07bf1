import os
from functools import partial
from typing import Optional

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
from move.scripts.errors import TokenNotWhitelistedError
from move.scripts.ledger import add_initialized_supply, update_deployment

# --- PARAMS ---
# Environment variables of the same name override these.
# None defaults to the configured reward coin type.
TOKEN_TYPE = None
COIN_AMOUNT = "15000000"
# ----------------------


async def init_supply(
    config: ScriptConfig,
    client: BridgeClient,
    token_type: Optional[str] = TOKEN_TYPE,
    coin_amount: Optional[str] = COIN_AMOUNT,
) -> TransactionResult:
    print_deployer(config)
    require_active_deployment(config)
    token_type = require_value(
        token_type or config.coin_types.get("reward"), "TOKEN_TYPE", "init_supply"
    )
    amount = parse_positive_int(
        require_value(coin_amount, "COIN_AMOUNT", "init_supply"), "COIN_AMOUNT"
    )
    if token_type not in (config.deployment.get("whitelistedTokens") or {}):
        raise TokenNotWhitelistedError(
            f"Token {token_type} is not whitelisted yet.",
            hints=[
                "You must whitelist the token before initializing supply.",
                "To whitelist: python -m move.scripts.whitelist_token",
            ],
        )

    print("\nToken Supply Initialization Configuration:")
    print(f"Package: {config.deployment['Package']}")
    print(f"BridgeSafe: {config.objects.get('BridgeSafe')}")
    print(f"Token Type: {token_type}")
    print(f"Coin Amount: {amount}")

    print("\nInitializing token supply...")
    await wait_before_submit(config)
    result = await client.init_supply(token_type, amount, config.admin_address)
    await report_transaction(config, "Token supply initialized successfully!", result)

    print("\nUpdating token supply details...")
    total = update_deployment(
        config.ledger_path,
        config.network,
        config.deployment_id,
        lambda record: add_initialized_supply(record, token_type, amount),
    )
    print(f"\nToken supply updated: {amount} added (total: {total})")
    print("Supply details saved to deployment.json")
    return result


def main():
    load_environment()
    run_script(
        partial(
            init_supply,
            token_type=os.environ.get("TOKEN_TYPE", TOKEN_TYPE),
            coin_amount=os.environ.get("COIN_AMOUNT", COIN_AMOUNT),
        )
    )


if __name__ == "__main__":
    main()
