import os
from functools import partial
from typing import Optional, Union

from move.scripts.client import BridgeClient, TransactionResult
from move.scripts.config import ScriptConfig, load_environment
from move.scripts.deploy_lib import (
    parse_bool,
    parse_positive_int,
    print_deployer,
    report_transaction,
    require_active_deployment,
    require_value,
    run_script,
    wait_before_submit,
)
from move.scripts.errors import ConfigurationError
from move.scripts.ledger import set_whitelisted_token, update_deployment

# --- CONFIGURATION ---
# Environment variables of the same name override these.
# None defaults to the configured reward coin type.
TOKEN_TYPE = None
MIN_AMOUNT = "1"
MAX_AMOUNT = "1000000000000000"
IS_NATIVE = "true"
IS_LOCKED = "false"
# ----------------------

COIN_TYPE_HINT = (
    "You can use COIN_TYPE_REWARD, COIN_TYPE_DEPOSIT_NORMAL or COIN_TYPE_DEPOSIT_BOOSTED"
)


async def whitelist_token(
    config: ScriptConfig,
    client: BridgeClient,
    token_type: Optional[str] = TOKEN_TYPE,
    min_amount: str = MIN_AMOUNT,
    max_amount: str = MAX_AMOUNT,
    is_native: Union[bool, str] = IS_NATIVE,
    is_locked: Union[bool, str] = IS_LOCKED,
) -> TransactionResult:
    print_deployer(config)
    require_active_deployment(config)
    token_type = token_type or config.coin_types.get("reward")
    if not token_type:
        raise ConfigurationError(
            "TOKEN_TYPE not configured",
            hints=["Set TOKEN_TYPE in the environment.", COIN_TYPE_HINT],
        )
    minimum = parse_positive_int(
        require_value(min_amount, "MIN_AMOUNT", "whitelist_token"), "MIN_AMOUNT"
    )
    maximum = parse_positive_int(
        require_value(max_amount, "MAX_AMOUNT", "whitelist_token"), "MAX_AMOUNT"
    )
    if minimum > maximum:
        raise ConfigurationError(f"MIN_AMOUNT ({minimum}) cannot exceed MAX_AMOUNT ({maximum})")
    is_native = parse_bool(is_native, "IS_NATIVE")
    is_locked = parse_bool(is_locked, "IS_LOCKED")

    print("\nToken Whitelisting Configuration:")
    print(f"Package: {config.deployment['Package']}")
    print(f"BridgeSafe: {config.objects.get('BridgeSafe')}")
    print(f"Token Type: {token_type}")
    print(f"Min Amount: {minimum}")
    print(f"Max Amount: {maximum}")
    print(f"Is Native: {is_native}")
    print(f"Is Locked: {is_locked}")

    print("\nWhitelisting token...")
    await wait_before_submit(config)
    result = await client.whitelist_token(token_type, minimum, maximum, is_native, is_locked)
    await report_transaction(config, "Token whitelisted successfully!", result)

    print("\nSaving whitelist details...")
    update_deployment(
        config.ledger_path,
        config.network,
        config.deployment_id,
        lambda record: set_whitelisted_token(
            record, token_type, str(minimum), str(maximum), is_native, is_locked
        ),
    )
    print("\nWhitelist details saved to deployment.json")
    return result


def main():
    load_environment()
    run_script(
        partial(
            whitelist_token,
            token_type=os.environ.get("TOKEN_TYPE", TOKEN_TYPE),
            min_amount=os.environ.get("MIN_AMOUNT", MIN_AMOUNT),
            max_amount=os.environ.get("MAX_AMOUNT", MAX_AMOUNT),
            is_native=os.environ.get("IS_NATIVE", IS_NATIVE),
            is_locked=os.environ.get("IS_LOCKED", IS_LOCKED),
        )
    )


if __name__ == "__main__":
    main()
