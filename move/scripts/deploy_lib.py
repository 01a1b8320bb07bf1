import asyncio
import json
import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional

from move.scripts.client import BridgeClient, PackageBuild, TransactionResult
from move.scripts.config import ScriptConfig, load_config
from move.scripts.errors import BuildError, ConfigurationError, ScriptError
from move.scripts.sui_cli_client import SuiCliClient

SUISCAN_URL = "https://suiscan.xyz"

DEPLOY_HINTS = [
    "Make sure you have deployed the package first and have an active deployment.",
    "",
    "To deploy: python -m move.scripts.deploy",
    "To set active deployment: DEPLOYMENT_ID=<id> python -m move.scripts.mark_active",
]


def explorer_url(network: str, digest: str) -> str:
    return f"{SUISCAN_URL}/{network}/tx/{digest}"


def build_package(package_path: Path, sui_binary: str = "sui") -> PackageBuild:
    command = [
        sui_binary,
        "move",
        "build",
        "--with-unpublished-dependencies",
        "--dump-bytecode-as-base64",
        "--path",
        str(package_path),
    ]
    try:
        output = subprocess.check_output(command, stderr=subprocess.PIPE).decode("utf-8")
    except FileNotFoundError:
        raise BuildError(
            f"{sui_binary} executable not found",
            hints=["Install the Sui CLI and make sure it is on PATH."],
        )
    except subprocess.CalledProcessError as error:
        raise BuildError(
            f"sui move build failed with status {error.returncode}:\n"
            f"{(error.stderr or b'').decode('utf-8').strip()}"
        )

    try:
        compiled = json.loads(output)
        return PackageBuild(
            package_path=Path(package_path),
            modules=compiled["modules"],
            dependencies=compiled["dependencies"],
            digest=compiled["digest"],
        )
    except (json.JSONDecodeError, KeyError) as error:
        raise BuildError(f"Unexpected output from sui move build: {error}")


def require_active_deployment(config: ScriptConfig):
    if not config.deployment.get("Package"):
        raise ConfigurationError("No active deployment found", hints=DEPLOY_HINTS)


def require_object(config: ScriptConfig, name: str) -> str:
    object_id = config.objects.get(name)
    if not object_id:
        raise ConfigurationError(
            f"{name} not found in deployment",
            hints=[f"Make sure the {name} object exists in your deployment Objects."],
        )
    return object_id


def require_value(value: Any, name: str, script: str) -> Any:
    if value is None or value == "" or value == []:
        raise ConfigurationError(
            f"{name} not configured",
            hints=[f"Set {name} in the environment or at the top of move/scripts/{script}.py"],
        )
    return value


def parse_positive_int(value: Any, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if number <= 0:
        raise ConfigurationError(f"{name} must be positive, got {number}")
    return number


def parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text not in ("true", "false"):
        raise ConfigurationError(f"{name} must be true or false, got {value!r}")
    return text == "true"


def env_list(name: str, default: List[str]) -> List[str]:
    value = os.environ.get(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


def configure_logging():
    name = os.environ.get("LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown LOG_LEVEL {name!r}", hints=["Use DEBUG, INFO, WARNING or ERROR."]
        )
    logging.basicConfig(level=level)


def print_deployer(config: ScriptConfig):
    print(f"Deployer: {config.admin_address}")


async def wait_before_submit(config: ScriptConfig):
    await asyncio.sleep(config.submit_delay)


async def report_transaction(config: ScriptConfig, title: str, result: TransactionResult):
    # Gives the fullnode time to index the effects before anything else is queried.
    await asyncio.sleep(config.settle_delay)
    print(f"\n{title}")
    print("Transaction digest:", result.digest)
    print(f"View transaction: {explorer_url(config.network, result.digest)}")


def get_bridge_client(config: ScriptConfig) -> BridgeClient:
    return SuiCliClient(
        network=config.network,
        admin_address=config.admin_address,
        package_id=config.deployment.get("Package"),
        objects=config.objects,
        gas_budget=config.gas_budget,
    )


def report_error(error: BaseException):
    if isinstance(error, ScriptError):
        print(f"Error: {error.message}", file=sys.stderr)
        for hint in error.hints:
            print(hint, file=sys.stderr)
    else:
        print(f"Error: {error!r}", file=sys.stderr)


def run_script(
    action: Callable[[ScriptConfig, BridgeClient], Awaitable[Any]],
    config: Optional[ScriptConfig] = None,
    client: Optional[BridgeClient] = None,
    with_client: bool = True,
) -> Any:
    """
    Entry point shared by all scripts: builds the configuration and the client unless
    given, runs the action and turns any failure into exit status 1.
    """
    try:
        configure_logging()
        config = config or load_config()
        if client is None and with_client:
            client = get_bridge_client(config)
        return asyncio.run(action(config, client))
    except Exception as error:
        report_error(error)
        sys.exit(1)
