"""
Script configuration.

Scripts are run from the Move package directory. Every script builds one ScriptConfig from
the environment (optionally loaded from the nearest .env file) and passes it explicitly to
the action it runs:
- DEPLOY_ON: network the scripts target (mainnet, testnet, devnet, localnet).
- SUI_ADMIN_ADDRESS: address of the admin account signing the transactions.
- DEPLOYMENT_FILE: ledger path (default: deployment.json in the working directory).
- DEPLOYMENT_ID: record to operate on (default: the record flagged as active).
- MOVE_PACKAGE_PATH: Move package handed to the build tool (default: the working directory).
- GAS_BUDGET, SETTLE_DELAY_SECONDS, SUBMIT_DELAY_SECONDS: transaction tunables.
- FROM_COIN_CAP, COIN_TYPE_REWARD, COIN_TYPE_DEPOSIT_NORMAL, COIN_TYPE_DEPOSIT_BOOSTED.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from move.scripts.errors import ConfigurationError
from move.scripts.ledger import get_deployments, read_ledger

NETWORKS = ("mainnet", "testnet", "devnet", "localnet")

DEFAULT_GAS_BUDGET = 100_000_000
DEFAULT_SETTLE_DELAY = 2.0
DEFAULT_SUBMIT_DELAY = 1.0


@dataclass(frozen=True)
class ScriptConfig:
    network: str
    admin_address: str
    ledger_path: Path
    deployment: Dict[str, Any] = field(default_factory=dict)
    package_path: Path = field(default_factory=Path.cwd)
    gas_budget: int = DEFAULT_GAS_BUDGET
    settle_delay: float = DEFAULT_SETTLE_DELAY
    submit_delay: float = DEFAULT_SUBMIT_DELAY
    capabilities: Dict[str, str] = field(default_factory=dict)
    coin_types: Dict[str, str] = field(default_factory=dict)

    @property
    def deployment_id(self) -> Optional[int]:
        return self.deployment.get("id")

    @property
    def objects(self) -> Dict[str, str]:
        return self.deployment.get("Objects") or {}


def _req(env: Mapping[str, str], name: str) -> str:
    value = env.get(name)
    if not value:
        raise ConfigurationError(f"Missing required env var: {name}")
    return value


def _opt_number(env: Mapping[str, str], name: str, default, cast):
    value = env.get(name)
    if value is None or value == "":
        return default
    try:
        return cast(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}")


def select_deployment(
    ledger: Dict[str, Any], network: str, deployment_id: Optional[int]
) -> Dict[str, Any]:
    """
    Returns the record a script operates on: the one with deployment_id if given,
    otherwise the last record flagged as active. Returns an empty dict if none matches.
    """
    deployments = get_deployments(ledger, network)
    if deployment_id is not None:
        matches = [d for d in deployments if d.get("id") == deployment_id]
    else:
        matches = [d for d in deployments if d.get("active")]
    return matches[-1] if matches else {}


def load_environment(dotenv_path: Optional[Path] = None):
    """
    Exports dotenv_path, or the nearest .env found from the working directory upwards, into
    os.environ. Variables already set in the environment win.
    """
    load_dotenv(dotenv_path=dotenv_path or find_dotenv(usecwd=True))


def load_config(
    env: Optional[Mapping[str, str]] = None, dotenv_path: Optional[Path] = None
) -> ScriptConfig:
    if env is None:
        load_environment(dotenv_path)
        env = os.environ

    network = _req(env, "DEPLOY_ON")
    if network not in NETWORKS:
        raise ConfigurationError(
            f"Unknown network {network!r}",
            hints=[f"DEPLOY_ON must be one of {', '.join(NETWORKS)}"],
        )
    admin_address = _req(env, "SUI_ADMIN_ADDRESS")
    ledger_path = Path(env.get("DEPLOYMENT_FILE") or Path.cwd() / "deployment.json")
    deployment_id = _opt_number(env, "DEPLOYMENT_ID", None, int)

    capabilities = {}
    if env.get("FROM_COIN_CAP"):
        capabilities["fromCoinCap"] = env["FROM_COIN_CAP"]

    coin_types = {
        role: env[name]
        for role, name in (
            ("reward", "COIN_TYPE_REWARD"),
            ("deposit_normal", "COIN_TYPE_DEPOSIT_NORMAL"),
            ("deposit_boosted", "COIN_TYPE_DEPOSIT_BOOSTED"),
        )
        if env.get(name)
    }

    return ScriptConfig(
        network=network,
        admin_address=admin_address,
        ledger_path=ledger_path,
        deployment=select_deployment(read_ledger(ledger_path), network, deployment_id),
        package_path=Path(env.get("MOVE_PACKAGE_PATH") or Path.cwd()),
        gas_budget=_opt_number(env, "GAS_BUDGET", DEFAULT_GAS_BUDGET, int),
        settle_delay=_opt_number(env, "SETTLE_DELAY_SECONDS", DEFAULT_SETTLE_DELAY, float),
        submit_delay=_opt_number(env, "SUBMIT_DELAY_SECONDS", DEFAULT_SUBMIT_DELAY, float),
        capabilities=capabilities,
        coin_types=coin_types,
    )
