from pathlib import Path

import pytest

from move.scripts import deploy_lib
from move.test.utils import (
    ADMIN_ADDRESS,
    NETWORK,
    StubBridgeClient,
    deployment_record,
    make_build,
    make_config,
    write_json,
)


@pytest.fixture
def ledger_path(tmp_path: Path) -> Path:
    return tmp_path / "deployment.json"


@pytest.fixture
def record() -> dict:
    return deployment_record(2)


@pytest.fixture
def deployed_ledger(ledger_path: Path, record: dict) -> Path:
    write_json(
        ledger_path,
        {
            NETWORK: {"deployments": [deployment_record(1, active=False), record]},
            "mainnet": {"deployments": [deployment_record(7)]},
        },
    )
    return ledger_path


@pytest.fixture
def config(deployed_ledger: Path, record: dict):
    return make_config(deployed_ledger, deployment=record)


@pytest.fixture
def undeployed_config(ledger_path: Path):
    return make_config(ledger_path)


@pytest.fixture
def client() -> StubBridgeClient:
    return StubBridgeClient()


@pytest.fixture
def fake_build(monkeypatch, tmp_path: Path):
    """
    Replaces the `sui move build` subprocess with a canned build.
    """
    build = make_build(tmp_path)

    def _build_package(package_path, sui_binary="sui"):
        return build

    for module_name in ("move.scripts.deploy", "move.scripts.upgrade"):
        monkeypatch.setattr(f"{module_name}.build_package", _build_package)
    return build


# Every variable a script reads, cleared so that the developer's shell cannot leak in.
SCRIPT_ENV_VARS = (
    "DEPLOY_ON",
    "SUI_ADMIN_ADDRESS",
    "DEPLOYMENT_FILE",
    "DEPLOYMENT_ID",
    "MOVE_PACKAGE_PATH",
    "GAS_BUDGET",
    "SETTLE_DELAY_SECONDS",
    "SUBMIT_DELAY_SECONDS",
    "FROM_COIN_CAP",
    "COIN_TYPE_REWARD",
    "COIN_TYPE_DEPOSIT_NORMAL",
    "COIN_TYPE_DEPOSIT_BOOSTED",
    "LOG_LEVEL",
    "TOKEN_TYPE",
    "COIN_AMOUNT",
    "MIN_AMOUNT",
    "MAX_AMOUNT",
    "IS_NATIVE",
    "IS_LOCKED",
    "RELAYER_PUBLIC_KEYS",
    "QUORUM",
    "NEW_QUORUM",
    "NEW_BATCH_SIZE",
    "TIMEOUT_MS",
)


@pytest.fixture
def dotenv_script(monkeypatch, tmp_path: Path, deployed_ledger: Path, client: StubBridgeClient):
    """
    Returns a function writing a .env for the deployed ledger (plus the given variables) into
    the working directory of a script's main(). The script talks to the stub client.
    """
    for name in SCRIPT_ENV_VARS:
        # setenv first so that undo also removes what load_dotenv exports.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(deploy_lib, "get_bridge_client", lambda config: client)

    def _write(**values):
        env = {
            "DEPLOY_ON": NETWORK,
            "SUI_ADMIN_ADDRESS": ADMIN_ADDRESS,
            "DEPLOYMENT_FILE": str(deployed_ledger),
            "SETTLE_DELAY_SECONDS": "0",
            "SUBMIT_DELAY_SECONDS": "0",
        }
        env.update(values)
        (tmp_path / ".env").write_text("".join(f"{key}={value}\n" for key, value in env.items()))

    return _write
