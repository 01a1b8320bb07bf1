import pytest

from move.scripts import init_bridge, mark_active, whitelist_token
from move.scripts.admin import set_batch_timeout, set_quorum
from move.test.utils import BRIDGE_CAP_ID, BRIDGE_SAFE_ID, NETWORK, read_json

USDC_COIN_TYPE = "0x9::usdc::USDC"
RELAYER_KEYS = ["0x" + "11" * 32, "0x" + "22" * 32, "0x" + "33" * 32, "0x" + "44" * 32]


def current_record(ledger_path):
    return read_json(ledger_path)[NETWORK]["deployments"][1]


def test_whitelist_token_main_reads_dotenv(dotenv_script, client, deployed_ledger):
    dotenv_script(
        TOKEN_TYPE=USDC_COIN_TYPE,
        COIN_TYPE_REWARD="0x1::reward::REWARD",
        MAX_AMOUNT="5000",
        IS_NATIVE="false",
        IS_LOCKED="TRUE",
    )
    whitelist_token.main()
    assert client.calls == [("whitelist_token", (USDC_COIN_TYPE, 1, 5000, False, True))]
    assert list(current_record(deployed_ledger)["whitelistedTokens"]) == [USDC_COIN_TYPE]


@pytest.mark.parametrize("name, value", [("IS_NATIVE", "1"), ("IS_LOCKED", "yes")])
def test_whitelist_token_main_rejects_non_boolean(
    dotenv_script, client, deployed_ledger, capsys, name, value
):
    dotenv_script(TOKEN_TYPE=USDC_COIN_TYPE, **{name: value})
    before = deployed_ledger.read_text()
    with pytest.raises(SystemExit) as exit_info:
        whitelist_token.main()
    assert exit_info.value.code == 1
    assert client.calls == []
    assert deployed_ledger.read_text() == before
    assert f"{name} must be true or false" in capsys.readouterr().err


def test_init_bridge_main_reads_key_list_and_quorum(dotenv_script, client):
    dotenv_script(RELAYER_PUBLIC_KEYS=",".join(RELAYER_KEYS), QUORUM="4")
    init_bridge.main()
    ((name, (public_keys, quorum, bridge_safe, bridge_cap)),) = client.calls
    assert name == "initialize_bridge"
    assert public_keys == [bytes.fromhex(key[2:]) for key in RELAYER_KEYS]
    assert quorum == 4
    assert (bridge_safe, bridge_cap) == (BRIDGE_SAFE_ID, BRIDGE_CAP_ID)


def test_init_bridge_main_defaults(dotenv_script, client):
    dotenv_script()
    init_bridge.main()
    ((_, (public_keys, quorum, _, _)),) = client.calls
    assert len(public_keys) == len(init_bridge.RELAYER_PUBLIC_KEYS)
    assert quorum == 3


def test_set_quorum_main_reads_dotenv(dotenv_script, client):
    dotenv_script(NEW_QUORUM="5")
    set_quorum.main()
    assert client.calls == [("set_quorum", (5,))]


def test_shell_environment_wins_over_dotenv(dotenv_script, client, monkeypatch):
    dotenv_script(TIMEOUT_MS="30000")
    monkeypatch.setenv("TIMEOUT_MS", "90000")
    set_batch_timeout.main()
    assert client.calls == [("set_batch_timeout", (90000,))]


def test_mark_active_main_reads_deployment_id(dotenv_script, client, deployed_ledger):
    dotenv_script(DEPLOYMENT_ID="1")
    mark_active.main()
    deployments = read_json(deployed_ledger)[NETWORK]["deployments"]
    assert [d["active"] for d in deployments] == [True, False]
    assert client.calls == []
