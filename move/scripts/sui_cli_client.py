"""
BridgeClient implementation driving the `sui` command line client.

Signing happens inside the CLI with its active address, so the client refuses to submit
anything unless the CLI's active environment and address match the script configuration.
"""

import asyncio
import json
import logging
import re
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from move.scripts.client import (
    BridgeClient,
    PackageBuild,
    TransactionResult,
    to_transaction_result,
)
from move.scripts.errors import ConfigurationError, SuiCommandError

logger = logging.getLogger(__name__)

SUI_COIN_TYPE = "0x2::sui::SUI"

# Bridge action -> (module, function) of the package's entry points.
MOVE_CALLS = {
    "initialize_bridge": ("bridge", "initialize"),
    "set_quorum": ("bridge", "set_quorum"),
    "unpause_bridge": ("bridge", "unpause"),
    "initialize_safe": ("safe", "initialize"),
    "init_supply": ("safe", "init_supply"),
    "whitelist_token": ("safe", "whitelist_token"),
    "remove_token_from_whitelist": ("safe", "remove_token_from_whitelist"),
    "set_batch_size": ("safe", "set_batch_size"),
    "set_batch_timeout": ("safe", "set_batch_timeout_ms"),
}

CommandRunner = Callable[[Sequence[str]], Awaitable[str]]


async def run_command(command: Sequence[str]) -> str:
    logger.debug("Running %s", " ".join(command))
    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError:
        raise SuiCommandError(
            f"{command[0]} executable not found",
            hints=["Install the Sui CLI and make sure it is on PATH."],
        )
    stdout, stderr = await process.communicate()
    if process.returncode != 0:
        raise SuiCommandError(
            f"{' '.join(command[:3])} exited with status {process.returncode}: "
            f"{stderr.decode('utf-8').strip() or stdout.decode('utf-8').strip()}"
        )
    return stdout.decode("utf-8")


def normalize_type(type_tag: str) -> str:
    # 0x0000...0002::sui::SUI -> 0x2::sui::SUI
    return re.sub(
        r"0x0*([0-9a-fA-F]+)", lambda match: "0x" + match.group(1).lower(), type_tag.strip()
    )


def format_arg(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return json.dumps([list(v) if isinstance(v, (bytes, bytearray)) else v for v in value])
    return str(value)


def coin_balance(entry: Dict[str, Any], token_type: str) -> Optional[int]:
    """
    Returns the balance of an entry of `sui client objects --json` if it is a
    Coin<token_type>, None otherwise.
    """
    data = entry.get("data", entry)
    match = re.fullmatch(r".*::coin::Coin<(.+)>", data.get("type") or "")
    if match is None or normalize_type(match.group(1)) != normalize_type(token_type):
        return None
    fields = (data.get("content") or {}).get("fields") or {}
    return int(fields.get("balance", 0))


class SuiCliClient(BridgeClient):
    def __init__(
        self,
        network: str,
        admin_address: str,
        package_id: Optional[str],
        objects: Dict[str, str],
        gas_budget: int,
        sui_binary: str = "sui",
        runner: CommandRunner = run_command,
    ):
        self.network = network
        self.admin_address = admin_address
        self.package_id = package_id
        self.objects = dict(objects)
        self.gas_budget = gas_budget
        self.sui_binary = sui_binary
        self.runner = runner
        self._environment_checked = False

    async def _run(self, *args: str) -> str:
        return await self.runner([self.sui_binary, *args])

    async def _run_json(self, *args: str) -> Any:
        output = await self._run(*args, "--json")
        try:
            return json.loads(output)
        except json.JSONDecodeError:
            raise SuiCommandError(f"Unexpected output from sui {' '.join(args[:2])}: {output!r}")

    async def ensure_environment(self):
        if self._environment_checked:
            return
        active_env = (await self._run("client", "active-env")).strip()
        if active_env != self.network:
            raise ConfigurationError(
                f"Sui CLI active environment is {active_env!r}, expected {self.network!r}",
                hints=[f"Run: sui client switch --env {self.network}"],
            )
        active_address = (await self._run("client", "active-address")).strip()
        if active_address.lower() != self.admin_address.lower():
            raise ConfigurationError(
                f"Sui CLI active address is {active_address}, expected {self.admin_address}",
                hints=[f"Run: sui client switch --address {self.admin_address}"],
            )
        self._environment_checked = True

    async def _submit(self, *args: str) -> TransactionResult:
        await self.ensure_environment()
        response = await self._run_json(*args, "--gas-budget", str(self.gas_budget))
        return to_transaction_result(response)

    def _object(self, name: str) -> str:
        object_id = self.objects.get(name)
        if not object_id:
            raise ConfigurationError(f"{name} not found in deployment Objects")
        return object_id

    def _target(self, action: str):
        if not self.package_id:
            raise ConfigurationError("No package id configured for the bridge client")
        module, function = MOVE_CALLS[action]
        return module, function

    async def _call(
        self, action: str, args: List[Any], type_args: Sequence[str] = ()
    ) -> TransactionResult:
        module, function = self._target(action)
        command = [
            "client",
            "call",
            "--package",
            self.package_id,
            "--module",
            module,
            "--function",
            function,
        ]
        if type_args:
            command += ["--type-args", *type_args]
        if args:
            command += ["--args", *(format_arg(arg) for arg in args)]
        return await self._submit(*command)

    async def publish(self, build: PackageBuild) -> TransactionResult:
        return await self._submit(
            "client",
            "publish",
            str(build.package_path),
            "--with-unpublished-dependencies",
        )

    async def upgrade_cap_package(self, upgrade_cap: str) -> str:
        response = await self._run_json("client", "object", upgrade_cap)
        data = response.get("data", response)
        fields = (data.get("content") or {}).get("fields") or {}
        package = fields.get("package")
        if not package:
            raise SuiCommandError(f"Object {upgrade_cap} is not an UpgradeCap")
        return package

    async def upgrade(
        self, package_id: str, upgrade_cap: str, package_path: Path
    ) -> TransactionResult:
        await self.ensure_environment()
        governed = await self.upgrade_cap_package(upgrade_cap)
        if normalize_type(governed) != normalize_type(package_id):
            raise ConfigurationError(
                f"UpgradeCap {upgrade_cap} governs package {governed}, not {package_id}",
                hints=["Check Package and Objects.UpgradeCap of the deployment record."],
            )
        logger.debug("Upgrading %s from %s", package_id, package_path)
        return await self._submit(
            "client",
            "upgrade",
            "--upgrade-capability",
            upgrade_cap,
            str(package_path),
            "--with-unpublished-dependencies",
        )

    async def initialize_bridge(
        self, public_keys: List[bytes], quorum: int, bridge_safe: str, bridge_cap: str
    ) -> TransactionResult:
        return await self._call(
            "initialize_bridge", [public_keys, quorum, bridge_safe, bridge_cap]
        )

    async def initialize_safe(self, from_coin_cap: str) -> TransactionResult:
        return await self._call("initialize_safe", [from_coin_cap])

    async def find_coin(self, owner: str, token_type: str, amount: int) -> str:
        entries = await self._run_json("client", "objects", owner)
        for entry in entries:
            balance = coin_balance(entry, token_type)
            if balance is not None and balance >= amount:
                return entry.get("data", entry)["objectId"]
        raise ConfigurationError(
            f"No Coin<{token_type}> owned by {owner} holds at least {amount}",
            hints=["Merge coins or fund the admin account before initializing supply."],
        )

    async def init_supply(self, token_type: str, amount: int, sender: str) -> TransactionResult:
        module, function = self._target("init_supply")
        if normalize_type(token_type) == SUI_COIN_TYPE:
            source = "gas"
        else:
            source = "@" + await self.find_coin(sender, token_type, amount)
        return await self._submit(
            "client",
            "ptb",
            "--split-coins",
            source,
            f"[{amount}]",
            "--assign",
            "supply",
            "--move-call",
            f"{self.package_id}::{module}::{function}",
            f"<{token_type}>",
            "@" + self._object("BridgeSafe"),
            "@" + self._object("BridgeCap"),
            "supply.0",
        )

    async def whitelist_token(
        self,
        token_type: str,
        min_amount: int,
        max_amount: int,
        is_native: bool,
        is_locked: bool,
    ) -> TransactionResult:
        return await self._call(
            "whitelist_token",
            [
                self._object("BridgeSafe"),
                self._object("BridgeCap"),
                min_amount,
                max_amount,
                is_native,
                is_locked,
            ],
            type_args=[token_type],
        )

    async def remove_token_from_whitelist(self, token_type: str) -> TransactionResult:
        return await self._call(
            "remove_token_from_whitelist",
            [self._object("BridgeSafe"), self._object("BridgeCap")],
            type_args=[token_type],
        )

    async def set_batch_size(self, batch_size: int) -> TransactionResult:
        return await self._call(
            "set_batch_size",
            [self._object("BridgeSafe"), self._object("BridgeCap"), batch_size],
        )

    async def set_batch_timeout(self, timeout_ms: int) -> TransactionResult:
        return await self._call(
            "set_batch_timeout",
            [self._object("BridgeSafe"), self._object("BridgeCap"), timeout_ms],
        )

    async def set_quorum(self, quorum: int) -> TransactionResult:
        return await self._call(
            "set_quorum", [self._object("Bridge"), self._object("BridgeCap"), quorum]
        )

    async def unpause_bridge(self) -> TransactionResult:
        return await self._call(
            "unpause_bridge", [self._object("Bridge"), self._object("BridgeCap")]
        )
