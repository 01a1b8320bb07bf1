"""
Deployment ledger (deployment.json) bookkeeping.

The ledger maps a network name to {"deployments": [record, ...]}. Every script reads the
whole file, mutates one record in memory and writes the whole file back. There is no
locking: two scripts running against the same file at once can lose an update.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from move.scripts.errors import DeploymentNotFoundError, TokenNotWhitelistedError

Ledger = Dict[str, Any]
DeploymentRecord = Dict[str, Any]


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def read_ledger(path: Path) -> Ledger:
    path = Path(path)
    if not path.exists():
        return {}
    return json.loads(path.read_text(encoding="utf-8"))


def write_ledger(ledger: Ledger, path: Path):
    Path(path).write_text(json.dumps(ledger, indent=2) + "\n", encoding="utf-8")


def get_deployments(ledger: Ledger, network: str) -> List[DeploymentRecord]:
    return (ledger.get(network) or {}).get("deployments") or []


def next_deployment_id(deployments: List[DeploymentRecord]) -> int:
    if not deployments:
        return 1
    return max(int(deployment["id"]) for deployment in deployments) + 1


def find_deployment(ledger: Ledger, network: str, deployment_id: int) -> DeploymentRecord:
    deployments = get_deployments(ledger, network)
    if not deployments:
        raise DeploymentNotFoundError(f"No deployments found for network {network}")
    for deployment in deployments:
        if deployment.get("id") == deployment_id:
            return deployment
    raise DeploymentNotFoundError(f"Deployment #{deployment_id} not found in deployment.json")


def new_deployment_record(
    deployment_id: int,
    package: Optional[str],
    objects: Dict[str, str],
    admin: str,
    digest: str,
) -> DeploymentRecord:
    record: DeploymentRecord = {
        "id": deployment_id,
        "createdAt": utc_timestamp(),
        "active": False,
    }
    # An absent package is left out of the file rather than written as null.
    if package:
        record["Package"] = package
    record.update(
        {
            "Objects": dict(objects),
            "Operators": {"Admin": admin},
            "digest": digest,
            "whitelistedTokens": {},
        }
    )
    return record


def add_deployment(
    path: Path,
    network: str,
    package: Optional[str],
    objects: Dict[str, str],
    admin: str,
    digest: str,
) -> DeploymentRecord:
    ledger = read_ledger(path)
    network_entry = ledger.setdefault(network, {})
    deployments = network_entry.setdefault("deployments", [])
    record = new_deployment_record(
        deployment_id=next_deployment_id(deployments),
        package=package,
        objects=objects,
        admin=admin,
        digest=digest,
    )
    deployments.append(record)
    write_ledger(ledger, path)
    return record


def update_deployment(
    path: Path,
    network: str,
    deployment_id: int,
    mutate: Callable[[DeploymentRecord], Any],
) -> Any:
    """
    Locates the record with the given id and applies mutate to it, then rewrites the file.
    A missing record raises before anything is written. Returns whatever mutate returns.
    """
    ledger = read_ledger(path)
    record = find_deployment(ledger, network, deployment_id)
    result = mutate(record)
    write_ledger(ledger, path)
    return result


def merge_objects(record: DeploymentRecord, objects: Dict[str, str]):
    record.setdefault("Objects", {}).update(objects)


def set_whitelisted_token(
    record: DeploymentRecord,
    token_type: str,
    min_amount: str,
    max_amount: str,
    is_native: bool,
    is_locked: bool,
):
    tokens = record.setdefault("whitelistedTokens", {})
    previous = tokens.get(token_type) or {}
    tokens[token_type] = {
        "minAmount": str(min_amount),
        "maxAmount": str(max_amount),
        "isNative": is_native,
        "isLocked": is_locked,
        "initializedSupply": previous.get("initializedSupply") or "0",
    }


def remove_whitelisted_token(record: DeploymentRecord, token_type: str) -> bool:
    tokens = record.setdefault("whitelistedTokens", {})
    return tokens.pop(token_type, None) is not None


def add_initialized_supply(record: DeploymentRecord, token_type: str, amount) -> int:
    tokens = record.get("whitelistedTokens") or {}
    if token_type not in tokens:
        raise TokenNotWhitelistedError(
            f"Token {token_type} is not whitelisted yet.",
            hints=[
                "You must whitelist the token before initializing supply.",
                "To whitelist: python -m move.scripts.whitelist_token",
            ],
        )
    # Python ints are unbounded, so large token amounts keep full precision.
    total = int(tokens[token_type].get("initializedSupply") or "0") + int(amount)
    tokens[token_type]["initializedSupply"] = str(total)
    return total


def record_upgrade(record: DeploymentRecord, new_package: str, digest: str) -> Optional[str]:
    previous_package = record.get("Package")
    record["Package"] = new_package
    record["lastUpgrade"] = {
        "previousPackage": previous_package,
        "upgradedAt": utc_timestamp(),
        "digest": digest,
    }
    return previous_package


def set_active(deployments: List[DeploymentRecord], deployment_id: int):
    for deployment in deployments:
        deployment["active"] = deployment.get("id") == deployment_id
