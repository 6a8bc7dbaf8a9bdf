"""Formatting of contract ABI, source code, creation and verification queries."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from scanfmt.fmt import ApiError, check_api_status

_SOURCE_FIELDS = {
    "source_code": "SourceCode",
    "abi": "ABI",
    "contract_name": "ContractName",
    "compiler_version": "CompilerVersion",
    "optimization_used": "OptimizationUsed",
    "runs": "Runs",
    "constructor_arguments": "ConstructorArguments",
    "evm_version": "EVMVersion",
    "library": "Library",
    "license_type": "LicenseType",
    "proxy": "Proxy",
    "implementation": "Implementation",
    "swarm_source": "SwarmSource",
}

_CREATION_FIELDS = {
    "contract_address": "contractAddress",
    "contract_creator": "contractCreator",
    "tx_hash": "txHash",
}

_OPTIONAL_CREATION_FIELDS = {
    "block_number": "blockNumber",
    "timestamp": "timestamp",
}


@dataclass(frozen=True)
class SourceCodeEntry:
    """Verified source code and compiler settings of a contract."""

    source_code: str
    abi: str
    contract_name: str
    compiler_version: str
    optimization_used: str
    runs: str
    constructor_arguments: str
    evm_version: str
    library: str
    license_type: str
    proxy: str
    implementation: str
    swarm_source: str


@dataclass(frozen=True)
class ContractCreationEntry:
    """Creator and creation transaction of a contract."""

    contract_address: str
    contract_creator: str
    tx_hash: str
    block_number: str | None = None
    timestamp: str | None = None


def _object(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {data!r}")
    return data


def _list(data: Any) -> list:
    if not isinstance(data, list):
        raise ValueError(f"expected a list, got {data!r}")
    return data


def _required_strings(data: dict, mapping: dict[str, str]) -> dict[str, str]:
    fields = {}
    for attr, key in mapping.items():
        value = data.get(key)
        if not isinstance(value, str):
            raise ValueError(f"field `{key}` must be a string")
        fields[attr] = value
    return fields


def _parse_source_entry(data: Any) -> SourceCodeEntry:
    return SourceCodeEntry(**_required_strings(_object(data), _SOURCE_FIELDS))


def _parse_creation_entry(data: Any) -> ContractCreationEntry:
    data = _object(data)
    fields: dict[str, str | None] = dict(_required_strings(data, _CREATION_FIELDS))
    for attr, key in _OPTIONAL_CREATION_FIELDS.items():
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"field `{key}` must be a string or null")
        fields[attr] = value
    return ContractCreationEntry(**fields)


def format_abi(client, address: str) -> str:
    """Fetch a verified contract's ABI and render it as indented JSON."""
    response = client.call_api("contract", "getabi", [("address", address)])
    check_api_status(response)

    abi_raw = response.get("result")
    if not isinstance(abi_raw, str):
        raise ApiError(f"Failed to parse ABI: expected a string, got {abi_raw!r}")
    try:
        parsed = json.loads(abi_raw)
    except ValueError as exc:
        raise ApiError(f"Failed to parse ABI JSON: {exc}") from exc
    pretty = json.dumps(parsed, indent=2, sort_keys=True, ensure_ascii=False)
    return f"{pretty}\n"


def _standard_json_sources(source_code: str) -> str:
    """Render a Standard JSON Input payload wrapped in an extra pair of braces."""
    inner = source_code[1:-1]
    try:
        parsed = json.loads(inner)
    except ValueError as exc:
        raise ApiError(f"Failed to parse source JSON: {exc}") from exc
    sources = parsed.get("sources") if isinstance(parsed, dict) else None
    if not isinstance(sources, dict):
        raise ApiError("Missing 'sources' in source JSON")

    parts = []
    for path, obj in sorted(sources.items()):
        parts.append(f"// File: {path}\n\n")
        content = obj.get("content") if isinstance(obj, dict) else None
        if isinstance(content, str):
            parts.append(f"{content}\n\n")
    return "".join(parts)


def format_source_code(client, address: str) -> str:
    """Fetch and render a verified contract's metadata and source files."""
    response = client.call_api("contract", "getsourcecode", [("address", address)])
    check_api_status(response)
    try:
        entries = [_parse_source_entry(item) for item in _list(response.get("result"))]
    except ValueError as exc:
        raise ApiError(f"Failed to parse source code response: {exc}") from exc
    if not entries:
        raise ApiError("No source code data returned")
    entry = entries[0]

    chain_id = "N/A" if client.chain_id is None else str(client.chain_id)
    lines = [
        f"// Contract Name  : {entry.contract_name}",
        f"// Chain ID       : {chain_id}",
        f"// Compiler       : {entry.compiler_version}",
        f"// EVM Version    : {entry.evm_version}",
        f"// Optimization   : {entry.optimization_used} (runs: {entry.runs})",
        f"// License        : {entry.license_type}",
        f"// Proxy          : {entry.proxy}",
    ]
    if entry.implementation:
        lines.append(f"// Implementation : {entry.implementation}")
    header = "".join(f"{line}\n" for line in lines) + "\n"

    if entry.source_code.startswith("{{"):
        body = _standard_json_sources(entry.source_code)
    else:
        body = f"{entry.source_code}\n"
    return header + body


def _format_creation(entry: ContractCreationEntry) -> str:
    lines = [
        f"Contract : {entry.contract_address}",
        f"Creator  : {entry.contract_creator}",
        f"Tx Hash  : {entry.tx_hash}",
    ]
    if entry.block_number is not None:
        lines.append(f"Block    : {entry.block_number}")
    if entry.timestamp is not None:
        lines.append(f"Time     : {entry.timestamp}")
    return "".join(f"{line}\n" for line in lines)


def format_contract_creation(client, addresses) -> str:
    """Fetch and render creator and creation transaction for each address."""
    joined = ",".join(addresses)
    response = client.call_api(
        "contract", "getcontractcreation", [("contractaddresses", joined)]
    )
    check_api_status(response)
    try:
        entries = [
            _parse_creation_entry(item) for item in _list(response.get("result"))
        ]
    except ValueError as exc:
        raise ApiError(f"Failed to parse contract creation response: {exc}") from exc
    return "\n".join(_format_creation(entry) for entry in entries)


def _format_status(client, action: str, guid: str) -> str:
    response = client.call_api("contract", action, [("guid", guid)])
    check_api_status(response)
    result = response.get("result")
    if not isinstance(result, str):
        result = "Unknown"
    return f"Status : {result}\n"


def format_verify_status(client, guid: str) -> str:
    """Fetch and render the status of a source verification request."""
    return _format_status(client, "checkverifystatus", guid)


def format_proxy_verification_status(client, guid: str) -> str:
    """Fetch and render the status of a proxy verification request."""
    return _format_status(client, "checkproxyverification", guid)