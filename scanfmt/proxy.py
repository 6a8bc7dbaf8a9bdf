"""Formatting of JSON-RPC proxy responses for blocks and chain head queries."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from scanfmt.fmt import ApiError, decimal_timestamp, hex_to_int

_BLOCK_FIELDS = {
    "number": "number",
    "hash": "hash",
    "timestamp": "timestamp",
    "miner": "miner",
    "gas_used": "gasUsed",
    "gas_limit": "gasLimit",
    "base_fee_per_gas": "baseFeePerGas",
}


@dataclass(frozen=True)
class ProxyBlock:
    """A block (or uncle) as returned by the JSON-RPC proxy; numbers are hex strings."""

    number: str | None = None
    hash: str | None = None
    timestamp: str | None = None
    miner: str | None = None
    gas_used: str | None = None
    gas_limit: str | None = None
    base_fee_per_gas: str | None = None
    transactions: Any = None


def _field(response: Any, key: str) -> Any:
    return response.get(key) if isinstance(response, dict) else None


def check_proxy_response(response: Any) -> None:
    """Raise ApiError when a proxy response carries an API failure or an RPC error."""
    if _field(response, "status") == "0":
        message = _field(response, "result")
        if not isinstance(message, str):
            message = "Unknown API error"
        raise ApiError(message)
    if isinstance(response, dict) and "error" in response:
        message = _field(response["error"], "message")
        if not isinstance(message, str):
            message = "Unknown proxy error"
        raise ApiError(message)


def raw_proxy_result(response: Any) -> str:
    """Return the ``result`` of a proxy response as compact JSON text."""
    check_proxy_response(response)
    try:
        return json.dumps(
            _field(response, "result"),
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False,
        )
    except (TypeError, ValueError) as exc:
        raise ApiError(f"Failed to serialize result: {exc}") from exc


def print_raw_proxy_result(response: Any) -> None:
    """Print the ``result`` of a proxy response as compact JSON."""
    print(raw_proxy_result(response))


def hex_display(value: str | None) -> str:
    """Render a hex quantity in decimal; unparsable text as is, None as ``N/A``."""
    if value is None:
        return "N/A"
    number = hex_to_int(value)
    return value if number is None else str(number)


def hex_or_na(value: str | None) -> str:
    """Return the value, or ``N/A`` when absent."""
    return "N/A" if value is None else value


def _parse_block(data: Any) -> ProxyBlock:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {data!r}")
    fields: dict[str, Any] = {}
    for attr, key in _BLOCK_FIELDS.items():
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"field `{key}` must be a string or null")
        fields[attr] = value
    return ProxyBlock(transactions=data.get("transactions"), **fields)


def _quantity_result(response: Any) -> str:
    result = _field(response, "result")
    return hex_display(result if isinstance(result, str) else "0x0")


def _timestamp(block: ProxyBlock) -> str:
    return "N/A" if block.timestamp is None else decimal_timestamp(block.timestamp)


def format_eth_block_number(client) -> str:
    """Fetch and render the number of the most recent block."""
    response = client.call_api("proxy", "eth_blockNumber", [])
    check_proxy_response(response)
    return f"Block Number: {_quantity_result(response)}\n"


def format_eth_get_block_by_number(client, params) -> str:
    """Fetch and render a block by number or tag."""
    response = client.call_api("proxy", "eth_getBlockByNumber", params)
    check_proxy_response(response)
    result = _field(response, "result")
    if result is None:
        return "Block not found\n"
    try:
        block = _parse_block(result)
    except ValueError as exc:
        raise ApiError(f"Failed to parse block response: {exc}") from exc

    tx_count = len(block.transactions) if isinstance(block.transactions, list) else 0
    lines = [
        f"Block        : {hex_display(block.number)}",
        f"Hash         : {hex_or_na(block.hash)}",
        f"Timestamp    : {_timestamp(block)}",
        f"Miner        : {hex_or_na(block.miner)}",
        f"Gas Used     : {hex_display(block.gas_used)}",
        f"Gas Limit    : {hex_display(block.gas_limit)}",
        f"Base Fee     : {hex_display(block.base_fee_per_gas)} wei",
        f"Transactions : {tx_count}",
    ]
    return "".join(f"{line}\n" for line in lines)


def format_eth_get_block_transaction_count_by_number(client, params) -> str:
    """Fetch and render the number of transactions in a block."""
    response = client.call_api(
        "proxy", "eth_getBlockTransactionCountByNumber", params
    )
    check_proxy_response(response)
    return f"Transaction Count: {_quantity_result(response)}\n"


def format_eth_get_uncle_by_block_number_and_index(client, params) -> str:
    """Fetch and render an uncle of a block by its index."""
    response = client.call_api("proxy", "eth_getUncleByBlockNumberAndIndex", params)
    check_proxy_response(response)
    result = _field(response, "result")
    if result is None:
        return "Uncle not found\n"
    try:
        block = _parse_block(result)
    except ValueError as exc:
        raise ApiError(f"Failed to parse uncle response: {exc}") from exc

    lines = [
        f"Block     : {hex_display(block.number)}",
        f"Hash      : {hex_or_na(block.hash)}",
        f"Timestamp : {_timestamp(block)}",
        f"Miner     : {hex_or_na(block.miner)}",
        f"Gas Used  : {hex_display(block.gas_used)}",
        f"Gas Limit : {hex_display(block.gas_limit)}",
    ]
    return "".join(f"{line}\n" for line in lines)