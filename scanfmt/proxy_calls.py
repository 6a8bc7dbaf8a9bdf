"""Formatting of JSON-RPC proxy responses for transactions, calls and gas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from scanfmt.fmt import ApiError, hex_to_int
from scanfmt.proxy import check_proxy_response, hex_display, hex_or_na

_TRANSACTION_FIELDS = {
    "hash": "hash",
    "block_number": "blockNumber",
    "from_": "from",
    "to": "to",
    "value": "value",
    "gas": "gas",
    "gas_price": "gasPrice",
    "nonce": "nonce",
}

_RECEIPT_FIELDS = {
    "transaction_hash": "transactionHash",
    "block_number": "blockNumber",
    "from_": "from",
    "to": "to",
    "status": "status",
    "gas_used": "gasUsed",
}


@dataclass(frozen=True)
class ProxyTransaction:
    """A transaction as returned by the JSON-RPC proxy; numbers are hex strings."""

    hash: str | None = None
    block_number: str | None = None
    from_: str | None = None
    to: str | None = None
    value: str | None = None
    gas: str | None = None
    gas_price: str | None = None
    nonce: str | None = None


@dataclass(frozen=True)
class ProxyReceipt:
    """A transaction receipt as returned by the JSON-RPC proxy."""

    transaction_hash: str | None = None
    block_number: str | None = None
    from_: str | None = None
    to: str | None = None
    status: str | None = None
    gas_used: str | None = None
    logs: Any = None


def _result(response: Any) -> Any:
    return response.get("result") if isinstance(response, dict) else None


def _optional_strings(data: Any, mapping: dict[str, str]) -> dict[str, str | None]:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {data!r}")
    fields: dict[str, str | None] = {}
    for attr, key in mapping.items():
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"field `{key}` must be a string or null")
        fields[attr] = value
    return fields


def _parse_transaction(data: Any) -> ProxyTransaction:
    return ProxyTransaction(**_optional_strings(data, _TRANSACTION_FIELDS))


def _parse_receipt(data: Any) -> ProxyReceipt:
    fields = _optional_strings(data, _RECEIPT_FIELDS)
    return ProxyReceipt(logs=data.get("logs"), **fields)


def _string_result(response: Any, default: str) -> str:
    result = _result(response)
    return result if isinstance(result, str) else default


def format_transaction(tx: ProxyTransaction) -> str:
    """Render a proxy transaction, converting hex quantities to decimal."""
    lines = [
        f"Hash      : {hex_or_na(tx.hash)}",
        f"Block     : {hex_display(tx.block_number)}",
        f"From      : {hex_or_na(tx.from_)}",
        f"To        : {hex_or_na(tx.to)}",
        f"Value     : {hex_display(tx.value)} wei",
        f"Gas       : {hex_display(tx.gas)}",
        f"Gas Price : {hex_display(tx.gas_price)} wei",
        f"Nonce     : {hex_display(tx.nonce)}",
    ]
    return "".join(f"{line}\n" for line in lines)


def _fetch_transaction(client, action: str, params) -> str:
    response = client.call_api("proxy", action, params)
    check_proxy_response(response)
    result = _result(response)
    if result is None:
        return "Transaction not found\n"
    try:
        tx = _parse_transaction(result)
    except ValueError as exc:
        raise ApiError(f"Failed to parse transaction response: {exc}") from exc
    return format_transaction(tx)


def format_eth_get_transaction_by_hash(client, params) -> str:
    """Fetch and render a transaction by its hash."""
    return _fetch_transaction(client, "eth_getTransactionByHash", params)


def format_eth_get_transaction_by_block_number_and_index(client, params) -> str:
    """Fetch and render a transaction by block and position in the block."""
    return _fetch_transaction(
        client, "eth_getTransactionByBlockNumberAndIndex", params
    )


def format_eth_get_transaction_count(client, params) -> str:
    """Fetch and render the number of transactions sent from an address."""
    response = client.call_api("proxy", "eth_getTransactionCount", params)
    check_proxy_response(response)
    return f"Transaction Count: {hex_display(_string_result(response, '0x0'))}\n"


def format_eth_get_transaction_receipt(client, params) -> str:
    """Fetch and render the receipt of a transaction."""
    response = client.call_api("proxy", "eth_getTransactionReceipt", params)
    check_proxy_response(response)
    result = _result(response)
    if result is None:
        return "Receipt not found\n"
    try:
        receipt = _parse_receipt(result)
    except ValueError as exc:
        raise ApiError(f"Failed to parse receipt response: {exc}") from exc

    if receipt.status is None:
        status_label = "N/A"
    else:
        status_label = "Success" if receipt.status == "0x1" else "Failed"
    log_count = len(receipt.logs) if isinstance(receipt.logs, list) else 0
    lines = [
        f"Tx Hash   : {hex_or_na(receipt.transaction_hash)}",
        f"Block     : {hex_display(receipt.block_number)}",
        f"From      : {hex_or_na(receipt.from_)}",
        f"To        : {hex_or_na(receipt.to)}",
        f"Status    : {status_label}",
        f"Gas Used  : {hex_display(receipt.gas_used)}",
        f"Log Count : {log_count}",
    ]
    return "".join(f"{line}\n" for line in lines)


def format_eth_call(client, params) -> str:
    """Execute a read-only call and render the raw return data."""
    response = client.call_api("proxy", "eth_call", params)
    check_proxy_response(response)
    return f"Result: {_string_result(response, '0x')}\n"


def format_eth_get_code(client, params) -> str:
    """Fetch and render the bytecode stored at an address."""
    response = client.call_api("proxy", "eth_getCode", params)
    check_proxy_response(response)
    return f"Code: {_string_result(response, '0x')}\n"


def format_eth_get_storage_at(client, params) -> str:
    """Fetch and render the value of a storage slot."""
    response = client.call_api("proxy", "eth_getStorageAt", params)
    check_proxy_response(response)
    return f"Storage: {_string_result(response, '0x')}\n"


def format_eth_gas_price(client) -> str:
    """Fetch and render the current gas price in wei and Gwei."""
    response = client.call_api("proxy", "eth_gasPrice", [])
    check_proxy_response(response)
    wei = hex_to_int(_string_result(response, "0x0")) or 0
    gwei = wei / 1_000_000_000
    return f"Gas Price: {wei} wei ({gwei:.2f} Gwei)\n"


def format_eth_estimate_gas(client, params) -> str:
    """Estimate and render the gas needed for a call."""
    response = client.call_api("proxy", "eth_estimateGas", params)
    check_proxy_response(response)
    return f"Estimated Gas: {hex_display(_string_result(response, '0x0'))}\n"