"""Formatting of event log queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from scanfmt.fmt import ApiError, check_api_status, format_timestamp, hex_to_int

_STRING_FIELDS = {
    "address": "address",
    "data": "data",
    "block_number": "blockNumber",
    "timestamp": "timeStamp",
    "gas_price": "gasPrice",
    "gas_used": "gasUsed",
    "log_index": "logIndex",
    "transaction_hash": "transactionHash",
    "transaction_index": "transactionIndex",
}


@dataclass(frozen=True)
class LogEntry:
    """One event log record; numeric fields are hex strings."""

    address: str
    topics: list[str]
    data: str
    block_number: str
    timestamp: str
    gas_price: str
    gas_used: str
    log_index: str
    transaction_hash: str
    transaction_index: str


def _parse_entry(data: Any) -> LogEntry:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {data!r}")
    fields = {}
    for attr, key in _STRING_FIELDS.items():
        value = data.get(key)
        if not isinstance(value, str):
            raise ValueError(f"field `{key}` must be a string")
        fields[attr] = value
    topics = data.get("topics")
    if not isinstance(topics, list) or not all(isinstance(t, str) for t in topics):
        raise ValueError("field `topics` must be a list of strings")
    return LogEntry(topics=topics, **fields)


def _number(value: str) -> str:
    number = hex_to_int(value)
    return value if number is None else str(number)


def _format_entry(entry: LogEntry) -> str:
    lines = [
        f"Tx Hash  : {entry.transaction_hash}",
        f"Block    : {_number(entry.block_number)}",
        f"Time     : {format_timestamp(entry.timestamp)}",
        f"Address  : {entry.address}",
    ]
    if entry.topics:
        lines.append("Topics   :")
        lines.extend(f"  [{index}] {topic}" for index, topic in enumerate(entry.topics))
    lines += [
        f"Data     : {entry.data}",
        f"Gas Price: {_number(entry.gas_price)}",
        f"Gas Used : {_number(entry.gas_used)}",
        f"Log Index: {_number(entry.log_index)}",
    ]
    return "".join(f"{line}\n" for line in lines)


def format_logs(client, params) -> str:
    """Fetch event logs matching the filter parameters and render them."""
    response = client.call_api("logs", "getLogs", params)
    check_api_status(response)
    result = response.get("result")
    try:
        if not isinstance(result, list):
            raise ValueError(f"expected a list, got {result!r}")
        entries = [_parse_entry(item) for item in result]
    except ValueError as exc:
        raise ApiError(f"Failed to parse logs response: {exc}") from exc
    return "\n".join(_format_entry(entry) for entry in entries)