"""Formatting of the supported-chain list."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from scanfmt.fmt import ApiError


@dataclass(frozen=True)
class ChainEntry:
    """One chain known to the explorer API."""

    chainname: str
    chainid: str
    blockexplorer: str
    apiurl: str
    status: int


def status_label(status: int) -> str:
    """Human label for a chain status code."""
    return {1: "OK", 2: "Degraded"}.get(status, "Offline")


def _parse_entry(data: Any) -> ChainEntry:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {data!r}")
    fields = {}
    for name in ("chainname", "chainid", "blockexplorer", "apiurl"):
        value = data.get(name)
        if not isinstance(value, str):
            raise ValueError(f"field `{name}` must be a string")
        fields[name] = value
    status = data.get("status")
    if isinstance(status, bool) or not isinstance(status, int) or not 0 <= status <= 255:
        raise ValueError("field `status` must be an integer from 0 to 255")
    return ChainEntry(status=status, **fields)


def _dump(response: Any) -> str:
    try:
        return json.dumps(response, separators=(",", ":"))
    except (TypeError, ValueError):
        return "unparseable"


def format_chainlist(response: Any) -> str:
    """Render a chain-list response as a fixed-width table."""
    result = response.get("result") if isinstance(response, dict) else None
    if not isinstance(result, list):
        raise ApiError(f"Unexpected chainlist response: {_dump(response)}")
    try:
        entries = [_parse_entry(item) for item in result]
    except ValueError as exc:
        raise ApiError(f"Failed to parse chainlist response: {exc}") from exc

    lines = [f"{'Chain ID':<10}{'Name':<30}{'Status':<10}Explorer\n"]
    lines.extend(
        f"{entry.chainid:<10}{entry.chainname:<30}"
        f"{status_label(entry.status):<10}{entry.blockexplorer}\n"
        for entry in entries
    )
    return "".join(lines)