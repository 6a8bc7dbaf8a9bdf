"""Formatting of gas tracker responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from scanfmt.fmt import ApiError, check_api_status

_ORACLE_FIELDS = {
    "last_block": "LastBlock",
    "safe_gas_price": "SafeGasPrice",
    "propose_gas_price": "ProposeGasPrice",
    "fast_gas_price": "FastGasPrice",
    "suggest_base_fee": "suggestBaseFee",
    "gas_used_ratio": "gasUsedRatio",
}


@dataclass(frozen=True)
class GasOracle:
    """Gas price suggestions for the latest block, in Gwei."""

    last_block: str
    safe_gas_price: str
    propose_gas_price: str
    fast_gas_price: str
    suggest_base_fee: str
    gas_used_ratio: str


def _parse_oracle(data: Any) -> GasOracle:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {data!r}")
    fields = {}
    for attr, key in _ORACLE_FIELDS.items():
        value = data.get(key)
        if not isinstance(value, str):
            raise ValueError(f"field `{key}` must be a string")
        fields[attr] = value
    return GasOracle(**fields)


def format_gas_oracle(client) -> str:
    """Fetch and render the current gas oracle."""
    response = client.call_api("gastracker", "gasoracle", [])
    check_api_status(response)
    try:
        oracle = _parse_oracle(response.get("result"))
    except ValueError as exc:
        raise ApiError(f"Failed to parse gas oracle response: {exc}") from exc

    return (
        f"Block      : {oracle.last_block}\n"
        f"Safe       : {oracle.safe_gas_price} Gwei\n"
        f"Standard   : {oracle.propose_gas_price} Gwei\n"
        f"Fast       : {oracle.fast_gas_price} Gwei\n"
        f"Base Fee   : {oracle.suggest_base_fee} Gwei\n"
    )


def format_gas_estimate(client, gasprice: str) -> str:
    """Fetch and render the estimated confirmation time for a gas price in wei."""
    response = client.call_api("gastracker", "gasestimate", [("gasprice", gasprice)])
    check_api_status(response)
    seconds = response.get("result")
    if not isinstance(seconds, str):
        raise ApiError("Expected string result for gas estimate")
    return f"Estimated confirmation : {seconds}s\n"