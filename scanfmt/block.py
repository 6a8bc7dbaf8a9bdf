"""Formatting of block reward, countdown and block-by-time queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from scanfmt.fmt import ApiError, check_api_status, decimal_timestamp, param_value


@dataclass(frozen=True)
class Uncle:
    """An uncle block included in a mined block."""

    miner: str
    block_reward: str
    uncle_position: str


@dataclass(frozen=True)
class BlockReward:
    """Mining reward details for one block."""

    block_number: str
    timestamp: str
    block_miner: str
    block_reward: str
    uncles: list[Uncle]
    uncle_inclusion_reward: str


@dataclass(frozen=True)
class BlockCountdown:
    """Estimated time remaining until a future block."""

    current_block: str
    countdown_block: str
    remaining_block: str
    estimate_time_in_sec: str


def _object(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {data!r}")
    return data


def _string(data: dict, *keys: str) -> str:
    """Return the first of ``keys`` present in ``data``; it must be a string."""
    for key in keys:
        if key in data:
            value = data[key]
            if not isinstance(value, str):
                raise ValueError(f"field `{key}` must be a string")
            return value
    raise ValueError(f"missing field `{keys[0]}`")


def _parse_uncle(data: Any) -> Uncle:
    data = _object(data)
    return Uncle(
        miner=_string(data, "miner"),
        block_reward=_string(data, "blockReward", "blockreward"),
        uncle_position=_string(data, "unclePosition"),
    )


def _parse_reward(data: Any) -> BlockReward:
    data = _object(data)
    uncles = data.get("uncles")
    if not isinstance(uncles, list):
        raise ValueError("field `uncles` must be a list")
    return BlockReward(
        block_number=_string(data, "blockNumber"),
        timestamp=_string(data, "timestamp", "timeStamp"),
        block_miner=_string(data, "blockMiner"),
        block_reward=_string(data, "blockReward"),
        uncles=[_parse_uncle(item) for item in uncles],
        uncle_inclusion_reward=_string(data, "uncleInclusionReward"),
    )


def _parse_countdown(data: Any) -> BlockCountdown:
    data = _object(data)
    return BlockCountdown(
        current_block=_string(data, "CurrentBlock"),
        countdown_block=_string(data, "CountdownBlock"),
        remaining_block=_string(data, "RemainingBlock"),
        estimate_time_in_sec=_string(data, "EstimateTimeInSec"),
    )


def format_getblockreward(client, params) -> str:
    """Fetch and render the mining reward of a block."""
    response = client.call_api("block", "getblockreward", params)
    check_api_status(response)
    try:
        reward = _parse_reward(response.get("result"))
    except ValueError as exc:
        raise ApiError(f"Failed to parse getblockreward response: {exc}") from exc

    lines = [
        f"Block        : {reward.block_number}",
        f"Time         : {decimal_timestamp(reward.timestamp)}",
        f"Miner        : {reward.block_miner}",
        f"Reward       : {reward.block_reward}",
        f"Uncle Reward : {reward.uncle_inclusion_reward}",
    ]
    for number, uncle in enumerate(reward.uncles, start=1):
        lines += [
            f"  Uncle {number}:",
            f"    Miner    : {uncle.miner}",
            f"    Position : {uncle.uncle_position}",
            f"    Reward   : {uncle.block_reward}",
        ]
    return "".join(f"{line}\n" for line in lines)


def format_getblockcountdown(client, params) -> str:
    """Fetch and render the countdown to a future block."""
    response = client.call_api("block", "getblockcountdown", params)
    check_api_status(response)
    try:
        countdown = _parse_countdown(response.get("result"))
    except ValueError as exc:
        raise ApiError(f"Failed to parse getblockcountdown response: {exc}") from exc

    return (
        f"Current Block : {countdown.current_block}\n"
        f"Target Block  : {countdown.countdown_block}\n"
        f"Remaining     : {countdown.remaining_block} blocks\n"
        f"Est. Time     : {countdown.estimate_time_in_sec}s\n"
    )


def format_getblocknobytime(client, params) -> str:
    """Fetch and render the block number closest to a timestamp."""
    params = list(params)
    response = client.call_api("block", "getblocknobytime", params)
    check_api_status(response)

    result = response.get("result")
    block = result if isinstance(result, str) else "0"
    timestamp = param_value(params, "timestamp", "unknown")
    closest = param_value(params, "closest", "before")
    return (
        f"Timestamp : {timestamp}\n"
        f"Closest   : {closest}\n"
        f"Block     : {block}\n"
    )