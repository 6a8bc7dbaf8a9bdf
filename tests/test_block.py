import json

import pytest

from scanfmt.block import (
    format_getblockcountdown,
    format_getblocknobytime,
    format_getblockreward,
)
from scanfmt.fmt import ApiError


class FakeClient:
    def __init__(self, body):
        self.body = body
        self.calls = []

    def call_api(self, module, action, params=()):
        self.calls.append((module, action, list(params)))
        return json.loads(self.body)


def mock_success(result):
    return '{"status":"1","message":"OK","result":' + result + "}"


def mock_error(msg):
    return '{"status":"0","message":"NOTOK","result":"' + msg + '"}'


REWARD = (
    '{"blockNumber":"2165403","timeStamp":"1472533979",'
    '"blockMiner":"0x13a06d3dfe21e0db5c016c03ea7d2f7dcdda4850",'
    '"blockReward":"5314181600000000000",'
    '"uncles":[{"miner":"0xbcdfc35b86bedf72f0cda046a3c16829a2ef41d1",'
    '"unclePosition":"0","blockreward":"3750000000000000000"}],'
    '"uncleInclusionReward":"312500000000000000"}'
)


def test_format_getblockreward_success():
    client = FakeClient(mock_success(REWARD))
    result = format_getblockreward(client, [("blockno", "2165403")])

    assert client.calls == [("block", "getblockreward", [("blockno", "2165403")])]
    assert "Block        : 2165403" in result
    assert "Time         : 2016-08-30 05:12:59 UTC" in result
    assert "Miner        : 0x13a06d3dfe21e0db5c016c03ea7d2f7dcdda4850" in result
    assert "Reward       : 5314181600000000000" in result
    assert "Uncle Reward : 312500000000000000" in result
    assert "  Uncle 1:" in result
    assert "    Miner    : 0xbcdfc35b86bedf72f0cda046a3c16829a2ef41d1" in result
    assert "    Position : 0" in result
    assert "    Reward   : 3750000000000000000" in result


def test_format_getblockreward_without_uncles():
    body = mock_success(
        '{"blockNumber":"1","timestamp":"0","blockMiner":"0xm",'
        '"blockReward":"5","uncles":[],"uncleInclusionReward":"0"}'
    )
    result = format_getblockreward(FakeClient(body), [("blockno", "1")])
    assert result == (
        "Block        : 1\n"
        "Time         : 1970-01-01 00:00:00 UTC\n"
        "Miner        : 0xm\n"
        "Reward       : 5\n"
        "Uncle Reward : 0\n"
    )


def test_format_getblockreward_error():
    client = FakeClient(mock_error("Block does not exist"))
    with pytest.raises(ApiError, match="Block does not exist"):
        format_getblockreward(client, [("blockno", "999999999")])


def test_format_getblockreward_malformed():
    client = FakeClient(mock_success('{"blockNumber":"1"}'))
    with pytest.raises(ApiError, match="Failed to parse getblockreward response"):
        format_getblockreward(client, [("blockno", "1")])


def test_format_getblockcountdown_success():
    client = FakeClient(
        mock_success(
            '{"CurrentBlock":"24685913","CountdownBlock":"25000000",'
            '"RemainingBlock":"314087","EstimateTimeInSec":"3769059.0"}'
        )
    )
    result = format_getblockcountdown(client, [("blockno", "25000000")])

    assert client.calls[0][:2] == ("block", "getblockcountdown")
    assert "Current Block : 24685913" in result
    assert "Target Block  : 25000000" in result
    assert "Remaining     : 314087 blocks" in result
    assert "Est. Time     : 3769059.0s" in result


def test_format_getblockcountdown_error():
    client = FakeClient(mock_error("Block already passed"))
    with pytest.raises(ApiError, match="Block already passed"):
        format_getblockcountdown(client, [("blockno", "1")])


def test_format_getblockcountdown_malformed():
    client = FakeClient(mock_success('"not an object"'))
    with pytest.raises(ApiError, match="Failed to parse getblockcountdown response"):
        format_getblockcountdown(client, [("blockno", "1")])


def test_format_getblocknobytime_success():
    client = FakeClient(mock_success('"9251482"'))
    result = format_getblocknobytime(
        client, [("timestamp", "1578638524"), ("closest", "before")]
    )

    assert client.calls[0][:2] == ("block", "getblocknobytime")
    assert "Timestamp : 1578638524" in result
    assert "Closest   : before" in result
    assert "Block     : 9251482" in result


def test_format_getblocknobytime_defaults():
    client = FakeClient(mock_success("123"))
    result = format_getblocknobytime(client, [])
    assert result == "Timestamp : unknown\nClosest   : before\nBlock     : 0\n"


def test_format_getblocknobytime_error():
    client = FakeClient(mock_error("Invalid timestamp"))
    with pytest.raises(ApiError, match="Invalid timestamp"):
        format_getblocknobytime(client, [("timestamp", "0"), ("closest", "before")])