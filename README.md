# scanfmt

Turns the JSON answers of an Etherscan-style block explorer API into short,
aligned, human-readable text. It uses only the standard library.

It covers:

- chain listings (`scanfmt.chainlist`)
- the gas tracker (`scanfmt.gas`)
- event logs (`scanfmt.logs`)
- block rewards, countdowns and block-by-timestamp lookups (`scanfmt.block`)
- contract ABI, source code, creation info and verification status
  (`scanfmt.contract`)
- the JSON-RPC proxy endpoints: blocks, uncles and transaction counts
  (`scanfmt.proxy`); transactions, receipts, calls, code, storage, gas price
  and gas estimates (`scanfmt.proxy_calls`)

## Installation

```
pip install scanfmt
```

## The client

Most formatters take a client and, where the query needs them, parameters
as a sequence of `(key, value)` string pairs. The bundled client is
`scanfmt.fmt.ApiClient`, a blocking HTTP client built on `urllib`:

```python
from scanfmt.fmt import ApiClient

client = ApiClient(api_key="placeholder", chain_id=1, base_url="https://api.example.com/api")
```

Its `call_api(module, action, params)` sends a GET request with the query
`module`, `action`, `chainid` (left out when `chain_id` is `None`), the given
parameters and `apikey`, and returns the decoded JSON body. HTTP failures,
network failures and bodies that are not JSON raise `scanfmt.fmt.ApiError`.
The request timeout is set by the `timeout` field (30 seconds by default).

Any other object with a `call_api(module, action, params)` method returning a
decoded JSON object can stand in for it; `format_source_code` also reads the
client's `chain_id` attribute.

## Usage

```python
from scanfmt.gas import format_gas_oracle
from scanfmt.logs import format_logs

print(format_gas_oracle(client), end="")
print(format_logs(client, [("fromBlock", "12878196"), ("toBlock", "12878300")]), end="")
```

A formatter that receives an error answer from the API (a missing or `"0"`
`status`, or a JSON-RPC `error` object for proxy calls) raises
`scanfmt.fmt.ApiError` carrying the API's message. A result that does not
have the expected shape raises `ApiError` as well.

```python
from scanfmt.fmt import ApiError
from scanfmt.contract import format_abi

try:
    print(format_abi(client, "0x0000000000000000000000000000000000000000"), end="")
except ApiError as exc:
    print(f"error: {exc}")
```

Proxy lookups for a block, uncle, transaction or receipt that does not exist
return `"Block not found\n"`, `"Uncle not found\n"`,
`"Transaction not found\n"` or `"Receipt not found\n"` instead of raising.

Some functions work on an already decoded response:

```python
from scanfmt.chainlist import format_chainlist

response = {
    "result": [
        {
            "chainname": "Example Chain",
            "chainid": "1",
            "blockexplorer": "https://explorer.example.com",
            "apiurl": "https://api.example.com",
            "status": 1,
        }
    ]
}
print(format_chainlist(response), end="")
```

```
Chain ID  Name                          Status    Explorer
1         Example Chain                 OK        https://explorer.example.com
```

`scanfmt.proxy.raw_proxy_result(response)` returns a proxy response's
`result` as compact JSON text, and `print_raw_proxy_result(response)` prints
it; both raise `ApiError` for error answers.

The helpers in `scanfmt.fmt` are usable on their own:

```python
from scanfmt.fmt import hex_to_int, format_timestamp, decimal_timestamp

hex_to_int("0xe62a42")           # 15084098
hex_to_int("invalid")            # None
format_timestamp("0x62c2bc6f")   # "2022-07-04 10:09:51 UTC"
decimal_timestamp("1598242563")  # "2020-08-24 04:16:03 UTC"
```

`format_timestamp` and `decimal_timestamp` return their input unchanged when
it cannot be read as a timestamp.

## What it does not do

- There is no command-line program; the package is a library only.
- It does not store or look up API keys or settings; the caller supplies them
  to `ApiClient`.
- It has no formatters for account balances and histories, token queries,
  transaction status checks, network statistics or API rate limits.
- `ApiClient` is synchronous and makes one request per call, without retries.

## Running the tests

```
pip install -e ".[test]"
pytest
```