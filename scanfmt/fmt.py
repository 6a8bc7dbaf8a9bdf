"""Shared helpers: API errors, the HTTP client and value formatting."""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode, urlsplit, urlunsplit
from urllib.request import Request, urlopen

_HEX_DIGITS = re.compile(r"\+?[0-9a-fA-F]+")
_DECIMAL = re.compile(r"[+-]?[0-9]+")
_U64_MAX = 2**64 - 1
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ApiError(Exception):
    """Raised when the explorer API reports a failure or returns unusable data."""


@dataclass
class ApiClient:
    """Blocking client for an explorer-style ``?module=...&action=...`` JSON API."""

    api_key: str
    chain_id: int | None
    base_url: str
    timeout: float = 30.0

    def _endpoint(self) -> str:
        parts = urlsplit(self.base_url)
        path = parts.path or "/"
        return urlunsplit((parts.scheme, parts.netloc, path, "", ""))

    def call_api(self, module, action, params=()) -> Any:
        """Send one API request and return the decoded JSON body."""
        query = [("module", module), ("action", action)]
        if self.chain_id is not None:
            query.append(("chainid", str(self.chain_id)))
        query.extend((str(key), str(value)) for key, value in params)
        query.append(("apikey", self.api_key))
        url = f"{self._endpoint()}?{urlencode(query)}"
        request = Request(url, headers={"Accept": "application/json"})
        try:
            with urlopen(request, timeout=self.timeout) as response:
                body = response.read()
        except HTTPError as exc:
            raise ApiError(f"HTTP error {exc.code}: {exc.reason}") from exc
        except URLError as exc:
            raise ApiError(f"Request failed: {exc.reason}") from exc
        try:
            return json.loads(body)
        except ValueError as exc:
            raise ApiError(f"Invalid JSON response: {exc}") from exc


def hex_to_int(value: str) -> int | None:
    """Parse an unsigned 64-bit hex string, with or without ``0x``; None if invalid."""
    digits = value[2:] if value.startswith("0x") else value
    if not _HEX_DIGITS.fullmatch(digits):
        return None
    number = int(digits, 16)
    return number if number <= _U64_MAX else None


def _format_utc(seconds: int) -> str | None:
    try:
        moment = _EPOCH + timedelta(seconds=seconds)
    except OverflowError:
        return None
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


def format_timestamp(value: str) -> str:
    """Render a hex Unix timestamp as UTC text, or return the input unchanged."""
    seconds = hex_to_int(value)
    if seconds is None or seconds > _I64_MAX:
        return value
    return _format_utc(seconds) or value


def decimal_timestamp(value: str) -> str:
    """Render a decimal Unix timestamp as UTC text, or return the input unchanged."""
    if not _DECIMAL.fullmatch(value):
        return value
    seconds = int(value)
    if not _I64_MIN <= seconds <= _I64_MAX:
        return value
    return _format_utc(seconds) or value


def check_api_status(response: Any) -> None:
    """Raise ApiError when the response's ``status`` is missing or ``"0"``."""
    data = response if isinstance(response, dict) else {}
    status = data.get("status")
    if not isinstance(status, str):
        status = "0"
    if status == "0":
        message = data.get("result")
        if not isinstance(message, str):
            message = "Unknown API error"
        raise ApiError(message)


def param_value(params: Iterable[tuple[str, str]], key: str, default: str) -> str:
    """Return the value of the first pair whose key matches, else the default."""
    return next((value for name, value in params if name == key), default)