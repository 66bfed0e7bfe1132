"""Trace sources: where raw ``debug_traceTransaction`` results come from."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from . import constants
from .errors import FetchFailure

logger = logging.getLogger(__name__)


def normalize_tx_hash(tx_hash: str) -> str:
    if not tx_hash.startswith("0x"):
        return "0x" + tx_hash
    return tx_hash


class TraceSource(ABC):
    """Abstract base for raw execution trace providers."""

    @abstractmethod
    def fetch(self, tx_hash: str) -> dict[str, Any]:
        """Return the struct-log trace of a transaction, exactly as provided."""
        ...


class Web3TraceSource(TraceSource):
    """Fetches traces over JSON-RPC through web3, with lazy import and DI."""

    _LAZY_IMPORT = object()

    def __init__(
        self,
        rpc_url: str = constants.DEFAULT_RPC_URL,
        client: Any = _LAZY_IMPORT,
        timeout: int = constants.DEFAULT_RPC_TIMEOUT,
    ):
        if client is Web3TraceSource._LAZY_IMPORT:
            from web3 import Web3

            self._w3 = Web3(
                Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout})
            )
        else:
            self._w3 = client
        self._rpc_url = rpc_url

    def fetch(self, tx_hash: str) -> dict[str, Any]:
        tx_hash = normalize_tx_hash(tx_hash)
        logger.info("Fetching trace for %s from %s", tx_hash, self._rpc_url)
        try:
            response = self._w3.provider.make_request(
                constants.TRACE_METHOD, [tx_hash, dict(constants.TRACE_CONFIG)]
            )
        except Exception as exc:
            raise FetchFailure(tx_hash, str(exc)) from exc

        if response.get("error"):
            error = response["error"]
            message = error.get("message", error) if isinstance(error, dict) else error
            raise FetchFailure(tx_hash, f"RPC error: {message}")

        trace = response.get("result")
        if not isinstance(trace, dict) or "structLogs" not in trace:
            raise FetchFailure(tx_hash, "response carries no structLogs")

        logger.info("Fetched %d steps for %s", len(trace["structLogs"]), tx_hash)
        return trace


class JsonFileTraceSource(TraceSource):
    """Reads a previously saved trace; the transaction hash is only informative."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def fetch(self, tx_hash: str = "") -> dict[str, Any]:
        logger.info("Loading trace from %s", self._path)
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        # ValueError covers both JSONDecodeError and UnicodeDecodeError
        except (OSError, ValueError) as exc:
            raise FetchFailure(tx_hash or str(self._path), str(exc)) from exc

        # Accept a full JSON-RPC envelope as well as a bare result
        if isinstance(data, dict) and isinstance(data.get("result"), dict):
            data = data["result"]

        if not isinstance(data, dict) or "structLogs" not in data:
            raise FetchFailure(tx_hash or str(self._path), "file carries no structLogs")
        return data


def get_trace_source(
    kind: str = constants.TRACE_SOURCE_RPC,
    rpc_url: str = constants.DEFAULT_RPC_URL,
    path: str | Path = "",
    client: Any = None,
) -> TraceSource:
    """Factory for trace sources.

    Args:
        kind: "rpc" or "file"
        rpc_url: Node endpoint for "rpc"
        path: Trace file for "file"
        client: Pre-built Web3 instance for DI/testing
    """
    if kind == constants.TRACE_SOURCE_RPC:
        if client is not None:
            return Web3TraceSource(rpc_url=rpc_url, client=client)
        return Web3TraceSource(rpc_url=rpc_url)

    if kind == constants.TRACE_SOURCE_FILE:
        if not path:
            raise ValueError("A trace file path is required for the file source")
        return JsonFileTraceSource(path)

    raise ValueError(f"Unknown trace source: {kind}")
