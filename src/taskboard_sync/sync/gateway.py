# src/taskboard_sync/sync/gateway.py

from __future__ import annotations

"""
Persistence Gateway.

Stateless request/response wrapper around the spreadsheet web-app endpoint.
Every call returns a GatewayResult; transport errors and failure envelopes are
converted here and never raised to callers. No retries, no backoff.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

import httpx

from ..tasks.task_models import BoardConfig, TaskCollection
from ..tasks.wire import WireSchema, rows_to_tasks, tasks_to_rows

logger = logging.getLogger(__name__)

T = TypeVar("T")

ErrorKind = Literal["transport", "remote"]

DEFAULT_READ_ERROR = "Erro na API."
DEFAULT_WRITE_ERROR = "Erro ao salvar."


class GatewayError(Exception):
    """
    A failed remote call.

    kind:
    - "transport": network error, timeout, HTTP error status, unparseable body
    - "remote": the endpoint answered with a non-success envelope
    """

    def __init__(self, message: str, *, kind: ErrorKind = "remote") -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind


@dataclass(frozen=True, slots=True)
class GatewayResult(Generic[T]):
    value: T | None = None
    error: GatewayError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> GatewayResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: GatewayError) -> GatewayResult[T]:
        return cls(error=error)


def _transport_message(exc: Exception) -> str:
    msg = str(exc).strip()
    return msg or exc.__class__.__name__


class SheetsGateway:
    """
    HTTP client for the spreadsheet endpoint.

    Reads are GET with an `action` query parameter; writes are POST with a JSON
    body sent as text/plain (the script host rejects preflighted content types).
    """

    def __init__(
            self,
            endpoint_url: str,
            *,
            schema: WireSchema | None = None,
            config: BoardConfig | None = None,
            timeout_seconds: float = 20.0,
            client: httpx.AsyncClient | None = None,
    ) -> None:
        if not endpoint_url or not endpoint_url.strip():
            raise ValueError("endpoint_url is required")
        self._url = endpoint_url.strip()
        self._schema = schema or WireSchema()
        self._config = config or BoardConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds, connect=min(5.0, timeout_seconds)),
            follow_redirects=True,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ---- low-level helpers ----

    async def _get(self, params: dict[str, str]) -> dict[str, Any]:
        resp = await self._client.get(self._url, params=params)
        return self._envelope(resp)

    async def _post(self, body: dict[str, Any]) -> dict[str, Any]:
        resp = await self._client.post(
            self._url,
            content=json.dumps(body, ensure_ascii=False).encode("utf-8"),
            headers={"Content-Type": "text/plain;charset=utf-8"},
        )
        return self._envelope(resp)

    @staticmethod
    def _envelope(resp: httpx.Response) -> dict[str, Any]:
        resp.raise_for_status()
        try:
            data = resp.json()
        except ValueError as e:
            raise GatewayError("Resposta inválida do servidor.", kind="transport") from e
        if not isinstance(data, dict):
            raise GatewayError("Resposta inválida do servidor.", kind="transport")
        return data

    @staticmethod
    def _is_success(envelope: dict[str, Any]) -> bool:
        return envelope.get("status") == "success"

    @staticmethod
    def _remote_error(envelope: dict[str, Any], default: str) -> GatewayError:
        msg = envelope.get("message")
        return GatewayError(str(msg) if msg else default, kind="remote")

    async def _call(self, action: str, coro_factory, default_error: str) -> GatewayResult[dict[str, Any]]:
        try:
            envelope = await coro_factory()
        except GatewayError as e:
            logger.warning("%s failed: %s", action, e.message)
            return GatewayResult.failure(e)
        except httpx.HTTPError as e:
            logger.warning("%s transport error: %s", action, _transport_message(e))
            return GatewayResult.failure(GatewayError(_transport_message(e), kind="transport"))
        except (httpx.InvalidURL, ValueError) as e:
            # a malformed endpoint URL only surfaces when the request is built
            logger.warning("%s bad endpoint %s: %s", action, self._url, _transport_message(e))
            return GatewayResult.failure(GatewayError(_transport_message(e), kind="transport"))

        if not self._is_success(envelope):
            err = self._remote_error(envelope, default_error)
            logger.warning("%s rejected by remote: %s", action, err.message)
            return GatewayResult.failure(err)
        return GatewayResult.success(envelope)

    # ---- public API ----

    async def fetch_all(self, board: str | None = None) -> GatewayResult[TaskCollection]:
        params = {"action": "getTasks"}
        if board is not None:
            params["sheetName"] = board

        res = await self._call("getTasks", lambda: self._get(params), DEFAULT_READ_ERROR)
        if res.error is not None:
            return GatewayResult.failure(res.error)

        rows = (res.value or {}).get("data")
        if not isinstance(rows, list):
            return GatewayResult.failure(GatewayError("Resposta inválida do servidor.", kind="remote"))

        tasks = rows_to_tasks(rows, self._schema, self._config)
        logger.info("Fetched %d tasks board=%s", len(tasks), board)
        return GatewayResult.success(tasks)

    async def replace_all(self, board: str | None, tasks: TaskCollection) -> GatewayResult[None]:
        body: dict[str, Any] = {"action": "saveTasks", "payload": tasks_to_rows(tasks, self._schema)}
        if board is not None:
            body["sheetName"] = board

        res = await self._call("saveTasks", lambda: self._post(body), DEFAULT_WRITE_ERROR)
        if res.error is not None:
            return GatewayResult.failure(res.error)

        logger.info("Saved %d tasks board=%s", len(tasks), board)
        return GatewayResult.success(None)

    async def fetch_board_names(self) -> GatewayResult[list[str]]:
        res = await self._call("getSheetNames", lambda: self._get({"action": "getSheetNames"}), DEFAULT_READ_ERROR)
        if res.error is not None:
            return GatewayResult.failure(res.error)

        names = (res.value or {}).get("data")
        if not isinstance(names, list):
            return GatewayResult.failure(GatewayError("Resposta inválida do servidor.", kind="remote"))
        return GatewayResult.success([str(n) for n in names if str(n).strip()])

    async def create_board(self, name: str) -> GatewayResult[None]:
        res = await self._call(
            "createSheet",
            lambda: self._post({"action": "createSheet", "sheetName": name}),
            "Erro desconhecido.",
        )
        if res.error is not None:
            return GatewayResult.failure(res.error)

        logger.info("Created board %s", name)
        return GatewayResult.success(None)
