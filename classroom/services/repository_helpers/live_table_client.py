# /classroom/services/repository_helpers/live_table_client.py

"""
HTTP adapter for the hosted table backend.

Requests are translated into the backend's query shape (field selectors,
`where` predicates, `orderBy`, `pagingInfo`) and the JSON body of the reply is
returned unchanged; interpreting it is the repository's job. The only thing
this adapter decides is what counts as a transport failure.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from .table_client import TableClient
from ..exceptions import BoundaryUnavailableError
from ...models.boundary_model import NOT_FOUND_CODE

logger = logging.getLogger(__name__)

ID_COLUMN = "Id"


class LiveTableClient(TableClient):
    """Client for the hosted backend's table API."""

    def __init__(
        self,
        base_url: str,
        project_id: str,
        public_key: str,
        timeout_seconds: float = 15.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Args:
            base_url: Root URL of the backend API, without a trailing slash.
            project_id: Project identifier sent with every request.
            public_key: Public API key sent with every request.
            timeout_seconds: Total timeout applied to each request.
            session: Optional aiohttp session. If None, one is created lazily
                and closed by `close()`.
        """
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "Accept": "application/json",
            "X-Project-Id": project_id,
            "Authorization": f"Bearer {public_key}",
        }
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._own_session = session is None

    async def __aenter__(self):
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(headers=self._headers, timeout=self._timeout)
        return self._session

    async def close(self) -> None:
        if self._own_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        session = self._ensure_session()
        url = f"{self._base_url}{path}"
        try:
            async with session.request(method, url, json=payload, headers=self._headers, timeout=self._timeout) as resp:
                if resp.status == 404:
                    return {"success": False, "code": NOT_FOUND_CODE, "message": f"Not found: {path}"}
                if resp.status >= 500:
                    logger.error("Backend returned HTTP %s for %s %s", resp.status, method, path)
                    raise BoundaryUnavailableError(f"Backend error: HTTP {resp.status}", status=resp.status)
                body = await resp.json(content_type=None)
        except aiohttp.ClientError as e:
            logger.error("Connection error calling %s %s: %s", method, path, e)
            raise BoundaryUnavailableError(str(e)) from e
        except asyncio.TimeoutError as e:
            logger.error("Timed out calling %s %s", method, path)
            raise BoundaryUnavailableError(f"Request timed out: {method} {path}") from e
        except ValueError as e:
            # A body that is not JSON at all.
            raise BoundaryUnavailableError(f"Invalid JSON response from backend: {e}") from e

        if not isinstance(body, dict):
            raise BoundaryUnavailableError("Unexpected response shape from backend")
        return body

    # --- Query translation ---

    @staticmethod
    def _selector(fields: List[str]) -> List[Dict[str, Any]]:
        return [{"field": {"Name": name}} for name in fields]

    @staticmethod
    def _where(where: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
        return [
            {"FieldName": p["field"], "Operator": p.get("operator", "EqualTo"), "Values": list(p.get("values", []))}
            for p in (where or [])
        ]

    @staticmethod
    def _order(order_by: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
        return [{"fieldName": o["field"], "sorttype": o.get("direction", "ASC")} for o in (order_by or [])]

    # --- TableClient Contract ---

    async def list_records(self, table, fields, where=None, order_by=None, limit=100, offset=0):
        payload = {
            "fields": self._selector(fields),
            "where": self._where(where),
            "orderBy": self._order(order_by),
            "pagingInfo": {"limit": limit, "offset": offset},
        }
        return await self._request("POST", f"/tables/{table}/records/query", payload)

    async def get_record(self, table, record_id, fields):
        payload = {"fields": self._selector(fields)}
        return await self._request("POST", f"/tables/{table}/records/{record_id}/query", payload)

    async def write_records(self, table, records):
        if not records:
            return {"success": True, "results": []}
        creates = [r for r in records if r.get(ID_COLUMN) is None]
        updates = [r for r in records if r.get(ID_COLUMN) is not None]
        if creates and not updates:
            return await self._request("POST", f"/tables/{table}/records", {"records": creates})
        if updates and not creates:
            return await self._request("PUT", f"/tables/{table}/records", {"records": updates})

        # Mixed batches go out as two calls; the results are merged in order.
        created = await self._request("POST", f"/tables/{table}/records", {"records": creates})
        updated = await self._request("PUT", f"/tables/{table}/records", {"records": updates})
        return {
            "success": bool(created.get("success")) and bool(updated.get("success")),
            "message": created.get("message") or updated.get("message"),
            "results": (created.get("results") or []) + (updated.get("results") or []),
        }

    async def delete_records(self, table, ids):
        return await self._request("DELETE", f"/tables/{table}/records", {"RecordIds": list(ids)})
