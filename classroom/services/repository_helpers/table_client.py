# /classroom/services/repository_helpers/table_client.py

"""
The contract every table boundary client implements.

Repositories only ever talk to this interface, so the live backend adapter and
the local fixture store are interchangeable. All methods return plain
JSON-like dictionaries shaped as described in `models.boundary_model`;
transport failures are raised as `BoundaryUnavailableError`.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class TableClient(ABC):

    @abstractmethod
    async def list_records(
        self,
        table: str,
        fields: List[str],
        where: Optional[List[Dict[str, Any]]] = None,
        order_by: Optional[List[Dict[str, Any]]] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> Dict[str, Any]:
        """Fetches up to `limit` rows matching every predicate in `where`."""

    @abstractmethod
    async def get_record(self, table: str, record_id: int, fields: List[str]) -> Dict[str, Any]:
        """Fetches a single row by id."""

    @abstractmethod
    async def write_records(self, table: str, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Creates rows without an `Id` and fully replaces rows that carry one."""

    @abstractmethod
    async def delete_records(self, table: str, ids: List[int]) -> Dict[str, Any]:
        """Deletes rows by id, reporting success per id."""

    async def close(self) -> None:
        """Releases any transport resources held by the client."""
        return None
