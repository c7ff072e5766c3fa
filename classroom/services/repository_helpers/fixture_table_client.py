# /classroom/services/repository_helpers/fixture_table_client.py

"""
An in-memory table store seeded from JSON fixture files.

This is the local-development fallback for the hosted backend. Each
`<table>.json` file in the fixture directory holds a list of rows in the
backend's own shape. Writes change only the in-memory copy; nothing is
written back to disk.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .table_client import TableClient
from ..coercion import parse_day, unwrap_reference
from ...models.boundary_model import NOT_FOUND_CODE, PredicateOperator, SortDirection

logger = logging.getLogger(__name__)

ID_COLUMN = "Id"


def _comparable(value: Any) -> str:
    if isinstance(value, dict):
        value = unwrap_reference(value)
    return "" if value is None else str(value)


class FixtureTableClient(TableClient):
    def __init__(self, fixture_dir: Optional[Union[str, Path]] = None, tables: Optional[Dict[str, List[Dict]]] = None):
        """
        Seeds the store either from `fixture_dir` or directly from `tables`
        (a mapping of table name to rows), which tests use.
        """
        self._tables: Dict[str, List[Dict[str, Any]]] = {}
        if fixture_dir is not None:
            self._tables.update(self._load_directory(Path(fixture_dir)))
        if tables:
            self._tables.update(copy.deepcopy(tables))
        self._next_ids = {
            name: max((unwrap_reference(row.get(ID_COLUMN)) or 0 for row in rows), default=0) + 1
            for name, rows in self._tables.items()
        }

    @staticmethod
    def _load_directory(directory: Path) -> Dict[str, List[Dict[str, Any]]]:
        tables = {}
        if not directory.is_dir():
            logger.warning("Fixture directory %s does not exist; starting with empty tables.", directory)
            return tables
        for path in sorted(directory.glob("*.json")):
            with open(path, "r", encoding="utf-8") as f:
                rows = json.load(f)
            if not isinstance(rows, list):
                raise ValueError(f"Fixture file {path.name} must contain a JSON list of rows.")
            tables[path.stem] = rows
        logger.info("Loaded %d fixture tables from %s", len(tables), directory)
        return tables

    # --- Helpers ---

    def _rows(self, table: str) -> Optional[List[Dict[str, Any]]]:
        return self._tables.get(table)

    @staticmethod
    def _unknown_table(table: str) -> Dict[str, Any]:
        return {"success": False, "message": f"Unknown table '{table}'"}

    @staticmethod
    def _project(row: Dict[str, Any], fields: List[str]) -> Dict[str, Any]:
        keep = {ID_COLUMN, *fields}
        return copy.deepcopy({key: value for key, value in row.items() if key in keep})

    @staticmethod
    def _matches(row: Dict[str, Any], predicate: Dict[str, Any]) -> bool:
        field = predicate.get("field")
        values = predicate.get("values") or []
        operator = predicate.get("operator", PredicateOperator.EQUAL_TO.value)
        if operator == PredicateOperator.SAME_DAY.value:
            day = parse_day(row.get(field))
            return day is not None and any(day == parse_day(v) for v in values)
        return _comparable(row.get(field)) in {_comparable(v) for v in values}

    def _find(self, rows: List[Dict[str, Any]], record_id: Any) -> Optional[Dict[str, Any]]:
        target = unwrap_reference(record_id)
        for row in rows:
            if unwrap_reference(row.get(ID_COLUMN)) == target:
                return row
        return None

    # --- TableClient Contract ---

    async def list_records(self, table, fields, where=None, order_by=None, limit=100, offset=0):
        rows = self._rows(table)
        if rows is None:
            return self._unknown_table(table)

        matched = [row for row in rows if all(self._matches(row, p) for p in (where or []))]
        # Apply the least significant ordering first; sorted() is stable.
        for order in reversed(order_by or []):
            matched = sorted(
                matched,
                key=lambda row: _comparable(row.get(order.get("field"))),
                reverse=order.get("direction") == SortDirection.DESC.value,
            )
        page = matched[offset:offset + limit]
        return {"success": True, "data": [self._project(row, fields) for row in page]}

    async def get_record(self, table, record_id, fields):
        rows = self._rows(table)
        if rows is None:
            return self._unknown_table(table)
        row = self._find(rows, record_id)
        if row is None:
            return {"success": False, "code": NOT_FOUND_CODE, "message": f"Record {record_id} not found in {table}"}
        return {"success": True, "data": self._project(row, fields)}

    async def write_records(self, table, records):
        rows = self._rows(table)
        if rows is None:
            return self._unknown_table(table)

        results = []
        for record in records:
            if record.get(ID_COLUMN) is None:
                new_row = {**copy.deepcopy(record), ID_COLUMN: self._next_ids.get(table, 1)}
                self._next_ids[table] = new_row[ID_COLUMN] + 1
                rows.append(new_row)
                results.append({"success": True, "data": copy.deepcopy(new_row)})
                continue

            existing = self._find(rows, record[ID_COLUMN])
            if existing is None:
                results.append({
                    "success": False,
                    "code": NOT_FOUND_CODE,
                    "message": f"Record {record[ID_COLUMN]} not found in {table}",
                })
                continue
            existing.update(copy.deepcopy(record))
            results.append({"success": True, "data": copy.deepcopy(existing)})

        return {"success": all(r["success"] for r in results), "results": results}

    async def delete_records(self, table, ids):
        rows = self._rows(table)
        if rows is None:
            return self._unknown_table(table)

        results = []
        for record_id in ids:
            existing = self._find(rows, record_id)
            if existing is None:
                results.append({
                    "id": record_id,
                    "success": False,
                    "code": NOT_FOUND_CODE,
                    "message": f"Record {record_id} not found in {table}",
                })
                continue
            rows.remove(existing)
            results.append({"id": record_id, "success": True})

        return {"success": all(r["success"] for r in results), "results": results}
