# /tests/test_table_clients.py

import json

import aiohttp
import pytest
from unittest.mock import AsyncMock, MagicMock

from classroom.services.exceptions import BoundaryUnavailableError
from classroom.services.repository_helpers.fixture_table_client import FixtureTableClient
from classroom.services.repository_helpers.live_table_client import LiveTableClient

# --- Fixture Store ---

@pytest.mark.asyncio
async def test_fixture_client_loads_json_directory(tmp_path):
    rows = [{"Id": 1, "Name": "Essay", "title_c": "Essay", "total_points_c": 100}]
    (tmp_path / "assignment_c.json").write_text(json.dumps(rows), encoding="utf-8")

    client = FixtureTableClient(tmp_path)
    response = await client.list_records("assignment_c", ["Name", "title_c"])

    assert response["success"] is True
    # Only Id and the selected fields come back.
    assert response["data"] == [{"Id": 1, "Name": "Essay", "title_c": "Essay"}]

def test_fixture_client_rejects_non_list_files(tmp_path):
    (tmp_path / "student_c.json").write_text(json.dumps({"Id": 1}), encoding="utf-8")
    with pytest.raises(ValueError):
        FixtureTableClient(tmp_path)

@pytest.mark.asyncio
async def test_fixture_client_filters_on_nested_references(fixture_client):
    response = await fixture_client.list_records(
        "grade_c", ["student_id_c"], where=[{"field": "student_id_c", "operator": "EqualTo", "values": [1]}]
    )
    assert [row["Id"] for row in response["data"]] == [1, 2]

@pytest.mark.asyncio
async def test_fixture_client_applies_limit_and_ordering(fixture_client):
    response = await fixture_client.list_records(
        "communication_c", ["date_c"], order_by=[{"field": "date_c", "direction": "DESC"}], limit=2
    )
    assert [row["date_c"] for row in response["data"]] == ["2024-01-20", "2024-01-12"]

@pytest.mark.asyncio
async def test_fixture_client_assigns_ids_and_updates_in_place(fixture_client):
    created = await fixture_client.write_records("student_c", [{"Name": "Noah Davis", "first_name_c": "Noah"}])
    assert created["results"][0]["data"]["Id"] == 4

    updated = await fixture_client.write_records("student_c", [{"Id": 4, "last_name_c": "Davis"}])
    assert updated["success"] is True
    assert updated["results"][0]["data"]["first_name_c"] == "Noah"

    missing = await fixture_client.write_records("student_c", [{"Id": 99, "first_name_c": "Ghost"}])
    assert missing["success"] is False
    assert missing["results"][0]["code"] == "NOT_FOUND"

@pytest.mark.asyncio
async def test_fixture_client_delete_reports_per_id(fixture_client):
    response = await fixture_client.delete_records("student_c", [2, 42])
    assert response["success"] is False
    assert response["results"][0] == {"id": 2, "success": True}
    assert response["results"][1]["code"] == "NOT_FOUND"

    remaining = await fixture_client.list_records("student_c", ["first_name_c"])
    assert [row["Id"] for row in remaining["data"]] == [1, 3]

@pytest.mark.asyncio
async def test_fixture_client_unknown_table(fixture_client):
    response = await fixture_client.list_records("parent_c", ["Name"])
    assert response["success"] is False

# --- Live Adapter ---

def _response_cm(status=200, body=None):
    """An object usable as `async with session.request(...) as resp`."""
    resp = MagicMock()
    resp.status = status
    resp.json = AsyncMock(return_value=body)
    cm = MagicMock()
    cm.__aenter__ = AsyncMock(return_value=resp)
    cm.__aexit__ = AsyncMock(return_value=False)
    return cm

@pytest.fixture
def mock_session():
    session = MagicMock()
    session.close = AsyncMock()
    return session

@pytest.fixture
def live_client(mock_session):
    return LiveTableClient("https://backend.example/api/", "proj_1", "pk_test", session=mock_session)

@pytest.mark.asyncio
async def test_live_list_translates_query_shape(live_client, mock_session):
    mock_session.request.return_value = _response_cm(body={"success": True, "data": []})

    response = await live_client.list_records(
        "grade_c",
        ["Name", "score_c"],
        where=[{"field": "student_id_c", "operator": "EqualTo", "values": [1]}],
        order_by=[{"field": "score_c", "direction": "DESC"}],
        limit=100,
    )

    assert response == {"success": True, "data": []}
    method, url = mock_session.request.call_args.args
    payload = mock_session.request.call_args.kwargs["json"]
    assert method == "POST"
    assert url == "https://backend.example/api/tables/grade_c/records/query"
    assert payload["fields"] == [{"field": {"Name": "Name"}}, {"field": {"Name": "score_c"}}]
    assert payload["where"] == [{"FieldName": "student_id_c", "Operator": "EqualTo", "Values": [1]}]
    assert payload["orderBy"] == [{"fieldName": "score_c", "sorttype": "DESC"}]
    assert payload["pagingInfo"] == {"limit": 100, "offset": 0}

@pytest.mark.asyncio
async def test_live_writes_split_creates_and_updates(live_client, mock_session):
    mock_session.request.side_effect = [
        _response_cm(body={"success": True, "results": [{"success": True, "data": {"Id": 7}}]}),
        _response_cm(body={"success": True, "results": [{"success": True, "data": {"Id": 3}}]}),
    ]
    response = await live_client.write_records("student_c", [{"first_name_c": "New"}, {"Id": 3, "first_name_c": "Old"}])

    methods = [c.args[0] for c in mock_session.request.call_args_list]
    assert methods == ["POST", "PUT"]
    assert response["success"] is True
    assert [r["data"]["Id"] for r in response["results"]] == [7, 3]

@pytest.mark.asyncio
async def test_live_delete_sends_record_ids(live_client, mock_session):
    mock_session.request.return_value = _response_cm(body={"success": True, "results": []})
    await live_client.delete_records("student_c", [4, 5])
    assert mock_session.request.call_args.args[0] == "DELETE"
    assert mock_session.request.call_args.kwargs["json"] == {"RecordIds": [4, 5]}

@pytest.mark.asyncio
async def test_live_404_becomes_not_found_code(live_client, mock_session):
    mock_session.request.return_value = _response_cm(status=404)
    response = await live_client.get_record("student_c", 99, ["Name"])
    assert response["success"] is False
    assert response["code"] == "NOT_FOUND"

@pytest.mark.asyncio
async def test_live_server_error_is_boundary_unavailable(live_client, mock_session):
    mock_session.request.return_value = _response_cm(status=503)
    with pytest.raises(BoundaryUnavailableError) as exc_info:
        await live_client.list_records("student_c", ["Name"])
    assert exc_info.value.status == 503

@pytest.mark.asyncio
async def test_live_connection_error_is_boundary_unavailable(live_client, mock_session):
    mock_session.request.side_effect = aiohttp.ClientConnectionError("connection refused")
    with pytest.raises(BoundaryUnavailableError) as exc_info:
        await live_client.list_records("student_c", ["Name"])
    assert str(exc_info.value) == "connection refused"

@pytest.mark.asyncio
async def test_live_client_does_not_close_injected_session(live_client, mock_session):
    await live_client.close()
    mock_session.close.assert_not_called()

# --- Client Selection ---

def test_build_table_client_follows_configuration(mocker, tmp_path):
    from classroom.services import data_service

    mocker.patch("classroom.config.USE_LIVE_BACKEND", False)
    mocker.patch("classroom.config.FIXTURE_DIR", str(tmp_path))
    assert isinstance(data_service.build_table_client(), FixtureTableClient)

    mocker.patch("classroom.config.USE_LIVE_BACKEND", True)
    mocker.patch("classroom.config.BACKEND_BASE_URL", "https://backend.example/api")
    assert isinstance(data_service.build_table_client(), LiveTableClient)
