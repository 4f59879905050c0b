import json
import pytest
from sqlalchemy.exc import OperationalError
from app.workers import audit_worker


def test_parse_payload_requires_scope_and_action():
    with pytest.raises(ValueError, match="missing required fields"):
        audit_worker.parse_payload(json.dumps({"scope": "AUTH"}))


def test_parse_payload_rejects_non_object():
    with pytest.raises(ValueError, match="not a JSON object"):
        audit_worker.parse_payload("[1, 2]")


def test_params_from_payload_normalizes_status_and_object_id():
    params = audit_worker.params_from_payload({
        "scope": "CERTIFICATES",
        "action": "CREATE",
        "status": "error",
        "object_id": 5,
        "actor_roles": ["ADMIN"],
    })

    assert params["status"] == "FAIL"
    assert params["object_id"] == "5"
    assert params["actor_roles"] == ["ADMIN"]
    assert params["meta"] == {}


@pytest.mark.asyncio
async def test_persist_entries_acks_stored_and_malformed_but_keeps_failed(mocker):
    r = mocker.Mock()
    r.xack = mocker.AsyncMock()
    db = mocker.Mock()
    savepoint = mocker.AsyncMock()
    db.begin_nested.return_value = savepoint
    db.execute = mocker.AsyncMock(side_effect=[None, OperationalError("INSERT ...", {}, Exception("down"))])
    entries = [
        ("1-0", {"json": json.dumps({"scope": "AUTH", "action": "LOGIN"})}),
        ("2-0", {"json": "not json"}),
        ("3-0", {"json": json.dumps({"scope": "AUTH", "action": "LOGOUT"})}),
    ]

    stored = await audit_worker.persist_entries(r, db, entries)

    assert stored == 1
    acked = [c.args[2] for c in r.xack.await_args_list]
    assert acked == ["1-0", "2-0"]
