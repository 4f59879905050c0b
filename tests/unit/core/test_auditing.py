import json
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.exc import IntegrityError
from app.core import auditing
from app.core.ctx import REDIS_CTX, REQUEST_ID_CTX, bind_actor
from app.domain.exceptions import NotFound


@pytest.fixture
def fake_redis(mocker):
    r = mocker.Mock()
    r.xadd = mocker.AsyncMock(return_value="1-0")
    token = REDIS_CTX.set(r)
    yield r
    REDIS_CTX.reset(token)


def _emitted(fake_redis) -> dict:
    stream, fields = fake_redis.xadd.await_args.args
    assert stream == auditing.AUDIT_STREAM
    return json.loads(fields["json"])


@pytest.mark.asyncio
async def test_audit_emit_without_redis_is_skipped():
    assert await auditing.audit_emit(scope="X", action="Y", status="SUCCESS") is None


@pytest.mark.asyncio
async def test_audit_emit_includes_request_context(fake_redis):
    token = REQUEST_ID_CTX.set("req-1")
    bind_actor(3, {"USER", "ADMIN"})
    try:
        msg_id = await auditing.audit_emit(
            scope="CERTIFICATES", action="CREATE", status="SUCCESS", object_type="certificate", object_id=9
        )
    finally:
        REQUEST_ID_CTX.reset(token)

    payload = _emitted(fake_redis)
    assert msg_id == "1-0"
    assert payload["request_id"] == "req-1"
    assert payload["actor_user_id"] == 3
    assert payload["actor_roles"] == ["ADMIN", "USER"]
    assert payload["object_id"] == "9"


@pytest.mark.asyncio
async def test_audit_emit_swallows_redis_failure(fake_redis):
    fake_redis.xadd.side_effect = RedisConnectionError("down")

    assert await auditing.audit_emit(scope="X", action="Y", status="SUCCESS") is None


@pytest.mark.asyncio
async def test_audit_span_success(fake_redis):
    async with auditing.AuditSpan(scope="COMPANIES", action="CREATE", object_type="company") as span:
        span.object_id = 12

    payload = _emitted(fake_redis)
    assert payload["status"] == "SUCCESS"
    assert payload["object_id"] == "12"
    assert "duration_ms" in payload["meta"]
    assert "occurred_at" in payload["meta"]


@pytest.mark.asyncio
async def test_audit_span_failure_records_reason_and_reraises(fake_redis):
    with pytest.raises(NotFound):
        async with auditing.AuditSpan(scope="COMPANIES", action="DELETE"):
            raise NotFound("Company not found")

    payload = _emitted(fake_redis)
    assert payload["status"] == "FAIL"
    assert payload["reason"] == "Company not found"


def test_reason_from_integrity_error_hides_details():
    exc = IntegrityError("INSERT ...", {}, Exception("duplicate key value"))
    assert auditing._reason_from_exception(exc) == "Integrity error"
    assert auditing._reason_from_exception(ValueError("x")) == "ValueError"
    assert auditing._reason_from_exception(None) is None
