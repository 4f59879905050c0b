import pytest
from jose import JWTError
from app.core.ctx import AUTH_USER_ID_CTX, AUTH_ROLES_CTX
from app.core.dependencies.auth import get_current_user_with_roles, get_token_payload
from app.domain.exceptions import Unauthorized, Forbidden
from tests.helper import create_role, db_with_scalars_first


@pytest.mark.asyncio
async def test_get_token_payload_ok(mocker):
    mocker.patch("app.core.dependencies.auth.decode_access_token",
                 return_value={
                     "sub": "7",
                     "iat": 1,
                     "exp": 2,
                     "nbf": 1,
                     "typ": "access",
                     "iss": "calibration-api",
                     "aud": "calibration-web"
                 })

    payload = await get_token_payload("token")

    assert payload.sub == "7"


@pytest.mark.asyncio
async def test_get_token_payload_invalid_jwt_raises_401(mocker):
    mocker.patch("app.core.dependencies.auth.decode_access_token", side_effect=JWTError("err"))

    with pytest.raises(Unauthorized) as e:
        await get_token_payload("bad-token")

    assert e.value.ctx == {"reason": "invalid_token"}


@pytest.mark.asyncio
async def test_get_token_payload_wrong_type_raises_401(mocker):
    mocker.patch("app.core.dependencies.auth.decode_access_token",
                 return_value={"sub": "7", "iat": 1, "typ": "refresh"})

    with pytest.raises(Unauthorized) as e:
        await get_token_payload("refresh-token")

    assert e.value.ctx.get("reason") == "invalid_type"


@pytest.mark.asyncio
async def test_get_token_payload_incomplete_claims_raises_401(mocker):
    mocker.patch("app.core.dependencies.auth.decode_access_token",
                 return_value={"sub": "7", "typ": "access"})

    with pytest.raises(Unauthorized) as e:
        await get_token_payload("token")

    assert e.value.ctx.get("reason") == "invalid_payload"


@pytest.mark.asyncio
async def test_get_current_user_with_roles_when_roles_intersect_and_user_found(mocker):
    dependency = get_current_user_with_roles("ADMIN", "USER")
    role = create_role(mocker, "USER")
    fake_user = mocker.Mock(id=1, is_active=True, roles=[role])

    db, res = db_with_scalars_first(mocker, fake_user)
    payload = mocker.Mock(sub="1")

    user = await dependency(payload, db)

    assert user is fake_user
    db.execute.assert_awaited_once()
    res.scalars.return_value.first.assert_called_once()


@pytest.mark.asyncio
async def test_get_current_user_binds_actor_to_context(mocker):
    dependency = get_current_user_with_roles("ADMIN")
    fake_user = mocker.Mock(id=42, is_active=True, roles=[create_role(mocker, "ADMIN")])
    db, _ = db_with_scalars_first(mocker, fake_user)

    await dependency(mocker.Mock(sub="42"), db)

    assert AUTH_USER_ID_CTX.get() == 42
    assert AUTH_ROLES_CTX.get() == frozenset({"ADMIN"})


@pytest.mark.asyncio
async def test_get_current_user_with_roles_when_roles_do_not_intersect_raises_403(mocker):
    dependency = get_current_user_with_roles("ADMIN")
    role = create_role(mocker, "USER")
    fake_user = mocker.Mock(id=1, is_active=True, roles=[role])

    db, res = db_with_scalars_first(mocker, fake_user)
    payload = mocker.Mock(sub="1")

    with pytest.raises(Forbidden) as e:
        await dependency(payload, db)

    assert e.value.ctx["required"] == ["ADMIN"]
    assert e.value.ctx["user_roles"] == ["USER"]
    db.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_current_user_with_roles_when_user_not_found_raises_401(mocker):
    dependency = get_current_user_with_roles("USER")

    db, result = db_with_scalars_first(mocker, None)
    payload = mocker.Mock(sub="1")

    with pytest.raises(Unauthorized) as e:
        await dependency(payload, db)

    assert str(e.value) == "User not found"
    assert e.value.ctx == {"user_id": "1"}
    result.scalars.return_value.first.assert_called_once()
