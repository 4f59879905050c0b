def db_with_scalars_first(mocker, value):
    res = mocker.Mock()
    res.scalars.return_value.first.return_value = value
    db = mocker.Mock()
    db.execute = mocker.AsyncMock(return_value=res)
    return db, res


def db_with_scalar(mocker, value):
    db = mocker.Mock()
    db.scalar = mocker.AsyncMock(return_value=value)
    return db


def writable_db(mocker):
    db = mocker.Mock()
    db.flush = mocker.AsyncMock()
    db.refresh = mocker.AsyncMock()
    db.delete = mocker.AsyncMock()
    return db


def create_role(mocker, name: str):
    role = mocker.Mock()
    role.name = name
    return role


def create_user(mocker, user_id: int = 1, *roles: str, **fields):
    user = mocker.Mock(id=user_id, is_active=True, **fields)
    user.roles = [create_role(mocker, r) for r in roles]
    return user
