import pytest
from sqlalchemy.exc import IntegrityError
from app.domain.catalog.schemas import CategoryCreateDTO, CategoriesQueryDTO, EngineerCreateDTO, EngineerPutDTO
from app.domain.exceptions import NotFound, Conflict
from app.services import catalog_service
from tests.helper import writable_db


@pytest.mark.asyncio
async def test_list_categories_defaults_to_full_ascending_page(mocker):
    crud = mocker.patch(
        "app.services.catalog_service.crud.list_categories",
        new=mocker.AsyncMock(return_value=([{"id": 1, "model_name": "GasAlertMax XT II", "range": "0-100% LEL"}], 1))
    )
    db = mocker.Mock()

    page = await catalog_service.list_categories(db, CategoriesQueryDTO())

    crud.assert_awaited_once_with(db, 1, 200, q=None, sort_by=None, sort_dir="asc")
    assert page.items[0].model_name == "GasAlertMax XT II"


@pytest.mark.asyncio
async def test_create_category_adds_model(mocker, auditspan_stub):
    add = mocker.patch("app.services.catalog_service.crud.add", new=mocker.AsyncMock(side_effect=lambda db, obj: obj))
    db = writable_db(mocker)

    category = await catalog_service.create_category(db, CategoryCreateDTO(model_name=" Altair 4X ", range="0-25%"))

    assert category.model_name == "Altair 4X"
    assert category.range == "0-25%"
    add.assert_awaited_once()
    assert auditspan_stub[-1].object_type == "category"


@pytest.mark.asyncio
async def test_create_category_duplicate_model_raises_409(mocker):
    mocker.patch("app.services.catalog_service.crud.add", new=mocker.AsyncMock(side_effect=lambda db, obj: obj))
    db = writable_db(mocker)
    db.flush.side_effect = IntegrityError("INSERT ...", {}, Exception("duplicate key"))

    with pytest.raises(Conflict) as e:
        await catalog_service.create_category(db, CategoryCreateDTO(model_name="Altair 4X", range="0-25%"))

    assert e.value.ctx == {"model_name": "Altair 4X"}


@pytest.mark.asyncio
async def test_get_engineer_not_found_raises_404(mocker):
    mocker.patch(
        "app.services.catalog_service.crud.get_engineer_by_id",
        new=mocker.AsyncMock(return_value=None)
    )

    with pytest.raises(NotFound) as e:
        await catalog_service.get_engineer(mocker.Mock(), 12)

    assert e.value.ctx == {"engineer_id": 12}


@pytest.mark.asyncio
async def test_create_engineer_duplicate_name_raises_409(mocker):
    mocker.patch("app.services.catalog_service.crud.add", new=mocker.AsyncMock(side_effect=lambda db, obj: obj))
    db = writable_db(mocker)
    db.flush.side_effect = IntegrityError("INSERT ...", {}, Exception("duplicate key"))

    with pytest.raises(Conflict) as e:
        await catalog_service.create_engineer(db, EngineerCreateDTO(name="Suresh Patil"))

    assert str(e.value) == "Engineer already exists"


@pytest.mark.asyncio
async def test_update_engineer_applies_fields(mocker):
    engineer = mocker.Mock(id=2)
    mocker.patch(
        "app.services.catalog_service.crud.get_engineer_by_id",
        new=mocker.AsyncMock(return_value=engineer)
    )
    apply = mocker.patch(
        "app.services.catalog_service.crud.apply",
        new=mocker.AsyncMock(side_effect=lambda obj, data: obj)
    )

    result = await catalog_service.update_engineer(writable_db(mocker), 2, EngineerPutDTO(name="Anil Rao"))

    assert result is engineer
    apply.assert_awaited_once_with(engineer, {"name": "Anil Rao"})
