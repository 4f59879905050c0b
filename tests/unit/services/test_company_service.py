import pytest
from app.core.pagination import PageDTO
from app.domain.companies.schemas import CompaniesQueryDTO, CompanyReadDTO, CompanyCreateDTO, CompanyPutDTO
from app.domain.contacts.schemas import ContactPersonCreateDTO
from app.domain.exceptions import NotFound
from app.services import company_service, contact_service
from tests.helper import writable_db


company_raw = {
    "id": 1,
    "company_name": "Acme Refinery",
    "address": "Plot 7, MIDC",
    "gst_number": None,
    "industries": None,
    "website": None,
    "industries_type": None,
    "flag": None,
    "created_at": "2024-05-10T10:00:00Z",
}


@pytest.mark.asyncio
async def test_get_company_not_found_raises_404(mocker):
    mocker.patch(
        "app.services.company_service.crud.get_company_by_id",
        new=mocker.AsyncMock(return_value=None)
    )

    with pytest.raises(NotFound) as e:
        await company_service.get_company(mocker.Mock(), 1)

    assert str(e.value) == "Company not found"
    assert e.value.ctx == {"company_id": 1}


@pytest.mark.asyncio
async def test_list_companies_returns_page(mocker):
    crud = mocker.patch(
        "app.services.company_service.crud.list_companies",
        new=mocker.AsyncMock(return_value=([company_raw], 1))
    )
    db = mocker.Mock()

    page = await company_service.list_companies(db, CompaniesQueryDTO(page=1, page_size=20, q="acme"))

    crud.assert_awaited_once_with(db, 1, 20, q="acme", sort_by=None, sort_dir="desc")
    assert isinstance(page, PageDTO)
    assert page.total == 1
    assert all(isinstance(item, CompanyReadDTO) for item in page.items)


@pytest.mark.asyncio
async def test_create_company_returns_company(mocker, auditspan_stub):
    company = mocker.Mock(id=8)
    create = mocker.patch(
        "app.services.company_service.crud.create_company",
        new=mocker.AsyncMock(return_value=company)
    )
    db = writable_db(mocker)

    result = await company_service.create_company(db, CompanyCreateDTO(company_name="Acme Refinery"))

    assert result is company
    assert create.await_args.args[1] == {"company_name": "Acme Refinery"}
    assert auditspan_stub[-1].object_id == 8
    db.flush.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_company_unknown_id_raises_404(mocker):
    mocker.patch(
        "app.services.company_service.crud.get_company_by_id",
        new=mocker.AsyncMock(return_value=None)
    )

    with pytest.raises(NotFound):
        await company_service.update_company(writable_db(mocker), 5, CompanyPutDTO(company_name="New"))


@pytest.mark.asyncio
async def test_delete_company_unknown_id_raises_404(mocker):
    mocker.patch(
        "app.services.company_service.crud.get_company_by_id",
        new=mocker.AsyncMock(return_value=None)
    )
    delete = mocker.patch("app.services.company_service.crud.delete_company", new=mocker.AsyncMock())

    with pytest.raises(NotFound):
        await company_service.delete_company(writable_db(mocker), 5)

    delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_contact_for_unknown_company_raises_404(mocker):
    mocker.patch(
        "app.services.company_service.crud.get_company_by_id",
        new=mocker.AsyncMock(return_value=None)
    )
    create = mocker.patch("app.services.contact_service.crud.create_contact_person", new=mocker.AsyncMock())
    schema = ContactPersonCreateDTO(
        first_name="Ravi",
        last_name="Kumar",
        contact_no="9876543210",
        email="ravi@acme.in",
        company_id=77
    )

    with pytest.raises(NotFound) as e:
        await contact_service.create_contact_person(writable_db(mocker), schema)

    assert e.value.ctx == {"company_id": 77}
    create.assert_not_awaited()
