import pytest
import httpx
from app.main import app
from app.core.database import get_db
from app.core.dependencies.auth import require_staff, require_admin
from app.domain.exceptions import NotFound, Forbidden
from tests.helper import create_user


@pytest.fixture
def client(mocker):
    db = mocker.Mock()

    async def _db():
        yield db

    async def _staff():
        return create_user(mocker, 1, "USER")

    async def _admin():
        raise Forbidden("Permission denied")

    app.dependency_overrides[get_db] = _db
    app.dependency_overrides[require_staff] = _staff
    app.dependency_overrides[require_admin] = _admin
    yield httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_unknown_company_returns_problem_404(mocker, client):
    mocker.patch(
        "app.services.company_service.get_company",
        new=mocker.AsyncMock(side_effect=NotFound("Company not found", ctx={"company_id": 404}))
    )

    async with client:
        response = await client.get("/companies/404")

    body = response.json()
    assert response.status_code == 404
    assert response.headers["content-type"] == "application/problem+json"
    assert body["detail"] == "Company not found"
    assert body["context"] == {"company_id": 404}


@pytest.mark.asyncio
async def test_create_company_sets_location(mocker, client):
    company = {
        "id": 7,
        "company_name": "Acme Refinery",
        "address": None,
        "gst_number": None,
        "industries": None,
        "website": None,
        "industries_type": None,
        "flag": None,
        "created_at": "2024-05-10T10:00:00Z",
    }
    mocker.patch(
        "app.services.company_service.create_company",
        new=mocker.AsyncMock(return_value=mocker.Mock(**company))
    )

    async with client:
        response = await client.post("/companies", json={"company_name": "Acme Refinery"})

    assert response.status_code == 201
    assert response.headers["Location"] == "/companies/7"
    assert response.json()["company_name"] == "Acme Refinery"


@pytest.mark.asyncio
async def test_delete_company_requires_admin(mocker, client):
    delete = mocker.patch("app.services.company_service.delete_company", new=mocker.AsyncMock())

    async with client:
        response = await client.delete("/companies/7")

    assert response.status_code == 403
    delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_list_rejects_unknown_sort_column(client):
    async with client:
        response = await client.get("/certificates", params={"sort_by": "password_hash"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_certificate_pdf_download(mocker, client):
    certificate = mocker.Mock(id=3, certificate_no="RPS/CER/24-25/0003")
    mocker.patch(
        "app.services.certificate_service.get_certificate",
        new=mocker.AsyncMock(return_value=certificate)
    )
    mocker.patch("app.api.v1.routes.certificates.render_certificate_pdf", return_value=b"%PDF-1.4 test")

    async with client:
        response = await client.get("/certificates/3/pdf")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="certificate_RPS-CER-24-25-0003.pdf"' in response.headers["content-disposition"]
    assert response.content == b"%PDF-1.4 test"
