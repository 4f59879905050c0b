import os

os.environ.setdefault("POSTGRES_USER", "calibration")
os.environ.setdefault("db_password", "calibration")
os.environ.setdefault("POSTGRES_DB", "calibration_test")
os.environ.setdefault("secret_key", "test-secret-key")
os.environ.setdefault("refresh_token_pepper", "test-pepper")

import pytest
import importlib


SERVICE_MODULES = [
    "app.services.auth_service",
    "app.services.users_service",
    "app.services.company_service",
    "app.services.contact_service",
    "app.services.certificate_service",
    "app.services.certificate_number_service",
    "app.services.service_report_service",
    "app.services.catalog_service",
]


class _StubSpan:
    def __init__(
        self,
        *,
        scope: str,
        action: str,
        object_type: str | None = None,
        object_id: int | str | None = None,
        meta: dict | None = None,
        **_ignored
    ):
        self.scope = scope
        self.action = action
        self.object_type = object_type
        self.object_id = object_id
        self.meta = dict(meta or {})
        self.entered = False
        self.exited = False
        self.exit_args = None

    async def __aenter__(self):
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.exited = True
        self.exit_args = (exc_type, exc, tb)
        return False


@pytest.fixture(autouse=True)
def auditspan_stub(mocker, request):
    instances = []

    def factory(*a, **k):
        s = _StubSpan(*a, **k)
        instances.append(s)
        return s

    for mod in SERVICE_MODULES:
        importlib.import_module(mod)
        mocker.patch(f"{mod}.AuditSpan", side_effect=factory)

    return instances
