import pytest
import time_machine
from datetime import datetime
from sqlalchemy.exc import OperationalError
from app.domain.exceptions import StorageUnavailable
from app.services import certificate_number_service as service


class FakeCounterStore:
    """In-memory stand-in for the certificate_counters row."""

    def __init__(self, last_number: int | None = None, generated_label: str | None = None):
        self.rows: dict[str, dict] = {}
        if last_number is not None:
            self.rows["certificate"] = {"last_number": last_number, "generated_label": generated_label}

    async def next_counter_value(self, db, counter_id="certificate"):
        row = self.rows.setdefault(counter_id, {"last_number": 0, "generated_label": None})
        row["last_number"] += 1
        return row["last_number"]

    async def store_generated_label(self, db, label, counter_id="certificate"):
        self.rows[counter_id]["generated_label"] = label

    async def reset_counter(self, db, counter_id="certificate"):
        if counter_id in self.rows:
            self.rows[counter_id].update(last_number=0, generated_label=None)

    async def get_counter(self, db, counter_id="certificate"):
        row = self.rows.get(counter_id)
        return None if row is None else type("Row", (), row)()


@pytest.fixture
def store(mocker):
    fake = FakeCounterStore()
    for name in ("next_counter_value", "store_generated_label", "reset_counter", "get_counter"):
        mocker.patch(f"app.services.certificate_number_service.crud.{name}", new=getattr(fake, name))
    return fake


@pytest.mark.parametrize(
    "year, expected",
    [
        (2024, "24-25"),
        (2009, "09-10"),
        (2099, "99-00"),
        (2100, "00-01"),
    ]
)
def test_fiscal_year_range(year, expected):
    assert service.fiscal_year_range(datetime(year, 6, 1)) == expected


@pytest.mark.parametrize(
    "number, expected",
    [
        (1, "RPS/CER/24-25/0001"),
        (42, "RPS/CER/24-25/0042"),
        (9999, "RPS/CER/24-25/9999"),
        (10000, "RPS/CER/24-25/10000"),
    ]
)
def test_format_certificate_number_pads_but_never_truncates(number, expected):
    assert service.format_certificate_number(number, datetime(2024, 3, 1), prefix="RPS") == expected


@pytest.mark.asyncio
@time_machine.travel("2024-07-15 10:00:00+05:30", tick=False)
async def test_generate_reset_generate_sequence(store):
    db = object()

    assert await service.generate_certificate_number(db) == "RPS/CER/24-25/0001"
    assert await service.generate_certificate_number(db) == "RPS/CER/24-25/0002"

    await service.reset_certificate_number(db)

    assert await service.generate_certificate_number(db) == "RPS/CER/24-25/0001"
    assert store.rows["certificate"] == {"last_number": 1, "generated_label": "RPS/CER/24-25/0001"}


@pytest.mark.asyncio
@time_machine.travel("2024-07-15 10:00:00+05:30", tick=False)
async def test_sequential_numbers_strictly_increase(store):
    labels = [await service.generate_certificate_number(object()) for _ in range(25)]

    suffixes = [int(label.rsplit("/", 1)[1]) for label in labels]
    assert suffixes == list(range(1, 26))
    assert len(set(labels)) == len(labels)


@pytest.mark.asyncio
@time_machine.travel("2024-07-15 10:00:00+05:30", tick=False)
async def test_counter_past_9999_widens(store):
    store.rows["certificate"] = {"last_number": 9999, "generated_label": "RPS/CER/24-25/9999"}

    assert await service.generate_certificate_number(object()) == "RPS/CER/24-25/10000"


@pytest.mark.asyncio
async def test_year_change_updates_prefix_and_keeps_counting(store):
    with time_machine.travel(datetime(2024, 12, 31, 12, 0, tzinfo=service.TZ), tick=False):
        assert await service.generate_certificate_number(object()) == "RPS/CER/24-25/0001"
    with time_machine.travel(datetime(2025, 1, 1, 9, 0, tzinfo=service.TZ), tick=False):
        assert await service.generate_certificate_number(object()) == "RPS/CER/25-26/0002"


@pytest.mark.asyncio
async def test_explicit_now_is_used_for_year_range(store):
    label = await service.generate_certificate_number(object(), now=datetime(2030, 4, 1))

    assert label == "RPS/CER/30-31/0001"


@pytest.mark.asyncio
async def test_reset_twice_is_idempotent(store):
    store.rows["certificate"] = {"last_number": 17, "generated_label": "RPS/CER/24-25/0017"}

    await service.reset_certificate_number(object())
    await service.reset_certificate_number(object())

    assert store.rows["certificate"] == {"last_number": 0, "generated_label": None}


@pytest.mark.asyncio
async def test_reset_on_missing_row_is_noop(store):
    await service.reset_certificate_number(object())

    assert store.rows == {}


@pytest.mark.asyncio
async def test_get_counter_defaults_when_row_missing(store):
    counter = await service.get_certificate_counter(object())

    assert counter.last_number == 0
    assert counter.generated_label is None


@pytest.mark.asyncio
async def test_get_counter_reports_last_label(store):
    store.rows["certificate"] = {"last_number": 3, "generated_label": "RPS/CER/24-25/0003"}

    counter = await service.get_certificate_counter(object())

    assert counter.last_number == 3
    assert counter.generated_label == "RPS/CER/24-25/0003"


@pytest.mark.asyncio
async def test_generate_audits_issued_number(store, auditspan_stub):
    label = await service.generate_certificate_number(object(), now=datetime(2024, 5, 1))

    span = auditspan_stub[-1]
    assert span.scope == "CERTIFICATE_NUMBERS"
    assert span.action == "GENERATE"
    assert span.meta == {"last_number": 1, "certificate_number": label}


@pytest.mark.asyncio
async def test_storage_error_surfaces_as_storage_unavailable(mocker):
    mocker.patch(
        "app.services.certificate_number_service.crud.next_counter_value",
        new=mocker.AsyncMock(side_effect=OperationalError("UPDATE ...", {}, Exception("connection refused")))
    )

    with pytest.raises(StorageUnavailable) as e:
        await service.generate_certificate_number(object())

    assert str(e.value) == "Certificate number storage unavailable"


@pytest.mark.asyncio
async def test_reset_storage_error_surfaces_as_storage_unavailable(mocker):
    mocker.patch(
        "app.services.certificate_number_service.crud.reset_counter",
        new=mocker.AsyncMock(side_effect=OperationalError("UPDATE ...", {}, Exception("timeout")))
    )

    with pytest.raises(StorageUnavailable):
        await service.reset_certificate_number(object())
