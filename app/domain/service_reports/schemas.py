from datetime import date as date_type, datetime
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from app.core.pagination import ListQueryDTO
from app.core.utils.validators import strip_text


class ServiceReportCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name_and_location: str = Field(min_length=1, max_length=500)
    contact_person: str | None = Field(default=None, max_length=256)
    contact_number: str | None = Field(default=None, pattern=r"^\+?\d{6,15}$")
    service_engineer: str | None = Field(default=None, max_length=256)
    date: date_type
    place: str | None = Field(default=None, max_length=256)
    place_options: str | None = Field(default=None, max_length=64)
    nature_of_job: str | None = Field(default=None, max_length=500)
    report_no: str | None = Field(default=None, max_length=64)
    make_model_quantity: str | None = Field(default=None, max_length=1000)
    serials_calibrated_ok: str | None = Field(default=None, max_length=2000)
    serials_faulty: str | None = Field(default=None, max_length=2000)
    engineer_name: str | None = Field(default=None, max_length=256)

    _strip = field_validator(
        'name_and_location', 'contact_person', 'contact_number', 'service_engineer', 'place', 'place_options',
        'nature_of_job', 'report_no', 'make_model_quantity', 'serials_calibrated_ok', 'serials_faulty',
        'engineer_name', mode='before'
    )(strip_text)


class ServiceReportPutDTO(ServiceReportCreateDTO):
    pass


class ServiceReportReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name_and_location: str
    contact_person: str | None
    contact_number: str | None
    service_engineer: str | None
    date: date_type
    place: str | None
    place_options: str | None
    nature_of_job: str | None
    report_no: str | None
    make_model_quantity: str | None
    serials_calibrated_ok: str | None
    serials_faulty: str | None
    engineer_name: str | None
    created_at: datetime


class ServiceReportsQueryDTO(ListQueryDTO):
    date_from: date_type | None = None
    date_to: date_type | None = None
    sort_by: Literal["name_and_location", "service_engineer", "date", "report_no", "created_at"] | None = None
