from datetime import date, datetime
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from app.core.pagination import ListQueryDTO
from app.core.utils.validators import strip_text


class ObservationDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    gas: str = Field(default="", max_length=128)
    before: str = Field(default="", max_length=64)
    after: str = Field(default="", max_length=64)


class CertificateCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    certificate_no: str | None = Field(
        default=None,
        min_length=1,
        max_length=64,
        description="Left empty to mint the next certificate number"
    )
    customer_name: str = Field(min_length=1, max_length=256)
    site_location: str | None = Field(default=None, max_length=256)
    make_model: str | None = Field(default=None, max_length=256)
    range: str | None = Field(default=None, max_length=128)
    serial_no: str | None = Field(default=None, max_length=128)
    calibration_gas: str | None = Field(default=None, max_length=256)
    gas_canister_details: str | None = Field(default=None, max_length=256)
    date_of_calibration: date
    calibration_due_date: date | None = None
    observations: list[ObservationDTO] = Field(default_factory=list, max_length=50)
    engineer_name: str | None = Field(default=None, max_length=256)
    status: str | None = Field(default=None, max_length=64)

    _strip = field_validator('certificate_no', 'customer_name', 'site_location', 'make_model', 'range', 'serial_no',
                             'calibration_gas', 'gas_canister_details', 'engineer_name', 'status',
                             mode='before')(strip_text)


class CertificatePutDTO(CertificateCreateDTO):
    certificate_no: str = Field(min_length=1, max_length=64)


class CertificateReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    certificate_no: str
    customer_name: str
    site_location: str | None
    make_model: str | None
    range: str | None
    serial_no: str | None
    calibration_gas: str | None
    gas_canister_details: str | None
    date_of_calibration: date
    calibration_due_date: date | None
    observations: list[ObservationDTO]
    engineer_name: str | None
    status: str | None
    created_at: datetime


class CertificatesQueryDTO(ListQueryDTO):
    date_from: date | None = None
    date_to: date | None = None
    engineer_name: str | None = None
    status: str | None = None
    sort_by: Literal[
        "certificate_no", "customer_name", "site_location", "make_model", "serial_no",
        "engineer_name", "date_of_calibration", "created_at"
    ] | None = None

    @model_validator(mode="after")
    def _check_dates(self):
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("date_from must not be after date_to")
        return self


class CertificateNumberDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    certificate_number: str = Field(alias="certificateNumber")


class CertificateCounterDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    last_number: int = Field(alias="lastNumber")
    generated_label: str | None = Field(alias="generatedLabel")


class MessageDTO(BaseModel):
    message: str
