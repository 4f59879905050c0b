from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field, ConfigDict, field_validator
from app.core.pagination import ListQueryDTO
from app.core.utils.validators import strip_text


class CompanyCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    company_name: str = Field(min_length=2, max_length=256)
    address: str | None = Field(default=None, max_length=500)
    gst_number: str | None = Field(default=None, pattern=r"^[0-9A-Z]{15}$")
    industries: str | None = Field(default=None, max_length=256)
    website: str | None = Field(default=None, max_length=256)
    industries_type: str | None = Field(default=None, max_length=256)
    flag: str | None = Field(default=None, max_length=64)

    _strip = field_validator('company_name', 'address', 'industries', 'website', 'industries_type', 'flag',
                             mode='before')(strip_text)

    @field_validator('gst_number', mode='before')
    def _upper_gst(cls, v):
        v = strip_text(v)
        return v.upper() if isinstance(v, str) else v


class CompanyPutDTO(CompanyCreateDTO):
    pass


class CompanyReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_name: str
    address: str | None
    gst_number: str | None
    industries: str | None
    website: str | None
    industries_type: str | None
    flag: str | None
    created_at: datetime


class CompaniesQueryDTO(ListQueryDTO):
    sort_by: Literal["company_name", "industries", "industries_type", "created_at"] | None = None
