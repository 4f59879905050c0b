from typing import Literal
from pydantic import BaseModel, EmailStr, Field, ConfigDict, AliasPath, field_validator
from app.core.pagination import ListQueryDTO
from app.core.utils.validators import strip_text


class ContactPersonCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    first_name: str = Field(min_length=1, max_length=128)
    middle_name: str | None = Field(default=None, max_length=128)
    last_name: str = Field(min_length=1, max_length=128)
    contact_no: str = Field(pattern=r"^\d{6,15}$", description="Digits only")
    email: EmailStr
    designation: str | None = Field(default=None, max_length=128)
    company_id: int = Field(gt=0)

    _strip = field_validator('first_name', 'middle_name', 'last_name', 'contact_no', 'designation',
                             mode='before')(strip_text)


class ContactPersonPutDTO(ContactPersonCreateDTO):
    pass


class ContactPersonReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    first_name: str
    middle_name: str | None
    last_name: str
    contact_no: str
    email: EmailStr
    designation: str | None
    company_id: int
    company_name: str | None = Field(default=None, validation_alias=AliasPath('company', 'company_name'))


class ContactPersonsQueryDTO(ListQueryDTO):
    company_id: int | None = Field(default=None, gt=0)
    sort_by: Literal["first_name", "last_name", "designation"] | None = None
