from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from app.core.pagination import ListQueryDTO
from app.core.utils.validators import strip_text


class CategoryCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid', protected_namespaces=())

    model_name: str = Field(min_length=1, max_length=256)
    range: str = Field(min_length=1, max_length=128)

    _strip = field_validator('model_name', 'range', mode='before')(strip_text)


class CategoryPutDTO(CategoryCreateDTO):
    pass


class CategoryReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, protected_namespaces=())

    id: int
    model_name: str
    range: str


class CategoriesQueryDTO(ListQueryDTO):
    page_size: int = Field(default=200, ge=1, le=200)
    sort_by: Literal["model_name", "range"] | None = None
    sort_dir: Literal["asc", "desc"] = "asc"


class EngineerCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str = Field(min_length=2, max_length=256)

    _strip = field_validator('name', mode='before')(strip_text)


class EngineerPutDTO(EngineerCreateDTO):
    pass


class EngineerReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class EngineersQueryDTO(ListQueryDTO):
    page_size: int = Field(default=200, ge=1, le=200)
    sort_by: Literal["name"] | None = None
    sort_dir: Literal["asc", "desc"] = "asc"
