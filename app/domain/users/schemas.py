from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict, SecretStr, model_validator, computed_field
from datetime import datetime
from app.core.utils.validators import check_password_strength, normalize_phone, normalize_phone_or_none, \
    ensure_passwords_match


class UserCreateDTO(BaseModel):
    email: EmailStr
    password: SecretStr = Field(
        min_length=8,
        max_length=64,
        description='Password must be between 8 and 64 characters long'
    )
    password_confirm: SecretStr = Field(min_length=8, max_length=64)
    name: str = Field(min_length=2, max_length=256)
    contact: str = Field(description="Phone number, normalized to E.164")

    @field_validator('password')
    def _check_password(cls, v: SecretStr) -> SecretStr:
        check_password_strength(v)
        return v

    _contact = field_validator('contact', mode="before")(normalize_phone)

    @model_validator(mode="after")
    def _passwords_match(self):
        return ensure_passwords_match(self, self.password, self.password_confirm)


class UserReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: EmailStr
    contact: str


class RoleReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class AdminUserListItemDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: EmailStr
    contact: str
    is_active: bool
    created_at: datetime
    roles: list[RoleReadDTO]

    @computed_field(return_type=bool)
    @property
    def is_admin(self) -> bool:
        return any(r.name == "ADMIN" for r in self.roles)


class AdminUsersQueryDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=200)
    email: str | None = None
    name: str | None = None
    is_active: bool | None = None


class UserUpdateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str | None = Field(default=None, min_length=2, max_length=256)
    email: EmailStr | None = None
    contact: str | None = None
    password: SecretStr | None = Field(default=None, min_length=8, max_length=64)
    is_active: bool | None = None

    _contact = field_validator('contact', mode="before")(normalize_phone_or_none)

    @field_validator('password')
    def _check_password(cls, v: SecretStr | None) -> SecretStr | None:
        if v is not None:
            check_password_strength(v)
        return v


class PasswordChangeDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    old_password: SecretStr = Field(min_length=8, max_length=64)
    new_password: SecretStr = Field(min_length=8, max_length=64)
    confirm_new_password: SecretStr = Field(min_length=8, max_length=64)

    @field_validator('new_password')
    def _check_password(cls, v: SecretStr) -> SecretStr:
        check_password_strength(v)
        return v

    @model_validator(mode="after")
    def _passwords_match(self):
        return ensure_passwords_match(self, self.new_password, self.confirm_new_password)
