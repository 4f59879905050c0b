import pytest
from pydantic import ValidationError
from app.domain.users.schemas import UserCreateDTO, UserUpdateDTO, PasswordChangeDTO


test_user_payload = {
    "email": "john@gmail.com",
    "name": "John Derek",
    "contact": "9876543210",
}


def create_payload(**override):
    data = dict(test_user_payload)
    data.setdefault("password", "Str0ng!Password")
    data.setdefault("password_confirm", "Str0ng!Password")
    data.update(override)
    return data


def test_check_password_pass_validation():
    dto = UserCreateDTO(**create_payload())
    assert dto.password.get_secret_value() == "Str0ng!Password"


@pytest.mark.parametrize(
    "password, expected_parts",
    [
        ("ABCDEFGH1!", {"a lowercase letter"}),
        ("abcdefgh1!", {"an uppercase letter"}),
        ("Abcdefgh!!", {"a digit"}),
        ("Abcdefgh1", {"a special character"}),
        ("abcdefgh", {"an uppercase letter", "a digit", "a special character"})
    ]
)
def test_check_password_weak_passwords_raise_validation_error(password, expected_parts):
    with pytest.raises(ValidationError) as e:
        UserCreateDTO(**create_payload(**{"password": password, "password_confirm": password}))
    msg = str(e.value)
    for part in expected_parts:
        assert part in msg


def test_passwords_do_not_match_raises_validation_error():
    with pytest.raises(ValidationError) as e:
        UserCreateDTO(**create_payload(**{"password_confirm": "Tokyo123@!"}))
    assert "Passwords do not match" in str(e.value)


def test_contact_is_normalized_to_e164():
    dto = UserCreateDTO(**create_payload(contact="98765 43210"))
    assert dto.contact == "+919876543210"


@pytest.mark.parametrize("bad_contact", ["", "12345", "call me"])
def test_invalid_contact_raises_validation_error(bad_contact):
    with pytest.raises(ValidationError):
        UserCreateDTO(**create_payload(contact=bad_contact))


def test_name_too_short_raises_validation_error():
    with pytest.raises(ValidationError):
        UserCreateDTO(**create_payload(name="J"))


def test_update_dto_allows_partial_payload():
    dto = UserUpdateDTO(name="New Name")
    assert dto.model_dump(exclude_none=True) == {"name": "New Name"}


def test_update_dto_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        UserUpdateDTO(roles=["ADMIN"])


def test_update_dto_checks_password_strength():
    with pytest.raises(ValidationError) as e:
        UserUpdateDTO(password="weakpassword")
    assert "an uppercase letter" in str(e.value)


def test_password_change_requires_matching_confirmation():
    with pytest.raises(ValidationError) as e:
        PasswordChangeDTO(
            old_password="Old!Passw0rd",
            new_password="N3w!Password",
            confirm_new_password="N3w!Passwordx"
        )
    assert "Passwords do not match" in str(e.value)
