from pydantic import BaseModel, EmailStr, Field, field_validator

NAME_MAX_LENGTH = 55
PASSWORD_MIN_LENGTH = 6
# bcrypt учитывает только первые 72 байта
PASSWORD_MAX_LENGTH = 72


def normalize_email(value: str) -> str:
    return value.strip().lower()


def check_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("The name field is required.")
    # длина считается после обрезки пробелов
    if len(value) > NAME_MAX_LENGTH:
        raise ValueError(f"The name must not be greater than {NAME_MAX_LENGTH} characters.")
    return value


def check_password(value: str) -> str:
    if len(value.encode("utf-8")) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"The password must not be greater than {PASSWORD_MAX_LENGTH} bytes.")
    if not any(ch.isalpha() for ch in value):
        raise ValueError("The password must contain at least one letter.")
    if not any(ch.isdigit() for ch in value):
        raise ValueError("The password must contain at least one number.")
    return value


class SignupRequest(BaseModel):
    name: str
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return check_name(value)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password(value)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)


class StoreUserRequest(SignupRequest):
    pass


class UpdateUserRequest(BaseModel):
    """Все поля необязательны, меняются только переданные"""
    name: str | None = None
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=PASSWORD_MIN_LENGTH)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return None if value is None else check_name(value)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        return None if value is None else normalize_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str | None) -> str | None:
        return None if value is None else check_password(value)
