"""Shared schema configuration and field rules."""

import re
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
)
from pydantic.alias_generators import to_camel

PASSWORD_SYMBOLS = '!@#$%^&*(),.?":{}|<>'
_UPPERCASE = re.compile(r"[A-Z]")


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def check_user_name(value: str) -> str:
    if len(value) < 20:
        raise ValueError("Name must be at least 20 characters")
    if len(value) > 60:
        raise ValueError("Name must not exceed 60 characters")
    return value


def check_password(value: str) -> str:
    """Enforce length 8-16 with at least one uppercase letter and one symbol."""
    if len(value) < 8:
        raise ValueError("Password must be at least 8 characters")
    if len(value) > 16:
        raise ValueError("Password must not exceed 16 characters")
    if not _UPPERCASE.search(value) or not any(ch in PASSWORD_SYMBOLS for ch in value):
        raise ValueError(
            "Password must contain at least one uppercase letter and one special character"
        )
    return value


def check_email(value: object, handler: ValidatorFunctionWrapHandler) -> str:
    try:
        return handler(value)
    except ValidationError:
        raise ValueError("Invalid email format") from None


def check_address(value: str | None) -> str | None:
    if value is not None and len(value) > 400:
        raise ValueError("Address must not exceed 400 characters")
    return value


UserName = Annotated[str, AfterValidator(check_user_name)]
Password = Annotated[str, AfterValidator(check_password)]
Address = Annotated[str | None, AfterValidator(check_address)]
Email = Annotated[EmailStr, WrapValidator(check_email)]
