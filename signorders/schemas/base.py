"""Shared pydantic base for camelCase wire models."""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input, serializes as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def as_utc(value: datetime | None) -> datetime | None:
    """Coerce client datetimes to UTC; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _blank_as_none(value: Any) -> Any:
    value = _strip(value)
    return None if value == "" else value


def _lower(value: str | None) -> str | None:
    return value.lower() if value else value


# Stored emails are lower-cased so lookups and duplicate checks are case-blind
EmailAddress = Annotated[EmailStr, BeforeValidator(_strip), AfterValidator(_lower)]
OptionalEmailAddress = Annotated[
    EmailStr | None, BeforeValidator(_blank_as_none), AfterValidator(_lower)
]
