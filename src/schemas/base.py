import re
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# local@domain; the domain needs no dot, like the front-end's validator
EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~.-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)*$"
)


class CamelModel(BaseModel):
    """Base for JSON DTOs: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def require_text(value: Optional[str], message: str) -> str:
    """Reject None, empty and whitespace-only strings."""
    if value is None or not value.strip():
        raise ValueError(message)
    return value
