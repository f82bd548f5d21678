"""Typed note properties destined for the frontmatter header."""

import datetime
import uuid
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator


class PropertyType(str, Enum):
    """Value types a frontmatter property can be encoded as."""

    TEXT = "text"
    MULTITEXT = "multitext"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    DATE = "date"
    DATETIME = "datetime"


def _generate_id() -> str:
    return uuid.uuid4().hex[:12]


class Property(BaseModel):
    """
    A named metadata value.

    ``type`` is optional: the serializer resolves the type from its
    registry first and only falls back to the declared type (then to
    ``text``) when the registry does not know the name.

    Example:
        Property(name="tags", value='["python", "notes"]')
        Property(name="read", value=True, type=PropertyType.CHECKBOX)
    """

    id: str = Field(default_factory=_generate_id, description="Stable property identifier")
    name: str = Field(..., min_length=1, description="Frontmatter key")
    value: Union[bool, str] = Field("", description="Raw value (checkbox values may be real booleans)")
    type: Optional[PropertyType] = Field(None, description="Declared type, used when the registry has none")

    model_config = {"extra": "forbid"}

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        # YAML loads unquoted dates and timestamps as date objects
        if isinstance(v, (datetime.date, datetime.datetime)):
            return v.isoformat()
        return v

    def text_value(self) -> str:
        """Value as a string (booleans rendered as ``true``/``false``)."""
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return self.value
