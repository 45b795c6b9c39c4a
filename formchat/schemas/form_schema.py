"""Form definition schemas."""

from pydantic import BaseModel, ConfigDict


class FormFieldSchema(BaseModel):
    """Single field the conversation should collect."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    name: str
    label: str
    type: str = "text"
    description: str | None = None
    required: bool = True


class FormWithFields(BaseModel):
    """Form definition together with its fields."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    name: str
    description: str | None = None
    fields: list[FormFieldSchema] = []
