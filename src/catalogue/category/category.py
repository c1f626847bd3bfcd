"""Category used to group products on the storefront home screen."""

from pydantic import BaseModel, ConfigDict, field_validator


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str

    @field_validator("id", mode="before")
    @classmethod
    def identifier_is_string(cls, value):
        if isinstance(value, int):
            return str(value)
        return value
