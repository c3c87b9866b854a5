"""Shared models for the MockBank REST contracts."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for wire models.

    The server speaks camelCase; Python code uses snake_case names.
    Both spellings are accepted on input, dumps use the server spelling.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_body(self) -> dict:
        """Serialize for a JSON request body."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ApiErrorBody(BaseModel):
    """Error body returned with non-2xx responses."""

    model_config = ConfigDict(extra="ignore")

    message: str | list[str] | None = None
