"""Base schemas shared by request, response and domain models"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class BaseSchema(BaseModel):
    """Base schema with common configuration

    Attributes are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        """Dump using the camelCase wire names"""
        return self.model_dump(mode="json", by_alias=True)
