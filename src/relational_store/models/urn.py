"""
URN model.

URN format: urn:{domain}:{resourceType}::{resourceId}
"""
from pydantic import BaseModel, ConfigDict, Field


class ParsedUrn(BaseModel):
    """Components of a parsed URN."""
    domain: str
    resource_type: str = Field(alias="resourceType")
    resource_id: str = Field(alias="resourceId")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_urn(self) -> str:
        return f"urn:{self.domain}:{self.resource_type}::{self.resource_id}"
