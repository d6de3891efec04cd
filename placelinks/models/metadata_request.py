from typing import List, Optional

from pydantic import BaseModel, Field


class MetadataRequest(BaseModel):
    url: Optional[str] = Field(
        default=None,
        description="Link to resolve. Google Maps links (including maps.app.goo.gl short links) "
        "get place details; anything else gets its Open Graph preview.",
        examples=["https://maps.app.goo.gl/abc123", "https://example.com/article"],
    )


class CategoryGroupRequest(BaseModel):
    types: List[str] = Field(default_factory=list)
    category: Optional[str] = None
