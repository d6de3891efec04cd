from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OpenGraphMetadata(BaseModel):
    """Page-level preview fields read from a generic web page."""

    title: str
    description: str = ""
    image: Optional[str] = None


class PlaceMetadata(BaseModel):
    """Normalized metadata for one submitted link.

    Serialized with camelCase keys (``reviewCount``, ``priceLevel``) so the
    record can be stored by the link list as-is.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    description: str = ""
    image: Optional[str] = None
    category: Optional[str] = None
    types: List[str] = Field(default_factory=list)
    address: Optional[str] = None
    city: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    review_count: Optional[int] = Field(default=None, ge=0, alias="reviewCount")
    price_level: Optional[str] = Field(default=None, alias="priceLevel")

    @classmethod
    def title_only(cls, title: str) -> "PlaceMetadata":
        """Return the reduced record used when nothing but a title is known."""
        return cls(title=title)

    @classmethod
    def from_open_graph(cls, og: OpenGraphMetadata) -> "PlaceMetadata":
        return cls(title=og.title, description=og.description, image=og.image)
