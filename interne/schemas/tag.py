"""Tag schemas."""

from pydantic import BaseModel


class TagCloudItem(BaseModel):
    """A tag sized and coloured by how often it is used."""

    name: str
    count: int
    font_size: str
    color: str
