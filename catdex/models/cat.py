"""Pydantic models for the cat listing."""

from pydantic import BaseModel, ConfigDict, Field

PROJECT_NAME = "Catdex"
LISTING_LIMIT = 64


class Cat(BaseModel):
    """One row of the ``cats`` table."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    name: str
    image_path: str = Field(..., description="Path relative to the static asset root")


class IndexPage(BaseModel):
    """View model handed to the ``index`` template."""

    project_name: str = PROJECT_NAME
    cats: list[Cat] = Field(default_factory=list, max_length=LISTING_LIMIT)
