"""
Pydantic schemas for categories and subcategories.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


def strip_name(v: str | None) -> str | None:
    """Trim a name and refuse one that is only whitespace."""
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("name must not be blank")
    return v


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        return strip_name(v)


class CategoryUpdate(CategoryCreate):
    pass


class CategoryResponse(BaseModel):
    id: str
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}


class SubcategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    category_id: str

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        return strip_name(v)


class SubcategoryUpdate(BaseModel):
    """Rename a subcategory or move it under another category."""
    name: str | None = Field(default=None, min_length=1, max_length=100)
    category_id: str | None = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str | None) -> str | None:
        return strip_name(v)


class SubcategoryResponse(BaseModel):
    id: str
    name: str
    category_id: str
    created_at: datetime

    model_config = {"from_attributes": True}
