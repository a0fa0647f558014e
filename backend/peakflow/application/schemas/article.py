"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, Field


class ArticleCreate(BaseModel):
    """Schema for creating a new article from the admin form."""

    title: str = Field(..., max_length=255, examples=["Slow Mornings in Lisbon"])
    excerpt: str | None = None
    content: str | None = None
    category: str = Field("general", max_length=100, examples=["travel"])
    image_url: str | None = None
    author: str | None = Field(None, max_length=255)
    read_time: str | None = Field(None, max_length=50, examples=["5 min read"])
    published: bool = False


class ArticleUpdate(BaseModel):
    """Schema for updating an existing article — all fields optional."""

    title: str | None = Field(None, max_length=255)
    excerpt: str | None = None
    content: str | None = None
    category: str | None = Field(None, max_length=100)
    image_url: str | None = None
    author: str | None = Field(None, max_length=255)
    read_time: str | None = Field(None, max_length=50)
    published: bool | None = None


class FeaturedSelection(BaseModel):
    """Ordered list of article ids for the homepage hero."""

    article_ids: list[str] = Field(..., examples=[["a1", "a2"]])


class ArticleResponse(BaseModel):
    """Raw article row returned to admin clients."""

    id: str
    title: str
    category: str
    excerpt: str | None
    content: str | None
    author: str
    image_url: str | None
    read_time: str | None
    published: bool
    featured: bool
    featured_rank: int | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ArticleDisplayResponse(BaseModel):
    """Display-mapped article returned to public clients."""

    id: str
    title: str
    category: str
    date: str
    image: str
    excerpt: str | None
    content: str | None
    author: str
    read_time: str
    category_color: str

    model_config = {"from_attributes": True}
