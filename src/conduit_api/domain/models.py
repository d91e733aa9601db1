"""
Domain Models

Entities returned by the business services and the query value objects the
HTTP layer builds for them.

Field names are pythonic; serialization uses the camelCase names of the wire
protocol through aliases, so ``jsonable_encoder`` emits ``tagList``,
``createdAt``, ``favoritesCount`` and friends.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------
# Query Value Objects
# ---------------------------------------------------------------------

class Pagination(BaseModel):
    """
    Window over a listing.

    Both values are non-negative; the HTTP layer substitutes the defaults
    whenever a query parameter is absent or unreadable.
    """

    limit: int = Field(default=20, ge=0)
    offset: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class ArticleFilter(BaseModel):
    """Optional, independent criteria for article listings."""

    tag: Optional[str] = None
    author: Optional[str] = None
    favorited_by: Optional[str] = None

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------

class User(BaseModel):
    """The authenticated user's own account, including a fresh token."""

    email: str
    token: str
    username: str
    bio: Optional[str] = None
    image: Optional[str] = None


class Profile(BaseModel):
    username: str
    bio: Optional[str] = None
    image: Optional[str] = None
    following: bool = False


class Article(BaseModel):
    slug: str
    title: str
    description: str
    body: str
    tag_list: List[str] = Field(default_factory=list, alias="tagList")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
    favorited: bool = False
    favorites_count: int = Field(default=0, ge=0, alias="favoritesCount")
    author: Profile

    model_config = ConfigDict(populate_by_name=True)


class Comment(BaseModel):
    id: int
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
    body: str
    author: Profile

    model_config = ConfigDict(populate_by_name=True)
