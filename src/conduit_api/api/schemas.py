"""
Request Schemas

Per-endpoint request bodies. Each body wraps its form under a single top-level
key (``user``, ``article``, ``comment``); forms declare their fields and the
rule chains from ``validation``.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .validation import Email, Password, Username


# ---------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------

class LoginForm(BaseModel):
    email: Email
    password: Password


class LoginRequest(BaseModel):
    user: LoginForm


class RegistrationForm(BaseModel):
    username: Username
    email: Email
    password: Password


class RegistrationRequest(BaseModel):
    user: RegistrationForm


class UpdateUserForm(BaseModel):
    """Profile update: credentials are validated only when supplied."""

    email: Optional[Email] = None
    username: Optional[Username] = None
    password: Optional[Password] = None
    image: Optional[str] = None
    bio: Optional[str] = None


class UpdateUserRequest(BaseModel):
    user: UpdateUserForm


# ---------------------------------------------------------------------
# Articles
# ---------------------------------------------------------------------

class CreateArticleForm(BaseModel):
    title: str
    description: str
    body: str
    tag_list: List[str] = Field(default_factory=list, alias="tagList")

    model_config = ConfigDict(populate_by_name=True)


class CreateArticleRequest(BaseModel):
    article: CreateArticleForm


class UpdateArticleForm(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    body: Optional[str] = None


class UpdateArticleRequest(BaseModel):
    article: UpdateArticleForm


# ---------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------

class CommentForm(BaseModel):
    body: str


class CommentRequest(BaseModel):
    comment: CommentForm
