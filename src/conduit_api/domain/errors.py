"""
Domain Errors

Failure vocabularies returned by the business services, one closed family per
feature area. The families deliberately share no base class: a service call
belongs to exactly one area, and the HTTP layer picks the dispatcher for that
area rather than inspecting error content.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


# ---------------------------------------------------------------------
# Users & Profiles
# ---------------------------------------------------------------------

class UserError(BaseModel):
    code: ClassVar[str]

    model_config = ConfigDict(frozen=True, extra="forbid")


class UserErrorBadAuth(UserError):
    """Email/password pair did not match any account."""

    code: ClassVar[str] = "user_bad_auth"

    email: str


class UserErrorNotFound(UserError):
    code: ClassVar[str] = "user_not_found"

    username: str


class UserErrorNameTaken(UserError):
    code: ClassVar[str] = "user_name_taken"

    username: str


class UserErrorEmailTaken(UserError):
    code: ClassVar[str] = "user_email_taken"

    email: str


# ---------------------------------------------------------------------
# Articles
# ---------------------------------------------------------------------

class ArticleError(BaseModel):
    code: ClassVar[str]

    model_config = ConfigDict(frozen=True, extra="forbid")


class ArticleErrorNotFound(ArticleError):
    code: ClassVar[str] = "article_not_found"

    slug: str


class ArticleErrorNotAllowed(ArticleError):
    """Caller is not the author of the article."""

    code: ClassVar[str] = "article_not_allowed"

    slug: str


# ---------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------

class CommentError(BaseModel):
    code: ClassVar[str]

    model_config = ConfigDict(frozen=True, extra="forbid")


class CommentErrorNotFound(CommentError):
    code: ClassVar[str] = "comment_not_found"

    comment_id: int


class CommentErrorSlugNotFound(CommentError):
    """The article the comment hangs off does not exist."""

    code: ClassVar[str] = "comment_slug_not_found"

    slug: str


class CommentErrorNotAllowed(CommentError):
    code: ClassVar[str] = "comment_not_allowed"

    comment_id: int
