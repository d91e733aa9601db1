"""
Business Service Contracts

The HTTP layer never implements login, registration, article or comment
semantics itself. It talks to these collaborators, which live behind
``typing.Protocol`` interfaces so any backend (database, remote API, test
double) can be plugged in through ``create_app`` or the ``services_factory``
setting.

Operations that can fail return ``Result[..., <AreaError>]`` with the error
family of their feature area; listings cannot fail and return plain values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol

from ..api.schemas import (
    CreateArticleForm,
    LoginForm,
    RegistrationForm,
    UpdateArticleForm,
    UpdateUserForm,
)
from ..auth.models import CurrentUser, TokenError
from ..core.result import Result
from ..domain.errors import ArticleError, CommentError, UserError
from ..domain.models import (
    Article,
    ArticleFilter,
    Comment,
    Pagination,
    Profile,
    User,
)


class TokenResolver(Protocol):
    async def resolve(self, token: str) -> Result[CurrentUser, TokenError]:
        """Exchange a raw token string for the caller's identity."""
        ...


class UserService(Protocol):
    async def login(self, form: LoginForm) -> Result[User, UserError]: ...

    async def register(self, form: RegistrationForm) -> Result[User, UserError]: ...

    async def get_user(self, current: CurrentUser) -> Result[User, UserError]: ...

    async def update_user(
        self, current: CurrentUser, form: UpdateUserForm
    ) -> Result[User, UserError]: ...

    async def get_profile(
        self, current: Optional[CurrentUser], username: str
    ) -> Result[Profile, UserError]: ...

    async def follow_user(
        self, current: CurrentUser, username: str
    ) -> Result[Profile, UserError]: ...

    async def unfollow_user(
        self, current: CurrentUser, username: str
    ) -> Result[Profile, UserError]: ...


class ArticleService(Protocol):
    async def list_articles(
        self,
        current: Optional[CurrentUser],
        article_filter: ArticleFilter,
        pagination: Pagination,
    ) -> List[Article]: ...

    async def get_feed(
        self, current: CurrentUser, pagination: Pagination
    ) -> List[Article]: ...

    async def get_article(
        self, current: Optional[CurrentUser], slug: str
    ) -> Result[Article, ArticleError]: ...

    async def create_article(
        self, current: CurrentUser, form: CreateArticleForm
    ) -> Result[Article, ArticleError]: ...

    async def update_article(
        self, current: CurrentUser, slug: str, form: UpdateArticleForm
    ) -> Result[Article, ArticleError]: ...

    async def delete_article(
        self, current: CurrentUser, slug: str
    ) -> Result[None, ArticleError]: ...

    async def favorite_article(
        self, current: CurrentUser, slug: str
    ) -> Result[Article, ArticleError]: ...

    async def unfavorite_article(
        self, current: CurrentUser, slug: str
    ) -> Result[Article, ArticleError]: ...


class CommentService(Protocol):
    async def add_comment(
        self, current: CurrentUser, slug: str, body: str
    ) -> Result[Comment, CommentError]: ...

    async def delete_comment(
        self, current: CurrentUser, slug: str, comment_id: int
    ) -> Result[None, CommentError]: ...

    async def get_comments(
        self, current: Optional[CurrentUser], slug: str
    ) -> Result[List[Comment], CommentError]: ...


class TagService(Protocol):
    async def get_tags(self) -> List[str]: ...


@dataclass(frozen=True)
class Services:
    """Bundle of business collaborators handed to the application factory."""

    users: UserService
    articles: ArticleService
    comments: CommentService
    tags: TagService
