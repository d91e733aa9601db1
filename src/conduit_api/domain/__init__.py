"""
Domain Package

Entity models and per-area error families shared between the HTTP layer and
the business services.
"""

from .models import Pagination, ArticleFilter, User, Profile, Article, Comment
from .errors import (
    UserError,
    UserErrorBadAuth,
    UserErrorNotFound,
    UserErrorNameTaken,
    UserErrorEmailTaken,
    ArticleError,
    ArticleErrorNotFound,
    ArticleErrorNotAllowed,
    CommentError,
    CommentErrorNotFound,
    CommentErrorSlugNotFound,
    CommentErrorNotAllowed,
)

__all__ = [
    "Pagination",
    "ArticleFilter",
    "User",
    "Profile",
    "Article",
    "Comment",
    "UserError",
    "UserErrorBadAuth",
    "UserErrorNotFound",
    "UserErrorNameTaken",
    "UserErrorEmailTaken",
    "ArticleError",
    "ArticleErrorNotFound",
    "ArticleErrorNotAllowed",
    "CommentError",
    "CommentErrorNotFound",
    "CommentErrorSlugNotFound",
    "CommentErrorNotAllowed",
]
