from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from conduit_api.auth.jwt_utils import create_user_token
from conduit_api.config import Settings
from conduit_api.domain.models import Article, Comment, Profile, User
from conduit_api.main import create_app
from conduit_api.services.protocols import (
    ArticleService,
    CommentService,
    Services,
    TagService,
    UserService,
)

TEST_JWT_SECRET = "test-secret-for-conduit-api-must-be-long-enough"
NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_settings():
    def _make(**overrides):
        return Settings(jwt_secret=TEST_JWT_SECRET, enable_https=False, **overrides)

    return _make


@pytest.fixture
def test_settings(make_settings):
    return make_settings()


@pytest.fixture
def services():
    return Services(
        users=AsyncMock(spec=UserService),
        articles=AsyncMock(spec=ArticleService),
        comments=AsyncMock(spec=CommentService),
        tags=AsyncMock(spec=TagService),
    )


@pytest.fixture
def app(services, test_settings):
    return create_app(services=services, app_settings=test_settings)


@pytest.fixture
def client(app):
    # Unhandled errors must come back as 500 responses, not re-raise in tests
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def auth_headers(test_settings):
    token = create_user_token(1, test_settings)
    return {"Authorization": f"Token {token}"}


@pytest.fixture
def profile():
    return Profile(username="jake", bio="I work at statefarm", image=None, following=False)


@pytest.fixture
def user():
    return User(email="jake@jake.jake", token="jwt.token.here", username="jake")


@pytest.fixture
def article(profile):
    return Article(
        slug="how-to-train-your-dragon",
        title="How to train your dragon",
        description="Ever wonder how?",
        body="It takes a Jacobian",
        tag_list=["dragons", "training"],
        created_at=NOW,
        updated_at=NOW,
        favorited=False,
        favorites_count=0,
        author=profile,
    )


@pytest.fixture
def comment(profile):
    return Comment(id=1, created_at=NOW, updated_at=NOW, body="It takes a Jacobian", author=profile)
