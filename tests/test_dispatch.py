import json

import pytest

from conduit_api.api.dispatch import (
    article_error_response,
    comment_error_response,
    dispatch_input_error,
    dispatch_token_error,
    input_error_response,
    token_error_response,
    user_error_response,
)
from conduit_api.api.validation import InputViolations, MalformedPayload
from conduit_api.auth.models import (
    TokenErrorExpired,
    TokenErrorMalformed,
    TokenErrorNotFound,
    TokenErrorUserIdNotFound,
)
from conduit_api.domain.errors import (
    ArticleErrorNotAllowed,
    ArticleErrorNotFound,
    CommentErrorNotAllowed,
    CommentErrorNotFound,
    CommentErrorSlugNotFound,
    UserErrorBadAuth,
    UserErrorEmailTaken,
    UserErrorNameTaken,
    UserErrorNotFound,
)


@pytest.mark.parametrize(
    "err",
    [
        TokenErrorNotFound(),
        TokenErrorMalformed(detail="bad header"),
        TokenErrorExpired(),
        TokenErrorUserIdNotFound(),
    ],
)
def test_every_token_error_is_401(err):
    status, body = token_error_response(err)

    assert status == 401
    assert body["errors"]["code"] == err.code


@pytest.mark.parametrize(
    "err, expected",
    [
        (UserErrorBadAuth(email="jake@jake.jake"), 400),
        (UserErrorNotFound(username="jake"), 404),
        (UserErrorNameTaken(username="jake"), 400),
        (UserErrorEmailTaken(email="jake@jake.jake"), 400),
    ],
)
def test_user_error_statuses(err, expected):
    assert user_error_response(err)[0] == expected


@pytest.mark.parametrize(
    "err, expected",
    [
        (ArticleErrorNotFound(slug="missing"), 404),
        (ArticleErrorNotAllowed(slug="theirs"), 403),
    ],
)
def test_article_error_statuses(err, expected):
    assert article_error_response(err)[0] == expected


@pytest.mark.parametrize(
    "err, expected",
    [
        (CommentErrorNotFound(comment_id=3), 404),
        (CommentErrorSlugNotFound(slug="missing"), 404),
        (CommentErrorNotAllowed(comment_id=3), 403),
    ],
)
def test_comment_error_statuses(err, expected):
    assert comment_error_response(err)[0] == expected


def test_error_body_carries_variant_and_payload():
    _, body = article_error_response(ArticleErrorNotAllowed(slug="theirs"))

    assert body == {"errors": {"code": "article_not_allowed", "slug": "theirs"}}


def test_bad_auth_body_does_not_echo_password():
    _, body = user_error_response(UserErrorBadAuth(email="jake@jake.jake"))

    assert body == {"errors": {"code": "user_bad_auth", "email": "jake@jake.jake"}}


def test_field_violations_serialize_as_map():
    err = InputViolations(fields={"email": ["Not a valid email"]})

    assert input_error_response(err) == (422, {"errors": {"email": ["Not a valid email"]}})


def test_malformed_payload_serializes_as_message():
    assert input_error_response(MalformedPayload()) == (422, {"errors": "Malformed JSON payload"})


def test_dispatchers_build_json_responses():
    response = dispatch_token_error(TokenErrorNotFound())

    assert response.status_code == 401
    assert json.loads(response.body) == {"errors": {"code": "token_not_found"}}

    response = dispatch_input_error(MalformedPayload())

    assert response.status_code == 422


def test_error_from_another_family_is_not_mapped():
    # Families do not share status tables
    with pytest.raises(TypeError):
        article_error_response(CommentErrorNotFound(comment_id=1))
