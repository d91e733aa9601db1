"""
Comment Routes

Comments hang off an article slug. Failures from the comment service,
including a missing parent article, go through the comment error
dispatcher, not the article one.
"""

from fastapi import APIRouter, Request, Response

from ..core.result import Err, Ok, Result
from .dependencies import ServicesDep
from .dispatch import dispatch_comment_error, dispatch_input_error
from .pipeline import AuthMode, RequestContext, acknowledge, run_pipeline, wrap
from .schemas import CommentRequest
from .validation import InputViolations

router = APIRouter(prefix="/api/articles/{slug}/comments", tags=["comments"])


@router.post("", summary="Comment on an article")
async def add_comment(slug: str, request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.comments.add_comment(ctx.user, slug, ctx.payload.comment.body),
        auth=AuthMode.REQUIRED,
        schema=CommentRequest,
        on_error=dispatch_comment_error,
        serialize=wrap("comment"),
    )


def _parse_comment_id(raw: str) -> Result[int, InputViolations]:
    # Parsed inside the pipeline: a missing token answers 401 before this 422
    if raw.isascii() and raw.isdigit():
        return Ok(int(raw))
    return Err(InputViolations(fields={"comment_id": ["Input should be a valid integer"]}))


def _dispatch_delete_error(err) -> Response:
    if isinstance(err, InputViolations):
        return dispatch_input_error(err)
    return dispatch_comment_error(err)


@router.delete("/{comment_id}", summary="Delete a comment")
async def delete_comment(
    slug: str,
    comment_id: str,
    request: Request,
    services: ServicesDep,
) -> Response:
    async def call(ctx: RequestContext):
        parsed = _parse_comment_id(comment_id)
        if isinstance(parsed, Err):
            return parsed
        return await services.comments.delete_comment(ctx.user, slug, parsed.value)

    return await run_pipeline(
        request,
        call,
        auth=AuthMode.REQUIRED,
        on_error=_dispatch_delete_error,
        serialize=acknowledge,
    )


@router.get("", summary="Comments on an article")
async def get_comments(slug: str, request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.comments.get_comments(ctx.user, slug),
        auth=AuthMode.OPTIONAL,
        on_error=dispatch_comment_error,
        serialize=wrap("comments"),
    )
