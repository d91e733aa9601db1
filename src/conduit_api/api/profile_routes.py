"""
Profile Routes

Public profiles and follow relationships. Reading a profile works
anonymously; following requires an authenticated caller.
"""

from fastapi import APIRouter, Request, Response

from .dependencies import ServicesDep
from .dispatch import dispatch_user_error
from .pipeline import AuthMode, run_pipeline, wrap

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.get("/{username}", summary="Get a profile")
async def get_profile(username: str, request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.users.get_profile(ctx.user, username),
        auth=AuthMode.OPTIONAL,
        on_error=dispatch_user_error,
        serialize=wrap("profile"),
    )


@router.post("/{username}/follow", summary="Follow a user")
async def follow_user(username: str, request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.users.follow_user(ctx.user, username),
        auth=AuthMode.REQUIRED,
        on_error=dispatch_user_error,
        serialize=wrap("profile"),
    )


@router.delete("/{username}/follow", summary="Unfollow a user")
async def unfollow_user(username: str, request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.users.unfollow_user(ctx.user, username),
        auth=AuthMode.REQUIRED,
        on_error=dispatch_user_error,
        serialize=wrap("profile"),
    )
