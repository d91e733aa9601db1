"""
User Routes

Login, registration and the authenticated user's own account. All failures
from the user service are answered by the user error dispatcher.
"""

from fastapi import APIRouter, Request, Response

from .dependencies import ServicesDep
from .dispatch import dispatch_user_error
from .pipeline import AuthMode, run_pipeline, wrap
from .schemas import LoginRequest, RegistrationRequest, UpdateUserRequest

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/users/login", summary="Authenticate with email and password")
async def login(request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.users.login(ctx.payload.user),
        schema=LoginRequest,
        on_error=dispatch_user_error,
        serialize=wrap("user"),
    )


@router.post("/users", summary="Register a new account")
async def register(request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.users.register(ctx.payload.user),
        schema=RegistrationRequest,
        on_error=dispatch_user_error,
        serialize=wrap("user"),
    )


@router.get("/user", summary="Current user")
async def get_user(request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.users.get_user(ctx.user),
        auth=AuthMode.REQUIRED,
        on_error=dispatch_user_error,
        serialize=wrap("user"),
    )


@router.put("/user", summary="Update current user")
async def update_user(request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.users.update_user(ctx.user, ctx.payload.user),
        auth=AuthMode.REQUIRED,
        schema=UpdateUserRequest,
        on_error=dispatch_user_error,
        serialize=wrap("user"),
    )
