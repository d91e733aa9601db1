"""
Article Routes

Listings, the personal feed, article CRUD and favorites.

Listings never fail at the service level; their query parameters are parsed
best-effort, falling back to defaults rather than rejecting the request.
Everything else is answered by the article error dispatcher.
"""

from fastapi import APIRouter, Request, Response

from ..core.result import Ok
from .dependencies import ServicesDep
from .dispatch import dispatch_article_error
from .pipeline import (
    AuthMode,
    RequestContext,
    acknowledge,
    parse_article_filter,
    parse_pagination,
    run_pipeline,
    wrap,
    wrap_articles,
)
from .schemas import CreateArticleRequest, UpdateArticleRequest

router = APIRouter(prefix="/api/articles", tags=["articles"])


# ---------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------

@router.get("", summary="List articles")
async def list_articles(request: Request, services: ServicesDep) -> Response:
    pagination = parse_pagination(request.query_params)
    article_filter = parse_article_filter(request.query_params)

    async def call(ctx: RequestContext):
        return Ok(await services.articles.list_articles(ctx.user, article_filter, pagination))

    return await run_pipeline(
        request,
        call,
        auth=AuthMode.OPTIONAL,
        serialize=wrap_articles,
    )


@router.get("/feed", summary="Articles by followed authors")
async def get_feed(request: Request, services: ServicesDep) -> Response:
    pagination = parse_pagination(request.query_params)

    async def call(ctx: RequestContext):
        return Ok(await services.articles.get_feed(ctx.user, pagination))

    return await run_pipeline(
        request,
        call,
        auth=AuthMode.REQUIRED,
        serialize=wrap_articles,
    )


# ---------------------------------------------------------------------
# Single article
# ---------------------------------------------------------------------

@router.get("/{slug}", summary="Get an article")
async def get_article(slug: str, request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.articles.get_article(ctx.user, slug),
        auth=AuthMode.OPTIONAL,
        on_error=dispatch_article_error,
        serialize=wrap("article"),
    )


@router.post("", summary="Create an article")
async def create_article(request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.articles.create_article(ctx.user, ctx.payload.article),
        auth=AuthMode.REQUIRED,
        schema=CreateArticleRequest,
        on_error=dispatch_article_error,
        serialize=wrap("article"),
    )


@router.put("/{slug}", summary="Update an article")
async def update_article(slug: str, request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.articles.update_article(ctx.user, slug, ctx.payload.article),
        auth=AuthMode.REQUIRED,
        schema=UpdateArticleRequest,
        on_error=dispatch_article_error,
        serialize=wrap("article"),
    )


@router.delete("/{slug}", summary="Delete an article")
async def delete_article(slug: str, request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.articles.delete_article(ctx.user, slug),
        auth=AuthMode.REQUIRED,
        on_error=dispatch_article_error,
        serialize=acknowledge,
    )


# ---------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------

@router.post("/{slug}/favorite", summary="Favorite an article")
async def favorite_article(slug: str, request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.articles.favorite_article(ctx.user, slug),
        auth=AuthMode.REQUIRED,
        on_error=dispatch_article_error,
        serialize=wrap("article"),
    )


@router.delete("/{slug}/favorite", summary="Unfavorite an article")
async def unfavorite_article(slug: str, request: Request, services: ServicesDep) -> Response:
    return await run_pipeline(
        request,
        lambda ctx: services.articles.unfavorite_article(ctx.user, slug),
        auth=AuthMode.REQUIRED,
        on_error=dispatch_article_error,
        serialize=wrap("article"),
    )
