from fastapi import APIRouter, Request, Response

from ..core.result import Ok
from .dependencies import ServicesDep
from .pipeline import RequestContext, run_pipeline, wrap

router = APIRouter(prefix="/api", tags=["tags"])


@router.get("/tags", summary="All tags in use")
async def get_tags(request: Request, services: ServicesDep) -> Response:
    async def call(ctx: RequestContext):
        return Ok(await services.tags.get_tags())

    return await run_pipeline(request, call, serialize=wrap("tags"))
