"""API routes implementation."""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from .schemas import (
    API_INFO,
    ApiInfoResponse,
    ErrorResponse,
    ShortenRequest,
    ShortenResponse,
)
from shortlink.common.urls import build_base_url, build_short_url

router = APIRouter()


@router.api_route(
    "/",
    methods=["GET", "HEAD"],
    response_model=ApiInfoResponse,
    summary="API information",
    description="Describe the create and redirect operations.",
)
async def api_info():
    """Return the static API description."""
    return API_INFO


@router.post(
    "/",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed JSON, missing url field or invalid URL"},
        500: {"model": ErrorResponse, "description": "Link store failure"},
    },
    summary="Create short URL",
    description="Shorten an http(s) URL. Body: {\"url\": \"https://example.com\"}.",
)
async def shorten_url(request: Request):
    """Create a shortened URL."""
    service = request.app.state.service
    config = request.app.state.config

    # Parsed by hand so malformed JSON, a missing field and a bad URL stay distinguishable
    body = ShortenRequest.from_body(await request.body())
    link = await service.create_link(body.url)

    base_url = build_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    response = ShortenResponse(
        short_url=build_short_url(link.id, base_url),
        id=link.id,
    )
    return JSONResponse(content=response.model_dump(by_alias=True))


@router.api_route("/{short_code:path}", methods=["GET", "HEAD"], include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL; NotFoundError becomes a plain-text 404."""
    service = request.app.state.service

    target = await service.resolve(short_code)
    return RedirectResponse(url=target, status_code=status.HTTP_301_MOVED_PERMANENTLY)

