"""API gateway: one public entrypoint that proxies to every service."""

import asyncio
import logging

import httpx
from fastapi import Depends, Request, status
from fastapi.responses import JSONResponse

from vyom.config import config
from vyom.services.common import create_service_app, get_http_client

logger = logging.getLogger(__name__)

SERVICE_NAME = "api-gateway"

app = create_service_app(SERVICE_NAME, "API Gateway", with_database=False)

# (method, gateway path, service, service path, description)
ROUTES = [
    ("POST", "/auth/register", "auth", "/register", "Register new user"),
    ("POST", "/auth/login", "auth", "/login", "User login"),
    ("GET", "/auth/me", "auth", "/me", "Get current user"),
    ("GET", "/wardrobe/items", "wardrobe", "/items", "Get all clothing items"),
    ("POST", "/wardrobe/items", "wardrobe", "/items", "Add new clothing item"),
    ("PUT", "/wardrobe/items/{item_id}", "wardrobe", "/items/{item_id}", "Update clothing item"),
    ("DELETE", "/wardrobe/items/{item_id}", "wardrobe", "/items/{item_id}", "Delete clothing item"),
    ("POST", "/wardrobe/items/{item_id}/wear", "wardrobe", "/items/{item_id}/wear", "Record a wear"),
    ("POST", "/wardrobe/items/{item_id}/favorite", "wardrobe", "/items/{item_id}/favorite",
     "Toggle favorite"),
    ("GET", "/wardrobe/analytics", "wardrobe", "/analytics", "Get wardrobe analytics"),
    ("POST", "/outfits/generate", "outfit", "/generate", "Generate outfit recommendations"),
    ("GET", "/outfits/suggestions", "outfit", "/suggestions", "Get style suggestions"),
    ("GET", "/profile", "profile", "/profile", "Get user profile"),
    ("PUT", "/profile", "profile", "/profile", "Update user profile"),
    ("POST", "/profile/style-quiz", "profile", "/style-quiz", "Complete style personality quiz"),
    ("GET", "/profile/recommendations", "profile", "/recommendations/personal",
     "Get personalized recommendations"),
]

SECTIONS = {
    "auth": "Authentication",
    "wardrobe": "Wardrobe Management",
    "outfit": "Outfit Generation",
    "profile": "User Profile",
}


async def proxy_request(request: Request, client: httpx.AsyncClient, service_url: str, path: str):
    """Forward the incoming request to a service and relay its answer"""
    url = f"{service_url.rstrip('/')}{path}"
    headers = {"Content-Type": "application/json"}
    if request.headers.get("authorization"):
        headers["Authorization"] = request.headers["authorization"]
    body = await request.body()
    params = dict(request.query_params)

    try:
        response = await client.request(
            request.method,
            url,
            headers=headers,
            content=body or None,
            params=params or None,
        )
    except (httpx.ConnectError, httpx.ConnectTimeout) as exc:
        logger.error("Proxy error to %s: %s", url, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "error": "Service temporarily unavailable",
                "service": service_url,
                "message": "The requested service is not available at the moment",
            },
        )
    except httpx.HTTPError as exc:
        logger.error("Proxy error to %s: %s", url, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Gateway error", "message": "Failed to process request"},
        )

    try:
        content = response.json()
    except ValueError:
        content = {"error": response.text or response.reason_phrase}
    headers = {}
    if "retry-after" in response.headers:
        headers["Retry-After"] = response.headers["retry-after"]
    return JSONResponse(status_code=response.status_code, content=content, headers=headers)


def _register_route(method: str, gateway_path: str, service: str, service_path: str, description: str):
    async def endpoint(request: Request, client: httpx.AsyncClient = Depends(get_http_client)):
        path = service_path.format(**request.path_params)
        return await proxy_request(request, client, config.services[service], path)

    endpoint.__name__ = f"proxy_{method.lower()}_{gateway_path.strip('/').replace('/', '_')}"
    app.add_api_route(gateway_path, endpoint, methods=[method], summary=description)


@app.get("/")
async def gateway_info(request: Request):
    endpoints = {}
    for method, gateway_path, service, _, description in ROUTES:
        endpoints.setdefault(SECTIONS[service], {})[f"{method} {gateway_path}"] = description
    return {
        "service": f"{config.APP_NAME} - API Gateway",
        "version": config.APP_VERSION,
        "architecture": "Microservices",
        "endpoints": endpoints,
        "services": {f"{name}Service": url for name, url in config.services.items()},
        "baseURL": str(request.base_url).rstrip("/"),
        "documentation": "All endpoints support JWT authentication via Authorization header",
    }


async def _check_service(client: httpx.AsyncClient, name: str, url: str) -> tuple:
    try:
        response = await client.get(f"{url.rstrip('/')}/health", timeout=config.HEALTH_CHECK_TIMEOUT)
        response.raise_for_status()
        return name, {"status": "healthy", "url": url, "response": response.json()}
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Health check failed for %s at %s: %s", name, url, exc)
        return name, {"status": "unhealthy", "url": url, "error": str(exc) or type(exc).__name__}


@app.get("/health")
async def health(client: httpx.AsyncClient = Depends(get_http_client)):
    results = await asyncio.gather(
        *(_check_service(client, name, url) for name, url in config.services.items())
    )
    checks = dict(results)
    all_healthy = all(check["status"] == "healthy" for check in checks.values())

    return JSONResponse(
        status_code=status.HTTP_200_OK if all_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "gateway": {"status": "healthy", "version": config.APP_VERSION},
            "services": checks,
            "overall": "All services operational" if all_healthy else "Some services are down",
        },
    )


for _route in ROUTES:
    _register_route(*_route)


@app.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def route_not_found(path: str):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Route not found",
            "availableEndpoints": {
                "GET /": "API Gateway info",
                "POST /auth/login": "User authentication",
                "GET /wardrobe/items": "Get wardrobe",
                "POST /outfits/generate": "Generate outfits",
                "GET /profile": "User profile",
                "GET /health": "Service health check",
            },
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Gateway error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "message": "Something went wrong in the API Gateway"},
    )
