"""FastAPI application exposing the idle resource inventory.

Routes:
    GET /resources            list idle resources
    DELETE /resources/{id}    accept a delete request
    OPTIONS *                 cross-origin preflight
    GET /health               liveness and configured region

Every response, including errors, carries the cross-origin headers.
"""
import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from . import __version__
from .aggregator import Aggregator
from .config import WasteManagerConfig, get_config
from .deleter import ResourceDeleter
from .type_defs import ResourceListResponse
from .utils import ClientInputError, WasteManagerError

logger = logging.getLogger(__name__)

ALLOWED_METHODS = 'GET, DELETE, OPTIONS'


def cors_headers(origin: str) -> Dict[str, str]:
    """Build the permissive cross-origin header set."""
    return {
        'Access-Control-Allow-Origin': origin,
        'Access-Control-Allow-Methods': ALLOWED_METHODS,
        'Access-Control-Allow-Headers': 'Content-Type',
    }


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Answers preflight requests and stamps CORS headers on every response.

    Starlette's CORSMiddleware only answers requests that carry an Origin
    header; this one answers every OPTIONS request the same way.
    """

    def __init__(self, app, origin: str = '*'):
        super().__init__(app)
        self.headers = cors_headers(origin)

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == 'OPTIONS':
            return Response(status_code=200, headers=self.headers)

        response = await call_next(request)
        for key, value in self.headers.items():
            response.headers[key] = value
        return response


def create_app(
    config: Optional[WasteManagerConfig] = None,
    aggregator: Optional[Aggregator] = None,
    deleter: Optional[ResourceDeleter] = None
) -> FastAPI:
    """
    Create the aggregator HTTP application.

    Args:
        config: Settings; defaults to the global configuration
        aggregator: Inventory aggregator; built from ``config`` when omitted
        deleter: Delete handler; built from ``config`` when omitted

    Returns:
        Configured FastAPI application
    """
    config = config or get_config()
    aggregator = aggregator or Aggregator(config)
    deleter = deleter or ResourceDeleter(config)
    headers = cors_headers(config.cors_origin)

    app = FastAPI(
        title="Cloud Waste Manager",
        description="Lists stopped, unattached and orphaned AWS resources in one region.",
        version=__version__,
    )
    app.add_middleware(CORSHeadersMiddleware, origin=config.cors_origin)

    @app.exception_handler(WasteManagerError)
    async def waste_manager_error_handler(request: Request, exc: WasteManagerError):
        status_code = 400 if isinstance(exc, ClientInputError) else 500
        if status_code == 500:
            logger.error(f"Request to {request.url.path} failed: {exc}")
        return JSONResponse(
            status_code=status_code,
            content={'error': str(exc) or 'Internal server error'},
            headers=headers
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = 'Method not allowed' if exc.status_code == 405 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={'error': message},
            headers=headers
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={'error': str(exc) or 'Internal server error'},
            headers=headers
        )

    @app.get('/resources')
    def list_resources():
        report = aggregator.collect()
        body: ResourceListResponse = {'resources': [resource.to_dict() for resource in report.resources]}
        if report.failures:
            body['warnings'] = [
                {'type': failure.resource_type.value, 'error': failure.error}
                for failure in report.failures
            ]
        return JSONResponse(content=body)

    @app.delete('/resources')
    @app.delete('/resources/')
    def delete_without_id():
        raise ClientInputError('Resource ID is required')

    @app.delete('/resources/{resource_id}')
    def delete_resource(resource_id: str):
        message = deleter.delete(resource_id)
        return JSONResponse(content={'message': message})

    @app.get('/health')
    def health():
        return {'status': 'ok', 'version': __version__, 'region': config.region}

    @app.api_route('/{path:path}', methods=['POST', 'PUT', 'PATCH'], include_in_schema=False)
    def method_not_allowed(path: str):
        return JSONResponse(status_code=405, content={'error': 'Method not allowed'})

    return app
