"""FastAPI middleware for request tracing and metrics"""

import uuid
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from fio_gateway.infrastructure.observability.metrics import request_duration_histogram

REQUEST_ID_HEADER = "X-Request-ID"


def route_template(request: Request) -> str:
    """
    Label a request by its route template, e.g. /v1/statements/{year}/{statement_id}.

    Built from the full request path with each matched path parameter put
    back as {name}, so router prefixes are kept whatever the framework
    version reports as the route's own path.
    """
    if request.scope.get("route") is None:
        return "unmatched"

    params = list(request.path_params.items())
    segments = []
    for segment in request.url.path.split("/"):
        if params and segment == str(params[0][1]):
            segments.append("{%s}" % params.pop(0)[0])
        else:
            segments.append(segment)
    return "/".join(segments)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagate the caller's request ID, or assign one, for distributed tracing"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request metrics labelled by route template"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        endpoint = route_template(request)

        request_duration_histogram.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code,
        ).observe(time.perf_counter() - start_time)

        return response
