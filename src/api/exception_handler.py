import logging
import traceback

from django.conf import settings
from ninja_extra import NinjaExtraAPI
from ninja.errors import HttpError
from ninja.errors import ValidationError as NinjaValidationError

from src.core.exceptions import APIError

logger = logging.getLogger(__name__)


def attach_exception_handlers(api: NinjaExtraAPI) -> None:
    def _envelope(request, *, message: str, status: int, code: str, data=None, errors=None, extra=None,):
        return api.create_response(
            request,
            {
                "success": 200 <= status < 400,
                "message": message,
                "data": data or {},
                "extra": extra or {},
                "errors": errors,
                "code": code,
                "request_id": request.headers.get("X-Request-Id", "")
                or request.META.get("HTTP_X_REQUEST_ID", "")
                or "",
            },
            status=status,
        )

    @api.exception_handler(APIError)
    def on_api_error(request, exc: APIError):
        return _envelope(
            request,
            message=exc.message,
            status=exc.status,
            code=exc.code,
            errors=exc.errors,
            extra=exc.extra,
        )

    @api.exception_handler(NinjaValidationError)
    def on_ninja_validation_error(request, exc: NinjaValidationError):
        return _envelope(
            request,
            message="Bad request",
            status=400,
            code="BAD_REQUEST",
            errors=[
                {"loc": list(e.get("loc", [])), "msg": e.get("msg", ""), "type": e.get("type", "")}
                for e in exc.errors
            ],
        )

    @api.exception_handler(HttpError)
    def on_http_error(request, exc: HttpError):
        # ninja raises HttpError(400) for bodies it cannot parse as JSON
        code = "BAD_REQUEST" if exc.status_code == 400 else "HTTP_ERROR"
        return _envelope(request, message=str(exc), status=exc.status_code, code=code)

    @api.exception_handler(Exception)
    def on_unexpected_error(request, exc: Exception):
        logger.exception("unhandled error on %s", request.path)
        err = None
        extra = {}
        if settings.DEBUG:
            err = str(exc)
            extra["trace"] = traceback.format_exc(limit=20)
        return _envelope(
            request,
            message="Unexpected error",
            status=500,
            code="INTERNAL_ERROR",
            errors=err,
            extra=extra if settings.DEBUG else None,
        )
