"""ASGI application for campmeals."""
# mypy: ignore-errors

from __future__ import annotations

import logging
from datetime import date
from time import perf_counter
from typing import Any, Optional
from uuid import uuid4

from fastapi import Body, Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from campmeals import __version__, metrics
from campmeals.config import Settings, get_settings
from campmeals.logging_utils import configure_logging as configure_app_logging
from campmeals.models.grid import WeekGrid
from campmeals.models.meal_times import MealTimeConfig
from campmeals.models.parsing import parse_date
from campmeals.models.summary import RangeSummary
from campmeals.server import deps

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    """Convert non-serializable values into JSON-safe representations."""

    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, (list, tuple)):
        return [_json_safe(entry) for entry in value]
    if isinstance(value, dict):
        return {key: _json_safe(sub_value) for key, sub_value in value.items()}
    return repr(value)


def _normalize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Ensure validation error payloads can be serialized to JSON."""

    return [{key: _json_safe(value) for key, value in error.items()} for error in errors]


def _configure_logging(settings: Settings) -> None:
    configure_app_logging(settings.log_level, settings.log_format, [settings.api_token or ""])


class RosterRequest(BaseModel):
    """Groups and staff in the roster wire format; entries are validated by the calculator."""

    groups: list[Any] = Field(default_factory=list)
    staff: list[Any] = Field(default_factory=list)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MealGridRequest(RosterRequest):
    start_date: Optional[date] = None

    @field_validator("start_date", mode="before")
    @classmethod
    def date_part(cls, value: Any) -> Any:
        """Accept ISO timestamps by their date; anything unreadable is left for pydantic to reject."""
        parsed = parse_date(value)
        return value if parsed is None else parsed


class MealTimesUpdateRequest(BaseModel):
    breakfast: Optional[str] = Field(default=None, max_length=8)
    lunch: Optional[str] = Field(default=None, max_length=8)
    dinner: Optional[str] = Field(default=None, max_length=8)


def _record_request(method: str, path: str, status_code: int, seconds: float) -> None:
    metrics.REQUEST_COUNT.labels(method=method, path=path, status=str(status_code)).inc()
    metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(seconds)


def _install_access_log(application: FastAPI) -> None:
    """Tag every request with an ``X-Request-ID`` and log/measure it on completion."""

    access_logger = logging.getLogger("campmeals.access")

    @application.middleware("http")
    async def access_log(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        request.state.request_id = request_id
        method, path = request.method, request.url.path
        started = perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception:
            elapsed = perf_counter() - started
            access_logger.exception(
                "HTTP %s %s status=500 duration_ms=%.2f",
                method,
                path,
                elapsed * 1000,
                extra={"request_id": request_id},
            )
            _record_request(method, path, 500, elapsed)
            raise

        elapsed = perf_counter() - started
        response.headers.setdefault("X-Request-ID", request_id)
        access_logger.info(
            "HTTP %s %s status=%s duration_ms=%.2f",
            method,
            path,
            response.status_code,
            elapsed * 1000,
            extra={"request_id": request_id},
        )
        _record_request(method, path, response.status_code, elapsed)
        return response


def create_app() -> FastAPI:
    """Create and configure a FastAPI application instance."""

    settings = get_settings()
    _configure_logging(settings)

    application = FastAPI(title="Camp Meal Planner", version=__version__)
    logger.debug("Application created with log level %s", settings.log_level)

    if settings.log_requests:
        _install_access_log(application)

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        log_kwargs: dict[str, Any] = {}
        request_id = getattr(request.state, "request_id", None)
        if request_id:
            log_kwargs["extra"] = {"request_id": request_id}

        logger.warning(
            "Validation error on %s %s: %s",
            request.method,
            request.url.path,
            exc.errors(),
            **log_kwargs,
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": _normalize_validation_errors(exc.errors())},
        )

    @application.get(
        "/settings/meal-times",
        response_model=MealTimeConfig,
        summary="Get meal cutoff times",
    )
    def meal_times_get(
        provider: deps.MealTimesProvider = Depends(deps.get_meal_times_provider),
    ) -> MealTimeConfig:
        return provider()

    @application.put(
        "/settings/meal-times",
        response_model=MealTimeConfig,
        summary="Update meal cutoff times",
    )
    def meal_times_update(
        payload: dict[str, Any] = Body(...),
        auth: None = Depends(deps.require_api_token),
        provider: deps.MealTimesProvider = Depends(deps.get_meal_times_provider),
        saver: deps.MealTimesSaver = Depends(deps.get_meal_times_saver),
    ) -> MealTimeConfig:
        try:
            parsed = MealTimesUpdateRequest.model_validate(payload)
            merged = {**provider().model_dump(), **parsed.model_dump(exclude_none=True)}
            config = MealTimeConfig.model_validate(merged)
        except ValidationError as exc:
            logger.warning("Invalid meal times payload=%s errors=%s", payload, exc.errors())
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=_normalize_validation_errors(exc.errors()),
            ) from exc

        try:
            return saver(config)
        except ValueError as exc:
            logger.warning("Rejected meal times %s: %s", config.model_dump(), exc)
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc

    @application.post(
        "/meal-grid",
        response_model=WeekGrid,
        summary="Compute the weekly meal grid",
    )
    def meal_grid(
        request_body: MealGridRequest,
        auth: None = Depends(deps.require_api_token),
        meal_times: deps.MealTimesProvider = Depends(deps.get_meal_times_provider),
        generator: deps.GridGenerator = Depends(deps.get_grid_generator),
    ) -> WeekGrid:
        """Count meals for the week containing ``startDate`` (today when omitted)."""

        start_date = request_body.start_date or date.today()
        return generator(request_body.groups, request_body.staff, start_date, meal_times())

    @application.post(
        "/meal-grid/summary",
        response_model=RangeSummary,
        summary="Summarize meals across every week of the roster",
    )
    def meal_grid_summary(
        request_body: RosterRequest,
        auth: None = Depends(deps.require_api_token),
        meal_times: deps.MealTimesProvider = Depends(deps.get_meal_times_provider),
        summarizer: deps.RangeSummarizer = Depends(deps.get_range_summarizer),
    ) -> RangeSummary:
        return summarizer(request_body.groups, request_body.staff, meal_times())

    @application.get("/metrics", include_in_schema=False)
    def metrics_endpoint() -> Response:
        payload = generate_latest()
        return Response(content=payload, media_type=CONTENT_TYPE_LATEST)

    return application


app = create_app()

__all__ = ["app", "create_app"]
