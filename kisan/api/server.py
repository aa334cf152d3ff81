import json
import traceback
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..application.services.crop_service import (
    CropNotFoundError,
    is_dataset_loaded,
    list_crops,
    query_dataset,
)
from ..application.services.risk_service import assess_risk, screen_observation
from ..domain.normalizers import ValidationError
from ..infra.config import get_config
from ..observability.logging_utils import (
    init_logging,
    log_error_event,
    reset_trace_id,
    set_trace_id,
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    cfg = get_config()
    init_logging(log_path=cfg.log_path, level=cfg.log_level)
    yield


app = FastAPI(title="Kisan Crop Risk API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def _bind_trace_id(request: Request, call_next):
    trace_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    token = set_trace_id(trace_id)
    try:
        response = await call_next(request)
    finally:
        reset_trace_id(token)
    response.headers["X-Request-ID"] = trace_id
    return response


@app.exception_handler(Exception)
async def _unhandled_exception_handler(request: Request, exc: Exception):
    log_error_event(
        "api_unhandled_error",
        path=request.url.path,
        error=str(exc),
        traceback=traceback.format_exc(),
    )
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc)},
    )


@app.get("/api/health")
async def health():
    cfg = get_config()
    return {
        "status": "ok",
        "datasetLoaded": is_dataset_loaded(),
        "randomSeeded": cfg.risk_random_seed is not None,
    }


@app.post("/api/predict")
async def predict(request: Request):
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JSONResponse(
            status_code=400, content={"error": "Request body must be valid JSON"}
        )
    try:
        result = assess_risk(payload)
    except ValidationError as exc:
        return JSONResponse(status_code=400, content=exc.to_dict())
    return result.to_payload()


@app.post("/api/screen")
async def screen(request: Request):
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JSONResponse(
            status_code=400, content={"error": "Request body must be valid JSON"}
        )
    try:
        return screen_observation(payload)
    except ValidationError as exc:
        return JSONResponse(status_code=400, content=exc.to_dict())


@app.get("/api/crops")
async def crops():
    return {"success": True, "crops": list_crops()}


@app.get("/api/dataset")
async def dataset(crop: Optional[str] = None, category: Optional[str] = None):
    try:
        data = query_dataset(crop=crop, category=category)
    except CropNotFoundError:
        return JSONResponse(status_code=404, content={"error": "Crop not found"})
    return {"success": True, "data": data}
