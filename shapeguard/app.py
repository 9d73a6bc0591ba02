import json
import logging
import math
import time
from datetime import datetime
from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Config
from .core.errors import ShapeValidationError
from .core.forms import NUMBER_TAGS, get_strict_form
from .core.middleware import global_exception_handler, log_requests, validation_exception_handler
from .core.validation import assert_strict, validate_inputs
from .schemas import ADMIN_CONFIG_GUARD, UI_SETTINGS_GUARD, USER_CONFIG_GUARD
from .services.settings_service import (
    get_app_config,
    get_client,
    get_user_settings,
    save_app_config,
    save_user_settings,
)

logger = logging.getLogger(__name__)


async def read_json_object(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body must be valid JSON")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")
    return body


# Initialize FastAPI
app = FastAPI(title="Settings API")

# CORS setup
ALLOWED_ORIGINS = Config.allowed_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "OPTIONS"],
    allow_headers=["*"],
)

@app.middleware("http")
async def _log_requests(request, call_next):
    return await log_requests(request, call_next)

@app.exception_handler(ShapeValidationError)
async def _validation_exception_handler(request, exc):
    return await validation_exception_handler(request, exc)

@app.exception_handler(Exception)
async def _global_exception_handler(request, exc):
    return await global_exception_handler(request, exc)


@app.get("/users/{user_id}/ui")
async def get_ui_settings(user_id: str):
    validate_inputs(user_id)
    return get_user_settings(user_id).get("ui") or {}


@app.patch("/users/{user_id}/ui")
async def update_ui_settings(user_id: str, request: Request):
    """Merge a partial UI settings update over the stored settings.

    - Fields that are present must match the UI settings guard
    - Unknown fields are dropped before saving
    """
    validate_inputs(user_id)
    body = await read_json_object(request)
    update = assert_strict(UI_SETTINGS_GUARD, body, partial=True, error="UI settings are invalid")

    current = get_user_settings(user_id).get("ui") or {}
    merged = {**current, **update}
    save_user_settings(user_id, "ui", merged)
    return merged


@app.put("/users/{user_id}/config")
async def update_user_config(user_id: str, request: Request):
    validate_inputs(user_id)
    body = await read_json_object(request)
    update = assert_strict(USER_CONFIG_GUARD, body, partial=True, error="Config update is invalid")

    current = get_user_settings(user_id).get("config") or {}
    merged = {**current, **update}
    save_user_settings(user_id, "config", merged)
    return merged


@app.get("/admin/config")
async def get_admin_config():
    return get_app_config()


@app.post("/admin/config")
async def update_admin_config(request: Request):
    """Save the admin configuration form.

    Checkboxes and number inputs are converted before validation. Numbers
    must be finite and the ``slots`` field must contain a JSON object.
    """
    form = await request.form()
    values = get_strict_form(form, ADMIN_CONFIG_GUARD)

    try:
        slots = json.loads(values["slots"] or "{}")
    except ValueError:
        raise HTTPException(status_code=400, detail="slots must be valid JSON")
    if not isinstance(slots, dict):
        raise HTTPException(status_code=400, detail="slots must be a JSON object")

    for key, descriptor in ADMIN_CONFIG_GUARD.items():
        if descriptor in NUMBER_TAGS and key in values and not math.isfinite(values[key]):
            raise HTTPException(status_code=400, detail=f"{key} must be a number")

    save_app_config(values)
    logger.info("Admin configuration updated")
    return values


@app.get("/health")
async def health_check():
    """Basic health and dependency checks for the API."""
    health_start_time = time.time()

    try:
        # Check configuration and Supabase connection
        Config.validate()
        supabase = get_client()
        supabase.table(Config.SETTINGS_TABLE).select('user_id').limit(1).execute()

        health_duration = time.time() - health_start_time

        return {
            "status": "healthy",
            "service": "settings-api",
            "timestamp": datetime.now().isoformat(),
            "response_time_ms": round(health_duration * 1000, 2)
        }
    except Exception as e:
        health_duration = time.time() - health_start_time
        logger.error(f"Health check failed: {str(e)} - Duration: {health_duration:.1f}s")

        return {
            "status": "unhealthy",
            "service": "settings-api",
            "timestamp": datetime.now().isoformat(),
            "error": str(e),
            "response_time_ms": round(health_duration * 1000, 2)
        }


@app.get("/")
async def root():
    """Return basic API information."""

    return {
        "service": "Settings API",
        "version": "1.0",
        "endpoints": {
            "ui_settings": "/users/{user_id}/ui",
            "user_config": "/users/{user_id}/config",
            "admin_config": "/admin/config",
            "health": "/health"
        },
        "timestamp": datetime.now().isoformat(),
        "description": "Validated storage for user UI settings, user service config and admin configuration"
    }
