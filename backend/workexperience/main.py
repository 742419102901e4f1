"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the work experience API.
Controllers are intentionally thin: they accept requests, delegate to
`services.WorkExperienceService`, and return JSON responses.

Endpoints implemented (also served under the `/api` prefix):
- GET /workexperience
- GET /workexperience/{id}
- POST /workexperience
- PUT /workexperience/{id}
- DELETE /workexperience/{id}
- GET /
"""

from contextlib import asynccontextmanager
import json
import logging
import time
import uuid

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlmodel import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__, services
from .config import settings
from .database import close_db, create_db_and_tables, get_session
from .errors import NOT_FOUND_BODY, SERVER_ERROR_BODY, InvalidBody
from .schemas import WorkExperienceIn

logger = logging.getLogger("workexperience.api")
if not logging.getLogger().handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
JSON_CONTENT_TYPES = ("application/json",)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    logger.info("Work experience API listening on http://%s:%s", settings.HOST, settings.PORT)
    yield
    logger.info("Shutting down the server")
    close_db()


app = FastAPI(title="Work Experience API", version=__version__, lifespan=lifespan)
router = APIRouter()


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    info = {"request_id": req_id, "path": request.url.path, "method": request.method}
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        info["duration_ms"] = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception("request_failed %s", json.dumps(info, ensure_ascii=True))
        response = JSONResponse(status_code=500, content=SERVER_ERROR_BODY)
        response.headers["X-Request-ID"] = req_id
        return response
    response.headers["X-Request-ID"] = req_id
    info["status_code"] = response.status_code
    info["duration_ms"] = round((time.perf_counter() - started) * 1000.0, 2)
    logger.info("request_done %s", json.dumps(info, ensure_ascii=True))
    return response


# added after the request middleware so it wraps it, error responses included
if settings.ALLOW_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.CORS_ALLOW_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render `ApiError` bodies as-is; routing misses become the generic 404."""
    if isinstance(exc.detail, dict):
        return JSONResponse(status_code=exc.status_code, content=exc.detail, headers=exc.headers)
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content=NOT_FOUND_BODY)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "Request failed", "message": str(exc.detail)},
        headers=exc.headers,
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Last resort for errors raised outside `request_context_middleware`."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=SERVER_ERROR_BODY)


async def read_payload(request: Request) -> WorkExperienceIn:
    """Parse a JSON, urlencoded or multipart body into `WorkExperienceIn`.

    Bodies of any other content type are ignored and read as an empty
    record, as is an empty body. JSON that is not an object is rejected
    with `InvalidBody`.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        raw = {k: v for k, v in form.items() if isinstance(v, str)}
    elif not (content_type in JSON_CONTENT_TYPES or content_type.endswith("+json")):
        raw = {}
    else:
        body = await request.body()
        if not body.strip():
            raw = {}
        else:
            try:
                raw = json.loads(body)
            except ValueError:
                raise InvalidBody()
    if not isinstance(raw, dict):
        raise InvalidBody()
    return WorkExperienceIn.model_validate(raw)


@router.get('/workexperience')
def list_work_experience(db: Session = Depends(get_session)):
    """List every work experience, latest start date first."""
    return services.WorkExperienceService(db).list_all()


@router.get('/workexperience/{record_id}')
def get_work_experience(record_id: str, db: Session = Depends(get_session)):
    """Return a single work experience by id."""
    return services.WorkExperienceService(db).get(record_id)


@router.post('/workexperience', status_code=201)
def create_work_experience(payload: WorkExperienceIn = Depends(read_payload), db: Session = Depends(get_session)):
    """Create a work experience.

    All validation problems are returned together in `details` with a 400.
    """
    return services.WorkExperienceService(db).create(payload)


@router.put('/workexperience/{record_id}')
def update_work_experience(record_id: str, payload: WorkExperienceIn = Depends(read_payload), db: Session = Depends(get_session)):
    """Replace every field of a work experience except `id` and `createdAt`.

    Omitting `endDate` clears it.
    """
    return services.WorkExperienceService(db).replace(record_id, payload)


@router.delete('/workexperience/{record_id}')
def delete_work_experience(record_id: str, db: Session = Depends(get_session)):
    """Delete a work experience and return the row as it was before."""
    return services.WorkExperienceService(db).delete(record_id)


@app.get('/')
def home():
    """Describe the API and its routes."""
    return {
        'message': 'Work Experience API',
        'version': __version__,
        'endpoints': {
            'GET /workexperience': 'List all work experiences',
            'GET /workexperience/{id}': 'Get a single work experience',
            'POST /workexperience': 'Create a work experience',
            'PUT /workexperience/{id}': 'Update a work experience',
            'DELETE /workexperience/{id}': 'Delete a work experience',
        },
        'documentation': 'See /docs for interactive API documentation',
    }


app.include_router(router)
app.include_router(router, prefix='/api', include_in_schema=False)
