from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from . import __version__
from .config import APP_TITLE, CORS_ORIGIN_REGEX, LOG_LEVEL
from .database import init_db
from .routes import api_router

logger = logging.getLogger(__name__)

app = FastAPI(title=APP_TITLE, version=__version__)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# GLOBAL EXCEPTION HANDLER
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    if isinstance(exc, StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    if isinstance(exc, RequestValidationError):
        return JSONResponse(status_code=422, content={"detail": exc.errors()})

    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": f"INTERNAL SERVER ERROR: {str(exc)}"},
    )

@app.get("/")
def read_root():
    return {"status": "ok", "message": "Backend is running"}

@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.debug("Request %s %s", request.method, request.url.path)
    return await call_next(request)

# Include all routes
app.include_router(api_router)

# --- STARTUP ---
@app.on_event("startup")
def startup():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()
    logger.info("%s started", APP_TITLE)
