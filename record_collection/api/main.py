"""
FastAPI app assembly: logging, middleware, error handlers and router wiring.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from starlette.requests import Request

from record_collection import __version__
from record_collection.api.api_records import router as api_records_router
from record_collection.api.auth import router as auth_router
from record_collection.api.deps import session_user
from record_collection.api.records import router as records_router
from record_collection.api.templating import render
from record_collection.db.database import init_db
from record_collection.utils.settings import get_settings

settings = get_settings()

# Configure logging
LOG_LEVEL = getattr(logging, settings.log_level, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", settings.log_level)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # No migration tooling; tables are created on startup if missing.
    init_db()
    yield


app = FastAPI(
    title=settings.app_title,
    description="Browse, search and curate a vinyl record collection.",
    version=__version__,
    lifespan=lifespan,
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

app.add_middleware(SessionMiddleware, secret_key=settings.secret_key, same_site="lax")


@app.exception_handler(StarletteHTTPException)
async def render_http_exception(request: Request, exc: StarletteHTTPException):
    path = request.url.path or ""
    if path.startswith("/api/"):
        return JSONResponse(
            {"error": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return render(request, "errors/404.html", session_user(request), status_code=status.HTTP_404_NOT_FOUND)
    return await http_exception_handler(request, exc)


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/records", status_code=status.HTTP_302_FOUND)


app.include_router(records_router)
app.include_router(api_records_router)
app.include_router(auth_router)
