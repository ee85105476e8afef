"""FastAPI application entrypoint and default HTTP routes.

The skeleton defines no business endpoints. It wires the web layer,
templating, static assets and the embedded database, and provides the
defaults an empty application is expected to serve:

- GET /                      home page (template)
- GET /health                liveness check
- GET /info                  module id and version
- GET /webjars/{name}/{path} versionless front-end asset locator
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, HTMLResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException
from http import HTTPStatus
from pathlib import Path
import json
import logging
import time
import uuid

from . import MODULE_ID, __version__
from .config import settings
from .database import create_db_and_tables
from .utils import webjars

app = FastAPI(title="appli", version=__version__)
logger = logging.getLogger("appli.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# templates and static assets ship inside the package
BASE = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE / "templates"))
templates.env.globals["asset_url"] = webjars.asset_url
templates.env.globals["module_id"] = MODULE_ID
templates.env.globals["version"] = __version__

static_dir = BASE / "static"
if static_dir.exists():
    app.mount("/static", StaticFiles(directory=static_dir), name="static")

create_db_and_tables()


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    info = {
        "request_id": req_id,
        "path": request.url.path,
        "method": request.method,
        "client": request.client.host if request.client else "unknown",
    }
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        info["duration_ms"] = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception("request_failed %s", json.dumps(info, ensure_ascii=True))
        raise
    response.headers["X-Request-ID"] = req_id
    info["status_code"] = response.status_code
    info["duration_ms"] = round((time.perf_counter() - started) * 1000.0, 2)
    logger.info("request_done %s", json.dumps(info, ensure_ascii=True))
    return response


def _wants_html(request: Request) -> bool:
    return "text/html" in request.headers.get("accept", "")


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as an HTML page for browsers and JSON otherwise."""
    headers = getattr(exc, "headers", None)
    if _wants_html(request):
        return templates.TemplateResponse(
            request,
            "error.html",
            {
                "status_code": exc.status_code,
                "reason": _reason(exc.status_code),
                "detail": exc.detail,
                "path": request.url.path,
                "request_id": getattr(request.state, "request_id", ""),
            },
            status_code=exc.status_code,
            headers=headers,
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


@app.get("/", response_class=HTMLResponse)
def home(request: Request):
    """Home page rendered from `templates/index.html`."""
    return templates.TemplateResponse(request, "index.html", {"bundles": webjars.WEBJARS})


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}


@app.get("/info")
def info():
    """Module identity of the running application."""
    return {"module_id": MODULE_ID, "version": __version__}


@app.get("/webjars/{name}/{path:path}")
def webjar_asset(name: str, path: str):
    """Redirect a versionless asset path to the pinned bundle version."""
    try:
        url = webjars.locate(name, path)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"unknown asset bundle: {name}")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RedirectResponse(url=url, status_code=307)
