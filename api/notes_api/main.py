from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import os
import pathlib
import sys
from alembic import command as alembic_command
from alembic.config import Config as AlembicConfig
from .errors import DomainError
from .routes_accounts import router as accounts_router
from .routes_templates import router as templates_router
from .routes_notes import router as notes_router
from .version import get_version

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(name)s:%(levelname)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("notes_api")

app = FastAPI(title="Notes API", version=get_version())

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(accounts_router)
app.include_router(templates_router)
app.include_router(notes_router)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    level = logging.WARNING if exc.status_code == 403 else logging.INFO
    logger.log(level, "%s %s -> %d %s: %s", request.method, request.url.path, exc.status_code, type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "kind": type(exc).__name__})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed JSON, bad ids and missing required parameters all surface as 400
    logger.info("%s %s -> 400 invalid request: %r", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors()), "kind": "InvalidInput"})


@app.get("/health")
def health():
    return {"status": "ok", "service": "api", "version": get_version()}

@app.get("/version")
def version():
    return {"version": get_version()}


@app.on_event("startup")
def _auto_migrate_dev():
    if os.environ.get("ENV") == "dev":
        try:
            here = pathlib.Path(__file__).resolve().parent
            cfg_path = here.parent / "alembic.ini"
            cfg = AlembicConfig(str(cfg_path))
            cfg.set_main_option("script_location", str(here.parent / "alembic"))
            # DATABASE_URL is read by env.py; nothing to set if env is present
            alembic_command.upgrade(cfg, "head")
            logger.info("[alembic] upgrade head executed on startup (dev)")
        except Exception:
            # Don't crash app on migration error in dev; just log
            logger.exception("[alembic] startup migration skipped/failed")
