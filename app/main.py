import time
import logging
from fastapi import FastAPI, Request
from dotenv import load_dotenv

# Load environment variables from .env file before anything else
load_dotenv()

from app.core.config import settings
from app.core.logging import setup_logging, request_id_ctx
from app.core.errors import register_exception_handlers
from app.core.db import engine, init_models
from app.api.router import api_router
from app.modules.audit.mapper import CORRELATION_ID

setup_logging()
app = FastAPI(title=settings.APP_NAME, version=settings.APPLICATION_VERSION)
register_exception_handlers(app)

logger = logging.getLogger(__name__)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = (time.time() - start_time) * 1000
    logger.info(
        f"Request: {request.method} {request.url.path} - Response: {response.status_code} - Time: {process_time:.2f}ms"
    )
    return response

# registered last so it runs first and the request log line carries the id
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get(CORRELATION_ID) or request.headers.get("x-request-id") or "-"
    token = request_id_ctx.set(rid)
    try:
        return await call_next(request)
    finally:
        request_id_ctx.reset(token)

@app.on_event("startup")
async def on_startup():
    await init_models()

@app.on_event("shutdown")
async def on_shutdown():
    await engine.dispose()

app.include_router(api_router, prefix=settings.API_PREFIX)
