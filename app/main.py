import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from .config import settings
from .logging_setup import setup_logging
from .routers import tasks

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Udio Webhook Relay", version="1.0.0")
app.include_router(tasks.router)

@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError):
    logger.error("Rejected request to %s: %s", request.url.path, exc.errors())
    return tasks.internal_error()
