import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from ..config import Settings, settings
from ..models import TaskRequest, TaskStatusResponse, ErrorResponse
from ..services.callback import CallbackSender
from ..services.task_poller import TaskOutcome, TaskPoller
from ..services.udio_client import UdioClient

logger = logging.getLogger(__name__)

router = APIRouter()

def build_poller(cfg: Settings) -> TaskPoller:
    client = UdioClient(
        cfg.udio_base_url,
        cfg.api_token,
        max_attempts=cfg.status_max_attempts,
        retry_delay=cfg.status_retry_delay_seconds,
        timeout=cfg.http_timeout_seconds,
    )
    sender = CallbackSender(
        cfg.api_token,
        max_attempts=cfg.callback_max_attempts,
        backoff_base=cfg.callback_backoff_base_seconds,
        timeout=cfg.http_timeout_seconds,
    )
    return TaskPoller(client, sender, interval=cfg.poll_interval_seconds, timeout=cfg.poll_timeout_seconds)

def get_poller() -> TaskPoller:
    return build_poller(settings)

def internal_error() -> JSONResponse:
    return JSONResponse(status_code=500, content=ErrorResponse(error="Internal server error").model_dump())

def timeout_message(seconds: float) -> str:
    minutes = seconds / 60
    return f"Processing timeout after {minutes:g} minutes"

@router.get("/health")
async def health():
    return {"status": "ok"}

@router.post("/api/udio-api", response_model=TaskStatusResponse, response_model_exclude_none=True,
             responses={500: {"model": ErrorResponse}})
async def relay_task(payload: TaskRequest, poller: TaskPoller = Depends(get_poller)):
    logger.info("Task %s: trackIds=%s callbackUrl=%s", payload.taskId, payload.trackIds, payload.callbackUrl)
    try:
        result = await poller.run(payload)
    except Exception:
        logger.exception("Error processing task %s", payload.taskId)
        return internal_error()

    if result.outcome is TaskOutcome.TIMEOUT:
        return TaskStatusResponse(status="timeout", message=timeout_message(poller.timeout))

    message = "All songs failed" if result.outcome is TaskOutcome.ALL_FAILED else "Process completed"
    return TaskStatusResponse(status="success", message=message, callbackSuccess=result.callback_success)
