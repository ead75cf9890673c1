from pydantic import BaseModel
import os

class Settings(BaseModel):
    api_token: str = os.getenv("GPTGOD_MUSIC_API_TOKEN", "")
    udio_base_url: str = os.getenv("UDIO_API_BASE_URL", "https://api.gptgod.online/udio")
    poll_interval_seconds: float = float(os.getenv("POLL_INTERVAL_SECONDS", 10))
    poll_timeout_seconds: float = float(os.getenv("POLL_TIMEOUT_SECONDS", 600))
    status_max_attempts: int = int(os.getenv("STATUS_MAX_ATTEMPTS", 5))
    status_retry_delay_seconds: float = float(os.getenv("STATUS_RETRY_DELAY_SECONDS", 0))
    callback_max_attempts: int = int(os.getenv("CALLBACK_MAX_ATTEMPTS", 3))
    callback_backoff_base_seconds: float = float(os.getenv("CALLBACK_BACKOFF_BASE_SECONDS", 10))
    http_timeout_seconds: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", 30))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

settings = Settings()
