"""Configuration settings for the rate window report."""

from dataclasses import dataclass, field
import os

from dotenv import load_dotenv


load_dotenv()


# Bank of Russia daily publication, English edition
DEFAULT_CBR_URL = "https://www.cbr.ru/scripts/XML_daily_eng.asp"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Application settings."""

    base_url: str = field(
        default_factory=lambda: os.getenv("CBR_RATES_URL", DEFAULT_CBR_URL)
    )
    period_days: int = field(
        default_factory=lambda: int(os.getenv("CBR_PERIOD_DAYS", "90"))
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("CBR_REQUEST_TIMEOUT", "30"))
    )
    # Pause before every request
    request_delay: float = field(
        default_factory=lambda: float(os.getenv("CBR_REQUEST_DELAY", "0.05"))
    )
    max_retries: int = field(
        default_factory=lambda: int(os.getenv("CBR_MAX_RETRIES", "3"))
    )
    retry_backoff: float = field(
        default_factory=lambda: float(os.getenv("CBR_RETRY_BACKOFF", "0.5"))
    )
    retry_max_wait: float = field(
        default_factory=lambda: float(os.getenv("CBR_RETRY_MAX_WAIT", "8"))
    )
    max_workers: int = field(
        default_factory=lambda: int(os.getenv("CBR_MAX_WORKERS", "4"))
    )
    strict: bool = field(default_factory=lambda: _env_bool("CBR_STRICT", False))

    def validate(self) -> None:
        """Validate settings."""
        if not self.base_url:
            raise ValueError("CBR_RATES_URL must not be empty")
        if self.period_days < 1:
            raise ValueError(f"Lookback period must be at least 1 day, got {self.period_days}")
        if self.request_timeout <= 0:
            raise ValueError(f"Request timeout must be positive, got {self.request_timeout}")
        if self.max_retries < 1:
            raise ValueError(f"At least one request attempt is required, got {self.max_retries}")
        if self.max_workers < 1:
            raise ValueError(f"At least one worker is required, got {self.max_workers}")
        if self.request_delay < 0 or self.retry_backoff < 0 or self.retry_max_wait < 0:
            raise ValueError("Delays must not be negative")
