"""Bank of Russia daily rate fetcher."""

import logging
import threading
import time
from datetime import date

import httpx
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from currency_window.config import Settings
from currency_window.data.decoder import decode_daily_rates
from currency_window.errors import FetchError
from currency_window.models import DailyRates


logger = logging.getLogger(__name__)

REQUEST_DATE_FORMAT = "%d/%m/%Y"


def _is_retryable(error: BaseException) -> bool:
    return isinstance(error, FetchError) and error.retryable


def _log_retry(state: RetryCallState) -> None:
    error = state.outcome.exception() if state.outcome else None
    logger.warning(f"  Attempt {state.attempt_number} failed: {error}")


class CbrRatesFetcher:
    """Fetches daily rate publications from the CBR XML service."""

    def __init__(
        self, settings: Settings | None = None, client: httpx.Client | None = None
    ) -> None:
        self.settings = settings or Settings()
        self.settings.validate()
        self._client = client
        # An injected client belongs to the caller and is left open
        self._owns_client = client is None
        self._lock = threading.Lock()

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client."""
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(timeout=self.settings.request_timeout)
            return self._client

    def close(self) -> None:
        """Close HTTP client if this fetcher created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "CbrRatesFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _request(self, day: date) -> bytes:
        """Single GET for one date, transport errors mapped to FetchError."""
        time.sleep(self.settings.request_delay)
        date_req = day.strftime(REQUEST_DATE_FORMAT)
        logger.debug(f"Fetching rates for {date_req}")
        try:
            response = self.client.get(
                self.settings.base_url, params={"date_req": date_req}
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"HTTP error {e.response.status_code} for {date_req}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise FetchError(f"Request for {date_req} failed: {e.__class__.__name__}") from e
        return response.content

    def fetch_raw(self, day: date) -> bytes:
        """
        Fetch the raw publication for a date, retrying transport failures.

        Raises:
            FetchError: Every attempt failed, or a permanent 4xx status
        """
        retrying = Retrying(
            stop=stop_after_attempt(self.settings.max_retries),
            wait=wait_exponential(
                multiplier=self.settings.retry_backoff,
                max=self.settings.retry_max_wait,
            ),
            retry=retry_if_exception(_is_retryable),
            before_sleep=_log_retry,
            reraise=True,
        )
        return retrying(self._request, day)

    def fetch_day(self, day: date) -> DailyRates:
        """Fetch and decode the publication for a date."""
        return decode_daily_rates(self.fetch_raw(day))
