"""Configuration for pimon."""

from dataclasses import dataclass

DEFAULT_BASE_URL = "http://pi.local:5000"
DEFAULT_POLL_RATE = 5.0


@dataclass(slots=True, frozen=True)
class MonitorConfig:
    """Fixed settings for the dashboard."""

    base_url: str = DEFAULT_BASE_URL
    poll_rate: float = DEFAULT_POLL_RATE  # Seconds between polls
    log_level: str = "INFO"
