"""
Application Configuration Model
Represents a validated configuration state
"""

from typing import Optional


class AppConfig:
    """
    Immutable configuration object for the Creator Curation Pipeline.

    Represents a VALID configuration state only.
    All validation must be performed before instantiation.
    """

    def __init__(
        self,
        api_key: str = "",
        max_channel_changes: int = 2,
        max_results: int = 25,
        timezone: Optional[str] = None,
        sink_mode: str = "http",
        sink_url: str = "",
        sink_timeout: float = 30.0,
        storage_root: str = "./storage",
        log_level: str = "INFO"
    ):
        """
        Initialize AppConfig with validated values.

        Args:
            api_key: YouTube Data API key (may be empty; lookups then fail explicitly)
            max_channel_changes: How many times a user may bind a channel (> 0)
            max_results: Catalog page size per month (25 - 50)
            timezone: IANA zone used for month windows (None = local zone)
            sink_mode: Submission backend ("http" or "csv")
            sink_url: Endpoint for the http sink
            sink_timeout: Request timeout in seconds for the http sink
            storage_root: Root directory for bindings, csv sheets and logs
            log_level: Logging level name
        """
        self._api_key = api_key
        self._max_channel_changes = max_channel_changes
        self._max_results = max_results
        self._timezone = timezone
        self._sink_mode = sink_mode
        self._sink_url = sink_url
        self._sink_timeout = sink_timeout
        self._storage_root = storage_root
        self._log_level = log_level

    @property
    def api_key(self) -> str:
        """YouTube Data API key."""
        return self._api_key

    @property
    def max_channel_changes(self) -> int:
        """Hard cap on channel binds per user."""
        return self._max_channel_changes

    @property
    def max_results(self) -> int:
        """Provider-side result cap for one month of uploads."""
        return self._max_results

    @property
    def timezone(self) -> Optional[str]:
        """Viewer timezone for month windows (None = local)."""
        return self._timezone

    @property
    def sink_mode(self) -> str:
        """Submission backend mode."""
        return self._sink_mode

    @property
    def sink_url(self) -> str:
        return self._sink_url

    @property
    def sink_timeout(self) -> float:
        return self._sink_timeout

    @property
    def storage_root(self) -> str:
        """Root directory for local state."""
        return self._storage_root

    @property
    def log_level(self) -> str:
        return self._log_level

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"AppConfig(sink_mode={self.sink_mode!r}, "
            f"max_results={self.max_results}, "
            f"max_channel_changes={self.max_channel_changes}, "
            f"storage_root={self.storage_root!r})"
        )
