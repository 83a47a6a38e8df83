"""HTTP client for the remote telemetry endpoints."""

import asyncio

import httpx

from pimon.models import ProcessSample, SystemSnapshot, parse_processes

SYSTEM_PATH = "/api/system"
PROCESSES_PATH = "/api/processes"


class PollError(Exception):
    """A poll of the remote host failed."""


class TelemetryClient:
    """
    Fetches system and process telemetry from a remote host.

    Both endpoints are requested concurrently and treated as a single unit:
    if either one fails, the whole fetch fails with PollError.
    """

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the TelemetryClient.

        Args:
            base_url: Root URL of the telemetry service, e.g. http://pi.local:5000.
            transport: Optional httpx transport, used to stub the remote host.
        """
        self._base_url = base_url
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport)

    @property
    def base_url(self) -> str:
        """Root URL of the telemetry service."""
        return self._base_url

    async def fetch(self) -> tuple[SystemSnapshot, tuple[ProcessSample, ...]]:
        """
        Fetch one snapshot and the process list.

        Raises:
            PollError: On a transport failure, a non-success status from
                either endpoint, or a body that cannot be decoded.
        """
        try:
            sys_response, proc_response = await asyncio.gather(
                self._http.get(SYSTEM_PATH),
                self._http.get(PROCESSES_PATH),
            )
        except httpx.HTTPError as exc:
            raise PollError(f"Could not reach {self._base_url}: {exc}") from exc

        for response in (sys_response, proc_response):
            if not response.is_success:
                raise PollError(
                    "Network response was not ok "
                    f"(HTTP {response.status_code} from {response.url.path})"
                )

        try:
            snapshot = SystemSnapshot.from_json(sys_response.json())
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            raise PollError(f"Malformed response from {SYSTEM_PATH}: {exc!r}") from exc

        try:
            processes = parse_processes(proc_response.json())
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            raise PollError(f"Malformed response from {PROCESSES_PATH}: {exc!r}") from exc

        return snapshot, processes

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._http.aclose()
