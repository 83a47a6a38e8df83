"""Shared fixtures for pimon tests."""

import copy

import httpx
import pytest

SYSTEM_PAYLOAD = {
    "cpu": {"usage_percent": 95, "temperature": 75, "frequency": 1500, "cores": 4},
    "memory": {"total": 8e9, "available": 2e9, "percent_used": 75},
    "disk": {"total": 1e11, "used": 5e10, "free": 5e10, "percent_used": 50},
    "network": {"bytes_sent": 1000, "bytes_recv": 2000},
}

PROCESSES_PAYLOAD = [
    {"pid": 812, "name": "python3", "cpu_percent": 62.5, "memory_percent": 4.2},
    {"pid": 1, "name": "systemd", "cpu_percent": 0.1, "memory_percent": 0.3},
    {"pid": 455, "name": "nginx", "cpu_percent": 3.0, "memory_percent": 51.0},
]


class FakeHost:
    """Stand-in for the remote telemetry service, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.system_status = 200
        self.processes_status = 200
        self.system_payload = copy.deepcopy(SYSTEM_PAYLOAD)
        self.processes_payload = copy.deepcopy(PROCESSES_PAYLOAD)
        self.requests: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.url.path)
        if request.url.path == "/api/system":
            return httpx.Response(self.system_status, json=self.system_payload)
        if request.url.path == "/api/processes":
            return httpx.Response(self.processes_status, json=self.processes_payload)
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def system_payload() -> dict:
    return copy.deepcopy(SYSTEM_PAYLOAD)


@pytest.fixture
def processes_payload() -> list[dict]:
    return copy.deepcopy(PROCESSES_PAYLOAD)
