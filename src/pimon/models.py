"""Data models for pimon."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True, frozen=True)
class CpuInfo:
    """CPU reading reported by the remote host."""

    usage_percent: float
    frequency: float | None  # MHz
    temperature: float | None  # Celsius
    cores: int

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CpuInfo":
        """Decode the ``cpu`` object of ``/api/system``."""
        frequency = data["frequency"]
        temperature = data["temperature"]
        return cls(
            usage_percent=float(data["usage_percent"]),
            frequency=float(frequency) if frequency is not None else None,
            temperature=float(temperature) if temperature is not None else None,
            cores=int(data["cores"]),
        )


@dataclass(slots=True, frozen=True)
class MemoryInfo:
    """Memory reading reported by the remote host."""

    total: int  # Bytes
    available: int  # Bytes
    percent_used: float

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "MemoryInfo":
        """Decode the ``memory`` object of ``/api/system``."""
        return cls(
            total=int(data["total"]),
            available=int(data["available"]),
            percent_used=float(data["percent_used"]),
        )


@dataclass(slots=True, frozen=True)
class DiskInfo:
    """Root filesystem reading reported by the remote host."""

    total: int  # Bytes
    used: int  # Bytes
    free: int  # Bytes
    percent_used: float

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "DiskInfo":
        """Decode the ``disk`` object of ``/api/system``."""
        return cls(
            total=int(data["total"]),
            used=int(data["used"]),
            free=int(data["free"]),
            percent_used=float(data["percent_used"]),
        )


@dataclass(slots=True, frozen=True)
class NetworkInfo:
    """Network counters reported by the remote host."""

    bytes_sent: int
    bytes_recv: int

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "NetworkInfo":
        """Decode the ``network`` object of ``/api/system``."""
        return cls(
            bytes_sent=int(data["bytes_sent"]),
            bytes_recv=int(data["bytes_recv"]),
        )


@dataclass(slots=True, frozen=True)
class SystemSnapshot:
    """Consistent snapshot of CPU, memory, disk and network readings."""

    cpu: CpuInfo
    memory: MemoryInfo
    disk: DiskInfo
    network: NetworkInfo

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "SystemSnapshot":
        """
        Decode a ``/api/system`` response body.

        Raises:
            KeyError: A required field is missing.
            TypeError: A field has the wrong container type.
            ValueError: A numeric field cannot be converted.
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return cls(
            cpu=CpuInfo.from_json(data["cpu"]),
            memory=MemoryInfo.from_json(data["memory"]),
            disk=DiskInfo.from_json(data["disk"]),
            network=NetworkInfo.from_json(data["network"]),
        )


@dataclass(slots=True, frozen=True)
class ProcessSample:
    """Immutable sample of one monitored process on the remote host."""

    pid: int
    name: str
    cpu_percent: float
    memory_percent: float

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "ProcessSample":
        """Decode one element of the ``/api/processes`` array."""
        return cls(
            pid=int(data["pid"]),
            name=str(data["name"]),
            cpu_percent=float(data["cpu_percent"]),
            memory_percent=float(data["memory_percent"]),
        )


def parse_processes(data: Any) -> tuple[ProcessSample, ...]:
    """Decode a ``/api/processes`` response body, keeping the producer's order."""
    if not isinstance(data, list):
        raise TypeError(f"expected a JSON array, got {type(data).__name__}")
    return tuple(ProcessSample.from_json(item) for item in data)


@dataclass(slots=True, frozen=True)
class PollState:
    """
    Latest known telemetry plus the outcome of the last poll.

    A successful poll replaces snapshot and processes wholesale and clears
    the error. A failed poll only sets the error; earlier data is kept.
    """

    snapshot: SystemSnapshot | None = None
    processes: tuple[ProcessSample, ...] = field(default_factory=tuple)
    error: str | None = None

    @property
    def has_data(self) -> bool:
        """Whether at least one poll has succeeded."""
        return self.snapshot is not None

    @property
    def is_loading(self) -> bool:
        """Whether nothing has been received yet and no error is pending."""
        return self.snapshot is None and self.error is None

    def succeeded(
        self,
        snapshot: SystemSnapshot,
        processes: tuple[ProcessSample, ...],
    ) -> "PollState":
        """Return the state after a successful poll."""
        return PollState(snapshot=snapshot, processes=tuple(processes), error=None)

    def failed(self, message: str) -> "PollState":
        """Return the state after a failed poll."""
        return PollState(snapshot=self.snapshot, processes=self.processes, error=message)
