"""Formatting helpers turning raw telemetry into display text."""

import math
from enum import Enum

BYTE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]

CPU_USAGE_THRESHOLD = 80.0
TEMPERATURE_THRESHOLD = 70.0
MEMORY_USED_THRESHOLD = 90.0
DISK_USED_THRESHOLD = 90.0
PROCESS_PERCENT_THRESHOLD = 50.0


class Severity(Enum):
    """Display severity of a reading."""

    NORMAL = "normal"
    HIGH = "high"

    @property
    def style(self) -> str:
        """Markup colour used for this severity."""
        return "red" if self is Severity.HIGH else "green"


def format_bytes(size: float) -> str:
    """Format a byte count using Bytes/KB/MB/GB/TB."""
    if size == 0:
        return "0 Bytes"

    index = 0
    while index < len(BYTE_UNITS) - 1 and size >= 1024 ** (index + 1):
        index += 1
    value = size / 1024**index
    unit = BYTE_UNITS[index]

    if unit == "GB":
        return f"{value:.2f} GB"
    if unit == "KB":
        # Halves round up
        return f"{math.floor(value + 0.5)} KB"
    return f"{value:.1f} {unit}"


def format_percentage(value: float) -> str:
    """Format a percentage with one decimal place."""
    return f"{value:.1f}%"


def format_temperature(celsius: float) -> str:
    """Format a temperature in degrees Celsius."""
    return f"{celsius:.1f}°C"


def format_frequency(mhz: float) -> str:
    """Format a CPU frequency given in MHz as GHz."""
    return f"{mhz / 1000:.2f} GHz"


def classify(value: float, threshold: float) -> Severity:
    """Classify a reading as HIGH when it strictly exceeds the threshold."""
    return Severity.HIGH if value > threshold else Severity.NORMAL


def cpu_severity(usage_percent: float) -> Severity:
    """Severity of the overall CPU usage."""
    return classify(usage_percent, CPU_USAGE_THRESHOLD)


def temperature_severity(celsius: float) -> Severity:
    """Severity of the CPU temperature."""
    return classify(celsius, TEMPERATURE_THRESHOLD)


def memory_severity(percent_used: float) -> Severity:
    """Severity of the memory usage."""
    return classify(percent_used, MEMORY_USED_THRESHOLD)


def disk_severity(percent_used: float) -> Severity:
    """Severity of the disk usage."""
    return classify(percent_used, DISK_USED_THRESHOLD)


def process_severity(percent: float) -> Severity:
    """Severity of a per-process CPU or memory percentage."""
    return classify(percent, PROCESS_PERCENT_THRESHOLD)


def styled(text: str, severity: Severity) -> str:
    """Wrap text in markup for the given severity."""
    return f"[{severity.style}]{text}[/{severity.style}]"
