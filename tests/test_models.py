"""Tests for pimon data models."""

import pytest

from pimon.models import (
    CpuInfo,
    PollState,
    ProcessSample,
    SystemSnapshot,
    parse_processes,
)


def test_system_snapshot_from_json(system_payload):
    """Test SystemSnapshot decodes every section of /api/system."""
    snapshot = SystemSnapshot.from_json(system_payload)

    assert snapshot.cpu.usage_percent == 95.0
    assert snapshot.cpu.frequency == 1500.0
    assert snapshot.cpu.temperature == 75.0
    assert snapshot.cpu.cores == 4
    assert snapshot.memory.total == 8_000_000_000
    assert snapshot.memory.available == 2_000_000_000
    assert snapshot.memory.percent_used == 75.0
    assert snapshot.disk.used == 50_000_000_000
    assert snapshot.disk.free == 50_000_000_000
    assert snapshot.network.bytes_sent == 1000
    assert snapshot.network.bytes_recv == 2000


def test_cpu_optional_fields_may_be_null():
    """Test frequency and temperature accept null."""
    cpu = CpuInfo.from_json(
        {"usage_percent": 12.5, "frequency": None, "temperature": None, "cores": 4}
    )
    assert cpu.frequency is None
    assert cpu.temperature is None


def test_percentages_are_not_range_checked(system_payload):
    """Test out-of-range percentages are passed through as reported."""
    system_payload["cpu"]["usage_percent"] = 140
    snapshot = SystemSnapshot.from_json(system_payload)
    assert snapshot.cpu.usage_percent == 140.0


def test_system_snapshot_missing_field(system_payload):
    """Test a missing field raises KeyError."""
    del system_payload["disk"]["free"]
    with pytest.raises(KeyError):
        SystemSnapshot.from_json(system_payload)


def test_system_snapshot_rejects_non_object():
    """Test a non-object body raises TypeError."""
    with pytest.raises(TypeError):
        SystemSnapshot.from_json([1, 2, 3])


def test_system_snapshot_rejects_non_numeric(system_payload):
    """Test a non-numeric value raises ValueError."""
    system_payload["memory"]["total"] = "lots"
    with pytest.raises(ValueError):
        SystemSnapshot.from_json(system_payload)


def test_parse_processes_keeps_order(processes_payload):
    """Test processes keep the producer's order."""
    processes = parse_processes(processes_payload)

    assert [p.pid for p in processes] == [812, 1, 455]
    assert processes[0] == ProcessSample(
        pid=812, name="python3", cpu_percent=62.5, memory_percent=4.2
    )


def test_parse_processes_rejects_object():
    """Test a non-array body raises TypeError."""
    with pytest.raises(TypeError):
        parse_processes({"pid": 1})


def test_process_sample_is_frozen():
    """Test that ProcessSample is immutable (frozen)."""
    sample = ProcessSample(pid=1, name="init", cpu_percent=0.1, memory_percent=0.5)

    with pytest.raises(AttributeError):
        sample.pid = 999


def test_process_sample_uses_slots():
    """Test that ProcessSample uses __slots__."""
    sample = ProcessSample(pid=1, name="init", cpu_percent=0.1, memory_percent=0.5)
    assert not hasattr(sample, "__dict__")


class TestPollState:
    """Tests for PollState transitions."""

    def test_initial_state_is_loading(self):
        """Test a fresh PollState has no data and no error."""
        state = PollState()
        assert state.snapshot is None
        assert state.processes == ()
        assert state.error is None
        assert state.is_loading
        assert not state.has_data

    def test_succeeded_replaces_data_and_clears_error(self, system_payload, processes_payload):
        """Test a successful poll replaces data and clears the error."""
        snapshot = SystemSnapshot.from_json(system_payload)
        processes = parse_processes(processes_payload)

        state = PollState().failed("boom").succeeded(snapshot, processes)

        assert state.snapshot == snapshot
        assert state.processes == processes
        assert state.error is None
        assert state.has_data

    def test_failed_keeps_prior_data(self, system_payload, processes_payload):
        """Test a failed poll keeps earlier data."""
        snapshot = SystemSnapshot.from_json(system_payload)
        processes = parse_processes(processes_payload)

        state = PollState().succeeded(snapshot, processes).failed("boom")

        assert state.error == "boom"
        assert state.snapshot == snapshot
        assert state.processes == processes
        assert not state.is_loading

    def test_failed_without_prior_data(self):
        """Test a failed first poll records only the error."""
        state = PollState().failed("boom")
        assert state.error == "boom"
        assert not state.has_data
        assert not state.is_loading
