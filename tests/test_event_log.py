"""Tests for the event log and notification models."""

import json
from pathlib import Path

from land_registry.audit.logger import EventLog, read_log
from land_registry.audit.models import (
    EventName,
    RegistryEvent,
    agent_added,
    fee_paid,
    land_transferred,
)


class TestRegistryEvent:
    """Tests for RegistryEvent model."""

    def test_event_creation(self) -> None:
        event = fee_paid("0xabc", 10)
        assert event.name == EventName.FEE_PAID
        assert event.payload == {"payer": "0xabc", "amount": 10}
        assert event.event_id.startswith("evt_")

    def test_transfer_payload_keys(self) -> None:
        event = land_transferred(1, "0xa", "0xb")
        assert event.payload == {"certificate": 1, "from": "0xa", "to": "0xb"}

    def test_log_line_has_checksum(self) -> None:
        event = agent_added("0xabc")
        data = json.loads(event.to_log_line())

        assert data["name"] == "AgentAdded"
        assert data["checksum"] == event.compute_checksum()
        assert len(data["checksum"]) == 64

    def test_all_names_defined(self) -> None:
        expected = {
            "AgentAdded",
            "AgentRevoked",
            "LandRegistered",
            "LandVerified",
            "LandTransferred",
            "FeePaid",
            "ExternalViewResult",
        }
        assert {n.value for n in EventName} == expected


class TestEventLog:
    """Tests for EventLog."""

    def test_emit_keeps_order(self) -> None:
        log = EventLog()
        log.emit(fee_paid("0xa", 1))
        log.emit(agent_added("0xb"))

        assert log.names() == [EventName.FEE_PAID, EventName.AGENT_ADDED]

    def test_subscribers_receive_events(self) -> None:
        log = EventLog()
        received: list[RegistryEvent] = []
        log.subscribe(received.append)

        event = log.emit(agent_added("0xa"))
        assert received == [event]

    def test_failing_subscriber_is_isolated(self) -> None:
        """A raising subscriber does not stop delivery or emission."""
        log = EventLog()
        received: list[RegistryEvent] = []

        def broken(event: RegistryEvent) -> None:
            raise RuntimeError("subscriber down")

        log.subscribe(broken)
        log.subscribe(received.append)
        log.emit(agent_added("0xa"))

        assert len(received) == 1
        assert len(log.events) == 1

    def test_file_sink_roundtrip(self, temp_dir: Path) -> None:
        path = temp_dir / "audit" / "events.jsonl"
        log = EventLog(path)
        log.emit(agent_added("0xa"))
        log.emit(fee_paid("0xb", 5))

        loaded = read_log(path)
        assert [e.name for e in loaded] == [EventName.AGENT_ADDED, EventName.FEE_PAID]
        assert loaded[1].payload == {"payer": "0xb", "amount": 5}

    def test_unwritable_file_sink_is_isolated(self, temp_dir: Path) -> None:
        """Events stay recorded and delivered when the file cannot be written."""
        log = EventLog(temp_dir)
        received: list[RegistryEvent] = []
        log.subscribe(received.append)

        event = log.emit(agent_added("0xa"))

        assert log.events == [event]
        assert received == [event]

    def test_read_log_skips_malformed_lines(self, temp_dir: Path) -> None:
        path = temp_dir / "events.jsonl"
        good = agent_added("0xa").to_log_line()
        path.write_text(f"{good}\nnot json\n\n{{\"name\": \"Bogus\"}}\n")

        loaded = read_log(path)
        assert [e.name for e in loaded] == [EventName.AGENT_ADDED]

    def test_read_missing_log(self, temp_dir: Path) -> None:
        assert read_log(temp_dir / "missing.jsonl") == []
