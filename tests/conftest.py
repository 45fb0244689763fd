"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from land_registry.audit.logger import EventLog
from land_registry.core.models import REGISTRATION_FEE
from land_registry.registry.service import RegistryService
from land_registry.settlement.ledger import InMemoryLedger

ADMIN = "0x" + "ad" * 20
AGENT = "0x" + "a1" * 20
OTHER_AGENT = "0x" + "a2" * 20
ALICE = "0x" + "0a" * 20
BOB = "0x" + "0b" * 20
CAROL = "0x" + "0c" * 20


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def ledger() -> InMemoryLedger:
    return InMemoryLedger()


@pytest.fixture
def event_log() -> EventLog:
    return EventLog()


@pytest.fixture
def service(ledger: InMemoryLedger, event_log: EventLog) -> Generator[RegistryService, None, None]:
    """Provide a registry administered by ADMIN with the default fee."""
    svc = RegistryService(admin=ADMIN, settlement=ledger, event_log=event_log)
    yield svc
    svc.close()


@pytest.fixture
def staffed_service(service: RegistryService) -> RegistryService:
    """Registry with AGENT on the roster."""
    service.add_agent(ADMIN, AGENT)
    return service


@pytest.fixture
def verified_parcel(staffed_service: RegistryService) -> int:
    """Certificate 42 registered by ALICE and verified by AGENT."""
    staffed_service.register_land(ALICE, 42, 100, REGISTRATION_FEE)
    staffed_service.verify_ownership(AGENT, 42)
    return 42
