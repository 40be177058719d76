from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src/ is importable when running tests without installation
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from msd347.config.settings import PrinterSettings
from msd347.hardware.mock import MockTransport
from msd347.printer.session import PrinterSession


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def settings() -> PrinterSettings:
    return PrinterSettings(_env_file=None)


@pytest.fixture
def session(transport: MockTransport, settings: PrinterSettings) -> PrinterSession:
    return PrinterSession(transport, settings)
