"""Shared test fixtures for pulsenet.

Provides the output reset used by every test plus small building blocks
for wiring a :class:`~pulsenet.client.NetworkClient` to an
:class:`httpx.MockTransport`.  These fixtures are automatically discovered
by pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

import pytest

from pulsenet.output import OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches a reference to sys.stderr at creation time.
    When pytest swaps capture streams between tests that reference goes
    stale, so a fresh manager is created on next use.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, colourless OutputManager for the test."""
    mgr = OutputManager(no_color=True, quiet=True)
    set_output(mgr)
    return mgr


@pytest.fixture
def verbose_output() -> OutputManager:
    """Install a verbose, colourless OutputManager for the test."""
    mgr = OutputManager(no_color=True, verbose=True)
    set_output(mgr)
    return mgr


class RecordingSleep:
    """Stand-in for :func:`asyncio.sleep` that records delays and returns at once."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def recording_sleep(monkeypatch: pytest.MonkeyPatch) -> RecordingSleep:
    """Replace the backoff sleep in the client module with a recorder."""
    sleeper = RecordingSleep()
    monkeypatch.setattr("pulsenet.client.network_client.asyncio.sleep", sleeper)
    return sleeper
