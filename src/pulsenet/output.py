"""Diagnostic output on stderr with Rich support.

pulsenet is a library, so it never writes to stdout.  Everything it has to
say -- request logs from :class:`~pulsenet.interceptors.LoggingInterceptor`,
cache and retry decisions from :class:`~pulsenet.client.NetworkClient` --
goes to stderr through a single :class:`OutputManager`.

* **Colour control** -- respects ``NO_COLOR``, ``TERM=dumb``, and the
  ``no_color`` flag.  Without colour, messages are written with plain
  ``print`` so they are trivially captured and grepped.
* **Verbosity** -- ``info`` is suppressed by ``quiet``; ``debug`` is only
  shown when ``verbose`` is set.  ``warning`` always prints.

:class:`OutputManager` holds the stderr console and the quiet/verbose
flags.  Install a configured one with :func:`set_output`; library code
reaches it through :func:`get_output`.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape


class OutputManager:
    """Central manager for pulsenet diagnostics.

    Args:
        no_color: Disable all colour and Rich markup.
        quiet: Suppress informational messages.
        verbose: Enable debug-level messages.
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
            highlight=False,
        )

    def info(self, message: str) -> None:
        """Print an informational message to stderr. Suppressed by ``quiet``.

        Args:
            message: The message text.
        """
        if not self._quiet:
            if self._no_color:
                print(message, file=sys.stderr, flush=True)
            else:
                self._stderr.print(message, markup=False)

    def warning(self, message: str) -> None:
        """Print a yellow warning to stderr. NOT suppressed by ``quiet``.

        Args:
            message: The warning text.
        """
        if self._no_color:
            print(f"Warning: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def debug(self, message: str) -> None:
        """Print a debug message to stderr. Only shown when ``verbose`` is active.

        Args:
            message: The debug text (prefixed with ``[debug]`` on output).
        """
        if self._verbose:
            if self._no_color:
                print(f"[debug] {message}", file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[dim]\\[debug] {escape(message)}[/dim]")


def _should_disable_color() -> bool:
    """Check if color should be disabled.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


# ------------------------------------------------------------------ #
# Global output instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager` instance.

    If no instance has been installed via :func:`set_output`, a default
    ``OutputManager`` is created lazily.

    Returns:
        The active :class:`OutputManager`.
    """
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance.

    Args:
        output: The configured manager to install.
    """
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None
