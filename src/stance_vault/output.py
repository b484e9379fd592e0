"""Trace and diagnostic output on stderr.

stance_vault is a library, so nothing it prints may land on stdout. All
output -- HTTP traces when debugging is enabled, and diagnostics such as
swallowed renewal failures -- goes to stderr through a single
:class:`OutputManager`:

* **Rich formatting** when stderr is a colour-capable terminal, plain text
  otherwise.
* **Colour control** -- respects ``NO_COLOR`` and ``TERM=dumb``.

Library code fetches the shared manager with :func:`get_output`. Install a
configured one with :func:`set_output`, for example
``set_output(OutputManager(verbose=True))`` to see renewal diagnostics.
"""

from __future__ import annotations

import os
import sys
from typing import Mapping, Optional

from rich.console import Console

_BANNER_FILL = "=" * 24
_RESPONSE_RULE = "-" * 41


class OutputManager:
    """Central manager for everything stance_vault writes to stderr.

    Args:
        no_color: Disable all colour and Rich markup.
        verbose: Enable debug-level diagnostics.
    """

    def __init__(
        self,
        no_color: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._verbose = verbose

        # Console without an explicit file follows sys.stderr at write time.
        self._stderr = Console(stderr=True, no_color=self._no_color)

    # ------------------------------------------------------------------ #
    # HTTP traces
    # ------------------------------------------------------------------ #

    def trace_request(
        self,
        method: str,
        path: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> None:
        """Render an outgoing request.

        The caller is responsible for masking secrets in *headers*; this
        method prints exactly what it is given.

        Args:
            method: HTTP verb.
            path: The relative path as the caller supplied it (banner only).
            url: The fully joined URL.
            headers: Request headers, already redacted.
            body: Encoded request body, if any.
        """
        self._emit(f"=====[ {method} {path} ]" + _BANNER_FILL, style="bold cyan")
        self._emit(f"{method} {url}")
        self._emit(_render_headers(headers))
        if body:
            self._emit(body.decode("utf-8", errors="replace"))
        self._emit("\n")

    def trace_response(
        self,
        status_code: int,
        reason: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> None:
        """Render a raw response exactly as received.

        Args:
            status_code: HTTP status code.
            reason: Reason phrase (may be empty).
            headers: Response headers.
            body: Raw, undecoded response body.
        """
        self._emit(_RESPONSE_RULE, style="dim")
        self._emit(f"{status_code} {reason}".rstrip())
        self._emit(_render_headers(headers))
        if body:
            self._emit(body.decode("utf-8", errors="replace"))
        self._emit("\n")

    # ------------------------------------------------------------------ #
    # Diagnostics
    # ------------------------------------------------------------------ #

    def warning(self, message: str) -> None:
        """Print a yellow warning. Always shown."""
        if self._no_color:
            self._emit(f"Warning: {message}")
        else:
            self._stderr.print(f"[yellow]Warning:[/yellow] {message}", highlight=False)

    def debug(self, message: str) -> None:
        """Print a debug message. Only shown when ``verbose`` is active."""
        if self._verbose:
            self._emit(f"[debug] {message}", style="dim")

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _emit(self, text: str, style: Optional[str] = None) -> None:
        if self._no_color:
            print(text, file=sys.stderr, flush=True)
        else:
            # soft_wrap keeps long header lines intact
            self._stderr.print(
                text, style=style, markup=False, highlight=False, soft_wrap=True
            )


# ------------------------------------------------------------------ #
# Module-level helpers
# ------------------------------------------------------------------ #


def _render_headers(headers: Mapping[str, str]) -> str:
    return "\n".join(f"{key}: {value}" for key, value in headers.items())


def _should_disable_color() -> bool:
    """Check if colour should be disabled.

    Returns True when the NO_COLOR env var is set (any value) or TERM=dumb.
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
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None

