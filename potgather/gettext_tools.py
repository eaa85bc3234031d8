"""Invoke GNU gettext command-line tools."""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from typing import Sequence

from .logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class GettextTools:
    """Locations of the gettext binaries and the per-call timeout."""

    xgettext: str = "xgettext"
    msgcat: str = "msgcat"
    timeout: float | None = None


def format_command(command: Sequence[str]) -> str:
    """Render an argument vector the way a shell user would type it."""
    return shlex.join(str(part) for part in command)


def run_gettext(command: Sequence[str], *, timeout: float | None = None) -> bool:
    """Run a gettext tool and report whether it succeeded.

    The command is executed without a shell, so file names are passed through
    verbatim whatever characters they contain.
    """
    argv = [str(part) for part in command]
    LOGGER.debug("executing: %s", format_command(argv))
    try:
        result = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except FileNotFoundError:
        LOGGER.error("%s not found; is GNU gettext installed?", argv[0])
        return False
    except subprocess.TimeoutExpired:
        LOGGER.error("%s did not finish within %s seconds", argv[0], timeout)
        return False
    except OSError as exc:
        LOGGER.error("failed to execute %s: %s", argv[0], exc)
        return False

    stderr_text = result.stderr.strip()
    if stderr_text:
        log_fn = LOGGER.error if result.returncode != 0 else LOGGER.debug
        log_fn("%s stderr:\n%s", argv[0], stderr_text)
    if result.returncode != 0:
        LOGGER.error("%s failed with exit code %s", argv[0], result.returncode)
        return False
    return True


__all__ = ["GettextTools", "format_command", "run_gettext"]
