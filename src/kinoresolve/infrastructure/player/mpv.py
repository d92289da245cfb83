"""External media player invocation."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Sequence

import structlog

from kinoresolve.domain.exceptions import PlayerError

log = structlog.get_logger(__name__)


class MpvPlayer:
    """Runs ``mpv <url>`` in the foreground, attached to the current terminal."""

    def __init__(self, command: str = "mpv", args: Sequence[str] = ()) -> None:
        self._command = command
        self._args = list(args)

    def is_available(self) -> bool:
        return shutil.which(self._command) is not None

    def play(self, url: str) -> None:
        path = shutil.which(self._command)
        if path is None:
            raise PlayerError(f"{self._command} not found in PATH")

        url = url.strip()
        log.info("player_started", player=self._command, url=url[:120])
        try:
            subprocess.run([path, *self._args, url], check=True)
        except subprocess.CalledProcessError as exc:
            raise PlayerError(f"failed to play stream: exit status {exc.returncode}") from exc
        except OSError as exc:
            raise PlayerError(f"failed to start {self._command}: {exc}") from exc
