"""External audio player wrapper.

Streams a recitation URL through a command-line player. The first of
``mpv``, ``ffplay`` and ``mpg123`` found on PATH is used unless a command
is configured.
"""

import logging
import shlex
import shutil
import subprocess
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

# Arguments that make each player play once, quietly, without a window
_PLAYER_ARGS: Dict[str, List[str]] = {
    "mpv": ["--no-video", "--really-quiet"],
    "ffplay": ["-nodisp", "-autoexit", "-loglevel", "quiet"],
    "mpg123": ["-q"],
}


def find_player(command: Optional[str] = None) -> Optional[List[str]]:
    """Resolve the player command line (without the URL).

    Args:
        command: Configured command, e.g. "mpv --volume=80"

    Returns:
        Argument list, or None when no player is installed
    """
    if command:
        parts = shlex.split(command)
        if parts and shutil.which(parts[0]):
            return parts
        logger.warning("Configured audio player %r not found", command)
        return None

    for name, args in _PLAYER_ARGS.items():
        if shutil.which(name):
            return [name, *args]
    return None


class AudioPlayer:
    """Plays one URL at a time in a child process."""

    def __init__(self, command: Optional[str] = None, *, force_fallback: bool = False):
        """Initialize the player.

        Args:
            command: Player command line to use instead of auto-detection
            force_fallback: Pretend no player is installed (for testing)
        """
        self._argv = None if force_fallback else find_player(command)
        self._proc: Optional[subprocess.Popen] = None

    @property
    def available(self) -> bool:
        return self._argv is not None

    @property
    def name(self) -> str:
        return self._argv[0] if self._argv else ""

    def play(self, url: str) -> bool:
        """Stop whatever is playing and start ``url``.

        Returns:
            True if the player process was started
        """
        self.stop()
        if not self._argv:
            return False
        try:
            self._proc = subprocess.Popen(
                [*self._argv, url],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError:
            logger.warning("Could not start %s for %s", self.name, url, exc_info=True)
            self._proc = None
            return False
        logger.debug("Playing %s with %s", url, self.name)
        return True

    def wait(self) -> bool:
        """Block until the current item ends.

        Returns:
            True if the item played to completion, False if it failed or
            was stopped
        """
        proc = self._proc
        if proc is None:
            return False
        returncode = proc.wait()
        return returncode == 0

    def stop(self) -> None:
        """Terminate the current item, if any."""
        proc = self._proc
        self._proc = None
        if proc is None or proc.poll() is not None:
            return
        proc.terminate()
        try:
            proc.wait(timeout=2)
        except subprocess.TimeoutExpired:
            proc.kill()
