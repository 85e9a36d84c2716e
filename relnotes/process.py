"""Run external commands and stream their output line by line."""

import logging
import subprocess
import tempfile
import threading
from typing import Iterator, Optional, Sequence

from .exceptions import CommandFailedError, CommandTimeoutError


logger = logging.getLogger(__name__)


def stream_command(args: Sequence[str], cwd: Optional[str] = None,
                   timeout: Optional[float] = None) -> Iterator[str]:
    """Run a command and yield its standard output lines as they arrive.

    The generator only finishes once the process has exited, so every line
    the process wrote is delivered before the exit status is checked.

    Args:
        args: Command and arguments
        cwd: Working directory for the command
        timeout: Seconds after which the command is killed

    Yields:
        Output lines without line terminators

    Raises:
        CommandFailedError: If the command cannot be started or exits non-zero
        CommandTimeoutError: If the command was killed after ``timeout`` seconds
    """
    args = list(args)
    logger.debug(f"Running {args} in {cwd or '.'}")

    with tempfile.TemporaryFile() as stderr_file:
        try:
            proc = subprocess.Popen(
                args,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=stderr_file,
                text=True,
                encoding='utf-8',
                errors='replace',
            )
        except OSError as e:
            raise CommandFailedError(args, None, str(e)) from e

        expired = threading.Event()

        def expire():
            # The process may have exited just before the timer fired
            if proc.poll() is None:
                expired.set()
                proc.kill()

        timer = threading.Timer(timeout, expire) if timeout else None
        if timer:
            timer.daemon = True
            timer.start()

        try:
            for line in proc.stdout:
                yield line.rstrip('\r\n')
            returncode = proc.wait()
        finally:
            if timer:
                timer.cancel()
            # Consumer stopped early
            if proc.poll() is None:
                proc.kill()
            proc.stdout.close()
            proc.wait()

        stderr_file.seek(0)
        stderr = stderr_file.read().decode('utf-8', errors='replace').strip()

    if expired.is_set():
        raise CommandTimeoutError(args, timeout, stderr)
    if returncode != 0:
        raise CommandFailedError(args, returncode, stderr)
    logger.debug(f"{args[0]} exited with status 0")
