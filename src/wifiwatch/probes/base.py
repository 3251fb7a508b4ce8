"""Subprocess plumbing shared by all probes."""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Captured output of one probe invocation."""

    returncode: int
    stdout: str
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# Signature of run_command; probes take one of these so tests can fake them.
CommandRunner = Callable[[Sequence[str], float], Awaitable[CommandResult | None]]


async def _reap(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        with contextlib.suppress(ProcessLookupError):
            process.kill()
        await process.wait()


async def run_command(argv: Sequence[str], timeout: float) -> CommandResult | None:
    """Run a probe command and capture its output.

    Returns None when the command could not be run at all (missing binary,
    permission error) or did not finish within ``timeout`` seconds. A command
    that ran and exited non-zero still returns its output: ping reports 100%
    loss that way.
    """
    if not argv:
        return None
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.debug("Cannot run %s: %s", argv[0], e)
        return None

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except TimeoutError:
        logger.warning("%s timed out after %.0fs", argv[0], timeout)
        await _reap(process)
        return None
    except BaseException:
        # cancelled: kill the child before propagating
        await _reap(process)
        raise

    return CommandResult(
        returncode=process.returncode if process.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
