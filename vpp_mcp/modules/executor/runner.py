"""
Process runner for kubectl invocations.

Each call maps to exactly one child process. Output streams are captured
separately, the child is killed when it outlives its timeout, and the
outcome is always returned as a CommandResult rather than raised.
"""

import asyncio
import logging
import shlex
from typing import List, Optional, Sequence

from vpp_mcp.modules.api import CommandFailure, CommandResult, CommandSuccess, ExecutionStatus

DEFAULT_TIMEOUT = 10.0


class ProcessRunner:
    """Runs external programs with a bounded timeout."""

    def __init__(self, default_timeout: float = DEFAULT_TIMEOUT, logger: Optional[logging.Logger] = None):
        """
        Initialize the runner.

        Args:
            default_timeout: Seconds before a child is killed when the caller
                does not pass its own timeout
            logger: Logger for command diagnostics
        """
        self.default_timeout = default_timeout
        self.logger = logger or logging.getLogger("vpp_mcp.executor")

    @staticmethod
    def format_command(program: str, args: Sequence[str]) -> str:
        """Render a command line the way a user would type it."""
        return " ".join(shlex.quote(part) for part in [program, *args])

    async def run(
        self,
        program: str,
        args: Sequence[str],
        *,
        timeout: Optional[float] = None,
        target: str = "",
    ) -> CommandResult:
        """
        Execute a program and capture its output.

        Args:
            program: Executable name or path
            args: Ordered argument list
            timeout: Seconds before the child is killed (default_timeout if None)
            target: Pod the command is aimed at, echoed in the result

        Returns:
            CommandSuccess on exit status 0, CommandFailure otherwise
        """
        timeout = self.default_timeout if timeout is None else timeout
        argv: List[str] = [program, *args]
        command = self.format_command(program, args)

        self.logger.info(f"Executing command: {command}")

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            self.logger.error(f"Failed to start {program}: {e}")
            return CommandFailure(error_detail=str(e), command=command, target=target)

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            await self._kill(proc)
            self.logger.error(f"Command timed out after {timeout}s: {command}")
            return CommandFailure(
                status=ExecutionStatus.TIMEOUT,
                error_detail=f"Command timed out after {timeout:g}s",
                command=command,
                target=target,
            )
        except asyncio.CancelledError:
            await self._kill(proc)
            raise

        out = stdout.decode("utf-8", errors="replace")
        err = stderr.decode("utf-8", errors="replace")

        if err:
            self.logger.debug(f"Command stderr: {err}")

        if proc.returncode != 0:
            detail = err.strip() or f"exit status {proc.returncode}"
            self.logger.warning(f"Command failed with exit status {proc.returncode}: {command}")
            return CommandFailure(
                error_detail=detail,
                command=command,
                target=target,
                exit_code=proc.returncode,
            )

        self.logger.debug(f"Command completed: {command}")
        return CommandSuccess(output=out, command=command, target=target)

    async def _kill(self, proc) -> None:
        """Kill and reap a child that is still running."""
        if proc.returncode is not None:
            return
        try:
            proc.kill()
        except ProcessLookupError:
            return
        await proc.wait()
