"""Bounded execution of the Resource Hacker executable."""

from __future__ import annotations

import asyncio
import signal
import subprocess
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from loguru import logger

from .config import Settings

_READ_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class ExecutionOutcome:
    """Captured result of one editor run.

    Failed outcomes keep whatever output was captured before the failure.
    """

    succeeded: bool
    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    returncode: int | None = None
    timed_out: bool = False
    output_limit_exceeded: bool = False

    @property
    def signal(self) -> str | None:
        if self.returncode is None or self.returncode >= 0:
            return None
        try:
            return signal.Signals(-self.returncode).name
        except ValueError:
            return str(-self.returncode)

    @property
    def output(self) -> str:
        """Captured text, stdout preferred."""
        return self.stdout or self.stderr

    @property
    def diagnostics(self) -> str:
        """Both captured streams, stdout first, blank ones left out."""
        return "\n".join(text.strip() for text in (self.stdout, self.stderr) if text.strip())


class _CaptureBudget:
    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.used = 0
        self.exceeded = False

    def take(self, size: int) -> int:
        """Reserve up to ``size`` bytes and return how many fit."""
        allowed = max(0, min(size, self.limit - self.used))
        self.used += allowed
        if allowed < size:
            self.exceeded = True
        return allowed


def _creation_flags() -> dict[str, Any]:
    if sys.platform == "win32":
        return {"creationflags": subprocess.CREATE_NO_WINDOW}
    return {}


def _decode(data: bytes | bytearray) -> str:
    return bytes(data).decode("utf-8", errors="replace")


def _kill(process: asyncio.subprocess.Process) -> None:
    if process.returncode is not None:
        return
    try:
        process.kill()
    except ProcessLookupError:
        pass


async def _drain(
    stream: asyncio.StreamReader | None,
    sink: bytearray,
    budget: _CaptureBudget,
    process: asyncio.subprocess.Process,
) -> None:
    if stream is None:
        return
    while chunk := await stream.read(_READ_CHUNK_SIZE):
        if budget.exceeded:
            continue
        allowed = budget.take(len(chunk))
        sink.extend(chunk[:allowed])
        if budget.exceeded:
            _kill(process)


class ProcessRunner:
    """Run the configured editor executable with a timeout and an output cap."""

    def __init__(self, settings: Settings) -> None:
        self.executable = settings.executable
        self.default_timeout = settings.timeout_seconds
        self.max_output_bytes = settings.max_output_bytes

    async def execute(self, args: Sequence[str], *, timeout_seconds: float | None = None) -> ExecutionOutcome:
        timeout = timeout_seconds if timeout_seconds is not None else self.default_timeout
        command = [self.executable, *args]
        logger.debug("process.spawn cmd={}", command)

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                **_creation_flags(),
            )
        except OSError as exc:
            logger.warning("process.spawn.error executable={} error={}", self.executable, exc)
            return ExecutionOutcome(succeeded=False, error=f"failed to start {self.executable}: {exc}")

        stdout, stderr = bytearray(), bytearray()
        budget = _CaptureBudget(self.max_output_bytes)
        start = time.monotonic()
        try:
            async with asyncio.timeout(timeout):
                await asyncio.gather(
                    _drain(process.stdout, stdout, budget, process),
                    _drain(process.stderr, stderr, budget, process),
                )
                returncode = await process.wait()
        except TimeoutError:
            _kill(process)
            await process.wait()
            logger.warning("process.timeout cmd={} timeout={}s", command, timeout)
            return ExecutionOutcome(
                succeeded=False,
                stdout=_decode(stdout),
                stderr=_decode(stderr),
                error=f"Command timed out after {timeout:g}s: {' '.join(command)}",
                returncode=process.returncode,
                timed_out=True,
            )

        elapsed_ms = (time.monotonic() - start) * 1000
        logger.debug("process.exit code={} duration={:.3f}ms", returncode, elapsed_ms)
        outcome_text = {"stdout": _decode(stdout), "stderr": _decode(stderr)}

        if budget.exceeded:
            logger.warning("process.output_limit cmd={} limit={}", command, self.max_output_bytes)
            return ExecutionOutcome(
                succeeded=False,
                error=f"stdout/stderr maxBuffer length exceeded ({self.max_output_bytes} bytes)",
                returncode=returncode,
                output_limit_exceeded=True,
                **outcome_text,
            )
        if returncode != 0:
            message = f"Command failed with exit code {returncode}: {' '.join(command)}"
            return ExecutionOutcome(succeeded=False, error=message, returncode=returncode, **outcome_text)
        return ExecutionOutcome(succeeded=True, returncode=returncode, **outcome_text)
