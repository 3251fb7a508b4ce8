"""Tests for the subprocess runner."""

import asyncio
import sys
from unittest.mock import patch

import pytest

from wifiwatch.probes.base import CommandResult, run_command


@pytest.mark.asyncio
async def test_captures_stdout():
    result = await run_command([sys.executable, "-c", "print('hello')"], timeout=10)
    assert result is not None
    assert result.ok
    assert result.stdout.strip() == "hello"


@pytest.mark.asyncio
async def test_nonzero_exit_keeps_output():
    result = await run_command(
        [sys.executable, "-c", "import sys; print('100% packet loss'); sys.exit(2)"], timeout=10
    )
    assert result is not None
    assert result.returncode == 2
    assert not result.ok
    assert "packet loss" in result.stdout


@pytest.mark.asyncio
async def test_missing_binary_is_none():
    assert await run_command(["/nonexistent/wifiwatch-probe"], timeout=5) is None


@pytest.mark.asyncio
async def test_timeout_is_none():
    result = await run_command([sys.executable, "-c", "import time; time.sleep(5)"], timeout=0.2)
    assert result is None


@pytest.mark.asyncio
async def test_empty_argv():
    assert await run_command([], timeout=1) is None


def test_ok_property():
    assert CommandResult(returncode=0, stdout="").ok
    assert not CommandResult(returncode=1, stdout="").ok


@pytest.mark.asyncio
async def test_cancel_kills_child():
    spawned = []
    real_exec = asyncio.create_subprocess_exec

    async def tracking_exec(*args, **kwargs):
        process = await real_exec(*args, **kwargs)
        spawned.append(process)
        return process

    with patch("wifiwatch.probes.base.asyncio.create_subprocess_exec", side_effect=tracking_exec):
        task = asyncio.create_task(
            run_command([sys.executable, "-c", "import time; time.sleep(30)"], timeout=60)
        )
        for _ in range(100):
            if spawned:
                break
            await asyncio.sleep(0.05)
        assert spawned
        await asyncio.sleep(0.1)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    assert spawned[0].returncode is not None
