import asyncio
import signal
import sys
import time
from copy import deepcopy
from dataclasses import dataclass
from os import environ
from os.path import abspath, join
from typing import Callable, Optional, Sequence

import psutil

from setupkit.log import get_logger

log = get_logger(__name__)

NONBLOCK_READ_TIMEOUT = 0.01
BUSY_WAIT_INTERVAL = 0.1
MAX_COMMAND_TIMEOUT = 600
STDERR_TAIL_LINES = 20


class CommandError(Exception):
    """A package manager command failed or timed out."""

    def __init__(self, args: Sequence[str], status_code: Optional[int], stdout: str = "", stderr: str = ""):
        self.cmd = list(args)
        self.status_code = status_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(self._describe())

    def _describe(self) -> str:
        cmd = " ".join(self.cmd)
        if self.status_code is None:
            message = f"Command `{cmd}` timed out and was terminated"
        else:
            message = f"Command `{cmd}` failed with exit status {self.status_code}"

        output = (self.stderr or self.stdout).strip()
        if output:
            tail = "\n".join(output.splitlines()[-STDERR_TAIL_LINES:])
            message += f":\n{tail}"
        return message


@dataclass
class LocalProcess:
    args: list[str]
    cwd: str
    stdout: str
    stderr: str
    _process: asyncio.subprocess.Process

    @property
    def cmd(self) -> str:
        return " ".join(self.args)

    @staticmethod
    async def start(
        args: Sequence[str],
        *,
        cwd: str = ".",
        env: dict[str, str],
    ) -> "LocalProcess":
        log.debug(f"Starting process: {' '.join(args)} (cwd={cwd})")
        _process = await asyncio.create_subprocess_exec(
            *args,
            cwd=cwd,
            env=env,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

        return LocalProcess(
            args=list(args),
            cwd=cwd,
            stdout="",
            stderr="",
            _process=_process,
        )

    async def wait(self, timeout: Optional[float] = None) -> int:
        try:
            future = self._process.wait()
            if timeout:
                future = asyncio.wait_for(future, timeout)
            retcode = await future
        except asyncio.TimeoutError:
            log.debug(f"Process {self.cmd} still running after {timeout}s, terminating")
            await self.terminate()
            retcode = await self._process.wait()

        return retcode

    @staticmethod
    async def _nonblock_read(reader: asyncio.StreamReader, timeout: float) -> str:
        """
        Reads data from a stream reader without blocking (for long).

        This wraps the read in a (short) timeout to avoid blocking the event loop for too long.

        :param reader: Async stream reader to read from.
        :param timeout: Timeout for the read operation (should not be too long).
        :return: Data read from the stream reader, or empty string.
        """
        buffer = ""
        while True:
            try:
                data = await asyncio.wait_for(reader.read(1024), timeout)
                if not data:
                    return buffer
                buffer += data.decode("utf-8", errors="ignore")
            except asyncio.TimeoutError:
                return buffer

    async def read_output(self, timeout: float = NONBLOCK_READ_TIMEOUT) -> tuple[str, str]:
        new_stdout = await self._nonblock_read(self._process.stdout, timeout)
        new_stderr = await self._nonblock_read(self._process.stderr, timeout)
        self.stdout += new_stdout
        self.stderr += new_stderr
        return (new_stdout, new_stderr)

    async def _terminate_process_tree(self, signal: int):
        # Children first, then the package manager itself
        try:
            root_process = psutil.Process(self._process.pid)
        except psutil.NoSuchProcess:
            return

        processes = root_process.children(recursive=True)
        processes.append(root_process)
        for proc in processes:
            try:
                proc.send_signal(signal)
            except psutil.NoSuchProcess:
                pass

        psutil.wait_procs(processes, timeout=1)

    async def terminate(self, kill: bool = True):
        if kill and sys.platform != "win32":
            await self._terminate_process_tree(signal.SIGKILL)
        else:
            # Windows doesn't have SIGKILL
            await self._terminate_process_tree(signal.SIGTERM)

    @property
    def is_running(self) -> bool:
        if self._process.returncode is not None:
            return False
        try:
            return psutil.Process(self._process.pid).status() != psutil.STATUS_ZOMBIE
        except psutil.NoSuchProcess:
            return False

    @property
    def pid(self) -> int:
        return self._process.pid


class ProcessManager:
    def __init__(
        self,
        *,
        root_dir: str,
        env: Optional[dict[str, str]] = None,
        output_handler: Optional[Callable] = None,
        timeout: float = MAX_COMMAND_TIMEOUT,
    ):
        if env is None:
            env = deepcopy(dict(environ))
        self.default_env = env
        self.root_dir = root_dir
        self.output_handler = output_handler
        self.timeout = timeout

    async def start_process(
        self,
        args: Sequence[str],
        *,
        cwd: str = ".",
        env: Optional[dict[str, str]] = None,
    ) -> LocalProcess:
        env = {**self.default_env, **(env or {})}
        abs_cwd = abspath(join(self.root_dir, cwd))
        return await LocalProcess.start(args, cwd=abs_cwd, env=env)

    async def run_command(
        self,
        args: Sequence[str],
        *,
        cwd: str = ".",
        env: Optional[dict[str, str]] = None,
        timeout: Optional[float] = None,
        show_output: Optional[bool] = True,
    ) -> tuple[Optional[int], str, str]:
        """
        Run command and wait for it to finish.

        Status code is an integer representing the process exit code, or
        None if the process timed out and was terminated.

        :param args: Program and its arguments.
        :param cwd: Working directory, relative to the manager's root directory.
        :param env: Environment variables.
        :param timeout: Timeout in seconds (capped at the manager's timeout).
        :param show_output: Pass output to the output handler as it arrives.
        :return: Tuple of (status code, stdout, stderr).
        """
        timeout = min(timeout or self.timeout, self.timeout)
        terminated = False
        process = await self.start_process(args, cwd=cwd, env=env)

        t0 = time.time()
        while process.is_running and (time.time() - t0) < timeout:
            out, err = await process.read_output(BUSY_WAIT_INTERVAL)
            if self.output_handler and (out or err) and show_output:
                await self.output_handler(out, err)

        if process.is_running:
            log.debug(f"Process {process.cmd} still running after {timeout}s, terminating")
            await process.terminate()
            terminated = True
        await process.wait()

        out, err = await process.read_output()
        if self.output_handler and (out or err) and show_output:
            await self.output_handler(out, err)

        if terminated:
            status_code = None
        else:
            status_code = process._process.returncode or 0

        return (status_code, process.stdout, process.stderr)

