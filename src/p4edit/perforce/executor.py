"""Runs the p4 command-line client."""

import asyncio
import contextlib
import logging
import shlex
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from p4edit.core.constant import OUTPUT_LOGGER_NAME
from p4edit.core.types import CommandResult, FailureReason, ServiceConfig

if TYPE_CHECKING:
    from p4edit.workspace.registry import WorkspaceRegistry

logger = logging.getLogger(__name__)


class PerforceExecutor:
    """Launches p4 as a subprocess and captures its output.

    Commands are passed to the OS as an argument list, never through a shell.
    Every command line and its combined output is written to the
    `p4edit.output` logger.
    """

    def __init__(
        self,
        registry: "WorkspaceRegistry",
        config: ServiceConfig | None = None,
        output: logging.Logger | None = None,
    ) -> None:
        """Initialize executor.

        Args:
            registry: Workspace registry used to find working directories
                and client bindings.
            config: Service configuration.
            output: Diagnostic sink. Defaults to the `p4edit.output` logger.
        """
        self._config = config or ServiceConfig()
        self._registry = registry
        self._output = output or logging.getLogger(OUTPUT_LOGGER_NAME)

    @property
    def config(self) -> ServiceConfig:
        """Get service configuration."""
        return self._config

    @property
    def registry(self) -> "WorkspaceRegistry":
        """Get workspace registry."""
        return self._registry

    def build_command(
        self,
        command: str,
        args: Sequence[str] = (),
        global_args: Sequence[str] = (),
        client: str | None = None,
    ) -> list[str]:
        """Build a p4 command line.

        Args:
            command: p4 command name, e.g. "info".
            args: Positional arguments for the command.
            global_args: Extra global flags placed before the command.
            client: Client to scope the command to with `-c`.

        Returns:
            Command line as list.
        """
        cmd = [self._config.program, *self._config.global_args, *global_args]

        if client:
            cmd.extend(["-c", client])

        cmd.append(command)
        cmd.extend(args)
        return cmd

    async def run(
        self,
        cwd: str | Path,
        command: str,
        args: Sequence[str] = (),
        global_args: Sequence[str] = (),
        client: str | None = None,
    ) -> CommandResult:
        """Run a p4 command in a directory.

        A non-zero exit status is reported through the result, never raised.

        Args:
            cwd: Working directory for the process.
            command: p4 command name.
            args: Positional arguments for the command.
            global_args: Extra global flags.
            client: Optional client to scope the command to.

        Returns:
            CommandResult for the invocation.
        """
        argv = self.build_command(command, args, global_args, client)
        self._output.info(f"[{cwd}] {shlex.join(argv)}")

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                cwd=str(cwd),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            self._output.error(f"Failed to launch {argv[0]}: {e}")
            return CommandResult(
                failed=True,
                stdout="",
                stderr=str(e),
                args=argv,
                reason=FailureReason.LAUNCH,
            )

        timeout = self._config.command_timeout
        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                proc.communicate(), timeout=timeout
            )
        except asyncio.TimeoutError:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.communicate()
            self._output.error(f"{command} timed out after {timeout}s")
            return CommandResult(
                failed=True,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
                args=argv,
                reason=FailureReason.TIMEOUT,
            )

        exit_code = proc.returncode
        failed = exit_code != 0
        result = CommandResult(
            failed=failed,
            stdout=stdout_bytes.decode("utf-8", errors="replace"),
            stderr=stderr_bytes.decode("utf-8", errors="replace"),
            exit_code=exit_code,
            args=argv,
            reason=FailureReason.EXIT_CODE if failed else None,
        )

        if result.output.strip():
            self._output.info(result.output.rstrip())
        logger.debug(f"{command} exited with code {exit_code}")
        return result

    async def execute(
        self,
        path: str | Path,
        command: str,
        args: Sequence[str] = (),
        global_args: Sequence[str] = (),
        require_client: bool = False,
    ) -> CommandResult:
        """Run a p4 command in the workspace root that contains path.

        Args:
            path: File or directory inside a registered workspace root.
            command: p4 command name.
            args: Positional arguments for the command.
            global_args: Extra global flags.
            require_client: If True, scope the command to the root's bound
                client and fail fast when no binding exists yet.

        Returns:
            CommandResult. Fails without launching a process when no
            workspace root or (if required) no client binding is found.
        """
        root = self._registry.find_root(path)
        if root is None:
            logger.warning(f"No workspace folder for {path}")
            return CommandResult.failure(
                FailureReason.NO_WORKSPACE_FOLDER,
                f"Failed to find workspace folder for {path}",
            )

        client = None
        if require_client:
            client = self._registry.get_client(root)
            if client is None:
                logger.warning(f"No client binding for workspace {root}")
                return CommandResult.failure(
                    FailureReason.NO_CLIENT_BINDING,
                    f"Failed to find perforce workspace for {root}",
                )

        return await self.run(root, command, args, global_args, client)
