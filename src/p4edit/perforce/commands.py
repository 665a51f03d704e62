"""Typed wrappers around the p4 commands p4edit uses."""

from pathlib import Path

from p4edit.core.constant import CLIENTS_FORMAT
from p4edit.core.errors import ParseIncompleteError
from p4edit.core.types import ClientRow, CommandResult, ServerInfo
from p4edit.perforce.executor import PerforceExecutor
from p4edit.perforce.parsers import parse_clients, parse_info


class PerforceCommands:
    """High-level p4 commands on top of PerforceExecutor."""

    def __init__(self, executor: PerforceExecutor) -> None:
        """Initialize command wrappers.

        Args:
            executor: Executor used to run p4.
        """
        self._executor = executor

    @property
    def executor(self) -> PerforceExecutor:
        """Get executor."""
        return self._executor

    async def info(self, path: str | Path) -> ServerInfo:
        """Run `p4 info` in the workspace containing path.

        Args:
            path: Directory inside a registered workspace root.

        Returns:
            Parsed server information.

        Raises:
            P4EditError: If the command fails.
            ParseIncompleteError: If the output had no recognizable fields.
        """
        result = await self._executor.execute(path, "info")
        result.raise_for_failure()

        info = parse_info(result.stdout)
        if info.is_empty:
            raise ParseIncompleteError("p4 info returned no recognizable fields")
        return info

    async def clients(self, path: str | Path, user: str) -> list[ClientRow]:
        """List the clients owned by user.

        Args:
            path: Directory inside a registered workspace root.
            user: Perforce user name.

        Returns:
            Client rows in the order p4 printed them.

        Raises:
            P4EditError: If the command fails.
        """
        result = await self._executor.execute(
            path, "clients", ["-u", user, "-ztag", "-F", CLIENTS_FORMAT]
        )
        result.raise_for_failure()
        return parse_clients(result.stdout)

    async def edit(
        self,
        file_path: str | Path,
        client: str | None = None,
        root: str | Path | None = None,
    ) -> CommandResult:
        """Open a file for edit under a client.

        Args:
            file_path: Absolute path of the file.
            client: Client to open the file under. When None, the binding of
                the registered root containing file_path is used, and the
                command fails fast if that root is not bound yet.
            root: Working directory for an explicit client. Defaults to the
                file's directory.

        Returns:
            CommandResult of `p4 -c <client> edit <file>`.
        """
        if client is None:
            return await self._executor.execute(
                file_path, "edit", [str(file_path)], require_client=True
            )

        cwd = root if root is not None else Path(file_path).parent
        return await self._executor.run(cwd, "edit", [str(file_path)], client=client)
