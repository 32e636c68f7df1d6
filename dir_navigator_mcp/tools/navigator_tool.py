import asyncio
import logging
from typing import Any, Callable

from typing_extensions import override

from pydantic import BaseModel

from dir_navigator_mcp.core.controller import NavigationController
from dir_navigator_mcp.core.errors import IOErrorKind, NavigatorError, NavigatorIOError
from dir_navigator_mcp.models.tree import DirectoryNode

from .base import Tool, ToolCallArguments, ToolError, ToolExecResult, ToolParameter
from .utils.formatting_utils import format_directory_node, format_outcome

logger = logging.getLogger(__name__)

NavigatorCommands = [
    "ls",
    "open",
    "back",
    "up",
    "refresh",
    "pwd",
    "history",
    "create_file",
    "create_directory",
    "delete",
    "delete_file",
    "delete_directory",
]

# Commands that cannot run without a target.
_TARGET_REQUIRED = {"open", "create_file", "create_directory", "delete", "delete_file", "delete_directory"}


class NavigatorTool(Tool):
    """
    Tool for browsing and changing a directory tree inside one session.

    Navigation commands (`open`, `back`, `up`, `refresh`) move the session and
    return the new snapshot. Mutation commands (`create_*`, `delete*`) apply
    the change and then refresh the snapshot of the current directory.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout

    @override
    def get_name(self) -> str:
        return "navigator"

    @override
    def get_description(self) -> str:
        return """Browse and modify a directory tree, one level at a time.
* `ls`: list the current directory, or `target` relative to it.
* `open`: enter the child directory `target`, or report that the file `target` should be viewed.
* `back`: return to the previously visited directory. `up`: go to the parent directory.
* `refresh`: re-read the current directory. `pwd`: show it. `history`: show the back stack.
* `create_file` / `create_directory`: create `target` (a plain name) in the current directory.
* `delete`: delete `target`, recursively if it is a directory. `delete_file` / `delete_directory` only accept that kind.
Recursive deletes stop at the first entry that cannot be removed and report how many entries were removed."""

    @override
    def get_parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="command",
                type="string",
                description=f"The command to run. Allowed options are: {', '.join(NavigatorCommands)}.",
                required=True,
                enum=NavigatorCommands,
            ),
            ToolParameter(
                name="target",
                type="string",
                description="Entry name or path relative to the current directory.",
                required=False,
            ),
        ]

    @override
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        session = arguments.get("_session")
        if not isinstance(session, NavigationController):
            return ToolExecResult(
                error="Navigation session not found in arguments. This is an internal server error.",
                error_code=-1,
            )

        command = arguments.get("command")
        if not isinstance(command, str):
            return ToolExecResult(error="Command must be a string.", error_code=-1)

        try:
            handler = self._handler_for(command)
            target = arguments.get("target")
            if command in _TARGET_REQUIRED and (not isinstance(target, str) or not target):
                raise ToolError(f"A non-empty 'target' is required for '{command}'.")
            if target is not None and not isinstance(target, str):
                raise ToolError("Target must be a string.")
            return await self._run(handler, session, target)
        except NavigatorError as e:
            logger.info(f"navigator {command} failed: {e}")
            return ToolExecResult(error=str(e), error_code=-1, data=e.to_dict())
        except ToolError as e:
            return ToolExecResult(error=e.message, error_code=-1)

    def _handler_for(self, command: str) -> Callable[[NavigationController, str | None], ToolExecResult]:
        match command:
            case "ls":
                return self._ls_handler
            case "open":
                return lambda s, t: self._outcome(s, s.open(t))
            case "back":
                return lambda s, t: self._outcome(s, s.back())
            case "up":
                return lambda s, t: self._outcome(s, s.up())
            case "refresh":
                return lambda s, t: self._snapshot_result(s, s.refresh())
            case "pwd":
                return lambda s, t: ToolExecResult(output=str(s.pwd()), data={"current": str(s.pwd())})
            case "history":
                return self._history_handler
            case "create_file":
                return lambda s, t: self._outcome(s, s.create_file(t))
            case "create_directory":
                return lambda s, t: self._outcome(s, s.create_directory(t))
            case "delete":
                return lambda s, t: self._outcome(s, s.delete(t))
            case "delete_file":
                return lambda s, t: self._outcome(s, s.delete_file(t))
            case "delete_directory":
                return lambda s, t: self._outcome(s, s.delete_directory(t))
            case _:
                raise ToolError(f"Unknown command: {command}")

    async def _run(
        self,
        handler: Callable[[NavigationController, str | None], ToolExecResult],
        session: NavigationController,
        target: str | None,
    ) -> ToolExecResult:
        # The session lock is held inside the worker thread, so a timed out
        # call still finishes before the next one starts.
        call = asyncio.to_thread(handler, session, target)
        if self._timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise NavigatorIOError(
                IOErrorKind.TIMEOUT,
                f"Timeout: the filesystem did not answer within {self._timeout} seconds.",
            ) from e

    def _ls_handler(self, session: NavigationController, target: str | None) -> ToolExecResult:
        return self._snapshot_result(session, session.list_directory(target))

    def _history_handler(self, session: NavigationController, target: str | None) -> ToolExecResult:
        entries = [str(path) for path in session.history()]
        output = "\n".join(reversed(entries)) if entries else "History is empty."
        return ToolExecResult(output=output, data={"history": entries})

    def _snapshot_result(self, session: NavigationController, node: DirectoryNode) -> ToolExecResult:
        return ToolExecResult(
            output=format_directory_node(node, session.root),
            data={"snapshot": node.model_dump(mode="json")},
        )

    def _outcome(self, session: NavigationController, outcome: BaseModel) -> ToolExecResult:
        snapshot = session.snapshot()
        data: dict[str, Any] = outcome.model_dump(mode="json")
        data["snapshot"] = snapshot.model_dump(mode="json")
        return ToolExecResult(
            output=f"{format_outcome(outcome)}\n{format_directory_node(snapshot, session.root)}",
            data=data,
        )
