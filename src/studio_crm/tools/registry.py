"""Name-keyed dispatch table for agent tools."""

import logging
from collections.abc import Iterable, Mapping

from studio_crm.errors import NotFoundError, ToolConfigurationError
from studio_crm.tools.contract import Tool, ToolResult, failure

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Static lookup of tools by name, built once at startup."""

    def __init__(self, tools: Iterable[Tool] = ()) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        """Add a tool, refusing duplicate names."""
        if tool.name in self._tools:
            raise ToolConfigurationError(f"Tool registered twice: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        """Return a tool by name, if registered."""
        return self._tools.get(name)

    def names(self) -> list[str]:
        """Return registered tool names in registration order."""
        return list(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def openai_tools(self) -> list[dict[str, object]]:
        """Return every tool as an OpenAI function-tool definition."""
        return [tool.definition() for tool in self._tools.values()]

    async def dispatch(
        self, name: str, parameters: Mapping[str, object] | None
    ) -> ToolResult:
        """Run a tool by name and return its result envelope."""
        tool = self.get(name)
        if tool is None:
            logger.warning("Unknown tool requested: %s", name)
            return failure(NotFoundError(f"Unknown tool: {name}"))
        return await tool.invoke(parameters)
