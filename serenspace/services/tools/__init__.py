from serenspace.services.tools.tool_service import ToolService

__all__ = ["ToolService"]
