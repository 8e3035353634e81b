"""AWS Diagram-as-Code MCP server over streamable HTTP."""

__version__ = "0.0.1"
