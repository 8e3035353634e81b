"""
MCP protocol constants and configuration values.

Server identity, defaults of the HTTP surface, header names and the log
notification levels live here so the app, the dispatcher and the tests
agree on them.
"""

from enum import Enum
from typing import Final


# Server information
SERVER_NAME: Final[str] = "awsdac-mcp-server-streamable"
SERVER_VERSION: Final[str] = "0.0.1"

SERVER_INSTRUCTIONS: Final[str] = """AWS Diagram-as-Code MCP Server (Streamable HTTP)

PURPOSE:
Generate professional AWS architecture diagrams from YAML-based specifications via HTTP transport.

ESSENTIAL WORKFLOW:
1. Call 'getDiagramAsCodeFormat' first to understand the format and get examples
2. Use the format guide to create proper YAML content
3. Call 'generateDiagram' or 'generateDiagramToFile' with the complete YAML specification
4. Receive a base64-encoded PNG diagram

CAPABILITIES:
- Generate PNG diagrams with AWS resource icons and relationships
- Support hierarchical layouts with Canvas -> Cloud -> Region -> VPC -> Subnets -> Resources
- Create network connections with Links (straight or orthogonal lines)
- Handle complex layouts using VerticalStack and HorizontalStack groupings

OUTPUT: Base64-encoded PNG images suitable for embedding in responses"""

# Default HTTP surface
DEFAULT_MCP_PORT: Final[int] = 8080
DEFAULT_MCP_HOST: Final[str] = "0.0.0.0"
DEFAULT_MCP_ENDPOINT: Final[str] = "/mcp"

# Logger name carried by notifications/message
NOTIFICATION_LOGGER: Final[str] = "awsdac-mcp"


class MCPHeaders(str, Enum):
    """Standard MCP headers."""
    SESSION_ID = "Mcp-Session-Id"
    PROTOCOL_VERSION = "Mcp-Protocol-Version"
    CONTENT_TYPE = "Content-Type"
    ACCEPT = "Accept"


class LogLevel(str, Enum):
    """Syslog-style levels used by MCP log notifications."""
    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    ALERT = "alert"
    EMERGENCY = "emergency"

    @property
    def severity(self) -> int:
        return _LOG_LEVEL_ORDER.index(self)


_LOG_LEVEL_ORDER = list(LogLevel)
