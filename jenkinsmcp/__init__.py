"""Jenkins tooling: MCP protocol types, tool registry, server and prompts, PKCE, output and notifications."""

__version__ = "0.1.0"

__all__ = [
    "notification",
    "output",
    "pkce",
    "prompts",
    "protocol",
    "registry",
    "server",
]