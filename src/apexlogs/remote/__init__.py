"""Remote API clients."""

from apexlogs.remote.tooling import ToolingClient, build_logs_query, build_query_url

__all__ = ["ToolingClient", "build_logs_query", "build_query_url"]
