"""MCP package - JSON-RPC 2.0 tool and resource surface for geolocation.

Transports:
    - HTTP: ``packages.mcp.routes`` (mounted under ``/mcp`` by ``api.router``)
    - Line-based stdio: ``python -m packages.mcp.stdio``

Both transports share ``McpDispatcher`` so method behavior is identical.
"""
