"""EKS MCP Server: Amazon EKS cluster management over the Model Context Protocol."""

__version__ = "1.0.0"
