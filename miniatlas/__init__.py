"""
Mini-Atlas - Natural-language tools for Atlas custom resources

Exposes MCP tools that create and inspect Atlas resources (workspaces,
web applications, infrastructure stacks and messaging topics) on a
Kubernetes control plane.

Architecture:
- Each module is self-contained with clear interfaces
- The control-plane client is an explicit handle passed to each module
- No module keeps state between calls; the cluster is the source of truth

Modules:
- validation: Field validation rules for tool input
- resources: Resource kinds, document model and builder
- controlplane: Kubernetes API access
- reconcile: Create-or-replace of a single resource
- aggregator: List/get/delete across resource kinds
- bootstrap: Startup connectivity check with retry
- operations: Request models and the public operation contract
- tools: Tool catalogue and dispatch
- mcp: stdio transport
"""

__version__ = "0.1.0"
