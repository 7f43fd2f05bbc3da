"""
Mini-Atlas Modules - Black Box Architecture

Each module is a self-contained black box with:
- Clear interface (public API)
- Hidden implementation details
- Single responsibility

Modules communicate only through well-defined interfaces. The control-plane
client is handed to the modules that need it; none of them reach for
process-wide state.
"""
