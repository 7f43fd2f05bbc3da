"""
Bootstrap Module - Black Box Interface

Purpose: Refuse to start until the control plane is reachable
Interface: ConnectivityBootstrap.ensure_connected(), retry()
Hidden: Backoff schedule

Failure here is fatal: BootstrapError is raised and the process exits.
"""

from .bootstrap import ConnectivityBootstrap, retry

__all__ = ["ConnectivityBootstrap", "retry"]
