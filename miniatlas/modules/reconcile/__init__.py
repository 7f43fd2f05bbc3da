"""
Reconcile Module - Black Box Interface

Purpose: Make the control plane hold one resource document
Interface: ReconcileEngine.apply()
Hidden: Create-then-replace-on-conflict protocol, error classification

No retries happen here; a failed mutation is reported, not repeated.
"""

from .engine import ApplyResult, ReconcileEngine

__all__ = ["ApplyResult", "ReconcileEngine"]
