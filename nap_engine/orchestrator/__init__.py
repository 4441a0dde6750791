"""Workflow orchestration for validating, analyzing, and aggregating citations."""

from .service import AuditOrchestrator

__all__ = ["AuditOrchestrator"]
