"""
Service Layer - UnusedFileAuditor and its result model.
"""

from useless.services.audit_models import AuditResult
from useless.services.audit_service import UnusedFileAuditor

__all__ = [
    "AuditResult",
    "UnusedFileAuditor",
]
