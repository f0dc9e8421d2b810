# api/anamnesis/models/__init__.py
from .anamnesis_clinica import AnamnesisClinica
from .auditoria import AnamnesisAuditLog
from .revision_pendiente import AnamnesisRevisionPendiente

__all__ = [
    'AnamnesisClinica',
    'AnamnesisAuditLog',
    'AnamnesisRevisionPendiente',
]
