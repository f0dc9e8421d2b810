# api/anamnesis/views/__init__.py
from .anamnesis_viewset import AnamnesisViewSet
from .audit_viewset import AnamnesisAuditLogViewSet
from .review_viewset import AnamnesisRevisionViewSet

__all__ = [
    'AnamnesisViewSet',
    'AnamnesisAuditLogViewSet',
    'AnamnesisRevisionViewSet',
]
