# api/anamnesis/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from api.anamnesis.views import (
    AnamnesisAuditLogViewSet,
    AnamnesisRevisionViewSet,
    AnamnesisViewSet,
)

app_name = 'anamnesis'

PACIENTE = r'(?P<paciente_id>[0-9a-fA-F-]{36})/anamnesis'

router = DefaultRouter()
router.include_root_view = False
router.register(rf'{PACIENTE}/auditoria', AnamnesisAuditLogViewSet, basename='anamnesis-auditoria')
router.register(rf'{PACIENTE}/revisiones', AnamnesisRevisionViewSet, basename='anamnesis-revisiones')
router.register(PACIENTE, AnamnesisViewSet, basename='anamnesis')

urlpatterns = [
    path('', include(router.urls)),
]
