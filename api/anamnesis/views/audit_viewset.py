# api/anamnesis/views/audit_viewset.py
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from api.anamnesis.models import AnamnesisAuditLog
from api.anamnesis.repositories.anamnesis_repository import AuditLogRepository
from api.anamnesis.serializers import (
    AnamnesisAuditLogDetailSerializer,
    AnamnesisAuditLogSerializer,
)

from .base import AnamnesisPagination, BasePermissionMixin, PacienteAnamnesisMixin


class AnamnesisAuditLogViewSet(
    BasePermissionMixin,
    PacienteAnamnesisMixin,
    viewsets.ReadOnlyModelViewSet,
):
    """
    Historial de ediciones de la anamnesis de un paciente.

    Filtros: accion, es_fuera_consulta, requiere_revision
    """

    queryset = AnamnesisAuditLog.objects.all()
    permission_model_name = 'anamnesisauditlog'
    pagination_class = AnamnesisPagination
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['accion', 'es_fuera_consulta', 'requiere_revision', 'verificado_con_paciente']
    lookup_value_regex = '[0-9a-fA-F-]+'

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return AnamnesisAuditLogDetailSerializer
        return AnamnesisAuditLogSerializer

    def get_queryset(self):
        return AuditLogRepository.get_by_paciente(self.get_paciente().id)

    def retrieve(self, request, *args, **kwargs):
        paciente = self.get_paciente()
        auditoria = AuditLogRepository.get_by_id(paciente.id, kwargs.get('pk'))
        if auditoria is None:
            raise NotFound('Registro de auditoría no encontrado')
        return Response(self.get_serializer(auditoria).data)
