# api/anamnesis/views/review_viewset.py
"""
Revisión de cambios críticos registrados sin verificación del paciente
"""
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from api.anamnesis.models import AnamnesisRevisionPendiente
from api.anamnesis.serializers import (
    AnamnesisRevisionSerializer,
    BatchReviewSerializer,
    ReviewDecisionSerializer,
)
from api.anamnesis.services.review_service import ReviewService
from api.anamnesis.services.status_service import AnamnesisStatusService
from api.anamnesis.repositories.anamnesis_repository import AnamnesisRepository

from .base import BasePermissionMixin, PacienteAnamnesisMixin, logger


class AnamnesisRevisionViewSet(
    BasePermissionMixin,
    PacienteAnamnesisMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    """
    Endpoints:
        - GET  /api/patients/{paciente_id}/anamnesis/revisiones/               - Pendientes
        - POST /api/patients/{paciente_id}/anamnesis/revisiones/{id}/revisar/  - Aprobar/rechazar
        - POST /api/patients/{paciente_id}/anamnesis/revisiones/revisar-lote/  - En lote
    """

    queryset = AnamnesisRevisionPendiente.objects.all()
    serializer_class = AnamnesisRevisionSerializer
    permission_model_name = 'revision_anamnesis'
    pagination_class = None
    lookup_value_regex = '[0-9a-fA-F-]+'

    def get_queryset(self):
        return ReviewService.listar_pendientes(self.get_paciente().id)

    def _estado_actual(self, paciente):
        anamnesis = AnamnesisRepository.get_by_paciente(paciente.id)
        return AnamnesisStatusService.obtener_info_estado(anamnesis)

    @action(detail=True, methods=['post'], url_path='revisar')
    def revisar(self, request, paciente_id=None, pk=None):
        paciente = self.get_paciente()
        serializer = ReviewDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        revision = ReviewService.revisar(
            pk,
            request.user,
            serializer.validated_data['aprobado'],
            serializer.validated_data['notas'],
            paciente_id=paciente.id,
        )
        return Response({
            'message': 'Revisión aprobada' if revision.aprobado else 'Revisión rechazada',
            'revision': AnamnesisRevisionSerializer(revision).data,
            'estado': self._estado_actual(paciente),
        })

    @action(detail=False, methods=['post'], url_path='revisar-lote')
    def revisar_lote(self, request, paciente_id=None):
        paciente = self.get_paciente()
        serializer = BatchReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        datos = serializer.validated_data

        revisiones = ReviewService.revisar_lote(
            datos['revisiones'],
            request.user,
            datos['aprobado'],
            datos['notas'],
            paciente_id=paciente.id,
        )
        logger.info(f"Revisión en lote de {len(revisiones)} cambios del paciente {paciente.id}")
        return Response({
            'message': f"{len(revisiones)} revisiones procesadas",
            'revisiones': AnamnesisRevisionSerializer(revisiones, many=True).data,
            'estado': self._estado_actual(paciente),
        })
