# api/anamnesis/views/anamnesis_viewset.py
"""
Consulta y edición fuera de consulta de la anamnesis de un paciente
"""
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from api.anamnesis.repositories.anamnesis_repository import AnamnesisRepository
from api.anamnesis.serializers import OutsideConsultationEditSerializer
from api.anamnesis.services.outside_consultation_service import OutsideConsultationService
from api.anamnesis.services.snapshot_service import snapshot_desde_modelo
from api.anamnesis.services.status_service import AnamnesisStatusService

from .base import (
    BasePermissionMixin,
    PacienteAnamnesisMixin,
    RequestMetadataMixin,
    logger,
)


class AnamnesisViewSet(
    BasePermissionMixin,
    PacienteAnamnesisMixin,
    RequestMetadataMixin,
    viewsets.ViewSet,
):
    """
    Endpoints:
        - GET  /api/patients/{paciente_id}/anamnesis/                - Anamnesis y estado
        - POST /api/patients/{paciente_id}/anamnesis/cambios/        - Previsualizar cambios
        - POST /api/patients/{paciente_id}/anamnesis/fuera-consulta/ - Guardar edición
    """

    permission_model_name = 'anamnesis'

    def list(self, request, paciente_id=None):
        paciente = self.get_paciente()
        anamnesis = AnamnesisRepository.get_by_paciente(paciente.id)
        return Response({
            'paciente': {
                'id': str(paciente.id),
                'nombreCompleto': paciente.nombre_completo,
                'sexo': paciente.sexo,
            },
            'anamnesis': snapshot_desde_modelo(anamnesis),
            'estado': AnamnesisStatusService.obtener_info_estado(anamnesis),
        })

    @action(detail=False, methods=['post'], url_path='cambios')
    def cambios(self, request, paciente_id=None):
        """Calcula cambios, resumen y validación sin guardar"""
        paciente = self.get_paciente()
        serializer = OutsideConsultationEditSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        contexto = serializer.to_contexto() if 'editContext' in serializer.validated_data else None
        resultado = OutsideConsultationService.previsualizar_cambios(
            paciente,
            serializer.validated_data['updatedRecord'],
            contexto,
        )
        return Response(resultado)

    @action(detail=False, methods=['post'], url_path='fuera-consulta')
    def fuera_consulta(self, request, paciente_id=None):
        paciente = self.get_paciente()
        serializer = OutsideConsultationEditSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        resultado = OutsideConsultationService.guardar_edicion(
            paciente=paciente,
            registro_enviado=serializer.validated_data['updatedRecord'],
            contexto=serializer.to_contexto(),
            usuario=request.user,
            metadatos=self.get_metadatos_solicitud(),
        )

        anamnesis = resultado['anamnesis']
        resumen = resultado['resumen']
        validacion = resultado['validacion']
        auditoria = resultado['auditoria']

        if resultado['anamnesis_guardada']:
            logger.info(
                f"Edición fuera de consulta de paciente {paciente.id} registrada por "
                f"{request.user.username} ({resumen.conteo.total} cambios)"
            )

        return Response(
            {
                'message': resultado['mensaje'],
                'saved': resultado['anamnesis_guardada'],
                'anamnesis': snapshot_desde_modelo(anamnesis),
                'estado': AnamnesisStatusService.obtener_info_estado(anamnesis),
                'auditLogId': str(auditoria.id) if auditoria else None,
                'changes': OutsideConsultationService.serializar_cambios(resultado['cambios']),
                'severityCounts': resumen.conteo.to_dict(),
                'auditSummary': auditoria.resumen if auditoria else None,
                'warnings': validacion.advertencias if validacion else [],
                'pendingReviews': len(resultado['revisiones']),
            },
            status=status.HTTP_201_CREATED if resultado['anamnesis_guardada'] else status.HTTP_200_OK,
        )
