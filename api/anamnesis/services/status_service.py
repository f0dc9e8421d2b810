# api/anamnesis/services/status_service.py
"""
Servicio para calcular el estado de la anamnesis
"""
import logging
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from api.anamnesis.constants import (
    ESTADO_SIN_ANAMNESIS,
    ESTADO_PENDIENTE_REVISION,
    ESTADO_VENCIDA,
    ESTADO_VIGENTE,
)
from ..repositories.anamnesis_repository import RevisionRepository

logger = logging.getLogger(__name__)


class AnamnesisStatusService:

    @staticmethod
    def _vigencia():
        return timedelta(days=getattr(settings, 'ANAMNESIS_VIGENCIA_DIAS', 365))

    @classmethod
    def calcular_estado(cls, anamnesis, ahora=None):
        """
        Estado según revisiones pendientes y antigüedad.

        Returns:
            NO_ANAMNESIS, PENDING_REVIEW, EXPIRED o VALID
        """
        if anamnesis is None:
            return ESTADO_SIN_ANAMNESIS

        if RevisionRepository.contar_pendientes(anamnesis.id) > 0:
            return ESTADO_PENDIENTE_REVISION

        ahora = ahora or timezone.now()
        if anamnesis.fecha_modificacion and ahora - anamnesis.fecha_modificacion > cls._vigencia():
            return ESTADO_VENCIDA

        return ESTADO_VIGENTE

    @classmethod
    def actualizar_estado(cls, anamnesis):
        """Recalcula y guarda el estado y las marcas de revisión pendiente"""
        estado = cls.calcular_estado(anamnesis)
        pendientes = estado == ESTADO_PENDIENTE_REVISION

        anamnesis.estado = estado
        anamnesis.tiene_revisiones_pendientes = pendientes
        if not pendientes:
            anamnesis.revision_pendiente_desde = None
            anamnesis.motivo_revision_pendiente = ''
        elif anamnesis.revision_pendiente_desde is None:
            anamnesis.revision_pendiente_desde = timezone.now()

        anamnesis.save()
        logger.info(f"Estado de anamnesis {anamnesis.id} actualizado a {estado}")
        return estado

    @classmethod
    def obtener_info_estado(cls, anamnesis):
        if anamnesis is None:
            return {
                'status': ESTADO_SIN_ANAMNESIS,
                'lastVerifiedAt': None,
                'lastVerifiedBy': None,
                'hasPendingReviews': False,
                'pendingReviewSince': None,
                'pendingReviewReason': None,
            }

        estado = cls.calcular_estado(anamnesis)
        verificador = anamnesis.verificado_por
        return {
            'status': estado,
            'lastVerifiedAt': anamnesis.ultima_verificacion.isoformat() if anamnesis.ultima_verificacion else None,
            'lastVerifiedBy': {
                'id': str(verificador.id),
                'nombreApellido': verificador.get_full_name(),
            } if verificador else None,
            'hasPendingReviews': estado == ESTADO_PENDIENTE_REVISION,
            'pendingReviewSince': (
                anamnesis.revision_pendiente_desde.isoformat()
                if anamnesis.revision_pendiente_desde else None
            ),
            'pendingReviewReason': anamnesis.motivo_revision_pendiente or None,
        }
