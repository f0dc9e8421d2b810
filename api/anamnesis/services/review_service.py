# api/anamnesis/services/review_service.py
"""
Servicio para revisar cambios críticos pendientes de la anamnesis
"""
import logging

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound

from api.anamnesis.exceptions import ReviewError
from ..repositories.anamnesis_repository import AuditLogRepository, RevisionRepository
from .status_service import AnamnesisStatusService

logger = logging.getLogger(__name__)


class ReviewService:

    @staticmethod
    def _verificar_revisor(usuario):
        if not getattr(usuario, 'puede_revisar_anamnesis', False):
            logger.warning(f"Usuario {getattr(usuario, 'username', None)} sin rol para revisar anamnesis")
            raise ReviewError('El usuario no puede revisar cambios de la anamnesis')

    @staticmethod
    def listar_pendientes(paciente_id):
        return RevisionRepository.get_pendientes_paciente(paciente_id)

    @classmethod
    @transaction.atomic
    def revisar(cls, revision_id, usuario, aprobado, notas='', paciente_id=None):
        """
        Aprueba o rechaza una revisión pendiente.

        Raises:
            NotFound: si no existe o es de otro paciente
            ReviewError: si ya fue procesada
        """
        cls._verificar_revisor(usuario)
        revision = RevisionRepository.get_by_id(revision_id, paciente_id)
        if revision is None:
            raise NotFound('Revisión pendiente no encontrada')
        if not revision.esta_pendiente:
            raise ReviewError('Esta revisión ya fue procesada')

        ahora = timezone.now()
        revision.aprobado = aprobado
        revision.revisado_en = ahora
        revision.revisado_por = usuario
        revision.notas_revision = notas or ''
        revision.save()

        if aprobado:
            AuditLogRepository.marcar_revisado([revision.auditoria_id], usuario, ahora)

        AnamnesisStatusService.actualizar_estado(revision.anamnesis)
        logger.info(
            f"Revisión {revision.id} ({revision.ruta_campo}) "
            f"{'aprobada' if aprobado else 'rechazada'} por {usuario.username}"
        )
        return revision

    @classmethod
    @transaction.atomic
    def revisar_lote(cls, revision_ids, usuario, aprobado, notas='', paciente_id=None):
        """Procesa varias revisiones; todas deben existir y estar pendientes"""
        cls._verificar_revisor(usuario)
        revision_ids = list(dict.fromkeys(str(r) for r in revision_ids))
        revisiones = list(RevisionRepository.get_pendientes_por_ids(revision_ids, paciente_id))

        if len(revisiones) != len(revision_ids):
            raise ReviewError('Algunas revisiones no existen o ya fueron procesadas')

        ahora = timezone.now()
        for revision in revisiones:
            revision.aprobado = aprobado
            revision.revisado_en = ahora
            revision.revisado_por = usuario
            revision.notas_revision = notas or ''
            revision.save()

        if aprobado:
            AuditLogRepository.marcar_revisado(
                {r.auditoria_id for r in revisiones}, usuario, ahora
            )

        anamnesis_afectadas = {r.anamnesis_id: r.anamnesis for r in revisiones}
        for anamnesis in anamnesis_afectadas.values():
            AnamnesisStatusService.actualizar_estado(anamnesis)

        logger.info(
            f"{len(revisiones)} revisiones {'aprobadas' if aprobado else 'rechazadas'} "
            f"por {usuario.username}"
        )
        return revisiones
