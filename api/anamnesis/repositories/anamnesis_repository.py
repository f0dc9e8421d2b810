# api/anamnesis/repositories/anamnesis_repository.py
from django.core.exceptions import ObjectDoesNotExist, ValidationError

from ..models import AnamnesisClinica, AnamnesisAuditLog, AnamnesisRevisionPendiente


class AnamnesisRepository:
    @staticmethod
    def get_by_paciente(paciente_id):
        try:
            return AnamnesisClinica.objects.select_related('paciente').get(
                paciente_id=paciente_id, activo=True
            )
        except ObjectDoesNotExist:
            return None

    @staticmethod
    def get_for_update(paciente_id):
        """Bloquea la fila durante la transacción de guardado"""
        return (
            AnamnesisClinica.objects.select_for_update()
            .filter(paciente_id=paciente_id, activo=True)
            .first()
        )

    @staticmethod
    def create(**kwargs):
        anamnesis = AnamnesisClinica(**kwargs)
        anamnesis.save()
        return anamnesis

    @staticmethod
    def update(anamnesis, **kwargs):
        for key, value in kwargs.items():
            setattr(anamnesis, key, value)
        anamnesis.save()
        return anamnesis


class AuditLogRepository:
    @staticmethod
    def create(**kwargs):
        return AnamnesisAuditLog.objects.create(**kwargs)

    @staticmethod
    def get_by_paciente(paciente_id):
        return (
            AnamnesisAuditLog.objects.filter(paciente_id=paciente_id)
            .select_related('actor', 'revisado_por')
            .order_by('-fecha')
        )

    @staticmethod
    def get_by_id(paciente_id, log_id):
        try:
            return AnamnesisAuditLog.objects.select_related('actor', 'revisado_por').get(
                id=log_id, paciente_id=paciente_id
            )
        except (ObjectDoesNotExist, ValidationError, ValueError):
            return None

    @staticmethod
    def marcar_revisado(log_ids, usuario, fecha):
        return AnamnesisAuditLog.objects.filter(id__in=log_ids).update(
            revisado_en=fecha,
            revisado_por=usuario,
        )


class RevisionRepository:
    @staticmethod
    def create(**kwargs):
        return AnamnesisRevisionPendiente.objects.create(**kwargs)

    @staticmethod
    def get_pendientes_paciente(paciente_id):
        return (
            AnamnesisRevisionPendiente.objects.filter(paciente_id=paciente_id, aprobado__isnull=True)
            .select_related('creado_por', 'auditoria')
            .order_by('-fecha_creacion')
        )

    @staticmethod
    def get_pendientes_por_ids(revision_ids, paciente_id=None):
        revisiones = AnamnesisRevisionPendiente.objects.select_for_update().filter(
            id__in=revision_ids, aprobado__isnull=True
        )
        if paciente_id is not None:
            revisiones = revisiones.filter(paciente_id=paciente_id)
        return revisiones

    @staticmethod
    def get_by_id(revision_id, paciente_id=None):
        filtros = {"id": revision_id}
        if paciente_id is not None:
            filtros["paciente_id"] = paciente_id
        try:
            return AnamnesisRevisionPendiente.objects.select_for_update().get(**filtros)
        except (ObjectDoesNotExist, ValidationError, ValueError):
            return None

    @staticmethod
    def contar_pendientes(anamnesis_id):
        return AnamnesisRevisionPendiente.objects.filter(
            anamnesis_id=anamnesis_id, aprobado__isnull=True
        ).count()
