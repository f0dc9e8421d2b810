# api/anamnesis/models/auditoria.py

import uuid
from django.conf import settings
from django.db import models

from api.patients.models.paciente import Paciente
from api.anamnesis.constants import ACCIONES_AUDITORIA, FUENTES_INFORMACION
from .anamnesis_clinica import AnamnesisClinica


class AnamnesisAuditLog(models.Model):
    """
    Registro inmutable de cada guardado de anamnesis.
    Guarda el estado previo y nuevo, los cambios detectados y el
    contexto aportado cuando la edición se hizo fuera de consulta.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, unique=True)

    anamnesis = models.ForeignKey(
        AnamnesisClinica,
        on_delete=models.CASCADE,
        related_name='auditoria'
    )
    paciente = models.ForeignKey(
        Paciente,
        on_delete=models.CASCADE,
        related_name='auditoria_anamnesis'
    )
    accion = models.CharField(max_length=10, choices=ACCIONES_AUDITORIA, default='UPDATE')

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='auditoria_anamnesis'
    )
    rol_actor = models.CharField(max_length=20, blank=True)

    estado_anterior = models.JSONField(null=True, blank=True)
    estado_nuevo = models.JSONField()
    cambios = models.JSONField(default=list)
    conteo_severidad = models.JSONField(default=dict)
    resumen = models.TextField(verbose_name="Resumen de cambios")

    # Contexto de edición fuera de consulta
    es_fuera_consulta = models.BooleanField(default=False)
    motivo = models.TextField(blank=True)
    fuente_informacion = models.CharField(
        max_length=20,
        choices=FUENTES_INFORMACION,
        null=True,
        blank=True
    )
    verificado_con_paciente = models.BooleanField(null=True, blank=True)
    requiere_revision = models.BooleanField(default=False)

    revisado_en = models.DateTimeField(null=True, blank=True)
    revisado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='auditoria_anamnesis_revisada'
    )

    # Metadatos de la solicitud
    ip_origen = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=255, blank=True)
    ruta_solicitud = models.CharField(max_length=255, blank=True)

    fecha = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Auditoría de Anamnesis"
        verbose_name_plural = "Auditoría de Anamnesis"
        ordering = ['-fecha']
        indexes = [
            models.Index(fields=['paciente', '-fecha']),
            models.Index(fields=['anamnesis', '-fecha']),
        ]

    def __str__(self):
        return f"{self.accion} anamnesis {self.anamnesis_id} ({self.fecha:%Y-%m-%d %H:%M})"
