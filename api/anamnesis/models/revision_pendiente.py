# api/anamnesis/models/revision_pendiente.py

import uuid
from django.conf import settings
from django.db import models

from api.patients.models.paciente import Paciente
from api.anamnesis.constants import SEVERIDADES
from .anamnesis_clinica import AnamnesisClinica
from .auditoria import AnamnesisAuditLog


class AnamnesisRevisionPendiente(models.Model):
    """
    Cambio crítico guardado sin verificación con el paciente.
    Debe revisarse en la próxima consulta presencial.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, unique=True)

    anamnesis = models.ForeignKey(
        AnamnesisClinica,
        on_delete=models.CASCADE,
        related_name='revisiones'
    )
    paciente = models.ForeignKey(
        Paciente,
        on_delete=models.CASCADE,
        related_name='revisiones_anamnesis'
    )
    auditoria = models.ForeignKey(
        AnamnesisAuditLog,
        on_delete=models.CASCADE,
        related_name='revisiones'
    )

    ruta_campo = models.CharField(max_length=100)
    etiqueta_campo = models.CharField(max_length=150)
    valor_anterior = models.JSONField(null=True, blank=True)
    valor_nuevo = models.JSONField(null=True, blank=True)
    motivo = models.TextField()
    severidad = models.CharField(max_length=10, choices=SEVERIDADES)

    creado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='revisiones_anamnesis_creadas'
    )
    fecha_creacion = models.DateTimeField(auto_now_add=True)

    # None = pendiente, True = aprobado, False = rechazado
    aprobado = models.BooleanField(null=True, blank=True)
    revisado_en = models.DateTimeField(null=True, blank=True)
    revisado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='revisiones_anamnesis_realizadas'
    )
    notas_revision = models.TextField(blank=True)

    class Meta:
        verbose_name = "Revisión pendiente de anamnesis"
        verbose_name_plural = "Revisiones pendientes de anamnesis"
        ordering = ['-fecha_creacion']
        indexes = [
            models.Index(fields=['anamnesis', 'aprobado']),
            models.Index(fields=['paciente', 'aprobado']),
        ]

    def __str__(self):
        return f"Revisión {self.etiqueta_campo} - {self.paciente}"

    @property
    def esta_pendiente(self):
        return self.aprobado is None
