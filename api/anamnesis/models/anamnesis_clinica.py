# api/anamnesis/models/anamnesis_clinica.py

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models

from api.patients.models.base import BaseModel
from api.patients.models.paciente import Paciente
from api.anamnesis.constants import URGENCIA_CHOICES, ESTADOS_ANAMNESIS, ESTADO_VIGENTE
from api.anamnesis.schemas import errores_coleccion, errores_datos_mujer


class AnamnesisClinica(BaseModel):
    """
    Anamnesis vigente del paciente.
    Las tres colecciones (antecedentes, medicaciones, alergias) guardan
    referencias a catálogo en formato JSON.
    """

    paciente = models.OneToOneField(
        Paciente,
        on_delete=models.CASCADE,
        related_name='anamnesis_clinica',
        verbose_name="Paciente"
    )

    # ================== GENERAL ==================
    tiene_dolor_actual = models.BooleanField(default=False, verbose_name="¿Tiene dolor actual?")
    dolor_intensidad = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(10)],
        verbose_name="Intensidad del dolor (1-10)"
    )
    urgencia_percibida = models.CharField(
        max_length=15,
        choices=URGENCIA_CHOICES,
        null=True,
        blank=True,
        verbose_name="Urgencia percibida"
    )
    ultima_visita_dental = models.DateField(null=True, blank=True, verbose_name="Última visita dental")
    notas_adicionales = models.TextField(blank=True, verbose_name="Notas adicionales")

    # ================== ALERGIAS Y MEDICACIÓN ==================
    tiene_alergias = models.BooleanField(default=False, verbose_name="¿Tiene alergias?")
    alergias = models.JSONField(default=list, blank=True, verbose_name="Alergias")
    tiene_medicacion_actual = models.BooleanField(default=False, verbose_name="¿Toma medicación actualmente?")
    medicaciones = models.JSONField(default=list, blank=True, verbose_name="Medicaciones")

    # ================== ANTECEDENTES ==================
    tiene_enfermedades_cronicas = models.BooleanField(default=False, verbose_name="¿Tiene enfermedades crónicas?")
    antecedentes = models.JSONField(default=list, blank=True, verbose_name="Antecedentes médicos")

    # ================== HÁBITOS ==================
    expuesto_humo_tabaco = models.BooleanField(null=True, blank=True, verbose_name="Expuesto a humo de tabaco")
    bruxismo = models.BooleanField(null=True, blank=True, verbose_name="Bruxismo")
    higiene_cepillados_dia = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MaxValueValidator(10)],
        verbose_name="Cepillados por día"
    )
    usa_hilo_dental = models.BooleanField(null=True, blank=True, verbose_name="Usa hilo dental")

    # ================== ESPECÍFICO DE MUJER ==================
    datos_mujer = models.JSONField(
        null=True,
        blank=True,
        verbose_name="Datos específicos de mujer",
        help_text="embarazada, semanasEmbarazo, ultimaMenstruacion, planificacionFamiliar"
    )

    # ================== PEDIÁTRICO ==================
    tiene_habitos_succion = models.BooleanField(null=True, blank=True, verbose_name="Hábitos de succión")
    lactancia_registrada = models.BooleanField(null=True, blank=True, verbose_name="Lactancia registrada")

    # ================== ESTADO / REVISIÓN ==================
    estado = models.CharField(
        max_length=20,
        choices=ESTADOS_ANAMNESIS,
        default=ESTADO_VIGENTE,
        verbose_name="Estado"
    )
    tiene_revisiones_pendientes = models.BooleanField(default=False, verbose_name="Revisiones pendientes")
    revision_pendiente_desde = models.DateTimeField(null=True, blank=True)
    motivo_revision_pendiente = models.TextField(blank=True)
    ultima_verificacion = models.DateTimeField(null=True, blank=True, verbose_name="Última verificación con el paciente")
    verificado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='anamnesis_verificadas',
        verbose_name="Verificado por"
    )

    class Meta:
        verbose_name = "Anamnesis Clínica"
        verbose_name_plural = "Anamnesis Clínicas"
        ordering = ['-fecha_modificacion']
        indexes = [
            models.Index(fields=['paciente']),
            models.Index(fields=['estado']),
        ]

    def __str__(self):
        return f"Anamnesis de {self.paciente.nombre_completo}"

    def clean(self):
        """Validaciones de coherencia y forma de las colecciones"""
        errores = {}

        for campo, nombre in (
            ('antecedentes', 'antecedents'),
            ('medicaciones', 'medications'),
            ('alergias', 'allergies'),
        ):
            mensajes = errores_coleccion(nombre, getattr(self, campo))
            if mensajes:
                errores[campo] = mensajes

        if self.datos_mujer is not None:
            mensajes = errores_datos_mujer(self.datos_mujer)
            if mensajes:
                errores['datos_mujer'] = mensajes

        if self.tiene_alergias and not self.alergias:
            errores['alergias'] = 'Debe registrar las alergias del paciente'

        if self.tiene_medicacion_actual and not self.medicaciones:
            errores['medicaciones'] = 'Debe registrar la medicación actual del paciente'

        if self.dolor_intensidad and not self.tiene_dolor_actual:
            errores['dolor_intensidad'] = 'No se puede registrar intensidad sin dolor actual'

        if self.datos_mujer and self.paciente_id and self.paciente.sexo == 'M':
            errores['datos_mujer'] = 'Un paciente masculino no puede tener datos específicos de mujer'

        if errores:
            raise ValidationError(errores)

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)
