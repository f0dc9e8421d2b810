# patients/models/paciente.py
from django.db import models
from django.core.validators import RegexValidator
from django.core.exceptions import ValidationError
from .base import BaseModel
from .constants import SEXOS, CONDICION_EDAD


class Paciente(BaseModel):
    """
    Datos de identificación del paciente.
    El sexo y la fecha de nacimiento determinan qué secciones de la
    anamnesis aplican (específica de mujer, pediátrica).
    """

    nombres = models.CharField(max_length=100, verbose_name="Nombres completos")
    apellidos = models.CharField(max_length=100, verbose_name="Apellidos completos")

    sexo = models.CharField(max_length=1, choices=SEXOS, verbose_name="Sexo")
    edad = models.PositiveIntegerField(verbose_name="Edad")
    condicion_edad = models.CharField(max_length=1, choices=CONDICION_EDAD, verbose_name="Condición de edad")

    cedula_pasaporte = models.CharField(max_length=20, unique=True, verbose_name="Cédula/Pasaporte")
    fecha_nacimiento = models.DateField(null=True, blank=True, verbose_name="Fecha de nacimiento")
    telefono = models.CharField(
        max_length=20,
        blank=True,
        validators=[
            RegexValidator(regex=r'^\d{10,}$', message="Solo números, mínimo 10 dígitos.")
        ],
        verbose_name="Teléfono"
    )
    correo = models.EmailField(blank=True, verbose_name="Correo electrónico")

    class Meta:
        verbose_name = "Paciente"
        verbose_name_plural = "Pacientes"
        ordering = ['apellidos', 'nombres']
        indexes = [
            models.Index(fields=['apellidos', 'nombres']),
            models.Index(fields=['activo']),
        ]

    def clean(self):
        if not self.nombres or not self.apellidos:
            raise ValidationError("Los nombres y apellidos son obligatorios.")
        if not self.cedula_pasaporte:
            raise ValidationError("La cédula o pasaporte es obligatorio.")
        if self.edad and not self.condicion_edad:
            raise ValidationError("Debe especificar la condición de edad (horas, días, meses, años).")

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.nombre_completo} - {self.cedula_pasaporte}"

    @property
    def nombre_completo(self):
        return f"{self.apellidos}, {self.nombres}".strip()
