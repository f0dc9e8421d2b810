# api/anamnesis/services/patient_rules.py
"""
Reglas por edad y sexo del paciente.
Determinan qué secciones condicionales de la anamnesis se comparan.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

CATEGORIA_INFANTE = 'INFANT'
CATEGORIA_NINO = 'CHILD'
CATEGORIA_ADOLESCENTE = 'ADOLESCENT'
CATEGORIA_ADULTO = 'ADULT'

# Edad promedio de menarquia
EDAD_MINIMA_SECCION_MUJER = 12


def calcular_edad_anios(fecha_nacimiento: date, hoy: Optional[date] = None) -> int:
    hoy = hoy or date.today()
    anios = hoy.year - fecha_nacimiento.year
    if (hoy.month, hoy.day) < (fecha_nacimiento.month, fecha_nacimiento.day):
        anios -= 1
    return max(anios, 0)


def categoria_por_edad(anios: int) -> str:
    if anios < 2:
        return CATEGORIA_INFANTE
    if anios < 12:
        return CATEGORIA_NINO
    if anios < 18:
        return CATEGORIA_ADOLESCENTE
    return CATEGORIA_ADULTO


@dataclass(frozen=True)
class ContextoPaciente:
    """Sexo ('M', 'F', 'O') y edad en años cumplidos del paciente"""
    sexo: Optional[str] = None
    edad_anios: Optional[int] = None

    @property
    def categoria(self) -> Optional[str]:
        if self.edad_anios is None:
            return None
        return categoria_por_edad(self.edad_anios)

    @property
    def aplica_seccion_mujer(self) -> bool:
        return (
            self.sexo == 'F'
            and self.edad_anios is not None
            and self.edad_anios >= EDAD_MINIMA_SECCION_MUJER
        )

    @property
    def es_pediatrico(self) -> bool:
        return self.categoria in (CATEGORIA_INFANTE, CATEGORIA_NINO)

    @classmethod
    def desde_paciente(cls, paciente, hoy: Optional[date] = None) -> 'ContextoPaciente':
        """Construye el contexto a partir de una instancia de Paciente"""
        if paciente.fecha_nacimiento:
            edad = calcular_edad_anios(paciente.fecha_nacimiento, hoy)
        elif paciente.condicion_edad == 'A':
            edad = paciente.edad
        else:
            # Horas, días o meses: menor de un año
            edad = 0
        return cls(sexo=paciente.sexo, edad_anios=edad)
