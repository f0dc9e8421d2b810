# api/anamnesis/services/field_classifier.py
"""
Clasificación de campos de la anamnesis por severidad clínica.

Tabla estática ruta -> (etiqueta, sección, severidad). Las rutas
desconocidas se clasifican como severidad baja en la sección "other".
"""
from typing import Dict

from api.anamnesis.constants import (
    SEVERIDAD_CRITICA,
    SEVERIDAD_MEDIA,
    SEVERIDAD_BAJA,
    SECCION_GENERAL,
    SECCION_ALERGIAS,
    SECCION_MEDICACIONES,
    SECCION_ANTECEDENTES,
    SECCION_HABITOS,
    SECCION_MUJER,
    SECCION_PEDIATRICA,
    SECCION_OTROS,
    MENSAJES_SEVERIDAD,
)
from .change_types import ClasificacionCampo


CAMPOS_CRITICOS = (
    'tieneAlergias',
    'allergies',
    'tieneMedicacionActual',
    'medications',
)

CAMPOS_SEVERIDAD_MEDIA = (
    'tieneEnfermedadesCronicas',
    'antecedents',
    'womenSpecific.embarazada',
    'womenSpecific.semanasEmbarazo',
)

# ruta: (etiqueta, sección)
ETIQUETAS_CAMPOS = {
    # General
    'tieneDolorActual': ('Tiene dolor actual', SECCION_GENERAL),
    'dolorIntensidad': ('Intensidad del dolor', SECCION_GENERAL),
    'urgenciaPercibida': ('Urgencia percibida', SECCION_GENERAL),
    'ultimaVisitaDental': ('Última visita dental', SECCION_GENERAL),
    'customNotes': ('Notas adicionales', SECCION_GENERAL),

    # Alergias y medicaciones
    'tieneAlergias': ('Tiene alergias', SECCION_ALERGIAS),
    'allergies': ('Lista de alergias', SECCION_ALERGIAS),
    'tieneMedicacionActual': ('Tiene medicación actual', SECCION_MEDICACIONES),
    'medications': ('Lista de medicaciones', SECCION_MEDICACIONES),

    # Antecedentes
    'tieneEnfermedadesCronicas': ('Tiene enfermedades crónicas', SECCION_ANTECEDENTES),
    'antecedents': ('Antecedentes médicos', SECCION_ANTECEDENTES),

    # Hábitos
    'expuestoHumoTabaco': ('Expuesto a humo de tabaco', SECCION_HABITOS),
    'bruxismo': ('Bruxismo', SECCION_HABITOS),
    'higieneCepilladosDia': ('Cepillados por día', SECCION_HABITOS),
    'usaHiloDental': ('Usa hilo dental', SECCION_HABITOS),

    # Específico de mujeres
    'womenSpecific.embarazada': ('Embarazada', SECCION_MUJER),
    'womenSpecific.semanasEmbarazo': ('Semanas de embarazo', SECCION_MUJER),
    'womenSpecific.ultimaMenstruacion': ('Última menstruación', SECCION_MUJER),
    'womenSpecific.planificacionFamiliar': ('Planificación familiar', SECCION_MUJER),

    # Pediátrico
    'tieneHabitosSuccion': ('Tiene hábitos de succión', SECCION_PEDIATRICA),
    'lactanciaRegistrada': ('Lactancia registrada', SECCION_PEDIATRICA),
}


def severidad_de(ruta: str) -> str:
    if ruta in CAMPOS_CRITICOS:
        return SEVERIDAD_CRITICA
    if ruta in CAMPOS_SEVERIDAD_MEDIA:
        return SEVERIDAD_MEDIA
    return SEVERIDAD_BAJA


def clasificar_campo(ruta: str) -> ClasificacionCampo:
    """
    Clasifica una ruta de campo.

    Args:
        ruta: Identificador del campo (ej. "tieneAlergias", "womenSpecific.embarazada")

    Returns:
        ClasificacionCampo con severidad, etiqueta y sección
    """
    etiqueta, seccion = ETIQUETAS_CAMPOS.get(ruta, (ruta, SECCION_OTROS))
    return ClasificacionCampo(
        severidad=severidad_de(ruta),
        etiqueta=etiqueta,
        seccion=seccion,
    )


def mensaje_severidad(severidad: str) -> str:
    return MENSAJES_SEVERIDAD.get(severidad, '')


def requisitos_validacion_campo(ruta: str) -> Dict:
    """Requisitos de contexto que impone un campo si se modifica"""
    severidad = severidad_de(ruta)

    if severidad == SEVERIDAD_CRITICA:
        return {
            'requiere_motivo': True,
            'requiere_verificacion': True,
            'severidad': severidad,
            'mensaje': 'Cambios en este campo requieren justificación obligatoria',
        }

    if severidad == SEVERIDAD_MEDIA:
        return {
            'requiere_motivo': False,
            'requiere_verificacion': True,
            'severidad': severidad,
            'mensaje': 'Se recomienda verificar estos cambios con el paciente',
        }

    return {
        'requiere_motivo': False,
        'requiere_verificacion': False,
        'severidad': severidad,
        'mensaje': '',
    }
