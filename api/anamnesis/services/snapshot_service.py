# api/anamnesis/services/snapshot_service.py
"""
Conversión entre el modelo AnamnesisClinica y el snapshot (dict con las
claves del registro clínico) que consume el motor de diferencias.
"""
from datetime import date, datetime
from typing import Any, Dict, Optional

from django.utils.dateparse import parse_date, parse_datetime

from .patient_rules import ContextoPaciente

# clave del snapshot -> campo del modelo
MAPEO_ESCALARES = {
    'tieneDolorActual': 'tiene_dolor_actual',
    'dolorIntensidad': 'dolor_intensidad',
    'urgenciaPercibida': 'urgencia_percibida',
    'tieneEnfermedadesCronicas': 'tiene_enfermedades_cronicas',
    'tieneAlergias': 'tiene_alergias',
    'tieneMedicacionActual': 'tiene_medicacion_actual',
    'expuestoHumoTabaco': 'expuesto_humo_tabaco',
    'bruxismo': 'bruxismo',
    'higieneCepilladosDia': 'higiene_cepillados_dia',
    'usaHiloDental': 'usa_hilo_dental',
    'ultimaVisitaDental': 'ultima_visita_dental',
}

MAPEO_PEDIATRICOS = {
    'tieneHabitosSuccion': 'tiene_habitos_succion',
    'lactanciaRegistrada': 'lactancia_registrada',
}

MAPEO_COLECCIONES = {
    'antecedents': 'antecedentes',
    'medications': 'medicaciones',
    'allergies': 'alergias',
}

CLAVES_SNAPSHOT = (
    list(MAPEO_ESCALARES)
    + list(MAPEO_PEDIATRICOS)
    + list(MAPEO_COLECCIONES)
    + ['womenSpecific', 'customNotes']
)


def _serializar_fecha(valor):
    if isinstance(valor, (date, datetime)):
        return valor.isoformat()
    return valor


def _parsear_fecha(valor):
    if valor in (None, ''):
        return None
    if isinstance(valor, date):
        return valor
    fecha = parse_date(str(valor))
    if fecha is None:
        fecha_hora = parse_datetime(str(valor))
        fecha = fecha_hora.date() if fecha_hora else None
    return fecha


def snapshot_desde_modelo(anamnesis) -> Optional[Dict[str, Any]]:
    """Snapshot del estado guardado (None si el paciente no tiene anamnesis)"""
    if anamnesis is None:
        return None

    snapshot = {}
    for clave, campo in {**MAPEO_ESCALARES, **MAPEO_PEDIATRICOS}.items():
        snapshot[clave] = _serializar_fecha(getattr(anamnesis, campo))
    for clave, campo in MAPEO_COLECCIONES.items():
        snapshot[clave] = list(getattr(anamnesis, campo) or [])
    snapshot['womenSpecific'] = anamnesis.datos_mujer
    snapshot['customNotes'] = anamnesis.notas_adicionales or ''
    return snapshot


def completar_con_inicial(inicial: Optional[Dict], enviado: Dict) -> Dict:
    """Las claves omitidas por el cliente conservan su valor guardado"""
    completo = dict(inicial or {})
    completo.update({k: v for k, v in enviado.items() if k in CLAVES_SNAPSHOT})
    return completo


def datos_modelo_desde_snapshot(
    snapshot: Dict[str, Any],
    contexto: Optional[ContextoPaciente] = None,
) -> Dict[str, Any]:
    """
    Campos del modelo a escribir a partir del snapshot editado.
    Las secciones que no aplican al paciente no se escriben.
    """
    datos = {}
    for clave, campo in MAPEO_ESCALARES.items():
        if clave in snapshot:
            datos[campo] = snapshot[clave]
    if 'ultima_visita_dental' in datos:
        datos['ultima_visita_dental'] = _parsear_fecha(datos['ultima_visita_dental'])

    for clave, campo in MAPEO_COLECCIONES.items():
        if clave in snapshot:
            datos[campo] = list(snapshot[clave] or [])

    if 'customNotes' in snapshot:
        datos['notas_adicionales'] = snapshot['customNotes'] or ''

    if contexto is None or contexto.es_pediatrico:
        for clave, campo in MAPEO_PEDIATRICOS.items():
            if clave in snapshot:
                datos[campo] = snapshot[clave]

    if (contexto is None or contexto.aplica_seccion_mujer) and 'womenSpecific' in snapshot:
        datos['datos_mujer'] = snapshot['womenSpecific'] or None

    return datos
