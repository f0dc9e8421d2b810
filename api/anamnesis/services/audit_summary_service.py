# api/anamnesis/services/audit_summary_service.py
"""
Formateo del resumen de cambios que acompaña al registro de auditoría.
"""
import json
from typing import Any, Iterable

from api.anamnesis.constants import SIN_CAMBIOS
from .change_aggregator import agrupar_por_seccion
from .change_types import CambioCampo


def formatear_resumen_auditoria(cambios: Iterable[CambioCampo]) -> str:
    """
    "[seccion] etiqueta: tipo (severidad), ...; [seccion] ..."

    Devuelve "Sin cambios" si no hay cambios.
    """
    grupos = agrupar_por_seccion(cambios)
    if not grupos:
        return SIN_CAMBIOS

    partes = []
    for seccion, items in grupos.items():
        detalle = ', '.join(
            f"{c.etiqueta}: {c.tipo_cambio} ({c.severidad})" for c in items
        )
        partes.append(f"[{seccion}] {detalle}")
    return '; '.join(partes)


def formatear_valor(valor: Any) -> str:
    """Representación legible de un valor anterior/nuevo"""
    if valor is None:
        return '—'
    if isinstance(valor, bool):
        return 'Sí' if valor else 'No'
    if isinstance(valor, (int, float)):
        return str(valor)
    if isinstance(valor, str):
        return valor or '—'
    if isinstance(valor, (list, tuple)):
        if not valor:
            return 'Ninguno'
        return f"{len(valor)} elemento{'s' if len(valor) > 1 else ''}"
    if isinstance(valor, dict):
        if valor.get('label'):
            return str(valor['label'])
        if valor.get('name'):
            return str(valor['name'])
        return json.dumps(valor, ensure_ascii=False, default=str)
    return str(valor)
