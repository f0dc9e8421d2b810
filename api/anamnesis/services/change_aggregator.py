# api/anamnesis/services/change_aggregator.py
"""
Agregación de cambios: agrupación por sección y conteo por severidad.
"""
from typing import Dict, Iterable, List

from api.anamnesis.constants import ORDEN_SECCIONES, SECCION_OTROS
from .change_types import CambioCampo, ConteoSeveridad, ResumenCambios


def _prioridad_seccion(seccion: str) -> int:
    if seccion in ORDEN_SECCIONES:
        return ORDEN_SECCIONES.index(seccion)
    return ORDEN_SECCIONES.index(SECCION_OTROS)


def agrupar_por_seccion(cambios: Iterable[CambioCampo]) -> Dict[str, tuple]:
    """Agrupa conservando el orden de los cambios dentro de cada sección"""
    grupos: Dict[str, List[CambioCampo]] = {}
    for cambio in cambios:
        grupos.setdefault(cambio.seccion, []).append(cambio)

    secciones = sorted(grupos, key=_prioridad_seccion)
    return {seccion: tuple(grupos[seccion]) for seccion in secciones}


def contar_severidades(cambios: Iterable[CambioCampo]) -> ConteoSeveridad:
    conteo = {'critical': 0, 'medium': 0, 'low': 0}
    for cambio in cambios:
        # Severidad desconocida cuenta como baja
        clave = cambio.severidad if cambio.severidad in conteo else 'low'
        conteo[clave] += 1
    return ConteoSeveridad(total=sum(conteo.values()), **conteo)


def agregar_cambios(cambios: Iterable[CambioCampo]) -> ResumenCambios:
    cambios = tuple(cambios)
    conteo = contar_severidades(cambios)
    return ResumenCambios(
        por_seccion=agrupar_por_seccion(cambios),
        conteo=conteo,
        tiene_cambios=conteo.total > 0,
        tiene_cambios_criticos=conteo.critical > 0,
    )
