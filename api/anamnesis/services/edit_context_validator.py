# api/anamnesis/services/edit_context_validator.py
"""
Validación del contexto de edición fuera de consulta.

Los errores bloquean el guardado; las advertencias solo informan.
No lanza excepciones ni persiste nada: devuelve un ResultadoValidacion.
"""
import logging
from typing import Iterable

from api.anamnesis.constants import (
    CODIGOS_FUENTE_INFORMACION,
    SEVERIDAD_CRITICA,
    SEVERIDAD_MEDIA,
    MENSAJE_MOTIVO_REQUERIDO,
    MENSAJE_FUENTE_REQUERIDA,
    MENSAJE_VERIFICACION_RECOMENDADA,
    MENSAJE_REVISION_OBLIGATORIA,
)
from .change_types import CambioCampo, ContextoEdicion, ResultadoValidacion
from .field_classifier import CAMPOS_CRITICOS, CAMPOS_SEVERIDAD_MEDIA

logger = logging.getLogger(__name__)


def es_cambio_critico(cambio: CambioCampo) -> bool:
    return cambio.ruta in CAMPOS_CRITICOS or cambio.severidad == SEVERIDAD_CRITICA


def es_cambio_severidad_media(cambio: CambioCampo) -> bool:
    return cambio.ruta in CAMPOS_SEVERIDAD_MEDIA or cambio.severidad == SEVERIDAD_MEDIA


def validar_contexto_edicion(
    contexto: ContextoEdicion,
    cambios: Iterable[CambioCampo],
) -> ResultadoValidacion:
    """
    Decide si el contexto es suficiente para guardar los cambios.

    Reglas:
        1. Cambios críticos exigen motivo no vacío (error).
        2. Cambios críticos o medios recomiendan verificar con el paciente
           (advertencia); críticos sin verificar quedan para revisión
           obligatoria (segunda advertencia).
        3. La fuente de información es obligatoria (error).
    """
    cambios = tuple(cambios)
    errores = []
    advertencias = []

    hay_criticos = any(es_cambio_critico(c) for c in cambios)
    hay_medios = any(es_cambio_severidad_media(c) for c in cambios)

    requiere_motivo = hay_criticos
    if requiere_motivo and not (contexto.motivo or '').strip():
        errores.append(MENSAJE_MOTIVO_REQUERIDO)

    requiere_verificacion = hay_criticos or hay_medios
    if requiere_verificacion and not contexto.verificado_con_paciente:
        advertencias.append(MENSAJE_VERIFICACION_RECOMENDADA)

    if contexto.fuente_informacion not in CODIGOS_FUENTE_INFORMACION:
        errores.append(MENSAJE_FUENTE_REQUERIDA)

    if hay_criticos and not contexto.verificado_con_paciente:
        advertencias.append(MENSAJE_REVISION_OBLIGATORIA)

    logger.debug(
        f"Contexto de edición validado: {len(errores)} errores, "
        f"{len(advertencias)} advertencias"
    )

    return ResultadoValidacion(
        es_valido=len(errores) == 0,
        errores=errores,
        advertencias=advertencias,
        requiere_motivo=requiere_motivo,
        requiere_verificacion=requiere_verificacion,
    )
