# api/anamnesis/services/diff_service.py
"""
Motor de diferencias entre dos versiones de la anamnesis.

Recorre un conjunto fijo de campos (no un diff recursivo genérico):
escalares, tres colecciones respaldadas por catálogos y las secciones
condicionales de mujer y pediátrica. Cada cambio se anota con la
clasificación del campo.
"""
import json
import logging
from typing import Any, Dict, List, Optional

from api.anamnesis.constants import (
    CAMBIO_AGREGADO,
    CAMBIO_ELIMINADO,
    CAMBIO_MODIFICADO,
)
from .change_types import CambioCampo, ConjuntoCambios
from .field_classifier import clasificar_campo
from .patient_rules import ContextoPaciente

logger = logging.getLogger(__name__)


CAMPOS_ESCALARES = (
    'tieneDolorActual',
    'dolorIntensidad',
    'urgenciaPercibida',
    'tieneEnfermedadesCronicas',
    'tieneAlergias',
    'tieneMedicacionActual',
    'expuestoHumoTabaco',
    'bruxismo',
    'higieneCepilladosDia',
    'usaHiloDental',
    'ultimaVisitaDental',
)

CAMPOS_PEDIATRICOS = (
    'tieneHabitosSuccion',
    'lactanciaRegistrada',
)

CAMPOS_COLECCION = (
    'antecedents',
    'medications',
    'allergies',
)

CAMPOS_TEXTO = (
    'customNotes',
)

CAMPOS_MUJER = (
    'womenSpecific.embarazada',
    'womenSpecific.semanasEmbarazo',
    'womenSpecific.ultimaMenstruacion',
    'womenSpecific.planificacionFamiliar',
)


def extraer_valor(registro: Optional[Dict], ruta: str) -> Any:
    """Obtiene un valor por ruta con puntos; cualquier tramo ausente devuelve None"""
    actual: Any = registro
    for parte in ruta.split('.'):
        if not isinstance(actual, dict):
            return None
        actual = actual.get(parte)
    return actual


def _es_vacio(valor: Any) -> bool:
    if valor is None or valor == '':
        return True
    if isinstance(valor, (list, tuple, dict)):
        return len(valor) == 0
    return False


def tipo_de_cambio(anterior: Any, nuevo: Any) -> str:
    anterior_vacio = _es_vacio(anterior)
    nuevo_vacio = _es_vacio(nuevo)
    if anterior_vacio and not nuevo_vacio:
        return CAMBIO_AGREGADO
    if not anterior_vacio and nuevo_vacio:
        return CAMBIO_ELIMINADO
    return CAMBIO_MODIFICADO


def escalares_iguales(a: Any, b: Any) -> bool:
    """
    Igualdad estricta: True no es igual a 1 y None no es igual a 0.
    Los números se comparan por valor (3 == 3.0).
    """
    if a is None or b is None:
        return a is None and b is None
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if isinstance(a, (dict, list, tuple)) or isinstance(b, (dict, list, tuple)):
        return _serializar(a) == _serializar(b)
    return type(a) is type(b) and a == b


def _serializar(valor: Any) -> str:
    try:
        return json.dumps(valor, sort_keys=True, default=str, ensure_ascii=False)
    except TypeError:
        # Claves de tipos mezclados no se pueden ordenar
        return json.dumps(valor, default=str, ensure_ascii=False)


def _como_lista(valor: Any) -> List:
    if valor is None:
        return []
    if isinstance(valor, (list, tuple)):
        return list(valor)
    # Entrada malformada: se trata como un único elemento
    return [valor]


def huella_coleccion(items: Any) -> List[str]:
    """Representación independiente del orden de los elementos"""
    return sorted(_serializar(item) for item in _como_lista(items))


def _cambio(ruta: str, anterior: Any, nuevo: Any, tipo: str) -> CambioCampo:
    clasificacion = clasificar_campo(ruta)
    return CambioCampo(
        ruta=ruta,
        etiqueta=clasificacion.etiqueta,
        valor_anterior=anterior,
        valor_nuevo=nuevo,
        tipo_cambio=tipo,
        severidad=clasificacion.severidad,
        seccion=clasificacion.seccion,
    )


def _comparar_escalar(inicial: Dict, actual: Dict, ruta: str) -> Optional[CambioCampo]:
    anterior = extraer_valor(inicial, ruta)
    nuevo = extraer_valor(actual, ruta)
    if escalares_iguales(anterior, nuevo):
        return None
    return _cambio(ruta, anterior, nuevo, tipo_de_cambio(anterior, nuevo))


def _comparar_coleccion(inicial: Dict, actual: Dict, ruta: str) -> Optional[CambioCampo]:
    anterior = _como_lista(extraer_valor(inicial, ruta))
    nuevo = _como_lista(extraer_valor(actual, ruta))

    if not anterior and not nuevo:
        return None
    if not anterior:
        return _cambio(ruta, anterior, nuevo, CAMBIO_AGREGADO)
    if not nuevo:
        return _cambio(ruta, anterior, nuevo, CAMBIO_ELIMINADO)
    if huella_coleccion(anterior) == huella_coleccion(nuevo):
        return None
    return _cambio(ruta, anterior, nuevo, CAMBIO_MODIFICADO)


def _comparar_texto(inicial: Dict, actual: Dict, ruta: str) -> Optional[CambioCampo]:
    # Texto libre: None y "" equivalen a "sin notas"
    anterior = extraer_valor(inicial, ruta) or ''
    nuevo = extraer_valor(actual, ruta) or ''
    if anterior == nuevo:
        return None
    return _cambio(ruta, anterior, nuevo, tipo_de_cambio(anterior, nuevo))


def calcular_cambios(
    inicial: Optional[Dict],
    actual: Optional[Dict],
    contexto: Optional[ContextoPaciente] = None,
) -> ConjuntoCambios:
    """
    Calcula los cambios entre la anamnesis inicial y la editada.

    Args:
        inicial: Snapshot cargado antes de editar (None si no existía)
        actual: Snapshot con las ediciones del usuario
        contexto: Sexo/edad del paciente. Sin contexto se comparan
            también las secciones condicionales.

    Returns:
        Tupla de CambioCampo en orden de declaración del esquema
    """
    inicial = inicial if isinstance(inicial, dict) else {}
    actual = actual if isinstance(actual, dict) else {}

    incluir_pediatricos = contexto is None or contexto.es_pediatrico
    incluir_mujer = contexto is None or contexto.aplica_seccion_mujer

    candidatos = [_comparar_escalar(inicial, actual, ruta) for ruta in CAMPOS_ESCALARES]
    if incluir_pediatricos:
        candidatos += [_comparar_escalar(inicial, actual, ruta) for ruta in CAMPOS_PEDIATRICOS]
    candidatos += [_comparar_coleccion(inicial, actual, ruta) for ruta in CAMPOS_COLECCION]
    candidatos += [_comparar_texto(inicial, actual, ruta) for ruta in CAMPOS_TEXTO]
    if incluir_mujer:
        candidatos += [_comparar_escalar(inicial, actual, ruta) for ruta in CAMPOS_MUJER]

    cambios = tuple(cambio for cambio in candidatos if cambio is not None)
    logger.debug(f"Diferencias de anamnesis calculadas: {len(cambios)} cambios")
    return cambios
