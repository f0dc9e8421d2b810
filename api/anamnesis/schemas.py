# api/anamnesis/schemas.py
"""
Esquemas JSON de las colecciones de la anamnesis.
Los identificadores de catálogo se validan aquí solo por forma; la
existencia en catálogo es responsabilidad de los módulos de catálogo.
"""
from jsonschema import Draft7Validator

from .constants import SEVERIDAD_ALERGIA_CHOICES

_FECHA = {'type': ['string', 'null']}
_TEXTO_OPCIONAL = {'type': ['string', 'null']}

ANTECEDENTE_SCHEMA = {
    'type': 'object',
    'properties': {
        'antecedentId': {'type': ['integer', 'null'], 'minimum': 1},
        'customName': {'type': ['string', 'null'], 'maxLength': 200},
        'customCategory': _TEXTO_OPCIONAL,
        'notes': _TEXTO_OPCIONAL,
        'diagnosedAt': _FECHA,
        'isActive': {'type': 'boolean'},
        'resolvedAt': _FECHA,
    },
    'anyOf': [
        {'required': ['antecedentId']},
        {'required': ['customName']},
    ],
}

MEDICACION_SCHEMA = {
    'type': 'object',
    'properties': {
        'id': {'type': ['integer', 'null']},
        'medicationId': {'type': 'integer', 'minimum': 1},
        'isActive': {'type': 'boolean'},
        'notes': _TEXTO_OPCIONAL,
    },
    'required': ['medicationId'],
}

ALERGIA_SCHEMA = {
    'type': 'object',
    'properties': {
        'id': {'type': ['integer', 'null']},
        'allergyId': {'type': 'integer', 'minimum': 1},
        'severity': {'enum': [codigo for codigo, _ in SEVERIDAD_ALERGIA_CHOICES] + [None]},
        'reaction': _TEXTO_OPCIONAL,
        'isActive': {'type': 'boolean'},
        'notes': _TEXTO_OPCIONAL,
    },
    'required': ['allergyId'],
}

DATOS_MUJER_SCHEMA = {
    'type': ['object', 'null'],
    'properties': {
        'embarazada': {'type': ['boolean', 'null']},
        'semanasEmbarazo': {'type': ['integer', 'null'], 'minimum': 1, 'maximum': 42},
        'ultimaMenstruacion': _FECHA,
        'planificacionFamiliar': _TEXTO_OPCIONAL,
    },
    'additionalProperties': False,
}

ESQUEMAS_COLECCION = {
    'antecedents': ANTECEDENTE_SCHEMA,
    'medications': MEDICACION_SCHEMA,
    'allergies': ALERGIA_SCHEMA,
}


def _formatear_error(error, prefijo):
    ruta = '.'.join(str(p) for p in error.absolute_path)
    ubicacion = f"{prefijo}.{ruta}" if ruta else prefijo
    return f"{ubicacion}: {error.message}"


def errores_coleccion(nombre, items):
    """Lista de mensajes de error para una colección (vacía si es válida)"""
    if items is None:
        return []
    if not isinstance(items, list):
        return [f"{nombre}: debe ser una lista"]

    validador = Draft7Validator(ESQUEMAS_COLECCION[nombre])
    errores = []
    for indice, item in enumerate(items):
        for error in validador.iter_errors(item):
            errores.append(_formatear_error(error, f"{nombre}[{indice}]"))
    return errores


def errores_datos_mujer(datos):
    validador = Draft7Validator(DATOS_MUJER_SCHEMA)
    return [_formatear_error(e, 'womenSpecific') for e in validador.iter_errors(datos)]
