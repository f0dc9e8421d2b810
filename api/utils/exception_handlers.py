# api/utils/exception_handlers.py
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from api.anamnesis.exceptions import ReviewError, SubmissionError

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    400: 'Error en los datos enviados',
    401: 'Credenciales no válidas',
    403: 'No tiene permisos para esta acción',
    404: 'Recurso no encontrado',
    405: 'Método no permitido',
    409: 'Conflicto con el estado actual del recurso',
    500: 'Error interno del servidor',
    503: 'No se pudo guardar, intente nuevamente',
}


def custom_exception_handler(exc, context):
    """
    Devuelve todas las excepciones con el formato estándar
    {success, status_code, message, data, errors}.

    Además de las excepciones de DRF traduce:
        - django ValidationError (clean() de los modelos) -> 400
        - ReviewError -> 409
        - SubmissionError (falla al persistir) -> 503
    """
    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(_django_validation_detail(exc))

    if isinstance(exc, ReviewError):
        return _respuesta(status.HTTP_409_CONFLICT, str(exc), {'detail': [str(exc)]})

    if isinstance(exc, SubmissionError):
        logger.error(f"Error al persistir: {exc.mensaje}", exc_info=exc.causa)
        return _respuesta(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            STATUS_MESSAGES[503],
            {'detail': [exc.mensaje]},
        )

    response = exception_handler(exc, context)

    if response is None:
        logger.critical(
            f"Unhandled Exception: {exc.__class__.__name__} - {str(exc)}",
            exc_info=True,
        )
        return _respuesta(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            STATUS_MESSAGES[500],
            {'detail': ['Ha ocurrido un error inesperado']},
        )

    logger.warning(f"API Error: {exc.__class__.__name__} - {str(exc)}")
    response.data = {
        'success': False,
        'status_code': response.status_code,
        'message': _get_error_message(exc, response),
        'data': None,
        'errors': _format_errors(response.data),
    }
    return response


def _respuesta(status_code, mensaje, errores):
    return Response(
        {
            'success': False,
            'status_code': status_code,
            'message': mensaje,
            'data': None,
            'errors': errores,
        },
        status=status_code,
    )


def _django_validation_detail(exc):
    if hasattr(exc, 'message_dict'):
        return exc.message_dict
    return {'non_field_errors': exc.messages}


def _get_error_message(exc, response):
    detail = getattr(exc, 'detail', None)
    if isinstance(detail, dict) and detail:
        first_error = next(iter(detail.values()))
        if isinstance(first_error, list) and first_error:
            return str(first_error[0])
        if isinstance(first_error, dict):
            return STATUS_MESSAGES.get(response.status_code, 'Error en la solicitud')
        return str(first_error)
    if isinstance(detail, list) and detail:
        return str(detail[0])
    if detail is not None:
        return str(detail)
    return STATUS_MESSAGES.get(response.status_code, 'Error en la solicitud')


def _format_errors(data):
    """Normaliza los errores a {campo: [mensajes]}; los anidados se conservan como dict"""
    if isinstance(data, dict):
        errors = {}
        for field, messages in data.items():
            if isinstance(messages, list):
                errors[field] = [str(m) if not isinstance(m, dict) else _format_errors(m) for m in messages]
            elif isinstance(messages, dict):
                errors[field] = _format_errors(messages)
            else:
                errors[field] = [str(messages)]
        return errors
    if isinstance(data, list):
        return {'non_field_errors': [str(m) for m in data]}
    return {'detail': [str(data)]}
