# api/utils/renderers.py
from rest_framework.renderers import JSONRenderer


class StandardizedJSONRenderer(JSONRenderer):
    """
    Envuelve las respuestas en {success, status_code, message, data, errors}.
    Las respuestas del exception handler ya vienen envueltas y pasan tal cual.
    """

    STATUS_MESSAGES = {
        200: 'Operación exitosa',
        201: 'Recurso creado exitosamente',
        204: 'Recurso eliminado exitosamente',
    }

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = renderer_context.get('response') if renderer_context else None

        if response is None:
            return super().render(data, accepted_media_type, renderer_context)

        if isinstance(data, dict) and 'success' in data and 'status_code' in data:
            return super().render(data, accepted_media_type, renderer_context)

        exito = response.status_code < 400
        mensaje = self.STATUS_MESSAGES.get(response.status_code, 'Operación completada')
        if isinstance(data, dict) and 'message' in data:
            data = dict(data)
            mensaje = data.pop('message')

        envuelto = {
            'success': exito,
            'status_code': response.status_code,
            'message': mensaje,
            'data': data if exito else None,
            'errors': None if exito else data,
        }
        return super().render(envuelto, accepted_media_type, renderer_context)
