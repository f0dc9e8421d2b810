# api/anamnesis/exceptions.py
"""
Excepciones del flujo de anamnesis fuera de consulta.

Los errores de validación del contexto no son excepciones: se devuelven
como datos en ResultadoValidacion.errores.
"""


class SubmissionError(Exception):
    """Falla del guardado en persistencia. Los cambios y el contexto se conservan."""

    def __init__(self, mensaje, causa=None):
        super().__init__(mensaje)
        self.mensaje = mensaje
        self.causa = causa


class TransicionInvalidaError(Exception):
    """Operación no permitida en el estado actual de la sesión de edición"""


class ReviewError(Exception):
    """Revisión inexistente o ya procesada"""
