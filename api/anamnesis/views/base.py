# api/anamnesis/views/base.py
"""
Mixins y configuración base para las vistas de anamnesis
"""
import logging

from django.core.exceptions import ValidationError
from django.core.validators import validate_ipv46_address
from rest_framework.exceptions import NotFound
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.patients.models.paciente import Paciente
from api.permissions import TienePermisoPorRolConfigurable

logger = logging.getLogger(__name__)


class AnamnesisPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100

    def get_paginated_response(self, data):
        return Response({
            'count': self.page.paginator.count,
            'next': self.get_next_link(),
            'previous': self.get_previous_link(),
            'total_pages': self.page.paginator.num_pages,
            'current_page': self.page.number,
            'results': data,
        })


class BasePermissionMixin:
    permission_classes = [IsAuthenticated, TienePermisoPorRolConfigurable]


class PacienteAnamnesisMixin:
    """
    Resuelve el paciente de la URL (/api/patients/<paciente_id>/anamnesis/...)
    """

    def get_paciente(self):
        if not hasattr(self, '_paciente'):
            paciente_id = self.kwargs.get('paciente_id')
            paciente = Paciente.objects.filter(id=paciente_id, activo=True).first()
            if paciente is None:
                logger.warning(f"Paciente {paciente_id} no encontrado o inactivo")
                raise NotFound('Paciente no encontrado')
            self._paciente = paciente
        return self._paciente


class RequestMetadataMixin:
    """Datos de la solicitud que se guardan en la auditoría"""

    @staticmethod
    def _ip_valida(valor):
        if not valor:
            return None
        try:
            validate_ipv46_address(valor)
        except ValidationError:
            logger.warning(f"IP de origen descartada: {valor!r}")
            return None
        return valor

    def get_metadatos_solicitud(self):
        request = self.request
        forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
        ip = self._ip_valida(forwarded.split(',')[0].strip()) if forwarded else None
        return {
            'ip': ip or self._ip_valida(request.META.get('REMOTE_ADDR')),
            'user_agent': request.META.get('HTTP_USER_AGENT', ''),
            'ruta': request.path,
        }
