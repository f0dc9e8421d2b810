# api/permissions.py
from rest_framework import permissions


class TienePermisoPorRolConfigurable(permissions.BasePermission):
    """
    Permisos por rol y recurso.

    Uso:
        permission_classes = [TienePermisoPorRolConfigurable]
        permission_model_name = 'anamnesis'   # opcional

    Si la vista no declara permission_model_name se usa el modelo del
    queryset o, en su defecto, el nombre de la clase.
    """

    PERMISOS = {
        'paciente': {
            'Administrador': ['GET', 'POST', 'PUT', 'PATCH', 'DELETE'],
            'Odontologo': ['GET', 'POST', 'PUT', 'PATCH'],
            'Asistente': ['GET', 'POST', 'PUT'],
        },

        # Edición de anamnesis: el asistente puede registrar cambios
        # telefónicos, la validación del contexto decide si requieren revisión
        'anamnesis': {
            'Administrador': ['GET', 'POST'],
            'Odontologo': ['GET', 'POST'],
            'Asistente': ['GET', 'POST'],
        },

        'anamnesisauditlog': {
            'Administrador': ['GET'],
            'Odontologo': ['GET'],
            'Asistente': ['GET'],
        },

        # Solo el odontólogo aprueba o rechaza cambios críticos
        'revision_anamnesis': {
            'Administrador': ['GET', 'POST'],
            'Odontologo': ['GET', 'POST'],
            'Asistente': ['GET'],
        },
    }

    PERMISOS_BASE = {
        'Administrador': ['GET', 'POST', 'PUT', 'PATCH', 'DELETE'],
        'Odontologo': ['GET'],
        'Asistente': ['GET'],
    }

    METODOS_SEGUROS = ('HEAD', 'OPTIONS')

    def has_permission(self, request, view):
        user = request.user

        if not user or not user.is_authenticated:
            return False

        if getattr(user, 'rol', None) == 'Administrador':
            return True

        model_name = self._get_model_name(view)
        permisos_modelo = self.PERMISOS.get(model_name, self.PERMISOS_BASE)
        metodos_permitidos = list(permisos_modelo.get(user.rol, []))

        if 'GET' in metodos_permitidos:
            metodos_permitidos.extend(self.METODOS_SEGUROS)

        return request.method in metodos_permitidos

    def _get_model_name(self, view):
        """
        Nombre del recurso para buscar en PERMISOS.

        Orden: permission_model_name, queryset.model, clase de la vista.
        """
        nombre = getattr(view, 'permission_model_name', None)
        if nombre:
            return nombre

        queryset = getattr(view, 'queryset', None)
        if queryset is not None:
            return queryset.model._meta.model_name

        return self._clean_view_name(view.__class__.__name__)

    def _clean_view_name(self, view_name):
        """
        'PacienteViewSet' -> 'paciente'
        """
        view_name = view_name.lower()
        for suffix in ['viewset', 'view', 'api']:
            if view_name.endswith(suffix):
                view_name = view_name[:-len(suffix)]
        return view_name.strip('_')
