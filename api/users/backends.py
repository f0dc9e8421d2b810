# api/users/backends.py
from django.contrib.auth.backends import BaseBackend

from .models import Usuario


class UsuarioAuthBackend(BaseBackend):
    """Autenticación por username y contraseña bcrypt"""

    def authenticate(self, request, username=None, password=None, **kwargs):
        if username is None or password is None:
            return None
        return Usuario.authenticate(username=username, password=password)

    def get_user(self, user_id):
        return Usuario.objects.filter(pk=user_id, is_active=True).first()
