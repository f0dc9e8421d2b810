# api/users/models.py
import uuid

import bcrypt
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator
from django.db import models
from django_currentuser.db.models import CurrentUserField


ROL_ADMINISTRADOR = 'Administrador'
ROL_ODONTOLOGO = 'Odontologo'
ROL_ASISTENTE = 'Asistente'

ROLES = [
    (ROL_ADMINISTRADOR, 'Administrador'),
    (ROL_ODONTOLOGO, 'Odontólogo'),
    (ROL_ASISTENTE, 'Asistente'),
]

# Roles que pueden aprobar o rechazar cambios críticos de la anamnesis
ROLES_REVISORES = (ROL_ADMINISTRADOR, ROL_ODONTOLOGO)


class UsuarioManager(BaseUserManager):
    def create_user(self, username, correo, password=None, **extra_fields):
        if not username:
            raise ValueError('El usuario debe tener un username')
        if not correo:
            raise ValueError('El usuario debe tener un correo electrónico')

        correo = self.normalize_email(correo)
        usuario = self.model(username=username, correo=correo, **extra_fields)

        if password:
            usuario.set_password(password)

        usuario.save(using=self._db)
        return usuario

    def create_superuser(self, username, correo, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('rol', ROL_ADMINISTRADOR)
        extra_fields.setdefault('is_active', True)

        return self.create_user(username, correo, password, **extra_fields)

    def get_by_natural_key(self, username):
        return self.get(username=username)


class Usuario(AbstractBaseUser, PermissionsMixin):
    """
    Personal de la clínica. El rol decide qué puede hacer sobre la
    anamnesis (ver api.permissions.TienePermisoPorRolConfigurable).
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, unique=True)
    nombres = models.CharField(max_length=100)
    apellidos = models.CharField(max_length=100)
    username = models.CharField(max_length=150, unique=True)

    telefono = models.CharField(
        max_length=20,
        validators=[
            RegexValidator(regex=r'^\d{10,}$', message="Solo números, mínimo 10 dígitos.")
        ]
    )

    correo = models.EmailField(unique=True)
    rol = models.CharField(max_length=20, choices=ROLES, default=ROL_ASISTENTE)

    is_staff = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    creado_por = CurrentUserField(
        related_name='%(class)s_creado_por',
        null=True,
        blank=True,
        editable=False
    )
    actualizado_por = CurrentUserField(
        on_update=True,
        related_name='%(class)s_actualizado_por',
        null=True,
        blank=True,
        editable=False
    )
    fecha_creacion = models.DateTimeField(auto_now_add=True)
    fecha_modificacion = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'username'
    REQUIRED_FIELDS = ['nombres', 'apellidos', 'correo', 'telefono', 'rol']

    objects = UsuarioManager()

    def clean(self):
        if not self.nombres or not self.apellidos:
            raise ValidationError("Los nombres y apellidos son obligatorios.")
        if not self.correo:
            raise ValidationError("El correo electrónico es obligatorio.")
        if not self.rol:
            raise ValidationError("Debe asignarse un rol al usuario.")

    def set_password(self, password):
        """Hashea la contraseña con bcrypt"""
        salt = bcrypt.gensalt()
        self.password = bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    def check_password(self, password):
        if not self.password or not password:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), self.password.encode('utf-8'))
        except ValueError:
            return False

    @classmethod
    def authenticate(cls, username, password):
        """Usuario activo cuyo username y contraseña coinciden, o None"""
        usuario = cls.objects.filter(username=username, is_active=True).first()
        if usuario is not None and usuario.check_password(password):
            return usuario
        return None

    @property
    def puede_revisar_anamnesis(self):
        return self.rol in ROLES_REVISORES

    def get_full_name(self):
        return f"{self.nombres} {self.apellidos}"

    def get_short_name(self):
        return self.nombres

    def __str__(self):
        return f'{self.username} - {self.nombres} {self.apellidos} ({self.rol})'

    class Meta:
        verbose_name = 'Usuario'
        verbose_name_plural = 'Usuarios'
        ordering = ['-fecha_creacion']
