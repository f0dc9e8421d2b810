# api/users/factories.py
import factory

from .models import ROL_ADMINISTRADOR, ROL_ASISTENTE, ROL_ODONTOLOGO, Usuario


class UsuarioFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Usuario

    username = factory.Sequence(lambda n: f'usuario{n}')
    nombres = factory.Faker('first_name', locale='es_ES')
    apellidos = factory.Faker('last_name', locale='es_ES')
    telefono = factory.Sequence(lambda n: f'09{n:08d}')
    correo = factory.LazyAttribute(lambda o: f'{o.username}@clinica.test')
    rol = ROL_ASISTENTE
    password = 'clave12345'

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Pasa por create_user para que la contraseña quede hasheada con bcrypt"""
        return model_class.objects.create_user(*args, **kwargs)


class OdontologoFactory(UsuarioFactory):
    rol = ROL_ODONTOLOGO


class AdministradorFactory(UsuarioFactory):
    rol = ROL_ADMINISTRADOR
    is_staff = True
