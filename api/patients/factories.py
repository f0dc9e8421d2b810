# api/patients/factories.py
from datetime import date

import factory

from .models.paciente import Paciente


def _edad_desde(fecha_nacimiento):
    hoy = date.today()
    return hoy.year - fecha_nacimiento.year - (
        (hoy.month, hoy.day) < (fecha_nacimiento.month, fecha_nacimiento.day)
    )


class PacienteFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Paciente

    nombres = factory.Faker('first_name', locale='es_ES')
    apellidos = factory.Faker('last_name', locale='es_ES')
    sexo = 'F'
    fecha_nacimiento = factory.Faker('date_of_birth', minimum_age=20, maximum_age=70)
    edad = factory.LazyAttribute(lambda o: _edad_desde(o.fecha_nacimiento) if o.fecha_nacimiento else 30)
    condicion_edad = 'A'
    cedula_pasaporte = factory.Sequence(lambda n: f'17{n:08d}')
    telefono = factory.Sequence(lambda n: f'09{n:08d}')
    correo = factory.LazyAttribute(lambda o: f'paciente{o.cedula_pasaporte}@correo.test')
