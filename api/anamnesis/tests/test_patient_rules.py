# api/anamnesis/tests/test_patient_rules.py
from datetime import date
from types import SimpleNamespace

import pytest

from api.anamnesis.services.patient_rules import (
    ContextoPaciente,
    calcular_edad_anios,
    categoria_por_edad,
)


@pytest.mark.parametrize('anios,categoria', [
    (0, 'INFANT'),
    (1, 'INFANT'),
    (2, 'CHILD'),
    (11, 'CHILD'),
    (12, 'ADOLESCENT'),
    (17, 'ADOLESCENT'),
    (18, 'ADULT'),
])
def test_categoria_por_edad(anios, categoria):
    assert categoria_por_edad(anios) == categoria


def test_calcular_edad_antes_del_cumpleanios():
    assert calcular_edad_anios(date(2000, 6, 15), hoy=date(2024, 6, 14)) == 23
    assert calcular_edad_anios(date(2000, 6, 15), hoy=date(2024, 6, 15)) == 24


def test_seccion_mujer():
    assert ContextoPaciente(sexo='F', edad_anios=12).aplica_seccion_mujer is True
    assert ContextoPaciente(sexo='F', edad_anios=11).aplica_seccion_mujer is False
    assert ContextoPaciente(sexo='M', edad_anios=30).aplica_seccion_mujer is False
    assert ContextoPaciente(sexo='F').aplica_seccion_mujer is False


def test_desde_paciente_usa_fecha_de_nacimiento():
    paciente = SimpleNamespace(sexo='F', fecha_nacimiento=date(2015, 3, 1), edad=40, condicion_edad='A')
    contexto = ContextoPaciente.desde_paciente(paciente, hoy=date(2024, 3, 1))
    assert contexto.edad_anios == 9
    assert contexto.es_pediatrico is True


def test_desde_paciente_sin_fecha():
    en_anios = SimpleNamespace(sexo='M', fecha_nacimiento=None, edad=40, condicion_edad='A')
    en_meses = SimpleNamespace(sexo='M', fecha_nacimiento=None, edad=8, condicion_edad='M')

    assert ContextoPaciente.desde_paciente(en_anios).categoria == 'ADULT'
    assert ContextoPaciente.desde_paciente(en_meses).categoria == 'INFANT'
