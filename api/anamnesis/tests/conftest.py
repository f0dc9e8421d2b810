# api/anamnesis/tests/conftest.py
"""
Fixtures compartidas para tests de anamnesis.
"""
from datetime import date

import pytest
from rest_framework.test import APIClient

from api.anamnesis.factories import AnamnesisClinicaFactory
from api.anamnesis.services.patient_rules import ContextoPaciente
from api.patients.factories import PacienteFactory
from api.users.factories import AdministradorFactory, OdontologoFactory, UsuarioFactory


@pytest.fixture
def registro_base():
    """Snapshot de anamnesis de una paciente adulta sin hallazgos"""
    return {
        'tieneDolorActual': False,
        'dolorIntensidad': None,
        'urgenciaPercibida': None,
        'tieneEnfermedadesCronicas': False,
        'tieneAlergias': False,
        'tieneMedicacionActual': False,
        'expuestoHumoTabaco': None,
        'bruxismo': None,
        'higieneCepilladosDia': 2,
        'usaHiloDental': None,
        'ultimaVisitaDental': None,
        'tieneHabitosSuccion': None,
        'lactanciaRegistrada': None,
        'antecedents': [],
        'medications': [],
        'allergies': [],
        'womenSpecific': None,
        'customNotes': '',
    }


@pytest.fixture
def mujer_adulta():
    return ContextoPaciente(sexo='F', edad_anios=34)


@pytest.fixture
def odontologo(db):
    return OdontologoFactory(username='odontotest', nombres='Carlos', apellidos='Mendoza')


@pytest.fixture
def asistente(db):
    return UsuarioFactory(username='asistentetest', nombres='María', apellidos='González')


@pytest.fixture
def administrador(db):
    return AdministradorFactory(username='adminanamnesis')


@pytest.fixture
def paciente(db):
    return PacienteFactory(sexo='F', fecha_nacimiento=date(1990, 5, 15))


@pytest.fixture
def paciente_masculino(db):
    return PacienteFactory(sexo='M', fecha_nacimiento=date(1985, 1, 10))


@pytest.fixture
def anamnesis(paciente):
    return AnamnesisClinicaFactory(paciente=paciente, higiene_cepillados_dia=2)


@pytest.fixture
def api_client():
    return APIClient()
