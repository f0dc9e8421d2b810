import pytest
from datetime import date
from django.core.exceptions import ValidationError

from api.anamnesis.services.patient_rules import ContextoPaciente
from api.patients.factories import PacienteFactory
from api.patients.models.paciente import Paciente


@pytest.mark.django_db
class TestPaciente:
    """Tests del modelo de paciente"""

    def test_crear_paciente(self):
        paciente = PacienteFactory(nombres='Ana', apellidos='Torres')
        assert paciente.activo is True
        assert paciente.nombre_completo == 'Torres, Ana'
        assert Paciente.objects.filter(id=paciente.id).exists()

    def test_cedula_es_obligatoria(self):
        with pytest.raises(ValidationError):
            PacienteFactory(cedula_pasaporte='')

    def test_telefono_invalido(self):
        with pytest.raises(ValidationError) as excinfo:
            PacienteFactory(telefono='12ab')
        assert 'telefono' in excinfo.value.message_dict

    def test_contexto_para_anamnesis(self):
        nina = PacienteFactory(sexo='F', fecha_nacimiento=date(2018, 2, 1))
        contexto = ContextoPaciente.desde_paciente(nina, hoy=date(2024, 2, 1))
        assert contexto.es_pediatrico is True
        assert contexto.aplica_seccion_mujer is False
