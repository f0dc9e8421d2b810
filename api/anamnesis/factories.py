# api/anamnesis/factories.py
import factory

from api.patients.factories import PacienteFactory
from .models import AnamnesisClinica


class AnamnesisClinicaFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = AnamnesisClinica

    paciente = factory.SubFactory(PacienteFactory)

    tiene_dolor_actual = False
    dolor_intensidad = None
    urgencia_percibida = None
    ultima_visita_dental = None
    notas_adicionales = ''

    tiene_alergias = False
    alergias = factory.LazyFunction(list)
    tiene_medicacion_actual = False
    medicaciones = factory.LazyFunction(list)
    tiene_enfermedades_cronicas = False
    antecedentes = factory.LazyFunction(list)

    expuesto_humo_tabaco = None
    bruxismo = None
    higiene_cepillados_dia = None
    usa_hilo_dental = None

    datos_mujer = None

    class Params:
        con_alergia_penicilina = factory.Trait(
            tiene_alergias=True,
            alergias=factory.LazyFunction(lambda: [
                {'allergyId': 1, 'severity': 'SEVERE', 'reaction': 'Urticaria'}
            ]),
        )
