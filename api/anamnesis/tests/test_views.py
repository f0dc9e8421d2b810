# api/anamnesis/tests/test_views.py
import uuid
from unittest.mock import patch

import pytest
from django.urls import reverse
from rest_framework import status

from api.anamnesis.constants import MENSAJE_MOTIVO_REQUERIDO
from api.anamnesis.exceptions import SubmissionError
from api.anamnesis.models import AnamnesisAuditLog


def _url(nombre, paciente, **kwargs):
    return reverse(f'anamnesis:{nombre}', kwargs={'paciente_id': str(paciente.id), **kwargs})


EDICION_CRITICA = {
    'updatedRecord': {
        'tieneAlergias': True,
        'allergies': [{'allergyId': 1, 'severity': 'SEVERE'}],
    },
    'editContext': {
        'informationSource': 'PHONE',
        'verifiedWithPatient': False,
        'reason': 'La paciente reporta alergia a penicilina',
    },
}


@pytest.mark.django_db
class TestAnamnesisAPI:

    def test_requiere_autenticacion(self, api_client, paciente):
        response = api_client.get(_url('anamnesis-list', paciente))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_paciente_inexistente(self, api_client, odontologo):
        api_client.force_authenticate(user=odontologo)
        response = api_client.get(
            reverse('anamnesis:anamnesis-list', kwargs={'paciente_id': str(uuid.uuid4())})
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['message'] == 'Paciente no encontrado'

    def test_obtener_sin_anamnesis(self, api_client, odontologo, paciente):
        api_client.force_authenticate(user=odontologo)

        response = api_client.get(_url('anamnesis-list', paciente))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['anamnesis'] is None
        assert response.data['estado']['status'] == 'NO_ANAMNESIS'

    def test_respuesta_con_formato_estandar(self, api_client, odontologo, anamnesis):
        api_client.force_authenticate(user=odontologo)

        response = api_client.get(_url('anamnesis-list', anamnesis.paciente))

        cuerpo = response.json()
        assert cuerpo['success'] is True
        assert cuerpo['status_code'] == 200
        assert cuerpo['data']['anamnesis']['higieneCepilladosDia'] == 2

    def test_previsualizar_cambios(self, api_client, asistente, anamnesis):
        api_client.force_authenticate(user=asistente)

        response = api_client.post(_url('anamnesis-cambios', anamnesis.paciente), EDICION_CRITICA, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['hasCriticalChanges'] is True
        assert response.data['validation']['isValid'] is True
        assert len(response.data['validation']['warnings']) == 2
        assert AnamnesisAuditLog.objects.count() == 0

    def test_guardar_sin_motivo(self, api_client, asistente, anamnesis):
        api_client.force_authenticate(user=asistente)
        datos = {
            'updatedRecord': EDICION_CRITICA['updatedRecord'],
            'editContext': {'informationSource': 'PHONE'},
        }

        response = api_client.post(_url('anamnesis-fuera-consulta', anamnesis.paciente), datos, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert response.data['errors']['editContext'] == [MENSAJE_MOTIVO_REQUERIDO]

    def test_guardar_fuente_invalida(self, api_client, asistente, anamnesis):
        api_client.force_authenticate(user=asistente)
        datos = {
            'updatedRecord': {'bruxismo': True},
            'editContext': {'informationSource': 'FAX'},
        }

        response = api_client.post(_url('anamnesis-fuera-consulta', anamnesis.paciente), datos, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'editContext' in response.data['errors']

    def test_coleccion_con_forma_invalida(self, api_client, asistente, anamnesis):
        api_client.force_authenticate(user=asistente)
        datos = {
            'updatedRecord': {'tieneAlergias': True, 'allergies': [{'severity': 'SEVERE'}]},
            'editContext': EDICION_CRITICA['editContext'],
        }

        response = api_client.post(_url('anamnesis-fuera-consulta', anamnesis.paciente), datos, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'updatedRecord' in response.data['errors']

    def test_guardar_edicion_critica(self, api_client, asistente, anamnesis):
        api_client.force_authenticate(user=asistente)

        response = api_client.post(
            _url('anamnesis-fuera-consulta', anamnesis.paciente),
            EDICION_CRITICA,
            format='json',
            HTTP_USER_AGENT='pytest-agent',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['saved'] is True
        assert response.data['pendingReviews'] == 2
        assert response.data['estado']['status'] == 'PENDING_REVIEW'
        assert response.data['severityCounts']['critical'] == 2
        auditoria = AnamnesisAuditLog.objects.get(id=response.data['auditLogId'])
        assert auditoria.actor == asistente
        assert auditoria.user_agent == 'pytest-agent'

    def test_ip_reenviada_invalida_usa_remote_addr(self, api_client, asistente, anamnesis):
        api_client.force_authenticate(user=asistente)

        response = api_client.post(
            _url('anamnesis-fuera-consulta', anamnesis.paciente),
            EDICION_CRITICA,
            format='json',
            HTTP_X_FORWARDED_FOR='unknown, 10.0.0.1',
            REMOTE_ADDR='192.168.1.20',
        )

        assert response.status_code == status.HTTP_201_CREATED
        auditoria = AnamnesisAuditLog.objects.get(id=response.data['auditLogId'])
        assert auditoria.ip_origen == '192.168.1.20'

    def test_ip_reenviada_valida(self, api_client, asistente, anamnesis):
        api_client.force_authenticate(user=asistente)

        response = api_client.post(
            _url('anamnesis-fuera-consulta', anamnesis.paciente),
            EDICION_CRITICA,
            format='json',
            HTTP_X_FORWARDED_FOR='203.0.113.7, 10.0.0.1',
        )

        auditoria = AnamnesisAuditLog.objects.get(id=response.data['auditLogId'])
        assert auditoria.ip_origen == '203.0.113.7'

    def test_guardar_sin_cambios(self, api_client, asistente, anamnesis):
        api_client.force_authenticate(user=asistente)
        datos = {'updatedRecord': {'higieneCepilladosDia': 2}, 'editContext': {}}

        response = api_client.post(_url('anamnesis-fuera-consulta', anamnesis.paciente), datos, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['saved'] is False
        assert response.data['auditLogId'] is None

    def test_falla_al_persistir(self, api_client, asistente, anamnesis):
        api_client.force_authenticate(user=asistente)
        with patch(
            'api.anamnesis.views.anamnesis_viewset.OutsideConsultationService.guardar_edicion',
            side_effect=SubmissionError('Error al guardar anamnesis: timeout'),
        ):
            response = api_client.post(
                _url('anamnesis-fuera-consulta', anamnesis.paciente), EDICION_CRITICA, format='json'
            )

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data['errors']['detail'] == ['Error al guardar anamnesis: timeout']


@pytest.mark.django_db
class TestAuditoriaYRevisionesAPI:

    @pytest.fixture
    def edicion_guardada(self, api_client, asistente, anamnesis):
        api_client.force_authenticate(user=asistente)
        response = api_client.post(
            _url('anamnesis-fuera-consulta', anamnesis.paciente), EDICION_CRITICA, format='json'
        )
        api_client.force_authenticate(user=None)
        return response.data

    def test_listar_auditoria(self, api_client, odontologo, anamnesis, edicion_guardada):
        api_client.force_authenticate(user=odontologo)

        response = api_client.get(_url('anamnesis-auditoria-list', anamnesis.paciente))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['requiere_revision'] is True

    def test_filtrar_auditoria(self, api_client, odontologo, anamnesis, edicion_guardada):
        api_client.force_authenticate(user=odontologo)
        response = api_client.get(
            _url('anamnesis-auditoria-list', anamnesis.paciente), {'requiere_revision': 'false'}
        )
        assert response.data['count'] == 0

    def test_detalle_auditoria(self, api_client, odontologo, anamnesis, edicion_guardada):
        api_client.force_authenticate(user=odontologo)

        response = api_client.get(
            _url('anamnesis-auditoria-detail', anamnesis.paciente, pk=edicion_guardada['auditLogId'])
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['estado_anterior']['tieneAlergias'] is False
        assert response.data['estado_nuevo']['tieneAlergias'] is True

    def test_detalle_auditoria_inexistente(self, api_client, odontologo, anamnesis):
        api_client.force_authenticate(user=odontologo)
        response = api_client.get(
            _url('anamnesis-auditoria-detail', anamnesis.paciente, pk=str(uuid.uuid4()))
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_listar_revisiones(self, api_client, asistente, anamnesis, edicion_guardada):
        api_client.force_authenticate(user=asistente)

        response = api_client.get(_url('anamnesis-revisiones-list', anamnesis.paciente))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 2

    def test_asistente_no_puede_revisar(self, api_client, asistente, anamnesis, edicion_guardada):
        revision_id = anamnesis.revisiones.first().id
        api_client.force_authenticate(user=asistente)

        response = api_client.post(
            _url('anamnesis-revisiones-revisar', anamnesis.paciente, pk=str(revision_id)),
            {'aprobado': True},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_odontologo_aprueba_y_no_puede_repetir(self, api_client, odontologo, anamnesis, edicion_guardada):
        revision_id = anamnesis.revisiones.first().id
        api_client.force_authenticate(user=odontologo)
        url = _url('anamnesis-revisiones-revisar', anamnesis.paciente, pk=str(revision_id))

        response = api_client.post(url, {'aprobado': True, 'notas': 'Verificado en consulta'}, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['revision']['aprobado'] is True

        response = api_client.post(url, {'aprobado': True}, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_revision_inexistente(self, api_client, odontologo, anamnesis, edicion_guardada):
        api_client.force_authenticate(user=odontologo)

        response = api_client.post(
            _url('anamnesis-revisiones-revisar', anamnesis.paciente, pk=str(uuid.uuid4())),
            {'aprobado': True},
            format='json',
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['message'] == 'Revisión pendiente no encontrada'

    def test_revision_de_otro_paciente(self, api_client, odontologo, paciente_masculino, anamnesis, edicion_guardada):
        revision_id = anamnesis.revisiones.first().id
        api_client.force_authenticate(user=odontologo)

        response = api_client.post(
            _url('anamnesis-revisiones-revisar', paciente_masculino, pk=str(revision_id)),
            {'aprobado': True},
            format='json',
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_revisar_en_lote(self, api_client, administrador, anamnesis, edicion_guardada):
        ids = [str(r.id) for r in anamnesis.revisiones.all()]
        api_client.force_authenticate(user=administrador)

        response = api_client.post(
            _url('anamnesis-revisiones-revisar-lote', anamnesis.paciente),
            {'revisiones': ids, 'aprobado': True},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['revisiones']) == 2
        assert response.data['estado']['status'] == 'VALID'
