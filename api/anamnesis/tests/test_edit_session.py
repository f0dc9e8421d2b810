# api/anamnesis/tests/test_edit_session.py
from unittest.mock import Mock

import pytest

from api.anamnesis.constants import MENSAJE_MOTIVO_REQUERIDO, MENSAJE_SIN_CAMBIOS_PARA_GUARDAR
from api.anamnesis.exceptions import SubmissionError, TransicionInvalidaError
from api.anamnesis.services.change_types import ContextoEdicion
from api.anamnesis.services.edit_session import (
    AWAITING_CONTEXT,
    EDITING,
    IDLE,
    SesionEdicionAnamnesis,
)


@pytest.fixture
def persistir():
    return Mock(return_value={'ok': True})


@pytest.fixture
def sesion(registro_base, persistir, mujer_adulta):
    return SesionEdicionAnamnesis(registro_base, persistir, mujer_adulta)


CONTEXTO_VALIDO = ContextoEdicion(
    fuente_informacion='PHONE',
    verificado_con_paciente=False,
    motivo='Paciente informa nueva alergia',
)


class TestSesionEdicion:

    def test_sin_cambios_vuelve_a_idle_sin_pedir_contexto(self, sesion, persistir):
        sesion.iniciar_edicion()

        resumen = sesion.solicitar_guardado()

        assert resumen.tiene_cambios is False
        assert sesion.estado == IDLE
        assert sesion.aviso == MENSAJE_SIN_CAMBIOS_PARA_GUARDAR
        persistir.assert_not_called()

    def test_editar_y_revertir_no_es_cambio(self, sesion):
        sesion.iniciar_edicion()
        sesion.actualizar_campo('bruxismo', True)
        sesion.actualizar_campo('bruxismo', None)

        sesion.solicitar_guardado()

        assert sesion.estado == IDLE

    def test_con_cambios_espera_contexto(self, sesion):
        sesion.iniciar_edicion()
        sesion.actualizar_campo('tieneAlergias', True)
        sesion.actualizar_campo('allergies', [{'allergyId': 1}])

        resumen = sesion.solicitar_guardado()

        assert sesion.estado == AWAITING_CONTEXT
        assert resumen.tiene_cambios_criticos is True
        assert resumen.conteo.critical == 2

    def test_contexto_invalido_no_persiste(self, sesion, persistir):
        sesion.iniciar_edicion()
        sesion.actualizar_campo('medications', [{'medicationId': 3}])
        sesion.solicitar_guardado()

        resultado = sesion.confirmar(ContextoEdicion(fuente_informacion='PHONE'))

        assert resultado.es_valido is False
        assert MENSAJE_MOTIVO_REQUERIDO in resultado.errores
        assert sesion.estado == AWAITING_CONTEXT
        persistir.assert_not_called()

    def test_confirmar_entrega_payload_y_vuelve_a_idle(self, sesion, persistir):
        sesion.iniciar_edicion()
        sesion.actualizar_campo('tieneAlergias', True)
        sesion.actualizar_campo('allergies', [{'allergyId': 1}])
        sesion.solicitar_guardado()

        resultado = sesion.confirmar(CONTEXTO_VALIDO)

        assert resultado.es_valido is True
        persistir.assert_called_once()
        payload = persistir.call_args[0][0]
        assert payload['updatedRecord']['allergies'] == [{'allergyId': 1}]
        assert payload['editContext'] == {
            'isOutsideConsultation': True,
            'informationSource': 'PHONE',
            'verifiedWithPatient': False,
            'reason': 'Paciente informa nueva alergia',
        }
        assert [c.ruta for c in payload['changes']] == ['tieneAlergias', 'allergies']
        assert payload['auditSummary'].startswith('[allergies]')
        assert sesion.estado == IDLE
        assert sesion.registro_inicial['allergies'] == [{'allergyId': 1}]

    def test_falla_de_persistencia_conserva_todo(self, sesion, persistir):
        persistir.side_effect = ConnectionError('timeout')
        sesion.iniciar_edicion()
        sesion.actualizar_campo('medications', [{'medicationId': 3}])
        sesion.solicitar_guardado()
        cambios = sesion.cambios

        with pytest.raises(SubmissionError) as excinfo:
            sesion.confirmar(CONTEXTO_VALIDO)

        assert isinstance(excinfo.value.causa, ConnectionError)
        assert sesion.estado == AWAITING_CONTEXT
        assert sesion.cambios == cambios
        assert sesion.contexto_edicion == CONTEXTO_VALIDO
        assert sesion.copia_trabajo['medications'] == [{'medicationId': 3}]
        assert sesion.ultimo_error == 'timeout'
        assert sesion.registro_inicial['medications'] == []

    def test_reintento_tras_falla(self, sesion, persistir):
        persistir.side_effect = [ConnectionError('timeout'), {'ok': True}]
        sesion.iniciar_edicion()
        sesion.actualizar_campo('medications', [{'medicationId': 3}])
        sesion.solicitar_guardado()

        with pytest.raises(SubmissionError):
            sesion.confirmar(CONTEXTO_VALIDO)
        sesion.confirmar(CONTEXTO_VALIDO)

        assert persistir.call_count == 2
        assert sesion.estado == IDLE

    def test_volver_a_editar_conserva_ediciones(self, sesion):
        sesion.iniciar_edicion()
        sesion.actualizar_campo('bruxismo', True)
        sesion.solicitar_guardado()

        sesion.volver_a_editar()

        assert sesion.estado == EDITING
        assert sesion.copia_trabajo['bruxismo'] is True

    def test_descartar_restaura_registro(self, sesion, registro_base):
        sesion.iniciar_edicion()
        sesion.actualizar_campo('bruxismo', True)
        sesion.solicitar_guardado()

        sesion.descartar()

        assert sesion.estado == IDLE
        assert sesion.copia_trabajo == registro_base

    def test_ruta_anidada(self, sesion):
        sesion.iniciar_edicion()
        sesion.actualizar_campo('womenSpecific.embarazada', True)

        resumen = sesion.solicitar_guardado()

        assert sesion.copia_trabajo['womenSpecific'] == {'embarazada': True}
        assert resumen.conteo.medium == 1

    def test_copia_de_trabajo_es_privada(self, registro_base, persistir):
        sesion = SesionEdicionAnamnesis(registro_base, persistir)
        sesion.iniciar_edicion()
        sesion.actualizar_campo('allergies', [{'allergyId': 2}])
        assert registro_base['allergies'] == []

    def test_transicion_invalida(self, sesion):
        with pytest.raises(TransicionInvalidaError):
            sesion.solicitar_guardado()
        with pytest.raises(TransicionInvalidaError):
            sesion.confirmar(CONTEXTO_VALIDO)
