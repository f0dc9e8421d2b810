# api/anamnesis/tests/test_diff_service.py
import copy

import pytest

from api.anamnesis.services.diff_service import (
    calcular_cambios,
    escalares_iguales,
    extraer_valor,
    tipo_de_cambio,
)
from api.anamnesis.services.patient_rules import ContextoPaciente


def _rutas(cambios):
    return [c.ruta for c in cambios]


class TestCalcularCambios:

    def test_registro_identico_no_tiene_cambios(self, registro_base, mujer_adulta):
        assert calcular_cambios(registro_base, copy.deepcopy(registro_base), mujer_adulta) == ()

    def test_alta_de_alergia(self, registro_base, mujer_adulta):
        actual = dict(registro_base, tieneAlergias=True, allergies=[{'allergyId': 1, 'severity': 'SEVERE'}])

        cambios = calcular_cambios(registro_base, actual, mujer_adulta)

        assert _rutas(cambios) == ['tieneAlergias', 'allergies']
        assert all(c.severidad == 'critical' for c in cambios)
        assert all(c.seccion == 'allergies' for c in cambios)
        assert cambios[0].tipo_cambio == 'modified'
        assert cambios[1].tipo_cambio == 'added'

    def test_mismo_valor_no_es_cambio(self, registro_base):
        inicial = dict(registro_base, tieneDolorActual=True, dolorIntensidad=3)
        actual = dict(registro_base, tieneDolorActual=True, dolorIntensidad=3)
        assert calcular_cambios(inicial, actual) == ()

    def test_null_a_cero_es_agregado(self, registro_base):
        inicial = dict(registro_base, higieneCepilladosDia=None)
        actual = dict(registro_base, higieneCepilladosDia=0)

        cambios = calcular_cambios(inicial, actual)

        assert len(cambios) == 1
        assert cambios[0].ruta == 'higieneCepilladosDia'
        assert cambios[0].tipo_cambio == 'added'

    def test_booleano_no_equivale_a_entero(self):
        cambios = calcular_cambios({'bruxismo': 1}, {'bruxismo': True})
        assert _rutas(cambios) == ['bruxismo']

    def test_clave_ausente_equivale_a_null(self):
        assert calcular_cambios({}, {'bruxismo': None}) == ()

    def test_reordenar_coleccion_no_es_cambio(self, registro_base):
        medicaciones = [{'medicationId': 1}, {'medicationId': 2, 'notes': 'noche'}]
        inicial = dict(registro_base, tieneMedicacionActual=True, medications=medicaciones)
        actual = dict(registro_base, tieneMedicacionActual=True, medications=list(reversed(medicaciones)))
        assert calcular_cambios(inicial, actual) == ()

    def test_coleccion_modificada_es_un_solo_cambio(self, registro_base):
        inicial = dict(registro_base, medications=[{'medicationId': 1}])
        actual = dict(registro_base, medications=[{'medicationId': 1}, {'medicationId': 7}])

        cambios = calcular_cambios(inicial, actual)

        assert len(cambios) == 1
        assert cambios[0].ruta == 'medications'
        assert cambios[0].tipo_cambio == 'modified'
        assert cambios[0].valor_anterior == [{'medicationId': 1}]

    def test_coleccion_vaciada_es_eliminada(self, registro_base):
        inicial = dict(registro_base, antecedents=[{'customName': 'Hipertensión'}])
        cambios = calcular_cambios(inicial, registro_base)
        assert cambios[0].tipo_cambio == 'removed'
        assert cambios[0].severidad == 'medium'

    def test_notas_none_y_vacio_son_equivalentes(self, registro_base):
        inicial = dict(registro_base, customNotes=None)
        assert calcular_cambios(inicial, registro_base) == ()

    def test_orden_de_campos_es_el_del_esquema(self, registro_base):
        actual = dict(
            registro_base,
            customNotes='Llamó por sensibilidad',
            allergies=[{'allergyId': 2}],
            bruxismo=True,
            tieneDolorActual=True,
        )
        cambios = calcular_cambios(registro_base, actual)
        assert _rutas(cambios) == ['tieneDolorActual', 'bruxismo', 'allergies', 'customNotes']

    def test_seccion_mujer_en_adulta(self, registro_base, mujer_adulta):
        actual = dict(registro_base, womenSpecific={'embarazada': True, 'semanasEmbarazo': 12})

        cambios = calcular_cambios(registro_base, actual, mujer_adulta)

        assert _rutas(cambios) == ['womenSpecific.embarazada', 'womenSpecific.semanasEmbarazo']
        assert all(c.seccion == 'women_specific' for c in cambios)
        assert cambios[0].severidad == 'medium'

    def test_seccion_mujer_se_omite_en_varon(self, registro_base):
        actual = dict(registro_base, womenSpecific={'embarazada': True})
        varon = ContextoPaciente(sexo='M', edad_anios=40)
        assert calcular_cambios(registro_base, actual, varon) == ()

    def test_seccion_mujer_se_omite_en_nina(self, registro_base):
        actual = dict(registro_base, womenSpecific={'embarazada': False})
        nina = ContextoPaciente(sexo='F', edad_anios=8)
        assert calcular_cambios(registro_base, actual, nina) == ()

    def test_seccion_pediatrica_solo_en_ninos(self, registro_base, mujer_adulta):
        actual = dict(registro_base, tieneHabitosSuccion=True)
        nino = ContextoPaciente(sexo='M', edad_anios=5)

        assert calcular_cambios(registro_base, actual, mujer_adulta) == ()
        assert _rutas(calcular_cambios(registro_base, actual, nino)) == ['tieneHabitosSuccion']

    def test_sin_contexto_compara_todas_las_secciones(self, registro_base):
        actual = dict(registro_base, tieneHabitosSuccion=True, womenSpecific={'embarazada': True})
        assert _rutas(calcular_cambios(registro_base, actual)) == [
            'tieneHabitosSuccion',
            'womenSpecific.embarazada',
        ]

    def test_inicial_inexistente(self):
        cambios = calcular_cambios(None, {'tieneAlergias': True, 'allergies': [{'allergyId': 3}]})
        assert _rutas(cambios) == ['tieneAlergias', 'allergies']
        assert all(c.tipo_cambio == 'added' for c in cambios)

    def test_elemento_con_claves_de_tipos_mezclados(self):
        inicial = {'allergies': [{'allergyId': 1}]}
        actual = {'allergies': [{1: 'x', 'allergyId': 1}]}

        cambios = calcular_cambios(inicial, actual)

        assert _rutas(cambios) == ['allergies']
        assert cambios[0].tipo_cambio == 'modified'
        assert calcular_cambios(actual, copy.deepcopy(actual)) == ()

    def test_no_modifica_las_entradas(self, registro_base):
        actual = dict(registro_base, allergies=[{'allergyId': 1}])
        copia_inicial = copy.deepcopy(registro_base)
        copia_actual = copy.deepcopy(actual)

        calcular_cambios(registro_base, actual)

        assert registro_base == copia_inicial
        assert actual == copia_actual

    @pytest.mark.parametrize('ruta,anterior,nuevo', [
        ('higieneCepilladosDia', None, 3),
        ('allergies', [], [{'allergyId': 9}]),
        ('customNotes', '', 'Nueva nota'),
        ('urgenciaPercibida', None, 'RUTINA'),
    ])
    def test_simetria_agregado_eliminado(self, registro_base, ruta, anterior, nuevo):
        a = dict(registro_base, **{ruta: anterior})
        b = dict(registro_base, **{ruta: nuevo})

        ida = calcular_cambios(a, b)
        vuelta = calcular_cambios(b, a)

        assert [c.tipo_cambio for c in ida] == ['added']
        assert [c.tipo_cambio for c in vuelta] == ['removed']
        assert ida[0].ruta == vuelta[0].ruta == ruta


class TestUtilidades:

    def test_extraer_valor_ruta_anidada(self):
        assert extraer_valor({'womenSpecific': {'embarazada': True}}, 'womenSpecific.embarazada') is True
        assert extraer_valor({'womenSpecific': None}, 'womenSpecific.embarazada') is None
        assert extraer_valor({}, 'bruxismo') is None

    def test_tipo_de_cambio(self):
        assert tipo_de_cambio(None, 0) == 'added'
        assert tipo_de_cambio([], [1]) == 'added'
        assert tipo_de_cambio('x', '') == 'removed'
        assert tipo_de_cambio(False, True) == 'modified'

    def test_escalares_iguales(self):
        assert escalares_iguales(3, 3.0)
        assert not escalares_iguales(None, 0)
        assert not escalares_iguales(True, 1)
        assert not escalares_iguales('3', 3)
        assert escalares_iguales({'a': 1, 'b': 2}, {'b': 2, 'a': 1})
