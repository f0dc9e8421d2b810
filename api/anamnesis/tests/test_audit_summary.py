# api/anamnesis/tests/test_audit_summary.py
import pytest

from api.anamnesis.services.audit_summary_service import formatear_resumen_auditoria, formatear_valor
from api.anamnesis.services.diff_service import calcular_cambios


def test_sin_cambios_devuelve_texto_fijo():
    assert formatear_resumen_auditoria(()) == 'Sin cambios'


def test_resumen_agrupado_por_seccion(registro_base):
    actual = dict(
        registro_base,
        bruxismo=True,
        tieneAlergias=True,
        allergies=[{'allergyId': 1}],
    )
    cambios = calcular_cambios(registro_base, actual)

    resumen = formatear_resumen_auditoria(cambios)

    assert resumen == (
        '[allergies] Tiene alergias: modified (critical), Lista de alergias: added (critical); '
        '[habits] Bruxismo: added (low)'
    )


def test_resumen_no_depende_de_la_entrada_original(registro_base):
    actual = dict(registro_base, customNotes='Refiere sensibilidad')
    cambios = calcular_cambios(registro_base, actual)
    assert formatear_resumen_auditoria(cambios) == formatear_resumen_auditoria(list(cambios))


@pytest.mark.parametrize('valor,esperado', [
    (None, '—'),
    (True, 'Sí'),
    (False, 'No'),
    (0, '0'),
    ('', '—'),
    ('RUTINA', 'RUTINA'),
    ([], 'Ninguno'),
    ([{'allergyId': 1}], '1 elemento'),
    ([1, 2, 3], '3 elementos'),
    ({'label': 'Penicilina'}, 'Penicilina'),
    ({'name': 'Ibuprofeno'}, 'Ibuprofeno'),
])
def test_formatear_valor(valor, esperado):
    assert formatear_valor(valor) == esperado
