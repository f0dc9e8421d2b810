# api/anamnesis/services/edit_session.py
"""
Sesión de edición de anamnesis fuera de consulta.

Máquina de estados explícita, independiente de la capa de presentación:

    IDLE -> EDITING -> IDLE              (sin cambios, aviso informativo)
                    -> AWAITING_CONTEXT  (hay cambios)
    AWAITING_CONTEXT -> EDITING          (cierra el diálogo, conserva ediciones)
                     -> IDLE             (descarta)
                     -> SUBMITTING       (contexto válido)
    SUBMITTING -> IDLE                   (guardado correcto)
               -> AWAITING_CONTEXT       (falla; se conserva todo)
"""
import copy
import logging
from typing import Any, Callable, Dict, Optional

from api.anamnesis.constants import MENSAJE_SIN_CAMBIOS_PARA_GUARDAR
from api.anamnesis.exceptions import SubmissionError, TransicionInvalidaError
from .audit_summary_service import formatear_resumen_auditoria
from .change_aggregator import agregar_cambios
from .change_types import ContextoEdicion, ResultadoValidacion, ResumenCambios
from .diff_service import calcular_cambios
from .edit_context_validator import validar_contexto_edicion
from .patient_rules import ContextoPaciente

logger = logging.getLogger(__name__)


IDLE = 'IDLE'
EDITING = 'EDITING'
AWAITING_CONTEXT = 'AWAITING_CONTEXT'
SUBMITTING = 'SUBMITTING'


class SesionEdicionAnamnesis:
    """
    Mantiene la copia de trabajo privada de una edición.

    Es la contraparte del lado cliente de
    OutsideConsultationService.guardar_edicion: el servidor repite el
    mismo cálculo de cambios y validación antes de persistir.

    `persistir` recibe el payload de guardado y se invoca una sola vez
    por intento; no se reintenta automáticamente.
    """

    def __init__(
        self,
        registro_inicial: Optional[Dict],
        persistir: Callable[[Dict[str, Any]], Any],
        contexto_paciente: Optional[ContextoPaciente] = None,
    ):
        self.registro_inicial = copy.deepcopy(registro_inicial or {})
        self.copia_trabajo = copy.deepcopy(self.registro_inicial)
        self.persistir = persistir
        self.contexto_paciente = contexto_paciente

        self.estado = IDLE
        self.cambios = ()
        self.resumen: Optional[ResumenCambios] = None
        self.contexto_edicion: Optional[ContextoEdicion] = None
        self.ultima_validacion: Optional[ResultadoValidacion] = None
        self.aviso: Optional[str] = None
        self.ultimo_error: Optional[str] = None

    # ================== TRANSICIONES ==================

    def _exigir_estado(self, *estados):
        if self.estado not in estados:
            raise TransicionInvalidaError(
                f"Operación no permitida en estado {self.estado}"
            )

    def iniciar_edicion(self) -> Dict:
        self._exigir_estado(IDLE)
        self.estado = EDITING
        self.aviso = None
        return self.copia_trabajo

    def actualizar_campo(self, ruta: str, valor: Any):
        """Asigna un valor en la copia de trabajo (rutas con puntos para objetos anidados)"""
        self._exigir_estado(EDITING)
        partes = ruta.split('.')
        destino = self.copia_trabajo
        for parte in partes[:-1]:
            if not isinstance(destino.get(parte), dict):
                destino[parte] = {}
            destino = destino[parte]
        destino[partes[-1]] = valor

    def solicitar_guardado(self) -> ResumenCambios:
        """Calcula los cambios; sin cambios vuelve a IDLE sin pedir contexto"""
        self._exigir_estado(EDITING)
        self.cambios = calcular_cambios(
            self.registro_inicial, self.copia_trabajo, self.contexto_paciente
        )
        self.resumen = agregar_cambios(self.cambios)

        if not self.resumen.tiene_cambios:
            self.estado = IDLE
            self.aviso = MENSAJE_SIN_CAMBIOS_PARA_GUARDAR
        else:
            self.estado = AWAITING_CONTEXT
        return self.resumen

    def validar(self, contexto: ContextoEdicion) -> ResultadoValidacion:
        self._exigir_estado(AWAITING_CONTEXT)
        self.contexto_edicion = contexto
        self.ultima_validacion = validar_contexto_edicion(contexto, self.cambios)
        return self.ultima_validacion

    def volver_a_editar(self):
        self._exigir_estado(AWAITING_CONTEXT)
        self.estado = EDITING

    def descartar(self):
        self._exigir_estado(EDITING, AWAITING_CONTEXT)
        self.copia_trabajo = copy.deepcopy(self.registro_inicial)
        self.cambios = ()
        self.resumen = None
        self.contexto_edicion = None
        self.ultima_validacion = None
        self.estado = IDLE

    def construir_payload(self) -> Dict[str, Any]:
        return {
            'updatedRecord': copy.deepcopy(self.copia_trabajo),
            'editContext': self.contexto_edicion.to_payload(),
            'changes': self.cambios,
            'auditSummary': formatear_resumen_auditoria(self.cambios),
        }

    def confirmar(self, contexto: ContextoEdicion) -> ResultadoValidacion:
        """
        Valida el contexto y, si es válido, entrega el payload a persistencia.

        Returns:
            ResultadoValidacion. Si no es válido la sesión permanece en
            AWAITING_CONTEXT y no se llama a persistencia.

        Raises:
            SubmissionError: si persistencia falla. La sesión vuelve a
            AWAITING_CONTEXT con cambios, contexto y copia intactos.
        """
        resultado = self.validar(contexto)
        if not resultado.es_valido:
            return resultado

        self.estado = SUBMITTING
        self.ultimo_error = None
        payload = self.construir_payload()

        try:
            self.persistir(payload)
        except Exception as e:
            self.estado = AWAITING_CONTEXT
            self.ultimo_error = str(e)
            logger.error(f"Error al guardar anamnesis fuera de consulta: {str(e)}")
            raise SubmissionError(f"Error al guardar anamnesis: {str(e)}", causa=e) from e

        self.registro_inicial = copy.deepcopy(self.copia_trabajo)
        self.cambios = ()
        self.resumen = None
        self.contexto_edicion = None
        self.estado = IDLE
        return resultado
