# api/anamnesis/services/outside_consultation_service.py
"""
Servicio de guardado de anamnesis editada fuera de consulta.

Recibe el registro actualizado y el contexto de edición, recalcula los
cambios contra el estado guardado, valida el contexto y escribe en una
sola transacción: anamnesis, registro de auditoría y revisiones pendientes.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from api.anamnesis.constants import MENSAJE_SIN_CAMBIOS_PARA_GUARDAR, SEVERIDAD_CRITICA
from api.anamnesis.exceptions import SubmissionError
from ..repositories.anamnesis_repository import (
    AnamnesisRepository,
    AuditLogRepository,
    RevisionRepository,
)
from .audit_summary_service import formatear_resumen_auditoria, formatear_valor
from .change_aggregator import agregar_cambios
from .diff_service import calcular_cambios
from .edit_context_validator import validar_contexto_edicion
from .field_classifier import mensaje_severidad, requisitos_validacion_campo
from .patient_rules import ContextoPaciente
from .snapshot_service import (
    completar_con_inicial,
    datos_modelo_desde_snapshot,
    snapshot_desde_modelo,
)
from .status_service import AnamnesisStatusService

logger = logging.getLogger(__name__)

MOTIVO_REVISION_POR_DEFECTO = 'Cambio crítico sin verificación con el paciente'


class OutsideConsultationService:

    @staticmethod
    def serializar_cambios(cambios, detallado=False):
        resultado = []
        for cambio in cambios:
            item = cambio.to_dict()
            if detallado:
                item['severityMessage'] = mensaje_severidad(cambio.severidad)
                item['oldValueDisplay'] = formatear_valor(cambio.valor_anterior)
                item['newValueDisplay'] = formatear_valor(cambio.valor_nuevo)
                requisitos = requisitos_validacion_campo(cambio.ruta)
                item['requiresReason'] = requisitos['requiere_motivo']
                item['requiresVerification'] = requisitos['requiere_verificacion']
            resultado.append(item)
        return resultado

    @classmethod
    def _calcular(cls, paciente, anamnesis, registro_enviado):
        inicial = snapshot_desde_modelo(anamnesis)
        actual = completar_con_inicial(inicial, registro_enviado)
        contexto_paciente = ContextoPaciente.desde_paciente(paciente)
        cambios = calcular_cambios(inicial, actual, contexto_paciente)
        return inicial, actual, contexto_paciente, cambios

    @classmethod
    def previsualizar_cambios(cls, paciente, registro_enviado, contexto=None):
        """
        Cambios, resumen y validación sin guardar nada.

        Args:
            paciente: Instancia de Paciente
            registro_enviado: Snapshot editado (claves del registro clínico)
            contexto: ContextoEdicion opcional; si viene se valida
        """
        anamnesis = AnamnesisRepository.get_by_paciente(paciente.id)
        _, _, _, cambios = cls._calcular(paciente, anamnesis, registro_enviado)
        resumen = agregar_cambios(cambios)

        respuesta = {
            'changes': cls.serializar_cambios(cambios, detallado=True),
            'bySection': {
                seccion: [c.ruta for c in items]
                for seccion, items in resumen.por_seccion.items()
            },
            'severityCounts': resumen.conteo.to_dict(),
            'hasChanges': resumen.tiene_cambios,
            'hasCriticalChanges': resumen.tiene_cambios_criticos,
            'auditSummary': formatear_resumen_auditoria(cambios),
        }
        if contexto is not None and resumen.tiene_cambios:
            respuesta['validation'] = validar_contexto_edicion(contexto, cambios).to_dict()
        return respuesta

    @classmethod
    def guardar_edicion(cls, paciente, registro_enviado, contexto, usuario, metadatos=None):
        """
        Guarda una edición fuera de consulta.

        Returns:
            dict con anamnesis, auditoria, revisiones, cambios, resumen y
            validacion. Si no hay cambios no escribe nada y
            'anamnesis_guardada' es False.

        Raises:
            ValidationError: contexto insuficiente o datos clínicos inválidos
            SubmissionError: falla de la base de datos al guardar
        """
        metadatos = metadatos or {}

        try:
            with transaction.atomic():
                anamnesis = AnamnesisRepository.get_for_update(paciente.id)
                inicial, actual, contexto_paciente, cambios = cls._calcular(
                    paciente, anamnesis, registro_enviado
                )
                resumen = agregar_cambios(cambios)

                if not resumen.tiene_cambios:
                    logger.info(f"Anamnesis de paciente {paciente.id} sin cambios; no se guarda")
                    return {
                        'anamnesis_guardada': False,
                        'mensaje': MENSAJE_SIN_CAMBIOS_PARA_GUARDAR,
                        'anamnesis': anamnesis,
                        'auditoria': None,
                        'revisiones': [],
                        'cambios': cambios,
                        'resumen': resumen,
                        'validacion': None,
                    }

                validacion = validar_contexto_edicion(contexto, cambios)
                if not validacion.es_valido:
                    logger.warning(
                        f"Edición de anamnesis rechazada para paciente {paciente.id}: "
                        f"{'; '.join(validacion.errores)}"
                    )
                    raise ValidationError({'editContext': validacion.errores})

                datos = datos_modelo_desde_snapshot(actual, contexto_paciente)
                if anamnesis is None:
                    accion = 'CREATE'
                    anamnesis = AnamnesisRepository.create(paciente=paciente, **datos)
                else:
                    accion = 'UPDATE'
                    anamnesis = AnamnesisRepository.update(anamnesis, **datos)

                requiere_revision = (
                    resumen.tiene_cambios_criticos and not contexto.verificado_con_paciente
                )
                resumen_texto = formatear_resumen_auditoria(cambios)

                auditoria = AuditLogRepository.create(
                    anamnesis=anamnesis,
                    paciente=paciente,
                    accion=accion,
                    actor=usuario,
                    rol_actor=getattr(usuario, 'rol', '') or '',
                    estado_anterior=inicial,
                    estado_nuevo=snapshot_desde_modelo(anamnesis),
                    cambios=cls.serializar_cambios(cambios),
                    conteo_severidad=resumen.conteo.to_dict(),
                    resumen=resumen_texto,
                    es_fuera_consulta=True,
                    motivo=contexto.motivo or '',
                    fuente_informacion=contexto.fuente_informacion,
                    verificado_con_paciente=contexto.verificado_con_paciente,
                    requiere_revision=requiere_revision,
                    ip_origen=metadatos.get('ip'),
                    user_agent=(metadatos.get('user_agent') or '')[:255],
                    ruta_solicitud=(metadatos.get('ruta') or '')[:255],
                )

                revisiones = []
                if requiere_revision:
                    motivo = contexto.motivo or MOTIVO_REVISION_POR_DEFECTO
                    for cambio in cambios:
                        if cambio.severidad != SEVERIDAD_CRITICA:
                            continue
                        revisiones.append(RevisionRepository.create(
                            anamnesis=anamnesis,
                            paciente=paciente,
                            auditoria=auditoria,
                            ruta_campo=cambio.ruta,
                            etiqueta_campo=cambio.etiqueta,
                            valor_anterior=cambio.valor_anterior,
                            valor_nuevo=cambio.valor_nuevo,
                            motivo=motivo,
                            severidad=cambio.severidad,
                            creado_por=usuario,
                        ))
                    anamnesis.motivo_revision_pendiente = motivo
                elif contexto.verificado_con_paciente:
                    anamnesis.ultima_verificacion = timezone.now()
                    anamnesis.verificado_por = usuario

                AnamnesisStatusService.actualizar_estado(anamnesis)

        except DatabaseError as e:
            logger.error(f"Error de base de datos al guardar anamnesis de paciente {paciente.id}: {str(e)}")
            raise SubmissionError(f"Error al guardar anamnesis: {str(e)}", causa=e) from e

        logger.info(
            f"Anamnesis {anamnesis.id} guardada fuera de consulta por "
            f"{getattr(usuario, 'username', 'desconocido')}: {resumen_texto}"
        )

        return {
            'anamnesis_guardada': True,
            'mensaje': 'Anamnesis actualizada correctamente',
            'anamnesis': anamnesis,
            'auditoria': auditoria,
            'revisiones': revisiones,
            'cambios': cambios,
            'resumen': resumen,
            'validacion': validacion,
        }
