# api/anamnesis/services/change_types.py
"""
Estructuras de datos del seguimiento de cambios de anamnesis.
Son valores inmutables que viajan entre el motor de diferencias,
el agregador, el validador y el formateador de auditoría.
"""
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ClasificacionCampo:
    severidad: str
    etiqueta: str
    seccion: str


@dataclass(frozen=True)
class CambioCampo:
    """Una diferencia detectada entre dos versiones de la anamnesis"""
    ruta: str
    etiqueta: str
    valor_anterior: Any
    valor_nuevo: Any
    tipo_cambio: str
    severidad: str
    seccion: str

    def to_dict(self) -> Dict[str, Any]:
        """Formato compatible con frontend (claves camelCase)"""
        return {
            'fieldPath': self.ruta,
            'fieldLabel': self.etiqueta,
            'oldValue': self.valor_anterior,
            'newValue': self.valor_nuevo,
            'changeType': self.tipo_cambio,
            'severity': self.severidad,
            'section': self.seccion,
        }


# Un ChangeSet es una tupla ordenada: no se modifica después de calculada
ConjuntoCambios = Tuple[CambioCampo, ...]


@dataclass(frozen=True)
class ConteoSeveridad:
    critical: int = 0
    medium: int = 0
    low: int = 0
    total: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class ResumenCambios:
    por_seccion: Dict[str, ConjuntoCambios]
    conteo: ConteoSeveridad
    tiene_cambios: bool
    tiene_cambios_criticos: bool


@dataclass(frozen=True)
class ContextoEdicion:
    """Metadatos que el usuario aporta al guardar fuera de consulta"""
    fuente_informacion: Optional[str] = None
    verificado_con_paciente: bool = False
    motivo: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            'isOutsideConsultation': True,
            'informationSource': self.fuente_informacion,
            'verifiedWithPatient': self.verificado_con_paciente,
            'reason': self.motivo,
        }


@dataclass(frozen=True)
class ResultadoValidacion:
    es_valido: bool
    errores: List[str] = field(default_factory=list)
    advertencias: List[str] = field(default_factory=list)
    requiere_motivo: bool = False
    requiere_verificacion: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'isValid': self.es_valido,
            'errors': list(self.errores),
            'warnings': list(self.advertencias),
            'requiresReason': self.requiere_motivo,
            'requiresVerification': self.requiere_verificacion,
        }
