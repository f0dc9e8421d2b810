# api/anamnesis/constants.py
"""
Constantes del flujo de edición de anamnesis fuera de consulta.
Tablas estáticas de severidad, secciones y mensajes mostrados al usuario.
"""

# ================== SEVERIDAD ==================
SEVERIDAD_CRITICA = 'critical'
SEVERIDAD_MEDIA = 'medium'
SEVERIDAD_BAJA = 'low'

SEVERIDADES = [
    (SEVERIDAD_CRITICA, 'Crítico'),
    (SEVERIDAD_MEDIA, 'Medio'),
    (SEVERIDAD_BAJA, 'Bajo'),
]

# ================== TIPO DE CAMBIO ==================
CAMBIO_AGREGADO = 'added'
CAMBIO_ELIMINADO = 'removed'
CAMBIO_MODIFICADO = 'modified'

TIPOS_CAMBIO = [
    (CAMBIO_AGREGADO, 'Agregado'),
    (CAMBIO_ELIMINADO, 'Eliminado'),
    (CAMBIO_MODIFICADO, 'Modificado'),
]

# ================== SECCIONES ==================
SECCION_GENERAL = 'general'
SECCION_ALERGIAS = 'allergies'
SECCION_MEDICACIONES = 'medications'
SECCION_ANTECEDENTES = 'medical_history'
SECCION_HABITOS = 'habits'
SECCION_MUJER = 'women_specific'
SECCION_PEDIATRICA = 'pediatric'
SECCION_OTROS = 'other'

# Orden de presentación (no afecta la validación)
ORDEN_SECCIONES = [
    SECCION_GENERAL,
    SECCION_ALERGIAS,
    SECCION_MEDICACIONES,
    SECCION_ANTECEDENTES,
    SECCION_HABITOS,
    SECCION_MUJER,
    SECCION_PEDIATRICA,
    SECCION_OTROS,
]

# ================== FUENTE DE INFORMACIÓN ==================
FUENTES_INFORMACION = [
    ('IN_PERSON', 'Presencial'),
    ('PHONE', 'Llamada telefónica'),
    ('EMAIL', 'Correo electrónico'),
    ('DOCUMENT', 'Documento'),
    ('PATIENT_PORTAL', 'Portal del paciente'),
    ('OTHER', 'Otro'),
]

CODIGOS_FUENTE_INFORMACION = {codigo for codigo, _ in FUENTES_INFORMACION}

# ================== CAMPOS CLÍNICOS ==================
URGENCIA_CHOICES = [
    ('RUTINA', 'Rutina'),
    ('PRIORITARIO', 'Prioritario'),
    ('URGENCIA', 'Urgencia'),
]

SEVERIDAD_ALERGIA_CHOICES = [
    ('MILD', 'Leve'),
    ('MODERATE', 'Moderada'),
    ('SEVERE', 'Severa'),
]

# ================== ESTADO DE LA ANAMNESIS ==================
ESTADO_VIGENTE = 'VALID'
ESTADO_PENDIENTE_REVISION = 'PENDING_REVIEW'
ESTADO_VENCIDA = 'EXPIRED'
ESTADO_SIN_ANAMNESIS = 'NO_ANAMNESIS'

ESTADOS_ANAMNESIS = [
    (ESTADO_VIGENTE, 'Vigente'),
    (ESTADO_PENDIENTE_REVISION, 'Pendiente de revisión'),
    (ESTADO_VENCIDA, 'Vencida'),
]

ACCIONES_AUDITORIA = [
    ('CREATE', 'Creación'),
    ('UPDATE', 'Actualización'),
]

# ================== MENSAJES ==================
SIN_CAMBIOS = 'Sin cambios'

MENSAJE_MOTIVO_REQUERIDO = (
    'Se requiere una razón para los cambios en campos críticos (alergias, medicaciones)'
)
MENSAJE_FUENTE_REQUERIDA = 'Debe seleccionar la fuente de información'
MENSAJE_VERIFICACION_RECOMENDADA = (
    'Se recomienda verificar los cambios directamente con el paciente para campos sensibles'
)
MENSAJE_REVISION_OBLIGATORIA = (
    'Los cambios críticos sin verificación serán marcados para revisión obligatoria '
    'en la próxima consulta presencial'
)
MENSAJE_SIN_CAMBIOS_PARA_GUARDAR = 'No hay cambios para guardar'

MENSAJES_SEVERIDAD = {
    SEVERIDAD_CRITICA: (
        'Este campo es crítico para la seguridad del paciente. '
        'Los cambios requieren justificación.'
    ),
    SEVERIDAD_MEDIA: (
        'Este campo es importante para el historial clínico. '
        'Se recomienda verificar con el paciente.'
    ),
    SEVERIDAD_BAJA: 'Este campo es informativo. Los cambios se registran normalmente.',
}
