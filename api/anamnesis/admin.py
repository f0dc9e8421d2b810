# api/anamnesis/admin.py
from django.contrib import admin

from .models import AnamnesisAuditLog, AnamnesisClinica, AnamnesisRevisionPendiente


class RevisionPendienteInline(admin.TabularInline):
    model = AnamnesisRevisionPendiente
    extra = 0
    can_delete = False
    fields = ('etiqueta_campo', 'severidad', 'motivo', 'aprobado', 'revisado_por', 'revisado_en')
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(AnamnesisClinica)
class AnamnesisClinicaAdmin(admin.ModelAdmin):
    list_display = ('paciente', 'estado', 'tiene_alergias', 'tiene_medicacion_actual',
                    'tiene_revisiones_pendientes', 'fecha_modificacion')
    list_filter = ('estado', 'tiene_revisiones_pendientes', 'tiene_alergias', 'activo')
    search_fields = ('paciente__nombres', 'paciente__apellidos', 'paciente__cedula_pasaporte')
    raw_id_fields = ('paciente', 'verificado_por')
    readonly_fields = ('estado', 'tiene_revisiones_pendientes', 'revision_pendiente_desde',
                       'creado_por', 'actualizado_por', 'fecha_creacion', 'fecha_modificacion')
    inlines = [RevisionPendienteInline]

    fieldsets = (
        ('Paciente', {'fields': ('paciente',)}),
        ('General', {'fields': ('tiene_dolor_actual', 'dolor_intensidad', 'urgencia_percibida',
                                'ultima_visita_dental', 'notas_adicionales')}),
        ('Alergias y medicación', {'fields': ('tiene_alergias', 'alergias',
                                              'tiene_medicacion_actual', 'medicaciones')}),
        ('Antecedentes', {'fields': ('tiene_enfermedades_cronicas', 'antecedentes')}),
        ('Hábitos', {'fields': ('expuesto_humo_tabaco', 'bruxismo',
                                'higiene_cepillados_dia', 'usa_hilo_dental')}),
        ('Específico', {'fields': ('datos_mujer', 'tiene_habitos_succion', 'lactancia_registrada')}),
        ('Estado', {'fields': ('estado', 'tiene_revisiones_pendientes', 'revision_pendiente_desde',
                               'motivo_revision_pendiente', 'ultima_verificacion', 'verificado_por')}),
        ('Auditoría', {'classes': ('collapse',),
                       'fields': ('activo', 'creado_por', 'actualizado_por',
                                  'fecha_creacion', 'fecha_modificacion')}),
    )


@admin.register(AnamnesisAuditLog)
class AnamnesisAuditLogAdmin(admin.ModelAdmin):
    list_display = ('paciente', 'accion', 'actor', 'fuente_informacion',
                    'verificado_con_paciente', 'requiere_revision', 'fecha')
    list_filter = ('accion', 'es_fuera_consulta', 'requiere_revision', 'fuente_informacion')
    search_fields = ('paciente__nombres', 'paciente__apellidos', 'resumen', 'motivo')
    date_hierarchy = 'fecha'

    # El historial de auditoría no se edita
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(AnamnesisRevisionPendiente)
class AnamnesisRevisionPendienteAdmin(admin.ModelAdmin):
    list_display = ('paciente', 'etiqueta_campo', 'severidad', 'aprobado', 'creado_por', 'fecha_creacion')
    list_filter = ('aprobado', 'severidad')
    search_fields = ('paciente__nombres', 'paciente__apellidos', 'etiqueta_campo')
    readonly_fields = ('anamnesis', 'paciente', 'auditoria', 'ruta_campo', 'etiqueta_campo',
                       'valor_anterior', 'valor_nuevo', 'motivo', 'severidad', 'creado_por',
                       'fecha_creacion')
