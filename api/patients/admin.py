# api/patients/admin.py
from django.contrib import admin
from django.utils.html import format_html

from .models.paciente import Paciente


@admin.register(Paciente)
class PacienteAdmin(admin.ModelAdmin):
    list_display = (
        'cedula_pasaporte',
        'nombre_completo',
        'sexo',
        'get_edad_completa',
        'fecha_nacimiento',
        'activo_display',
    )
    list_filter = ('sexo', 'activo', 'condicion_edad')
    search_fields = ('nombres', 'apellidos', 'cedula_pasaporte', 'telefono', 'correo')
    readonly_fields = ('creado_por', 'actualizado_por', 'fecha_creacion', 'fecha_modificacion')
    actions = ['activar_pacientes', 'desactivar_pacientes']

    fieldsets = (
        ('Identificación', {
            'fields': ('nombres', 'apellidos', 'cedula_pasaporte', 'sexo')
        }),
        ('Edad', {
            'fields': ('fecha_nacimiento', 'edad', 'condicion_edad')
        }),
        ('Contacto', {
            'fields': ('telefono', 'correo')
        }),
        ('Auditoría', {
            'classes': ('collapse',),
            'fields': ('activo', 'creado_por', 'actualizado_por', 'fecha_creacion', 'fecha_modificacion')
        }),
    )

    @admin.display(description='Edad')
    def get_edad_completa(self, obj):
        return f"{obj.edad} {obj.get_condicion_edad_display()}"

    @admin.display(description='Estado')
    def activo_display(self, obj):
        color = 'green' if obj.activo else 'red'
        texto = 'Activo' if obj.activo else 'Inactivo'
        return format_html('<span style="color: {};">{}</span>', color, texto)

    @admin.action(description='Activar pacientes seleccionados')
    def activar_pacientes(self, request, queryset):
        actualizados = queryset.update(activo=True)
        self.message_user(request, f'{actualizados} paciente(s) activado(s).')

    @admin.action(description='Desactivar pacientes seleccionados')
    def desactivar_pacientes(self, request, queryset):
        actualizados = queryset.update(activo=False)
        self.message_user(request, f'{actualizados} paciente(s) desactivado(s).')
