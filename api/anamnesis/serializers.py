# api/anamnesis/serializers.py

from django.conf import settings
from django.utils.dateparse import parse_date, parse_datetime
from rest_framework import serializers

from api.anamnesis.constants import FUENTES_INFORMACION, URGENCIA_CHOICES
from api.anamnesis.models import AnamnesisAuditLog, AnamnesisRevisionPendiente
from api.anamnesis.schemas import errores_coleccion, errores_datos_mujer
from api.anamnesis.services.change_types import ContextoEdicion


class AnamnesisRecordSerializer(serializers.Serializer):
    """
    Registro clínico editado (claves camelCase del formulario).
    Todos los campos son opcionales: los omitidos conservan su valor guardado.
    """
    tieneDolorActual = serializers.BooleanField(required=False)
    dolorIntensidad = serializers.IntegerField(required=False, allow_null=True, min_value=1, max_value=10)
    urgenciaPercibida = serializers.ChoiceField(choices=URGENCIA_CHOICES, required=False, allow_null=True)
    ultimaVisitaDental = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    customNotes = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    tieneAlergias = serializers.BooleanField(required=False)
    allergies = serializers.ListField(child=serializers.JSONField(), required=False, allow_null=True)
    tieneMedicacionActual = serializers.BooleanField(required=False)
    medications = serializers.ListField(child=serializers.JSONField(), required=False, allow_null=True)

    tieneEnfermedadesCronicas = serializers.BooleanField(required=False)
    antecedents = serializers.ListField(child=serializers.JSONField(), required=False, allow_null=True)

    expuestoHumoTabaco = serializers.BooleanField(required=False, allow_null=True)
    bruxismo = serializers.BooleanField(required=False, allow_null=True)
    higieneCepilladosDia = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=10)
    usaHiloDental = serializers.BooleanField(required=False, allow_null=True)

    womenSpecific = serializers.JSONField(required=False, allow_null=True)

    tieneHabitosSuccion = serializers.BooleanField(required=False, allow_null=True)
    lactanciaRegistrada = serializers.BooleanField(required=False, allow_null=True)

    def _validar_coleccion(self, nombre, value):
        errores = errores_coleccion(nombre, value)
        if errores:
            raise serializers.ValidationError(errores)
        return value

    def validate_allergies(self, value):
        return self._validar_coleccion('allergies', value)

    def validate_medications(self, value):
        return self._validar_coleccion('medications', value)

    def validate_antecedents(self, value):
        return self._validar_coleccion('antecedents', value)

    def validate_womenSpecific(self, value):
        errores = errores_datos_mujer(value)
        if errores:
            raise serializers.ValidationError(errores)
        return value

    def validate_ultimaVisitaDental(self, value):
        """Se conserva como fecha ISO (YYYY-MM-DD)"""
        if not value:
            return None
        fecha = parse_date(value)
        if fecha is None:
            fecha_hora = parse_datetime(value)
            fecha = fecha_hora.date() if fecha_hora else None
        if fecha is None:
            raise serializers.ValidationError("Fecha inválida, use el formato YYYY-MM-DD")
        return fecha.isoformat()

    def validate(self, attrs):
        if attrs.get('tieneAlergias') and 'allergies' in attrs and not attrs['allergies']:
            raise serializers.ValidationError(
                {"allergies": "Debe registrar las alergias del paciente"}
            )
        if attrs.get('tieneMedicacionActual') and 'medications' in attrs and not attrs['medications']:
            raise serializers.ValidationError(
                {"medications": "Debe registrar la medicación actual del paciente"}
            )
        return attrs


class EditContextSerializer(serializers.Serializer):
    """
    Contexto de edición. La fuente de información y el motivo se validan
    en el servicio según la severidad de los cambios.
    """
    reason = serializers.CharField(
        required=False,
        allow_null=True,
        allow_blank=True,
        max_length=getattr(settings, 'ANAMNESIS_MOTIVO_MAX_LENGTH', 1000),
    )
    informationSource = serializers.ChoiceField(
        choices=FUENTES_INFORMACION,
        required=False,
        allow_null=True,
    )
    verifiedWithPatient = serializers.BooleanField(required=False, default=False)

    def to_contexto(self):
        datos = self.validated_data
        return ContextoEdicion(
            fuente_informacion=datos.get('informationSource'),
            verificado_con_paciente=datos.get('verifiedWithPatient', False),
            motivo=datos.get('reason'),
        )


class OutsideConsultationEditSerializer(serializers.Serializer):
    updatedRecord = AnamnesisRecordSerializer()
    editContext = EditContextSerializer(required=False)

    def to_contexto(self):
        datos = self.validated_data.get('editContext') or {}
        return ContextoEdicion(
            fuente_informacion=datos.get('informationSource'),
            verificado_con_paciente=datos.get('verifiedWithPatient', False),
            motivo=datos.get('reason'),
        )


class AnamnesisAuditLogSerializer(serializers.ModelSerializer):
    actor_nombre = serializers.SerializerMethodField()
    revisado_por_nombre = serializers.SerializerMethodField()

    class Meta:
        model = AnamnesisAuditLog
        fields = [
            'id', 'anamnesis', 'paciente', 'accion', 'actor', 'actor_nombre', 'rol_actor',
            'resumen', 'cambios', 'conteo_severidad', 'es_fuera_consulta', 'motivo',
            'fuente_informacion', 'verificado_con_paciente', 'requiere_revision',
            'revisado_en', 'revisado_por', 'revisado_por_nombre', 'fecha',
        ]
        read_only_fields = fields

    def get_actor_nombre(self, obj):
        return obj.actor.get_full_name() if obj.actor else None

    def get_revisado_por_nombre(self, obj):
        return obj.revisado_por.get_full_name() if obj.revisado_por else None


class AnamnesisAuditLogDetailSerializer(AnamnesisAuditLogSerializer):

    class Meta(AnamnesisAuditLogSerializer.Meta):
        fields = AnamnesisAuditLogSerializer.Meta.fields + [
            'estado_anterior', 'estado_nuevo', 'ip_origen', 'user_agent', 'ruta_solicitud',
        ]
        read_only_fields = fields


class AnamnesisRevisionSerializer(serializers.ModelSerializer):
    creado_por_nombre = serializers.SerializerMethodField()

    class Meta:
        model = AnamnesisRevisionPendiente
        fields = [
            'id', 'anamnesis', 'paciente', 'auditoria', 'ruta_campo', 'etiqueta_campo',
            'valor_anterior', 'valor_nuevo', 'motivo', 'severidad', 'creado_por',
            'creado_por_nombre', 'fecha_creacion', 'aprobado', 'revisado_en',
            'revisado_por', 'notas_revision',
        ]
        read_only_fields = fields

    def get_creado_por_nombre(self, obj):
        return obj.creado_por.get_full_name() if obj.creado_por else None


class ReviewDecisionSerializer(serializers.Serializer):
    aprobado = serializers.BooleanField()
    notas = serializers.CharField(required=False, allow_blank=True, default='')


class BatchReviewSerializer(ReviewDecisionSerializer):
    revisiones = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
