from django.apps import AppConfig


class AnamnesisConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'api.anamnesis'
    verbose_name = 'Anamnesis'
