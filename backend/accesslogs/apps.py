from django.apps import AppConfig


class AccessLogsConfig(AppConfig):
    default_auto_field = "django.db.models.AutoField"
    name = "accesslogs"
    verbose_name = "Access logs"
