from django.apps import AppConfig


class StatisticsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.statistics'
    label = 'statistics'
    verbose_name = 'View tracking and analytics'
