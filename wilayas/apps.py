from django.apps import AppConfig


class WilayasConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'wilayas'
