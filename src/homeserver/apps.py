from django.apps import AppConfig


class HomeserverConfig(AppConfig):
    name = "src.homeserver"
