import atexit

from django.apps import AppConfig, apps
from django.conf import settings


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core'

    def ready(self):
        from .storage import PortalStorage

        self.storage = PortalStorage(using=settings.PORTAL_DATABASE_ALIAS).open()
        atexit.register(self.storage.close)


def get_storage():
    """The process-wide storage component built when the app registry loaded."""
    return apps.get_app_config('core').storage
