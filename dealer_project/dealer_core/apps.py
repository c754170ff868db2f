from django.apps import AppConfig


class DealerCoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "dealer_core"
    verbose_name = "Dealer back office"

    # ensure receivers are registered
    def ready(self):
        import dealer_core.signals  # noqa: F401
