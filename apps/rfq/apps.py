from django.apps import AppConfig


class RfqConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.rfq"
    verbose_name = "Vendor RFQs"
