from django.apps import AppConfig


class VerifyMetaTagsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.verify_meta_tags"
    label = "verify_meta_tags"
    verbose_name = "Verify Meta Tags"

    def ready(self):
        """
        Attach to the host lifecycle.

        Only `init` and `plugin_uninstall` are connected here; the
        remaining hooks are connected from `on_init`.
        """
        from . import hooks

        hooks.connect()
