from django.apps import apps
from django.core.management.base import BaseCommand, CommandError

from apps.core import hooks
from apps.core.options import options


class Command(BaseCommand):
    help = "Run the uninstall hooks of a plugin app (removes its stored options)."

    def add_arguments(self, parser):
        parser.add_argument("app_label", help="Label of the app being removed, e.g. verify_meta_tags")

    def handle(self, *args, **options_):
        label = options_["app_label"]
        try:
            apps.get_app_config(label)
        except LookupError as exc:
            raise CommandError(f"Unknown app: {label}") from exc

        responses = hooks.plugin_uninstall.send(sender=label, store=options)
        handled = [receiver for receiver, result in responses if result]
        if not handled:
            raise CommandError(f"No uninstall handler registered for '{label}'.")

        self.stdout.write(self.style.SUCCESS(f"Uninstalled {label}."))
