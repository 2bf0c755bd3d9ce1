from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Option
from .options import OptionStore


@receiver(post_save, sender=Option)
@receiver(post_delete, sender=Option)
def invalidate_option_cache(sender, instance, **kwargs):
    """
    Signal handler to clear the cached value whenever an option row changes,
    including edits made through the Django admin.
    """
    OptionStore.invalidate(instance.name)
