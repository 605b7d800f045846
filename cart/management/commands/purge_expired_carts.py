from cart.services import purge_expired_carts
from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = "Delete expired carts and their line items"

    def handle(self, *args, **options):
        count = purge_expired_carts()
        self.stdout.write(self.style.SUCCESS(f"Purged {count} expired carts."))
