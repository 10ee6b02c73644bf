from django.core.management.base import BaseCommand, CommandError

from src.accounts.selectors import account_get


class Command(BaseCommand):
    help = "Show whether an address is registered (exits non-zero if it is not)."

    def add_arguments(self, parser):
        parser.add_argument("address", help="0x-prefixed address (any case).")

    def handle(self, *args, **opts):
        account = account_get(address=opts["address"])
        if account is None:
            raise CommandError(f"{opts['address']} is not registered")

        self.stdout.write(self.style.SUCCESS(f"{account.address} registered"))
        self.stdout.write(f"  display_name: {account.display_name}")
        self.stdout.write(f"  created_at:   {account.created_at.isoformat()}")
