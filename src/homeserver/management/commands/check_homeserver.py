import logging
from urllib.parse import urlparse

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

LOG = logging.getLogger(__name__)


def _mask(val: str | None) -> str:
    if not val:
        return "<empty>"
    n = len(val)
    if n <= 4:
        return "*" * n
    return val[:2] + "*" * (n - 4) + val[-2:]


class Command(BaseCommand):
    help = "Check the homeserver forwarding settings (exits non-zero if the URL or AS token is missing)."

    def handle(self, *args, **opts):
        url = settings.HOMESERVER_REGISTER_URL
        token = settings.HOMESERVER_AS_TOKEN

        self.stdout.write(f"HOMESERVER_REGISTER_URL            = {url or '<empty>'}")
        self.stdout.write(f"HOMESERVER_AS_TOKEN                = {_mask(token)}")
        self.stdout.write(f"HOMESERVER_TIMEOUT                 = {settings.HOMESERVER_TIMEOUT}s")
        self.stdout.write(
            f"HOMESERVER_MAX_IDLE_CONNS_PER_HOST = {settings.HOMESERVER_MAX_IDLE_CONNS_PER_HOST}"
        )

        problems = []
        parsed = urlparse(url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            problems.append("HOMESERVER_REGISTER_URL must be an absolute http(s) URL")
        elif parsed.scheme == "http":
            LOG.warning("homeserver URL is plain http; the AS token travels in the query string")
        if not token:
            problems.append("HOMESERVER_AS_TOKEN is empty")

        if problems:
            raise CommandError("; ".join(problems))
        self.stdout.write(self.style.SUCCESS("Homeserver settings OK"))
