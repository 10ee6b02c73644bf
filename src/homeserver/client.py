import logging
from dataclasses import dataclass
from functools import lru_cache

import requests
from django.conf import settings
from requests.adapters import HTTPAdapter

logger = logging.getLogger(__name__)

RESULT_FIELDS = ("access_token", "home_server", "user_id")


class HomeserverError(Exception):
    pass


@dataclass(frozen=True)
class RegistrationResult:
    access_token: str
    home_server: str
    user_id: str

    def as_dict(self) -> dict[str, str]:
        return {
            "access_token": self.access_token,
            "home_server": self.home_server,
            "user_id": self.user_id,
        }


def build_session(*, max_idle_per_host: int) -> requests.Session:
    """
    Pooled session shared by every request thread of the process.
    max_retries=0: a retried registration could create the account twice upstream.
    """
    adapter = HTTPAdapter(pool_connections=10, pool_maxsize=max_idle_per_host, max_retries=0)
    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class HomeserverClient:
    def __init__(self, *, session: requests.Session, register_url: str, as_token: str, timeout: float):
        self._session = session
        self._register_url = register_url
        self._as_token = as_token
        self._timeout = timeout

    def register(self, *, localpart: str, displayname: str, password_hash: str) -> RegistrationResult:
        """
        POST the registration to the identity server, once.
        Raises HomeserverError on transport failure, timeout, non-2xx or an unusable body.
        """
        if not self._register_url:
            raise HomeserverError("HOMESERVER_REGISTER_URL is not configured")

        payload = {
            "localpart": localpart,
            "displayname": displayname,
            "password_hash": password_hash,
        }
        logger.debug("registering on homeserver url=%s localpart=%s", self._register_url, localpart)
        try:
            resp = self._session.post(
                self._register_url,
                params={"access_token": self._as_token},
                json=payload,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise HomeserverError(f"homeserver request failed: {exc.__class__.__name__}") from exc

        if not 200 <= resp.status_code < 300:
            raise HomeserverError(
                f"homeserver answered {resp.status_code}: {resp.text.strip()[:200]}"
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise HomeserverError("homeserver returned a non-JSON body") from exc

        if not isinstance(body, dict):
            raise HomeserverError("homeserver returned an unexpected body")
        missing = [f for f in RESULT_FIELDS if not isinstance(body.get(f), str)]
        if missing:
            raise HomeserverError(f"homeserver response lacks {', '.join(missing)}")

        return RegistrationResult(
            access_token=body["access_token"],
            home_server=body["home_server"],
            user_id=body["user_id"],
        )


@lru_cache(maxsize=1)
def get_homeserver_client() -> HomeserverClient:
    """Process-wide client, built from settings on first use."""
    session = build_session(max_idle_per_host=settings.HOMESERVER_MAX_IDLE_CONNS_PER_HOST)
    return HomeserverClient(
        session=session,
        register_url=settings.HOMESERVER_REGISTER_URL,
        as_token=settings.HOMESERVER_AS_TOKEN,
        timeout=settings.HOMESERVER_TIMEOUT,
    )
