from django.conf import settings
from ninja_extra.throttling import AnonRateThrottle


class RegistrationThrottle(AnonRateThrottle):
    """
    Rate limit registration attempts per IP.
    Signature recovery and bcrypt are the expensive part of a request.
    """
    scope = "registration"

    def get_rate(self):
        return settings.REGISTRATION_THROTTLE_RATE
