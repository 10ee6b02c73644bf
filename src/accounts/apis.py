from ninja_extra import api_controller, route

from src.accounts import services
from src.accounts.schemas import RegistrationPayload, RegistrationResponse
from src.accounts.throttlers import RegistrationThrottle


@api_controller("", tags=["Registration"], auth=None, throttle=[RegistrationThrottle()])
class RegistrationController:
    @route.post("/register", response=RegistrationResponse)
    def register(self, payload: RegistrationPayload):
        """
        Register the address on the homeserver. The homeserver's answer is relayed verbatim.
          - 400: malformed body, bad address, bad signature
          - 409: address already registered
          - 502: homeserver unreachable or refused
        """
        result = services.account_register(
            localpart=payload.localpart,
            displayname=payload.displayname,
            password=payload.password,
        )
        return result.as_dict()
