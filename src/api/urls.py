from ninja_extra import NinjaExtraAPI

from src.api.exception_handler import attach_exception_handlers
from src.accounts.apis import RegistrationController


api = NinjaExtraAPI(title="Matrix Registration Service", version="1.0.0", csrf=False)

# Register exception handlers in one place
attach_exception_handlers(api)

api.register_controllers(RegistrationController)
