from src.accounts.models import Account


def normalize_address(address: str) -> str:
    return address.lower()


def account_exists(*, address: str) -> bool:
    """
    True only on a positive lookup. Database errors are raised, not read as "absent".
    """
    return Account.objects.filter(pk=normalize_address(address)).exists()


def account_get(*, address: str) -> Account | None:
    return Account.objects.filter(pk=normalize_address(address)).first()
