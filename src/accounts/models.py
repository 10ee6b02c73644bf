from django.db import models


class Account(models.Model):
    """
    A Matrix account claimed by the holder of an Ethereum address.
    Created once, after the homeserver accepted the registration; never updated.
    """

    address = models.CharField(
        max_length=42,
        primary_key=True,
        help_text="Lower-cased 0x-prefixed address, also the Matrix localpart",
    )
    display_name = models.CharField(max_length=255)
    password_hash = models.CharField(
        max_length=255,
        help_text="bcrypt hash forwarded to the homeserver; the raw secret is never stored",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "accounts"
        verbose_name = "Account"
        verbose_name_plural = "Accounts"
        ordering = ["-created_at"]

    def __str__(self):
        return self.address
