from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                (
                    "address",
                    models.CharField(
                        help_text="Lower-cased 0x-prefixed address, also the Matrix localpart",
                        max_length=42,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("display_name", models.CharField(max_length=255)),
                (
                    "password_hash",
                    models.CharField(
                        help_text="bcrypt hash forwarded to the homeserver; the raw secret is never stored",
                        max_length=255,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Account",
                "verbose_name_plural": "Accounts",
                "db_table": "accounts",
                "ordering": ["-created_at"],
            },
        ),
    ]
