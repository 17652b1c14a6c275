import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Player",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("first_name", models.CharField(max_length=80)),
                ("last_name", models.CharField(max_length=80)),
                ("number", models.PositiveSmallIntegerField()),
                ("pin", models.CharField(blank=True, max_length=4, validators=[django.core.validators.RegexValidator("^\\d{4}$", "PIN must be exactly 4 digits.")])),
            ],
            options={
                "ordering": ["last_name", "first_name"],
            },
        ),
        migrations.CreateModel(
            name="RaffleWinner",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("year", models.PositiveSmallIntegerField()),
                ("month", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)])),
                ("winning_day", models.PositiveSmallIntegerField()),
            ],
            options={
                "ordering": ["year", "month"],
                "constraints": [models.UniqueConstraint(fields=("year", "month"), name="uniq_raffle_month")],
            },
        ),
        migrations.CreateModel(
            name="CalendarEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("year", models.PositiveSmallIntegerField()),
                ("month", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)])),
                ("day", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(31)])),
                ("supporter_name", models.CharField(max_length=150)),
                ("note", models.TextField(blank=True)),
                ("phone", models.CharField(blank=True, max_length=30)),
                ("payment_method", models.CharField(choices=[("unpaid", "Unpaid"), ("zelle", "Zelle"), ("venmo", "Venmo")], default="unpaid", max_length=10)),
                ("payment_amount", models.DecimalField(decimal_places=2, default=0, max_digits=8, validators=[django.core.validators.MinValueValidator(0)])),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("player", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="entries", to="fundraiser.player")),
            ],
            options={
                "verbose_name_plural": "calendar entries",
                "ordering": ["year", "month", "day"],
                "constraints": [models.UniqueConstraint(fields=("year", "month", "day"), name="uniq_claimed_day")],
            },
        ),
        migrations.CreateModel(
            name="PinOverride",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("pin", models.CharField(max_length=4, validators=[django.core.validators.RegexValidator("^\\d{4}$", "PIN must be exactly 4 digits.")])),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("player", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="pin_override", to="fundraiser.player")),
            ],
        ),
    ]
