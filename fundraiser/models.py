from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
from django.db import models

pin_validator = RegexValidator(r"^\d{4}$", "PIN must be exactly 4 digits.")


class PaymentMethod(models.TextChoices):
    UNPAID = "unpaid", "Unpaid"
    ZELLE = "zelle", "Zelle"
    VENMO = "venmo", "Venmo"


class Player(models.Model):
    first_name = models.CharField(max_length=80)
    last_name = models.CharField(max_length=80)
    number = models.PositiveSmallIntegerField()
    # blank = no default PIN configured
    pin = models.CharField(max_length=4, blank=True, validators=[pin_validator])

    class Meta:
        ordering = ["last_name", "first_name"]

    def __str__(self):
        return f"{self.first_name} {self.last_name} #{self.number}"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"


class CalendarEntry(models.Model):
    year = models.PositiveSmallIntegerField()
    month = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(12)]
    )
    day = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(31)]
    )
    player = models.ForeignKey(Player, on_delete=models.PROTECT, related_name="entries")

    supporter_name = models.CharField(max_length=150)
    note = models.TextField(blank=True)
    phone = models.CharField(max_length=30, blank=True)

    payment_method = models.CharField(
        max_length=10, choices=PaymentMethod.choices, default=PaymentMethod.UNPAID
    )
    payment_amount = models.DecimalField(
        max_digits=8, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["year", "month", "day"]
        verbose_name_plural = "calendar entries"
        constraints = [
            models.UniqueConstraint(fields=["year", "month", "day"], name="uniq_claimed_day")
        ]

    def __str__(self):
        return f"{self.year}-{self.month:02d}-{self.day:02d} {self.supporter_name}"

    @property
    def owed(self):
        # the day number is both the dollars due and the raffle tickets
        return self.day


class RaffleWinner(models.Model):
    year = models.PositiveSmallIntegerField()
    month = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(12)]
    )
    winning_day = models.PositiveSmallIntegerField()

    class Meta:
        ordering = ["year", "month"]
        constraints = [
            models.UniqueConstraint(fields=["year", "month"], name="uniq_raffle_month")
        ]

    def __str__(self):
        return f"{self.year}-{self.month:02d}: day {self.winning_day}"


class PinOverride(models.Model):
    player = models.OneToOneField(Player, on_delete=models.CASCADE, related_name="pin_override")
    pin = models.CharField(max_length=4, validators=[pin_validator])
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"PIN override for {self.player}"
