from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Category(models.Model):
    """A program track applicants register for.

    Registrations keep the category name by value, so renaming or
    deactivating a category never touches existing registrations.
    """
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField()
    actual_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'), validators=[MinValueValidator(Decimal('0.00'))])
    offer_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'), validators=[MinValueValidator(Decimal('0.00'))])
    image_url = models.URLField(max_length=500, blank=True, default='')
    popup_image_url = models.URLField(max_length=500, blank=True, default='')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']
        verbose_name_plural = 'Categories'

    def __str__(self):
        return self.name

    @property
    def has_discount(self):
        return self.offer_fee < self.actual_fee

    @property
    def fee_label(self):
        if self.offer_fee == 0:
            return 'FREE'
        return f"₹{self.offer_fee}"


class Panchayath(models.Model):
    name = models.CharField(max_length=100)
    district = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return f"{self.name} - {self.district}"
