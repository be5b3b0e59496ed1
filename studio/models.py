import re

from django.db import models
from django.db.models import Q
from django.utils import timezone


def slugify_type_name(name: str) -> str:
    """
    Lower-case, whitespace collapsed to "-", anything outside [A-Za-z0-9_-] dropped.
    """
    slug = re.sub(r"\s+", "-", (name or "").lower().strip())
    return re.sub(r"[^\w-]", "", slug)


def capitalize_slug(slug: str) -> str:
    return slug[:1].upper() + slug[1:]


class PhotographyType(models.Model):
    name = models.CharField(max_length=80)
    slug = models.SlugField(max_length=80, unique=True)
    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order", "created_at"]

    def __str__(self) -> str:  # pragma: no cover
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify_type_name(self.name)
        super().save(*args, **kwargs)


class Package(models.Model):
    category = models.SlugField(max_length=80)
    name = models.CharField(max_length=120)
    price = models.CharField(max_length=60)
    description = models.TextField()
    features = models.JSONField(default=list, blank=True)
    highlighted = models.BooleanField(default=False)
    sort_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order", "created_at"]
        indexes = [models.Index(fields=["category", "sort_order"], name="idx_package_cat_sort")]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.name} ({self.category})"


class PortfolioPhoto(models.Model):
    category = models.SlugField(max_length=80)
    title = models.CharField(max_length=160)
    alt = models.CharField(max_length=255)
    image_url = models.CharField(max_length=500)
    path = models.CharField(max_length=300, blank=True, null=True)
    sort_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["sort_order", "created_at"]
        indexes = [models.Index(fields=["category", "sort_order"], name="idx_portfolio_cat_sort")]

    def __str__(self) -> str:  # pragma: no cover
        return self.title


class GalleryImage(models.Model):
    url = models.CharField(max_length=500)
    path = models.CharField(max_length=300, blank=True, null=True)
    category = models.SlugField(max_length=80, blank=True, null=True)
    sort_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["sort_order", "created_at"]

    def __str__(self) -> str:  # pragma: no cover
        return self.path or self.url


class SiteSettings(models.Model):
    SINGLETON_ID = 1

    id = models.PositiveSmallIntegerField(primary_key=True, default=SINGLETON_ID, editable=False)
    brand_name = models.CharField(max_length=120, blank=True)
    brand_domain = models.CharField(max_length=120, blank=True, null=True)
    logo_url = models.CharField(max_length=500, blank=True, null=True)
    banner_url = models.CharField(max_length=500, blank=True, null=True)
    hero_title = models.CharField(max_length=160, blank=True, null=True)
    hero_subtitle = models.CharField(max_length=255, blank=True, null=True)
    hero_description = models.TextField(blank=True, null=True)
    contact_phone = models.CharField(max_length=40, blank=True, null=True)
    whatsapp_number = models.CharField(max_length=40, blank=True, null=True)
    instagram_url = models.CharField(max_length=255, blank=True, null=True)
    tiktok_url = models.CharField(max_length=255, blank=True, null=True)
    facebook_url = models.CharField(max_length=255, blank=True, null=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "site settings"
        verbose_name_plural = "site settings"

    def __str__(self) -> str:  # pragma: no cover
        return self.brand_name or "Site settings"

    def save(self, *args, **kwargs):
        self.id = self.SINGLETON_ID
        if self._state.adding and type(self).objects.filter(pk=self.id).exists():
            # A fresh instance replaces the single row instead of inserting a second one.
            self._state.adding = False
        super().save(*args, **kwargs)

    @classmethod
    def load(cls) -> "SiteSettings":
        obj, _ = cls.objects.get_or_create(id=cls.SINGLETON_ID)
        return obj


class BookedDay(models.Model):
    """
    Legacy whole-day flag. No row for a date means the date is available.
    """

    date = models.DateField(unique=True)
    note = models.TextField(blank=True, null=True)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["date"]

    def __str__(self) -> str:  # pragma: no cover
        return self.date.isoformat()


class SlotStatus(models.TextChoices):
    AVAILABLE = "available", "Available"
    BOOKED = "booked", "Booked"


class AvailabilitySlot(models.Model):
    date = models.DateField()
    slot_time = models.TimeField(null=True, blank=True)
    is_full_day = models.BooleanField(default=False)
    service_type = models.SlugField(max_length=80, blank=True, null=True)
    status = models.CharField(max_length=16, choices=SlotStatus.choices, default=SlotStatus.AVAILABLE)
    note = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["date", "-is_full_day", "slot_time"]
        constraints = [
            models.UniqueConstraint(
                fields=["date", "slot_time"],
                condition=Q(is_full_day=False),
                name="unique_slot_date_time",
            ),
            models.UniqueConstraint(
                fields=["date"],
                condition=Q(is_full_day=True),
                name="unique_slot_date_full_day",
            ),
        ]
        indexes = [models.Index(fields=["date"], name="idx_slot_date")]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.date} · {self.time_label} · {self.status}"

    @property
    def time_label(self) -> str:
        if self.is_full_day:
            return "Full Day"
        if self.slot_time is None:
            return "00:00"
        return self.slot_time.strftime("%H:%M")

    @property
    def is_booked(self) -> bool:
        return self.status == SlotStatus.BOOKED

    @property
    def blocks_whole_day(self) -> bool:
        return self.is_full_day and self.is_booked
