# Generated manually (initial migration).
from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PhotographyType",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("name", models.CharField(max_length=80)),
                ("slug", models.SlugField(max_length=80, unique=True)),
                ("is_active", models.BooleanField(default=True)),
                ("sort_order", models.IntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["sort_order", "created_at"],
            },
        ),
        migrations.CreateModel(
            name="Package",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("category", models.SlugField(max_length=80)),
                ("name", models.CharField(max_length=120)),
                ("price", models.CharField(max_length=60)),
                ("description", models.TextField()),
                ("features", models.JSONField(blank=True, default=list)),
                ("highlighted", models.BooleanField(default=False)),
                ("sort_order", models.IntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["sort_order", "created_at"],
            },
        ),
        migrations.CreateModel(
            name="PortfolioPhoto",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("category", models.SlugField(max_length=80)),
                ("title", models.CharField(max_length=160)),
                ("alt", models.CharField(max_length=255)),
                ("image_url", models.CharField(max_length=500)),
                ("path", models.CharField(blank=True, max_length=300, null=True)),
                ("sort_order", models.IntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["sort_order", "created_at"],
            },
        ),
        migrations.CreateModel(
            name="GalleryImage",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("url", models.CharField(max_length=500)),
                ("path", models.CharField(blank=True, max_length=300, null=True)),
                ("category", models.SlugField(blank=True, max_length=80, null=True)),
                ("sort_order", models.IntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["sort_order", "created_at"],
            },
        ),
        migrations.CreateModel(
            name="SiteSettings",
            fields=[
                (
                    "id",
                    models.PositiveSmallIntegerField(
                        default=1, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("brand_name", models.CharField(blank=True, max_length=120)),
                ("brand_domain", models.CharField(blank=True, max_length=120, null=True)),
                ("logo_url", models.CharField(blank=True, max_length=500, null=True)),
                ("banner_url", models.CharField(blank=True, max_length=500, null=True)),
                ("hero_title", models.CharField(blank=True, max_length=160, null=True)),
                ("hero_subtitle", models.CharField(blank=True, max_length=255, null=True)),
                ("hero_description", models.TextField(blank=True, null=True)),
                ("contact_phone", models.CharField(blank=True, max_length=40, null=True)),
                ("whatsapp_number", models.CharField(blank=True, max_length=40, null=True)),
                ("instagram_url", models.CharField(blank=True, max_length=255, null=True)),
                ("tiktok_url", models.CharField(blank=True, max_length=255, null=True)),
                ("facebook_url", models.CharField(blank=True, max_length=255, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "site settings",
                "verbose_name_plural": "site settings",
            },
        ),
        migrations.CreateModel(
            name="BookedDay",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("date", models.DateField(unique=True)),
                ("note", models.TextField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "ordering": ["date"],
            },
        ),
        migrations.CreateModel(
            name="AvailabilitySlot",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("date", models.DateField()),
                ("slot_time", models.TimeField(blank=True, null=True)),
                ("is_full_day", models.BooleanField(default=False)),
                ("service_type", models.SlugField(blank=True, max_length=80, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("available", "Available"), ("booked", "Booked")],
                        default="available",
                        max_length=16,
                    ),
                ),
                ("note", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["date", "-is_full_day", "slot_time"],
            },
        ),
        migrations.AddIndex(
            model_name="package",
            index=models.Index(fields=["category", "sort_order"], name="idx_package_cat_sort"),
        ),
        migrations.AddIndex(
            model_name="portfoliophoto",
            index=models.Index(fields=["category", "sort_order"], name="idx_portfolio_cat_sort"),
        ),
        migrations.AddIndex(
            model_name="availabilityslot",
            index=models.Index(fields=["date"], name="idx_slot_date"),
        ),
        migrations.AddConstraint(
            model_name="availabilityslot",
            constraint=models.UniqueConstraint(
                condition=models.Q(("is_full_day", False)),
                fields=("date", "slot_time"),
                name="unique_slot_date_time",
            ),
        ),
        migrations.AddConstraint(
            model_name="availabilityslot",
            constraint=models.UniqueConstraint(
                condition=models.Q(("is_full_day", True)),
                fields=("date",),
                name="unique_slot_date_full_day",
            ),
        ),
    ]
