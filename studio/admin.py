from django.contrib import admin
from django.utils.html import format_html

from .models import AvailabilitySlot, BookedDay, GalleryImage, Package, PhotographyType, PortfolioPhoto, SiteSettings
from .models import SlotStatus


admin.site.site_header = "Raygraphy Studio Admin"
admin.site.site_title = "Raygraphy Studio Admin"
admin.site.index_title = "Studio Controls"


@admin.register(PhotographyType)
class PhotographyTypeAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "is_active", "sort_order", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "slug")
    ordering = ("sort_order", "created_at")
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Package)
class PackageAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "highlighted", "is_active", "sort_order")
    list_filter = ("category", "is_active", "highlighted")
    search_fields = ("name", "description")
    ordering = ("category", "sort_order", "created_at")


@admin.register(PortfolioPhoto)
class PortfolioPhotoAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "is_active", "sort_order", "created_at")
    list_filter = ("category", "is_active")
    search_fields = ("title", "alt")
    ordering = ("category", "sort_order", "created_at")
    readonly_fields = ("path",)


@admin.register(GalleryImage)
class GalleryImageAdmin(admin.ModelAdmin):
    list_display = ("id", "category", "is_active", "sort_order", "created_at")
    list_filter = ("category", "is_active")
    ordering = ("sort_order", "created_at")
    readonly_fields = ("path",)


@admin.register(BookedDay)
class BookedDayAdmin(admin.ModelAdmin):
    list_display = ("date", "note", "updated_at")
    date_hierarchy = "date"
    ordering = ("-date",)


@admin.register(AvailabilitySlot)
class AvailabilitySlotAdmin(admin.ModelAdmin):
    list_display = ("date", "time_label", "service_type", "status_badge", "created_at")
    list_filter = ("status", "is_full_day", "service_type")
    date_hierarchy = "date"
    ordering = ("date", "-is_full_day", "slot_time")

    @admin.display(description="Time", ordering="slot_time")
    def time_label(self, obj: AvailabilitySlot) -> str:
        return obj.time_label

    @admin.display(description="Status", ordering="status")
    def status_badge(self, obj: AvailabilitySlot) -> str:
        color = "#b91c1c" if obj.status == SlotStatus.BOOKED else "#15803d"
        return format_html(
            '<span style="padding:3px 8px;border-radius:999px;'
            "border: 1px solid {};"
            "color: {};"
            'font-weight: 600; font-size: 11px;">{}</span>',
            color,
            color,
            obj.get_status_display(),
        )


@admin.register(SiteSettings)
class SiteSettingsAdmin(admin.ModelAdmin):
    list_display = ("brand_name", "whatsapp_number", "contact_phone", "updated_at")

    def has_add_permission(self, request):
        return not SiteSettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False
