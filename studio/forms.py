from __future__ import annotations

from django import forms
from django.core.validators import FileExtensionValidator

from .models import AvailabilitySlot, GalleryImage, Package, PhotographyType, PortfolioPhoto, SiteSettings, SlotStatus
from .models import slugify_type_name
from .services import SlotInput


IMAGE_EXTENSIONS = ["jpg", "jpeg", "png", "webp", "gif", "avif", "svg", "ico"]


def lines_to_list(text: str) -> list[str]:
    return [line.strip() for line in (text or "").split("\n") if line.strip()]


def list_to_lines(values) -> str:
    return "\n".join(values or [])


class MultipleFileInput(forms.ClearableFileInput):
    allow_multiple_selected = True


class MultipleFileField(forms.FileField):
    def __init__(self, *args, **kwargs):
        kwargs.setdefault("widget", MultipleFileInput())
        super().__init__(*args, **kwargs)

    def clean(self, data, initial=None):
        single_file_clean = super().clean
        if isinstance(data, (list, tuple)):
            result = [single_file_clean(d, initial) for d in data]
        else:
            result = [single_file_clean(data, initial)]
        return [f for f in result if f]


class CategoryChoiceMixin:
    """
    Category fields reference PhotographyType.slug by convention only, so the
    choices are injected by the caller instead of a queryset.
    """

    category_field_name = "category"
    category_required = True

    def _set_category_choices(self, category_choices):
        field = self.fields.get(self.category_field_name)
        if field is None:
            return
        choices = list(category_choices or [])
        current = getattr(self.instance, self.category_field_name, None) if getattr(self, "instance", None) else None
        if current and current not in [slug for slug, _ in choices]:
            choices.append((current, current))
        if not self.category_required:
            choices = [("", "General")] + choices
        field.choices = choices


class UploadFormMixin:
    """Forms whose rows are created from uploaded files."""

    upload_field_name = "image"

    def uploads(self) -> list:
        value = self.cleaned_data.get(self.upload_field_name)
        if isinstance(value, list):
            return value
        return [value] if value else []

    def row_fields(self) -> dict:
        return {name: self.cleaned_data.get(name) for name in self._meta.fields}


class PhotographyTypeForm(forms.ModelForm):
    slug = forms.CharField(max_length=80, required=False)

    class Meta:
        model = PhotographyType
        fields = ["name", "slug", "is_active", "sort_order"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["name"].required = False
        self.fields["sort_order"].required = False

    def clean_name(self):
        name = (self.cleaned_data.get("name") or "").strip()
        if not name:
            raise forms.ValidationError("Type name is required")
        return name

    def clean(self):
        cleaned = super().clean()
        # An empty slug is derived from the name.
        slug = slugify_type_name(cleaned.get("slug") or "") or slugify_type_name(cleaned.get("name") or "")
        if not slug and not self.errors:
            self.add_error("slug", "Slug cannot be empty.")
        cleaned["slug"] = slug
        if cleaned.get("sort_order") is None:
            cleaned["sort_order"] = 0
        return cleaned


class PackageForm(CategoryChoiceMixin, forms.ModelForm):
    category = forms.ChoiceField(choices=[])
    features_text = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={"rows": 5}),
        help_text="Features: 1 line = 1 bullet.",
    )

    class Meta:
        model = Package
        fields = ["category", "name", "price", "description", "highlighted", "sort_order", "is_active"]

    def __init__(self, *args, category_choices=None, **kwargs):
        super().__init__(*args, **kwargs)
        for name in ("name", "price", "description"):
            self.fields[name].required = False
        self.fields["sort_order"].required = False
        self._set_category_choices(category_choices)
        if self.instance.pk and not self.is_bound:
            self.initial["features_text"] = list_to_lines(self.instance.features)

    def clean(self):
        cleaned = super().clean()
        for name in ("name", "price", "description"):
            cleaned[name] = (cleaned.get(name) or "").strip()
        if not cleaned["name"] or not cleaned["price"] or not cleaned["description"]:
            raise forms.ValidationError("Please fill in name, price and description.")
        cleaned["features"] = lines_to_list(cleaned.get("features_text", ""))
        if cleaned.get("sort_order") is None:
            cleaned["sort_order"] = 0
        return cleaned

    def save(self, commit=True):
        self.instance.features = self.cleaned_data["features"]
        return super().save(commit=commit)


class PortfolioPhotoForm(UploadFormMixin, CategoryChoiceMixin, forms.ModelForm):
    category = forms.ChoiceField(choices=[])
    image = forms.FileField(
        required=False,
        validators=[FileExtensionValidator(IMAGE_EXTENSIONS)],
    )

    class Meta:
        model = PortfolioPhoto
        fields = ["category", "title", "alt", "sort_order", "is_active"]

    def __init__(self, *args, category_choices=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["title"].required = False
        self.fields["alt"].required = False
        self.fields["sort_order"].required = False
        self._set_category_choices(category_choices)

    def clean(self):
        cleaned = super().clean()
        if not self.instance.pk and not cleaned.get("image"):
            raise forms.ValidationError("Please choose an image file.")
        cleaned["title"] = (cleaned.get("title") or "").strip()
        cleaned["alt"] = (cleaned.get("alt") or "").strip()
        if not cleaned["title"]:
            raise forms.ValidationError("Please enter a title.")
        if not cleaned["alt"]:
            raise forms.ValidationError("Please enter alt text.")
        if cleaned.get("sort_order") is None:
            cleaned["sort_order"] = 0
        return cleaned


class GalleryUploadForm(UploadFormMixin, CategoryChoiceMixin, forms.ModelForm):
    upload_field_name = "images"
    category_required = False

    category = forms.ChoiceField(choices=[], required=False)
    images = MultipleFileField(
        required=False,
        validators=[FileExtensionValidator(IMAGE_EXTENSIONS)],
    )

    class Meta:
        model = GalleryImage
        fields = ["category", "sort_order", "is_active"]

    def __init__(self, *args, category_choices=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["sort_order"].required = False
        self._set_category_choices(category_choices)

    def clean(self):
        cleaned = super().clean()
        if not self.instance.pk and not cleaned.get("images"):
            raise forms.ValidationError("Please select at least one image.")
        cleaned["category"] = cleaned.get("category") or None
        if cleaned.get("sort_order") is None:
            cleaned["sort_order"] = 0
        return cleaned


class AvailabilitySlotForm(CategoryChoiceMixin, forms.Form):
    """
    Plain form: collisions are left to the service layer, which reports them
    with a dedicated message.
    """

    category_field_name = "service_type"
    category_required = False

    date = forms.DateField(widget=forms.DateInput(attrs={"type": "date"}))
    slot_time = forms.TimeField(required=False, widget=forms.TimeInput(attrs={"type": "time"}))
    is_full_day = forms.BooleanField(required=False)
    status = forms.ChoiceField(choices=SlotStatus.choices, initial=SlotStatus.AVAILABLE)
    service_type = forms.ChoiceField(choices=[], required=False)
    note = forms.CharField(required=False, widget=forms.Textarea(attrs={"rows": 2}))

    def __init__(self, *args, category_choices=None, instance: AvailabilitySlot | None = None, **kwargs):
        self.instance = instance
        if instance is not None and "initial" not in kwargs:
            kwargs["initial"] = {
                "date": instance.date,
                "slot_time": instance.slot_time,
                "is_full_day": instance.is_full_day,
                "status": instance.status,
                "service_type": instance.service_type or "",
                "note": instance.note or "",
            }
        super().__init__(*args, **kwargs)
        self._set_category_choices(category_choices)

    def clean(self):
        cleaned = super().clean()
        if not cleaned.get("is_full_day") and not cleaned.get("slot_time"):
            self.add_error("slot_time", "Pick a time or mark the slot as full day.")
        return cleaned

    def to_input(self) -> SlotInput:
        data = self.cleaned_data
        return SlotInput(
            date=data["date"],
            slot_time=None if data.get("is_full_day") else data.get("slot_time"),
            is_full_day=bool(data.get("is_full_day")),
            status=data.get("status") or SlotStatus.AVAILABLE,
            service_type=data.get("service_type") or None,
            note=(data.get("note") or "").strip() or None,
        )


class SiteSettingsForm(forms.ModelForm):
    logo_file = forms.FileField(required=False, validators=[FileExtensionValidator(IMAGE_EXTENSIONS)])
    banner_file = forms.FileField(required=False, validators=[FileExtensionValidator(IMAGE_EXTENSIONS)])

    class Meta:
        model = SiteSettings
        fields = [
            "brand_name",
            "brand_domain",
            "logo_url",
            "banner_url",
            "hero_title",
            "hero_subtitle",
            "hero_description",
            "contact_phone",
            "whatsapp_number",
            "instagram_url",
            "tiktok_url",
            "facebook_url",
        ]
        help_texts = {
            "whatsapp_number": "Example: 60123456789 (no plus sign).",
            "contact_phone": "Used for tel: links, e.g. +60123456789.",
        }

    def clean(self):
        cleaned = super().clean()
        for name in self.Meta.fields:
            value = cleaned.get(name)
            if isinstance(value, str):
                value = value.strip()
                cleaned[name] = value if value or name == "brand_name" else None
        return cleaned
