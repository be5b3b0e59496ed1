from django import template

from studio.providers import category_label
from studio.whatsapp import display_number, format_long_date


register = template.Library()


@register.filter
def add_class(bound_field, css_class: str):
    """{{ form.name|add_class:"input" }} keeps any class the widget already has."""
    existing = bound_field.field.widget.attrs.get("class", "")
    return bound_field.as_widget(attrs={"class": f"{existing} {css_class}".strip()})


@register.filter
def long_date(value):
    if not value:
        return ""
    return format_long_date(value)


@register.filter
def phone_display(value):
    return display_number(value)


@register.simple_tag
def category_name(slug, types=None):
    return category_label(slug, types) or "General"


@register.simple_tag(takes_context=True)
def query_with(context, **params):
    """
    Current query string with ``params`` overridden; a None value drops the key.
    """
    query = context["request"].GET.copy()
    for key, value in params.items():
        if value is None:
            query.pop(key, None)
        else:
            query[key] = value
    encoded = query.urlencode()
    return f"?{encoded}" if encoded else "?"
