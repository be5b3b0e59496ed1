from __future__ import annotations

import json

from studio.seo import (
    SERVICE_SEO,
    absolute_url,
    breadcrumb_schema,
    build_page_metadata,
    label_from_slug,
    service_schema,
    services_list_schema,
    to_json_ld,
)


def test_absolute_url(settings):
    settings.STUDIO_SITE_URL = "https://studio.example"
    assert absolute_url("/services") == "https://studio.example/services"
    assert absolute_url("gallery") == "https://studio.example/gallery"
    assert absolute_url("https://cdn.example/og.png") == "https://cdn.example/og.png"


def test_page_metadata(settings):
    settings.STUDIO_SITE_URL = "https://studio.example"
    meta = build_page_metadata(title="T", description="D", path="/services/event/", keywords=["extra"])

    assert meta["canonical"] == "https://studio.example/services/event/"
    assert set(meta["alternates"]) == {"en-MY", "ms-MY", "x-default"}
    assert meta["open_graph"]["image"]["url"] == "https://studio.example/static/raygraphy-og.svg"
    assert meta["keywords"][-1] == "extra"
    assert meta["twitter"]["card"] == "summary_large_image"


def test_json_ld_escapes_script_breakout():
    encoded = to_json_ld({"name": "</script><b>"})
    assert "<" not in encoded
    assert json.loads(encoded) == {"name": "</script><b>"}


def test_service_schemas():
    service = SERVICE_SEO["convocation"]
    schema = service_schema(service)
    assert schema["@type"] == "Service"
    assert len(schema["hasOfferCatalog"]["itemListElement"]) == 3
    assert breadcrumb_schema(service)["itemListElement"][-1]["name"] == "Convocation Photography"
    assert len(services_list_schema()["itemListElement"]) == len(SERVICE_SEO)


def test_label_from_slug():
    assert label_from_slug("pre-wedding") == "Pre Wedding"
