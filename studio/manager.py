"""
Generic back-office list screen.

Gallery, portfolio, packages, photography types and availability slots share
one flow: guarded list (optionally filtered by category) ordered by
``sort_order`` then ``created_at``, inline status toggle and sort-order edit,
delete with confirmation, and a create form that may upload files to a
storage bucket before inserting the row.
"""
from __future__ import annotations

import logging
from typing import Callable

from django.contrib import messages
from django.db import DatabaseError, transaction
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import path, reverse
from django.views.decorators.http import require_http_methods, require_POST

from accounts.decorators import admin_required

from . import storage
from .providers import category_label, category_options, get_photography_types, resolve_category
from .services import StoreError, StudioError, ensure_admin


logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"
MISSING_PATH_MESSAGE = "Missing storage path. Cannot delete file."


class EntityListManager:
    list_template = "studio/manage/list.html"
    edit_template = "studio/manage/edit.html"

    def __init__(
        self,
        *,
        slug: str,
        title: str,
        model,
        form_class,
        row_template: str,
        edit_form_class=None,
        category_field: str | None = "category",
        allow_all_categories: bool = False,
        ordering: tuple[str, ...] = ("sort_order", "created_at"),
        bucket: str | None = None,
        url_field: str | None = None,
        upload_path: Callable | None = None,
        sortable: bool = True,
        description: str = "",
        created_message: str = "Saved ✅",
        delete_prompt: str = "Delete this item? This cannot be undone.",
    ):
        self.slug = slug
        self.title = title
        self.model = model
        self.form_class = form_class
        self.edit_form_class = edit_form_class or form_class
        self.row_template = row_template
        self.category_field = category_field
        self.allow_all_categories = allow_all_categories
        self.ordering = ordering
        self.bucket = bucket
        self.url_field = url_field
        self.upload_path = upload_path
        self.sortable = sortable
        self.description = description
        self.created_message = created_message
        self.delete_prompt = delete_prompt

    # URL names

    @property
    def list_url_name(self) -> str:
        return f"studio:{self.slug}_list"

    @property
    def edit_url_name(self) -> str:
        return f"studio:{self.slug}_edit"

    @property
    def toggle_url_name(self) -> str:
        return f"studio:{self.slug}_toggle"

    @property
    def sort_url_name(self) -> str:
        return f"studio:{self.slug}_sort"

    @property
    def delete_url_name(self) -> str:
        return f"studio:{self.slug}_delete"

    def urls(self) -> list:
        return [
            path(f"{self.slug}/", self.list_view, name=f"{self.slug}_list"),
            path(f"{self.slug}/<int:pk>/edit/", self.edit_view, name=f"{self.slug}_edit"),
            path(f"{self.slug}/<int:pk>/toggle/", self.toggle_view, name=f"{self.slug}_toggle"),
            path(f"{self.slug}/<int:pk>/sort/", self.sort_view, name=f"{self.slug}_sort"),
            path(f"{self.slug}/<int:pk>/delete/", self.delete_view, name=f"{self.slug}_delete"),
        ]

    # Data operations

    def get_queryset(self, category: str | None = None):
        qs = self.model.objects.all()
        if self.category_field and category and category != ALL_CATEGORIES:
            qs = qs.filter(**{self.category_field: category})
        return qs.order_by(*self.ordering)

    def form_kwargs(self, options) -> dict:
        if self.category_field:
            return {"category_choices": options}
        return {}

    def create(self, *, user, form) -> list:
        ensure_admin(user)
        if self.bucket:
            return [self._create_from_upload(form, upload) for upload in form.uploads()]
        try:
            return [form.save()]
        except DatabaseError as exc:
            logger.exception("Insert into %s failed", self.slug)
            raise StoreError(str(exc)) from exc

    def _create_from_upload(self, form, upload):
        stored_path = storage.upload(self.bucket, self.upload_path(form.cleaned_data, upload), upload)
        row = self.model(**form.row_fields())
        setattr(row, self.url_field, storage.public_url(self.bucket, stored_path))
        row.path = stored_path
        try:
            row.save()
        except DatabaseError as exc:
            # The uploaded object is left in the bucket.
            logger.exception("Insert into %s failed after uploading %s", self.slug, stored_path)
            raise StoreError(str(exc)) from exc
        return row

    def update(self, *, user, form):
        """
        Save edited fields. A file uploaded on edit replaces the stored image;
        the previous object is removed only after the row is saved.
        """
        ensure_admin(user)
        obj = form.instance
        replacements = form.uploads()[:1] if self.bucket else []
        previous_path = self.storage_path(obj) if replacements else None
        if replacements:
            upload = replacements[0]
            stored_path = storage.upload(self.bucket, self.upload_path(form.cleaned_data, upload), upload)
            setattr(obj, self.url_field, storage.public_url(self.bucket, stored_path))
            obj.path = stored_path
        try:
            saved = form.save()
        except DatabaseError as exc:
            logger.exception("Update of %s failed", self.slug)
            raise StoreError(str(exc)) from exc
        if previous_path and previous_path != obj.path:
            storage.remove(self.bucket, [previous_path])
        return saved

    def _save_fields(self, obj, fields: list[str]):
        try:
            obj.save(update_fields=fields)
        except DatabaseError as exc:
            logger.exception("Updating %s of %s %s failed", ", ".join(fields), self.slug, obj.pk)
            raise StoreError(str(exc)) from exc
        return obj

    def toggle(self, *, user, obj):
        ensure_admin(user)
        obj.is_active = not obj.is_active
        return self._save_fields(obj, ["is_active"])

    def set_sort_order(self, *, user, obj, value: int):
        ensure_admin(user)
        obj.sort_order = value
        return self._save_fields(obj, ["sort_order"])

    def storage_path(self, obj) -> str | None:
        return getattr(obj, "path", None) or storage.path_from_url(self.bucket, getattr(obj, self.url_field, None))

    def delete(self, *, user, obj) -> None:
        """
        Hard delete. Image-bearing rows drop their stored object first; a row
        whose path cannot be recovered is kept.
        """
        ensure_admin(user)
        if self.bucket:
            stored_path = self.storage_path(obj)
            if not stored_path:
                raise StudioError(MISSING_PATH_MESSAGE)
            storage.remove(self.bucket, [stored_path])
        try:
            with transaction.atomic():
                obj.delete()
        except DatabaseError as exc:
            logger.exception("Delete of %s %s failed", self.slug, obj.pk)
            raise StoreError(str(exc)) from exc

    # Views

    def _category_context(self, request):
        types = get_photography_types(active_only=False) if self.category_field else []
        options = category_options(types) if self.category_field else []
        requested = request.GET.get("category") or request.POST.get("category_filter")
        if self.allow_all_categories and (not requested or requested == ALL_CATEGORIES):
            current = ALL_CATEGORIES
        else:
            current = resolve_category(requested, options) if self.category_field else None
        return types, options, current

    def _list_redirect(self, category: str | None):
        url = reverse(self.list_url_name)
        if category:
            url = f"{url}?category={category}"
        return redirect(url)

    def render_list(self, request, *, form, types, options, current):
        rows = list(self.get_queryset(current))
        return render(
            request,
            self.list_template,
            {
                "manager": self,
                "rows": rows,
                "form": form,
                "category_options": options,
                "current_category": current,
                "current_category_label": category_label(current, types) if current != ALL_CATEGORIES else "All",
                "types": types,
            },
        )

    def list_view(self, request):
        return admin_required(require_http_methods(["GET", "POST"])(self._list_view))(request)

    def _list_view(self, request):
        types, options, current = self._category_context(request)
        initial = {}
        if self.category_field and current and current != ALL_CATEGORIES:
            initial[self.category_field] = current

        if request.method == "POST":
            form = self.form_class(request.POST, request.FILES, **self.form_kwargs(options))
            if form.is_valid():
                try:
                    self.create(user=request.user, form=form)
                except StudioError as exc:
                    messages.error(request, str(exc))
                else:
                    messages.success(request, self.created_message)
                    return self._list_redirect(current)
            else:
                messages.error(request, first_form_error(form))
            return self.render_list(request, form=form, types=types, options=options, current=current)

        form = self.form_class(initial=initial, **self.form_kwargs(options))
        return self.render_list(request, form=form, types=types, options=options, current=current)

    def edit_view(self, request, pk: int):
        return admin_required(require_http_methods(["GET", "POST"])(self._edit_view))(request, pk)

    def _edit_view(self, request, pk: int):
        obj = get_object_or_404(self.model, pk=pk)
        options = category_options(get_photography_types(active_only=False)) if self.category_field else []
        back_category = getattr(obj, self.category_field, None) if self.category_field else None

        if request.method == "POST":
            form = self.edit_form_class(request.POST, request.FILES, instance=obj, **self.form_kwargs(options))
            if form.is_valid():
                try:
                    self.update(user=request.user, form=form)
                except StudioError as exc:
                    messages.error(request, str(exc))
                else:
                    messages.success(request, "Updated ✅")
                    return self._list_redirect(back_category)
            else:
                messages.error(request, first_form_error(form))
        else:
            form = self.edit_form_class(instance=obj, **self.form_kwargs(options))

        return render(request, self.edit_template, {"manager": self, "form": form, "object": obj})

    def toggle_view(self, request, pk: int):
        return admin_required(require_POST(self._toggle_view))(request, pk)

    def _toggle_view(self, request, pk: int):
        obj = get_object_or_404(self.model, pk=pk)
        try:
            self.toggle(user=request.user, obj=obj)
        except StudioError as exc:
            messages.error(request, str(exc))
        return self._list_redirect(request.POST.get("category_filter"))

    def sort_view(self, request, pk: int):
        return admin_required(require_POST(self._sort_view))(request, pk)

    def _sort_view(self, request, pk: int):
        obj = get_object_or_404(self.model, pk=pk)
        raw = (request.POST.get("sort_order") or "").strip()
        try:
            value = int(raw)
        except ValueError:
            messages.error(request, "Sort order must be a whole number.")
        else:
            try:
                self.set_sort_order(user=request.user, obj=obj, value=value)
            except StudioError as exc:
                messages.error(request, str(exc))
        return self._list_redirect(request.POST.get("category_filter"))

    def delete_view(self, request, pk: int):
        return admin_required(require_POST(self._delete_view))(request, pk)

    def _delete_view(self, request, pk: int):
        obj = get_object_or_404(self.model, pk=pk)
        try:
            self.delete(user=request.user, obj=obj)
        except StudioError as exc:
            messages.error(request, str(exc))
        else:
            messages.success(request, "Deleted ✅")
        return self._list_redirect(request.POST.get("category_filter"))


def first_form_error(form) -> str:
    for errors in form.errors.values():
        if errors:
            return str(errors[0])
    return "Please fix the highlighted fields and try again."
