"""
Django admin configuration for licenses app.

Saves, deletes and actions go through the application handlers so that
domain events fire and changes are pushed to the remote store.
"""
from asgiref.sync import async_to_sync
from django import forms
from django.contrib import admin, messages
from django.utils.html import format_html

from catalog.infrastructure.models import ModuleDefinition
from core.domain.exceptions import (
    DomainException,
    LicenseNotFoundError,
    LicenseRequestNotFoundError,
)
from core.domain.value_objects import UNKNOWN_DOMAIN, Email, normalize_domain
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.license_requests import (
    ApproveRequestCommand,
    CreateRequestCommand,
    RejectRequestCommand,
    UpdateRequestCommand,
)
from licenses.application.commands.revoke_license import (
    ReactivateLicenseCommand,
    RevokeLicenseCommand,
)
from licenses.application.commands.update_license import (
    UpdateLicenseCommand,
    UpdateLicenseFeaturesCommand,
)
from licenses.application.handlers.create_license_handler import (
    CreateLicenseHandler,
    default_valid_until,
)
from licenses.application.handlers.license_lifecycle_handlers import (
    DeleteLicenseHandler,
    ReactivateLicenseHandler,
    RevokeLicenseHandler,
    UpdateLicenseFeaturesHandler,
    UpdateLicenseHandler,
)
from licenses.application.handlers.license_request_handlers import (
    ApproveRequestHandler,
    CreateRequestHandler,
    RejectRequestHandler,
    UpdateRequestHandler,
)
from licenses.domain import license as license_entity
from licenses.domain import license_request as request_entity
from licenses.infrastructure.models import License, LicenseRequest
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_license_request_repository import (
    DjangoLicenseRequestRepository,
)

STATUS_COLORS = {
    "active": "green",
    "suspended": "orange",
    "expired": "gray",
}


def _clean_domain(value, queryset, field_name):
    domain = normalize_domain(value)
    if domain == UNKNOWN_DOMAIN:
        raise forms.ValidationError("Enter a valid domain, e.g. shop.example.com")
    if queryset.filter(**{f"{field_name}__iexact": domain}).exists():
        raise forms.ValidationError(f"{domain} is already taken")
    return domain


class LicenseAdminForm(forms.ModelForm):
    """License form with the module catalog as checkboxes."""

    email = forms.EmailField()
    valid_until = forms.DateField(
        required=False, help_text="Leave empty for the default validity period"
    )
    modules = forms.MultipleChoiceField(
        required=False, widget=forms.CheckboxSelectMultiple, label="Enabled modules"
    )

    class Meta:
        model = License
        fields = [
            "organization",
            "contact_person",
            "email",
            "phone_number",
            "domain",
            "valid_until",
            "note",
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        catalog = ModuleDefinition.objects.order_by("position", "id")
        self.fields["modules"].choices = [(module.id, module.label) for module in catalog]
        if self.instance.pk:
            self.fields["valid_until"].required = True
            features = self.instance.features or {}
            self.initial["modules"] = [module_id for module_id, on in features.items() if on]

    def clean_domain(self):
        others = License.objects.exclude(pk=self.instance.pk)
        return _clean_domain(self.cleaned_data["domain"], others, "domain")

    def clean(self):
        """Run the entity rules on the submitted values so failures show up on the form."""
        cleaned_data = super().clean()
        if self.errors:
            return cleaned_data
        try:
            if self.instance.pk:
                current = async_to_sync(DjangoLicenseRepository().find_by_id)(self.instance.pk)
                if current is None:
                    raise LicenseNotFoundError(f"License {self.instance.pk} not found")
                current.update_details(**self.changed_details())
            else:
                Email(cleaned_data["email"])
                license_entity.License.create(
                    organization=cleaned_data["organization"],
                    contact_person=cleaned_data.get("contact_person", ""),
                    email=cleaned_data["email"],
                    domain=cleaned_data["domain"],
                    valid_until=cleaned_data.get("valid_until") or default_valid_until(),
                    features=self.selected_features(),
                    phone_number=cleaned_data.get("phone_number", ""),
                    note=cleaned_data.get("note", ""),
                )
        except (DomainException, ValueError) as e:
            raise forms.ValidationError(str(e))
        return cleaned_data

    def changed_details(self):
        return {
            name: self.cleaned_data[name]
            for name in self.changed_data
            if name in license_entity.EDITABLE_FIELDS
        }

    def selected_features(self):
        selected = set(self.cleaned_data.get("modules") or [])
        return {module_id: module_id in selected for module_id, _ in self.fields["modules"].choices}


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    form = LicenseAdminForm
    list_display = [
        "organization",
        "domain",
        "key",
        "status_display",
        "valid_until",
        "days_remaining",
        "created_at",
    ]
    list_filter = ["status", "valid_until", "created_at"]
    search_fields = ["organization", "domain", "key", "email", "contact_person"]
    readonly_fields = ["id", "key", "status", "created_at", "updated_at"]
    actions = ["revoke_licenses", "reactivate_licenses"]

    def get_fieldsets(self, request, obj=None):
        fieldsets = [
            (
                "Licensee",
                {"fields": ("organization", "contact_person", "email", "phone_number", "note")},
            ),
            ("License", {"fields": ("domain", "valid_until", "modules")}),
        ]
        if obj:
            fieldsets.insert(0, ("Key", {"fields": ("id", "key", "status")}))
            fieldsets.append(
                ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)})
            )
        return fieldsets

    def _license_repo(self):
        return DjangoLicenseRepository()

    def status_display(self, obj):
        """Display effective status with color coding."""
        status = obj.effective_status
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            STATUS_COLORS.get(status, "black"),
            status.upper(),
        )

    status_display.short_description = "Status"

    def days_remaining(self, obj):
        days = obj.days_remaining
        if days <= 30:
            return format_html('<span style="color: red;">{}</span>', days)
        return days

    days_remaining.short_description = "Days left"

    def save_model(self, request, obj, form, change):
        if change:
            self._update(obj, form)
        else:
            self._create(obj, form)

    def _create(self, obj, form):
        created = async_to_sync(
            CreateLicenseHandler(self._license_repo(), DjangoLicenseRequestRepository()).handle
        )(
            CreateLicenseCommand(
                organization=obj.organization,
                contact_person=obj.contact_person,
                email=obj.email,
                domain=obj.domain,
                valid_until=form.cleaned_data.get("valid_until"),
                features=form.selected_features(),
                phone_number=obj.phone_number,
                note=obj.note,
            )
        )
        obj.pk = created.id
        obj.key = created.key

    def _update(self, obj, form):
        changes = form.changed_details()
        if changes:
            async_to_sync(UpdateLicenseHandler(self._license_repo()).handle)(
                UpdateLicenseCommand(license_id=obj.pk, changes=changes)
            )
        if "modules" in form.changed_data:
            async_to_sync(UpdateLicenseFeaturesHandler(self._license_repo()).handle)(
                UpdateLicenseFeaturesCommand(license_id=obj.pk, features=form.selected_features())
            )

    def delete_model(self, request, obj):
        async_to_sync(DeleteLicenseHandler(self._license_repo()).handle)(
            DeleteLicenseCommand(license_id=obj.pk)
        )

    def delete_queryset(self, request, queryset):
        for obj in queryset:
            self.delete_model(request, obj)

    def _run_for_each(self, request, queryset, handler_class, command_class, verb):
        done = 0
        for obj in queryset:
            try:
                async_to_sync(handler_class(self._license_repo()).handle)(
                    command_class(license_id=obj.pk)
                )
                done += 1
            except (DomainException, ValueError) as e:
                self.message_user(request, f"{obj}: {e}", level=messages.WARNING)
        self.message_user(request, f"{done} license(s) {verb}.", level=messages.SUCCESS)

    @admin.action(description="Revoke (suspend) selected licenses")
    def revoke_licenses(self, request, queryset):
        self._run_for_each(request, queryset, RevokeLicenseHandler, RevokeLicenseCommand, "revoked")

    @admin.action(description="Reactivate selected licenses")
    def reactivate_licenses(self, request, queryset):
        self._run_for_each(
            request, queryset, ReactivateLicenseHandler, ReactivateLicenseCommand, "reactivated"
        )


class LicenseRequestAdminForm(forms.ModelForm):
    email = forms.EmailField()

    class Meta:
        model = LicenseRequest
        fields = [
            "organization",
            "contact_person",
            "email",
            "phone_number",
            "requested_domain",
            "note",
            "custom_message",
        ]

    def clean_requested_domain(self):
        domain = _clean_domain(
            self.cleaned_data["requested_domain"], License.objects.all(), "domain"
        )
        if LicenseRequest.objects.filter(requested_domain__iexact=domain).exists():
            raise forms.ValidationError(f"{domain} already has a pending request")
        return domain

    def clean(self):
        cleaned_data = super().clean()
        if self.errors:
            return cleaned_data
        try:
            if self.instance.pk:
                current = async_to_sync(DjangoLicenseRequestRepository().find_by_id)(
                    self.instance.pk
                )
                if current is None:
                    raise LicenseRequestNotFoundError(
                        f"License request {self.instance.pk} not found"
                    )
                current.update_details(**self.changed_details())
            else:
                Email(cleaned_data["email"])
                request_entity.LicenseRequest.create(
                    organization=cleaned_data["organization"],
                    contact_person=cleaned_data.get("contact_person", ""),
                    email=cleaned_data["email"],
                    requested_domain=cleaned_data["requested_domain"],
                )
        except (DomainException, ValueError) as e:
            raise forms.ValidationError(str(e))
        return cleaned_data

    def changed_details(self):
        return {
            name: self.cleaned_data[name]
            for name in self.changed_data
            if name in request_entity.EDITABLE_FIELDS
        }


@admin.register(LicenseRequest)
class LicenseRequestAdmin(admin.ModelAdmin):
    """Admin interface for LicenseRequest model."""

    form = LicenseRequestAdminForm
    list_display = ["organization", "requested_domain", "email", "contact_person", "request_date"]
    search_fields = ["organization", "requested_domain", "email", "contact_person"]
    list_filter = ["request_date"]
    readonly_fields = ["id", "request_date", "updated_at"]
    actions = ["approve_requests", "reject_requests"]

    def get_readonly_fields(self, request, obj=None):
        if obj:
            return self.readonly_fields + ["requested_domain"]
        return self.readonly_fields

    def _request_repo(self):
        return DjangoLicenseRequestRepository()

    def save_model(self, request, obj, form, change):
        if change:
            changes = form.changed_details()
            if changes:
                async_to_sync(UpdateRequestHandler(self._request_repo()).handle)(
                    UpdateRequestCommand(request_id=obj.pk, changes=changes)
                )
            return
        created = async_to_sync(
            CreateRequestHandler(
                self._request_repo(), license_repository=DjangoLicenseRepository()
            ).handle
        )(
            CreateRequestCommand(
                organization=obj.organization,
                contact_person=obj.contact_person,
                email=obj.email,
                requested_domain=obj.requested_domain,
                phone_number=obj.phone_number,
                note=obj.note,
                custom_message=obj.custom_message,
            )
        )
        obj.pk = created.id

    def delete_model(self, request, obj):
        async_to_sync(RejectRequestHandler(self._request_repo()).handle)(
            RejectRequestCommand(request_id=obj.pk)
        )

    def delete_queryset(self, request, queryset):
        for obj in queryset:
            self.delete_model(request, obj)

    @admin.action(description="Approve selected requests (issue licenses)")
    def approve_requests(self, request, queryset):
        handler = ApproveRequestHandler(self._request_repo(), DjangoLicenseRepository())
        approved = 0
        for obj in queryset:
            try:
                license = async_to_sync(handler.handle)(ApproveRequestCommand(request_id=obj.pk))
                approved += 1
                self.message_user(request, f"{license.domain}: key {license.key}")
            except (DomainException, ValueError) as e:
                self.message_user(request, f"{obj}: {e}", level=messages.WARNING)
        self.message_user(request, f"{approved} request(s) approved.", level=messages.SUCCESS)

    @admin.action(description="Reject selected requests")
    def reject_requests(self, request, queryset):
        count = 0
        for obj in queryset:
            self.delete_model(request, obj)
            count += 1
        self.message_user(request, f"{count} request(s) rejected.", level=messages.SUCCESS)
