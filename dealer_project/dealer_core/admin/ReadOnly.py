from django.contrib import admin
from django.core.exceptions import PermissionDenied

"""Base admin for history tables and closures: rows only change through close/restore."""
class ReadOnlyAdmin(admin.ModelAdmin):
    list_per_page = 50  # page size (adjust for performance)

    # make every model field readonly
    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    # Allow the user to view the instance page;
    # actual edits are prevented because fields are readonly.
    def has_change_permission(self, request, obj=None):
        return True

    # Prevent any attempt to save via the admin UI
    def save_model(self, request, obj, form, change):
        raise PermissionDenied("Closed rows cannot be changed via the admin.")

    # Disable admin actions like delete_selected; subclasses add their own
    def get_actions(self, request):
        return {}

    # Common useful filters if present
    def get_list_filter(self, request):
        possible = {f.name for f in self.model._meta.fields}
        filters = []
        for candidate in ("division", "closed_year", "closed_month", "status"):
            if candidate in possible:
                filters.append(candidate)
        return tuple(filters)

    # Useful searchable text fields if present
    def get_search_fields(self, request):
        possible = {f.name for f in self.model._meta.fields}
        search = []
        for candidate in ("plate_number", "description", "name", "notes"):
            if candidate in possible:
                search.append(candidate)
        return tuple(search)
