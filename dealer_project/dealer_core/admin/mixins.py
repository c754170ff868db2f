from django.conf import settings

from dealer_core.managers import ALL_DIVISIONS


class DivisionAdminMixin:
    """
    Scope admin lists to the division picked for the request.
    Uses request.division (set by CurrentDivisionMiddleware);
    "all" shows every division.
    """

    def _get_request_division(self, request):
        return getattr(request, "division", None) or ALL_DIVISIONS

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        division = self._get_request_division(request)
        if division == ALL_DIVISIONS:
            return qs
        return qs.filter(division=division)

    def formfield_for_dbfield(self, db_field, request, **kwargs):
        # offer the configured divisions instead of a free text box
        if db_field.name == "division":
            from django import forms

            kwargs["widget"] = forms.Select(
                choices=[(d, d.title()) for d in settings.DEALER_DIVISIONS]
            )
        return super().formfield_for_dbfield(db_field, request, **kwargs)

    def save_model(self, request, obj, form, change):
        # new rows default to the request's division when one is picked
        division = self._get_request_division(request)
        if not change and not obj.division and division != ALL_DIVISIONS:
            obj.division = division
        super().save_model(request, obj, form, change)
