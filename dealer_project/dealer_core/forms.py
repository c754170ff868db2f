from decimal import Decimal

from django import forms
from django.conf import settings


def _division_choices():
    return [(division, division.title()) for division in settings.DEALER_DIVISIONS]


class ClosePeriodForm(forms.Form):
    month = forms.IntegerField(min_value=1, max_value=12)
    year = forms.IntegerField()
    notes = forms.CharField(required=False, max_length=2000)

    def clean_year(self):
        year = self.cleaned_data["year"]
        low, high = settings.DEALER_CLOSURE_YEAR_MIN, settings.DEALER_CLOSURE_YEAR_MAX
        if not low <= year <= high:
            raise forms.ValidationError(f"Tahun harus di antara {low} dan {high}")
        return year


class RestorePeriodForm(ClosePeriodForm):
    division = forms.ChoiceField(choices=_division_choices)


class PreviewForm(ClosePeriodForm):
    division = forms.CharField(required=False)


class ModalAdjustmentForm(forms.Form):
    company_id = forms.IntegerField()
    amount = forms.DecimalField(max_digits=18, decimal_places=2)
    description = forms.CharField(required=False, max_length=400)
    date = forms.DateField(required=False)


class ProfitDeductionForm(forms.Form):
    operational_id = forms.IntegerField()
    date = forms.DateField()
    division = forms.ChoiceField(choices=_division_choices)
    category = forms.CharField(max_length=80)
    description = forms.CharField(required=False, max_length=400)
    amount = forms.DecimalField(max_digits=18, decimal_places=2, min_value=Decimal("0.01"))


class ProfitRestoreForm(forms.Form):
    operational_id = forms.IntegerField()
