from decimal import Decimal

from django import forms


class GenerateInvoiceForm(forms.Form):
    tax_rate = forms.DecimalField(required=False, min_value=0, max_value=100, decimal_places=2)
    discount = forms.DecimalField(required=False, min_value=0, initial=Decimal("0"))


class InvoicePaymentForm(forms.Form):
    """``amount`` left out settles the remaining balance."""

    amount = forms.DecimalField(required=False, min_value=Decimal("0.0001"))
