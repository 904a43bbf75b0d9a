"""Shared form utilities."""


class DefaultsFormMixin:
    """
    Makes the fields named in ``field_defaults`` optional and fills in the
    default when a value is missing, mirroring the model defaults for JSON
    payloads that omit them.
    """

    field_defaults = {}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in self.field_defaults:
            if name in self.fields:
                self.fields[name].required = False

    def clean(self):
        cleaned_data = super().clean()
        for name, default in self.field_defaults.items():
            if name in self.fields and cleaned_data.get(name) in (None, ""):
                cleaned_data[name] = default
        return cleaned_data
