from django import forms


class SettingsForm(forms.Form):
    """One input per catalog parameter, typed by the parameter kind"""

    def __init__(self, catalog, *args, **kwargs):
        self.catalog = catalog

        if not kwargs.get('initial'):
            kwargs['initial'] = {
                param.name: param.value for param in catalog.params() if not param.kind.is_heading
            }
        super().__init__(*args, **kwargs)

        for param in catalog.params():
            field = param.kind.form_field(param)
            if field is not None:
                self.fields[param.name] = field

    def sections(self):
        """Bound fields grouped under their heading parameters, for the template"""
        return [
            (heading, [self[param.name] for param in members])
            for heading, members in self.catalog.sections()
        ]

    def save(self):
        for name, value in self.cleaned_data.items():
            self.catalog.set(name, value)

        self.catalog.save()
