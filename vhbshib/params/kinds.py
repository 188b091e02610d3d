import logging

from django import forms


logger = logging.getLogger(__name__)


FALSE_STRINGS = ('', '0', 'false', 'off', 'no')


class ParamKind:
    """Base of the parameter kinds.

    Each kind knows how to coerce raw input (form data or a persisted string)
    into its python value, how to serialize that value back into the
    `param_value` column, and which form field edits it.
    """

    name = None
    is_heading = False

    def coerce(self, raw, param):
        return raw

    def serialize(self, value):
        if value is None:
            return None
        return str(value)

    def form_field(self, param):
        raise NotImplementedError


class HeadingKind(ParamKind):
    name = 'heading'
    is_heading = True

    def coerce(self, raw, param):
        # headings carry no value
        return param.value

    def form_field(self, param):
        return None


class TextKind(ParamKind):
    name = 'text'

    def coerce(self, raw, param):
        return str(raw)

    def form_field(self, param):
        return forms.CharField(
            label=param.title,
            help_text=param.description,
            required=False,
            max_length=255,
            widget=forms.TextInput(attrs={'class': 'form-control'}),
        )


class BooleanKind(ParamKind):
    name = 'boolean'

    def coerce(self, raw, param):
        if isinstance(raw, str):
            return raw.strip().lower() not in FALSE_STRINGS
        return bool(raw)

    def serialize(self, value):
        if value is None:
            return None
        return '1' if value else ''

    def form_field(self, param):
        return forms.BooleanField(label=param.title, help_text=param.description, required=False)


class _NumberKind(ParamKind):
    number_type = None

    def coerce(self, raw, param):
        if isinstance(raw, str) and not raw.strip():
            return None
        try:
            value = self.number_type(raw)
        except (TypeError, ValueError):
            logger.warning('Invalid %s value %r for parameter %s', self.name, raw, param.name)
            return None

        if param.min_value is not None and value < param.min_value:
            logger.warning('Value %r below %r for parameter %s', value, param.min_value, param.name)
            return None

        return value


class IntegerKind(_NumberKind):
    name = 'integer'
    number_type = int

    def form_field(self, param):
        return forms.IntegerField(
            label=param.title,
            help_text=param.description,
            required=False,
            min_value=param.min_value,
            widget=forms.NumberInput(attrs={'class': 'form-control', 'size': 10}),
        )


class FloatKind(_NumberKind):
    name = 'float'
    number_type = float

    def form_field(self, param):
        return forms.FloatField(
            label=param.title,
            help_text=param.description,
            required=False,
            min_value=param.min_value,
            widget=forms.NumberInput(attrs={'class': 'form-control', 'size': 10, 'step': 'any'}),
        )


class SelectKind(ParamKind):
    name = 'select'

    def coerce(self, raw, param):
        value = str(raw)
        keys = [key for key, _ in param.options]
        if keys and value not in keys:
            logger.warning('Unknown option %r for parameter %s', value, param.name)
            return keys[0]
        return value

    def form_field(self, param):
        return forms.ChoiceField(
            label=param.title,
            help_text=param.description,
            required=False,
            choices=param.options,
            widget=forms.Select(attrs={'class': 'form-control'}),
        )


HEADING = HeadingKind()
TEXT = TextKind()
BOOLEAN = BooleanKind()
INTEGER = IntegerKind()
FLOAT = FloatKind()
SELECT = SelectKind()
