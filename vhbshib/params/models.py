from django.db import models
from django.utils.translation import gettext_lazy as _


class ConfigParam(models.Model):
    """A persisted configuration value, keyed by the parameter name.

    Values are stored as strings and coerced by `vhbshib.params.catalog`
    when they are read back.
    """

    param_name = models.CharField(_('parameter name'), max_length=255, primary_key=True)
    param_value = models.CharField(_('parameter value'), max_length=255, null=True, blank=True, default=None)

    def __str__(self):
        return f'{self.param_name} = {self.param_value}'

    class Meta:
        db_table = 'vhbshib_config'
        verbose_name = 'configuration parameter'
