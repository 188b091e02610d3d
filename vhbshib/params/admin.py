from django.contrib import admin

from .models import ConfigParam


@admin.register(ConfigParam)
class ConfigParamAdmin(admin.ModelAdmin):
    list_display = ('param_name', 'param_value')
    search_fields = ('param_name',)
