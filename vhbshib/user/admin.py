from django.contrib import admin

from .models import User, UserPreference


class PreferenceInline(admin.TabularInline):
    model = UserPreference


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    search_fields = ('login', 'external_account', 'email', 'first_name', 'last_name', 'matriculation')
    list_filter = ('auth_mode', 'is_superuser', 'is_active')
    fields = ('login', 'external_account', 'auth_mode', 'first_name', 'last_name', 'email', 'gender',
              'matriculation', 'title', 'institution', 'is_active', 'date_joined', 'last_login')
    readonly_fields = ('external_account', 'date_joined', 'last_login')
    list_display = ('login', 'external_account', 'email', 'auth_mode', 'is_active', 'last_login')
    inlines = [
        PreferenceInline,
    ]

    def get_fields(self, request, obj=None):
        fields = super().get_fields(request, obj)

        if request.user.is_superuser:
            fields += ('is_staff', 'is_superuser', 'groups', 'user_permissions')
        return fields
