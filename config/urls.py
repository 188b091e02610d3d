from django.conf import settings
from django.contrib import admin
from django.urls import include, path

from django.views.generic.base import RedirectView

admin.site.site_header = "vhb Shibboleth Admin Section"
admin.site.site_title = ""
admin.site.index_title = ""

urlpatterns = [
    path("", RedirectView.as_view(pattern_name=settings.LOGIN_URL)),
    path("admin/", admin.site.urls),
    path("settings/", include("vhbshib.params.urls")),
    path("shibauth/", include("vhbshib.shibauth.urls")),
]
