from django.contrib.auth.views import LogoutView
from django.urls import path

from . import views

app_name = 'shibauth'

urlpatterns = [
    path('login/', views.ShibbolethLoginView.as_view(), name='login'),
    path('select-courses/', views.CourseSelectView.as_view(), name='select-courses'),
    path('start/', views.start, name='start'),
    path('logged-in/', views.logged_in, name='logged-in'),
    path('logout/', LogoutView.as_view(next_page='shibauth:start'), name='logout'),
]
