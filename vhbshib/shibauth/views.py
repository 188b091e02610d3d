import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import authenticate, login
from django.contrib.auth.decorators import login_required
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import HttpResponseRedirect
from django.shortcuts import redirect, render, resolve_url
from django.urls import reverse
from django.views.generic.base import View
from django.views.generic.edit import FormView

from vhbshib.core.logging import create_x_access_log
from vhbshib.courses.models import CourseMembership, WaitingListEntry
from vhbshib.courses.repository import CourseRepository
from vhbshib.courses.services import MembershipService
from vhbshib.params.catalog import ParameterCatalog

from .exceptions import AccessDenied, ConfigAmbiguity
from .forms import CourseSelectForm
from .matching import EntitlementMatcher
from .pipeline import DEEP_LINK_SELECT_PARAM, ShibLogin

logger = logging.getLogger('vhbshib.shibauth')


class ShibbolethLoginView(View):
    """
    Entry point protected by the Shibboleth service provider.

    The SP puts the federation attributes into the request environment.
    """

    def get(self, request, *args, **kwargs):
        shib_login = ShibLogin(request)

        try:
            user = authenticate(request, shib_login=shib_login)
        except ConfigAmbiguity as exc:
            create_x_access_log(request, 403, message='Ambiguous federation attributes', field=exc.field)
            return render(request, 'vhbshib/login-error.html', {'message': exc.message}, status=403)
        except AccessDenied as exc:
            create_x_access_log(
                request, 403, message='Federation access denied', external_account=shib_login.identity.login
            )
            messages.error(request, exc.message)
            return redirect('shibauth:start')

        if user is None:
            create_x_access_log(request, 403, message='Shibboleth Auth failed')
            messages.error(request, 'The login with your institution failed. No user data was received.')
            return redirect('shibauth:start')

        login(request, user, backend='vhbshib.shibauth.backends.ShibbolethBackend')
        shib_login.store_pending()

        create_x_access_log(
            request,
            200,
            message='Shibboleth Auth',
            external_account=shib_login.decision.external_key,
            created=shib_login.decision.is_new,
        )

        return HttpResponseRedirect(shib_login.get_redirect_url(request.GET.get('next')))


class CourseSelectView(LoginRequiredMixin, FormView):
    form_class = CourseSelectForm
    template_name = 'vhbshib/course-select.html'

    def dispatch(self, request, *args, **kwargs):
        self.memberships = MembershipService()
        self.matcher = EntitlementMatcher(
            ParameterCatalog.load_current(),
            CourseRepository(),
            self.memberships,
            request.session,
        )
        self.deep_link = request.GET.get(DEEP_LINK_SELECT_PARAM) or None

        return super().dispatch(request, *args, **kwargs)

    def get(self, request, *args, **kwargs):
        if not self.matcher.get_courses_to_select():
            return redirect(settings.LOGIN_REDIRECT_URL)

        messages.info(request, 'Your entitlement matches several courses. Please choose the course you want to join.')
        return super().get(request, *args, **kwargs)

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()

        courses = self.matcher.get_courses_to_select()
        waiting = {
            ref_id
            for ref_ids in courses.values() for ref_id in ref_ids
            if self.memberships.is_on_waiting_list(self.request.user, ref_id)
        }

        kwargs.update(
            courses=courses,
            repository=self.matcher.repository,
            deep_link=self.deep_link,
            waiting=waiting,
        )
        return kwargs

    def form_valid(self, form):
        user = self.request.user

        self.matcher.save_course_selection(user, form.get_selections())
        logger.info('Course selection saved for %s', user)

        return HttpResponseRedirect(self.get_success_url())

    def get_success_url(self):
        if self.deep_link:
            course = self.matcher.get_target_course(self.request.user, self.deep_link)
            if course is not None:
                return course.get_absolute_url()

        return resolve_url(settings.LOGIN_REDIRECT_URL)


def start(request):
    """
    Start page, shows the errors of a failed login.
    """
    return render(request, 'vhbshib/start.html', {'login_url': reverse('shibauth:login')})


@login_required
def logged_in(request):
    """
    Fallback view after logging in if no redirect url is specified.
    """

    return render(
        request,
        'vhbshib/logged-in.html',
        {
            'memberships': CourseMembership.objects.filter(user=request.user).select_related('course'),
            'waiting': WaitingListEntry.objects.filter(user=request.user).select_related('course'),
        },
    )
