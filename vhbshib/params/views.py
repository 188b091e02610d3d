import logging

from django.contrib import messages
from django.contrib.admin.views.decorators import staff_member_required
from django.urls import reverse
from django.utils.decorators import method_decorator
from django.views.generic import FormView

from .catalog import ParameterCatalog
from .forms import SettingsForm


logger = logging.getLogger(__name__)


@method_decorator(staff_member_required, name='dispatch')
class SettingsView(FormView):
    form_class = SettingsForm
    template_name = 'vhbshib/settings.html'

    def dispatch(self, request, *args, **kwargs):
        self.catalog = ParameterCatalog.load_current()
        return super().dispatch(request, *args, **kwargs)

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs['catalog'] = self.catalog
        return kwargs

    def get_success_url(self):
        return reverse('params:settings')

    def form_valid(self, form):
        form.save()

        logger.info('Settings saved by %s', self.request.user)
        messages.success(self.request, 'Settings saved')

        return super().form_valid(form)
