from django import forms


def join_field_name(lvnr):
    return f'join_{lvnr}'


def wait_field_name(lvnr):
    return f'wait_{lvnr}'


def candidate_label(candidate):
    if candidate.description:
        return f'{candidate.title}: {candidate.description}'
    return f'{candidate.title} (no description)'


class CourseSelectForm(forms.Form):
    """
    One choice group per vhb course number: a radio group for the courses
    that can be joined directly and a checkbox group for subscription
    requests to courses with a waiting list.
    """

    def __init__(self, courses, repository, deep_link=None, waiting=(), *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.courses = courses
        self.deep_link = deep_link

        for lvnr, ref_ids in courses.items():
            candidates = [repository.get(ref_id) for ref_id in ref_ids]
            direct = [candidate for candidate in candidates if not candidate.needs_confirmation]
            confirm = [candidate for candidate in candidates if candidate.needs_confirmation]

            if direct:
                self.fields[join_field_name(lvnr)] = forms.TypedChoiceField(
                    label=f'Course for {lvnr}',
                    choices=[(candidate.ref_id, candidate_label(candidate)) for candidate in direct],
                    coerce=int,
                    empty_value=None,
                    required=False,
                    widget=forms.RadioSelect,
                )

            if confirm:
                self.fields[wait_field_name(lvnr)] = forms.TypedMultipleChoiceField(
                    label=f'Subscription requests for {lvnr}',
                    choices=[(candidate.ref_id, candidate_label(candidate)) for candidate in confirm],
                    coerce=int,
                    required=False,
                    initial=[candidate.ref_id for candidate in confirm if candidate.ref_id in waiting],
                    widget=forms.CheckboxSelectMultiple,
                )

    def groups(self):
        """Bound fields per course number, for the template"""
        return [
            (lvnr, [self[name] for name in (join_field_name(lvnr), wait_field_name(lvnr)) if name in self.fields])
            for lvnr in self.courses
        ]

    def clean(self):
        cleaned_data = super().clean()

        # a course must be selected for the deep link to allow a redirection afterwards
        lvnr = self.deep_link
        if lvnr in self.courses:
            join = cleaned_data.get(join_field_name(lvnr))
            waiting = cleaned_data.get(wait_field_name(lvnr))
            if not join and not waiting:
                name = join_field_name(lvnr) if join_field_name(lvnr) in self.fields else wait_field_name(lvnr)
                self.add_error(name, 'Please select a course.')

        return cleaned_data

    def get_selections(self):
        """
        :return: course number => (ref_id to join or None, set of ref_ids for the waiting list)
        """
        return {
            lvnr: (
                self.cleaned_data.get(join_field_name(lvnr)),
                set(self.cleaned_data.get(wait_field_name(lvnr)) or ()),
            )
            for lvnr in self.courses
        }
