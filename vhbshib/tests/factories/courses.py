import factory


class CourseFactory(factory.django.DjangoModelFactory):
    ref_id = factory.Sequence(lambda n: 100 + n)
    obj_id = factory.Sequence(lambda n: 5000 + n)
    title = factory.Sequence(lambda n: f'Course {n+1}')
    description = ''

    class Meta:
        model = 'courses.Course'

    @factory.post_generation
    def lv_keywords(self, create, extracted, **kwargs):
        """Add course number patterns as LV_ keywords"""
        if not create:
            return

        if extracted:
            for keyword in extracted:
                self.keywords.create(keyword=keyword)

    @factory.post_generation
    def vhb_identifiers(self, create, extracted, **kwargs):
        """Add course number patterns as identifiers of the vhb catalog"""
        if not create:
            return

        if extracted:
            for entry in extracted:
                self.identifiers.create(catalog='vhb', entry=entry)


class CourseRoleFactory(factory.django.DjangoModelFactory):
    course = factory.SubFactory(CourseFactory)
    title = factory.Sequence(lambda n: f'Role {n+1}')

    class Meta:
        model = 'courses.CourseRole'
