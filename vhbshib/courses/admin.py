from django.contrib import admin

from .models import VHB_CATALOG, Course, CourseIdentifier, CourseKeyword, CourseMembership, CourseRole, WaitingListEntry


class IdentifierInline(admin.TabularInline):
    model = CourseIdentifier


class KeywordInline(admin.TabularInline):
    model = CourseKeyword


class RoleInline(admin.TabularInline):
    model = CourseRole
    fields = ('title',)


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    search_fields = ('title', 'identifiers__entry', 'keywords__keyword')
    list_filter = ('is_online', 'is_deleted', 'needs_confirmation')
    list_display = ('ref_id', 'title', 'is_online', 'needs_confirmation', 'list_patterns')
    inlines = [
        IdentifierInline,
        KeywordInline,
        RoleInline,
    ]

    def list_patterns(self, obj):
        patterns = list(obj.identifiers.filter(catalog=VHB_CATALOG).values_list('entry', flat=True))
        patterns += list(obj.keywords.values_list('keyword', flat=True))
        return ', '.join(patterns)

    list_patterns.short_description = 'course number patterns'


@admin.register(CourseMembership)
class CourseMembershipAdmin(admin.ModelAdmin):
    list_display = ('course', 'user', 'created')
    search_fields = ('user__login', 'course__title')


@admin.register(WaitingListEntry)
class WaitingListEntryAdmin(admin.ModelAdmin):
    list_display = ('course', 'user', 'created')
    search_fields = ('user__login', 'course__title')
