from django.contrib import admin

from accesslogs.models import AccessLog


@admin.register(AccessLog)
class AccessLogAdmin(admin.ModelAdmin):
    list_display = ("epoch", "host", "method", "path", "status", "remote_addr")
    search_fields = ("host", "path", "referer", "remote_addr")
    list_filter = ("host", "method", "status")
