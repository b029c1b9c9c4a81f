from django.contrib import admin

from apps.client.models import Client, ClientContact


class ClientContactInline(admin.TabularInline):
    model = ClientContact
    extra = 1
    fields = ("name", "email", "phone", "position", "is_primary")


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ["name", "email", "phone", "is_supplier"]
    list_filter = ["is_supplier"]
    search_fields = ["name", "email"]
    inlines = [ClientContactInline]
