from django.contrib import admin
from .models import User

@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'email', 'phone', 'role', 'is_active']
    list_filter = ['role', 'is_active']
    search_fields = ['name', 'email']
    exclude = ['password', 'groups', 'user_permissions', 'last_login']
    list_per_page = 20
