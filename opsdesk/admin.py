from django.contrib import admin

# Customize admin site
admin.site.site_header = "OpsDesk - Admin Panel"
admin.site.site_title = "OpsDesk Admin"
admin.site.index_title = "Operations Administration"
