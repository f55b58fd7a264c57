from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('questions.urls')),
    path('api/exams/', include('exams.urls')),
    # Authentication (browsable API login/logout)
    path('api-auth/', include('rest_framework.urls')),
]
