from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import ExamViewSet

router = SimpleRouter()
router.register(r'', ExamViewSet, basename='exams')

urlpatterns = [
    path('', include(router.urls)),
]
