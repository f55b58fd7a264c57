from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import QuestionViewSet, UserViewSet

router = DefaultRouter()
router.register(r'questions', QuestionViewSet)
router.register(r'users', UserViewSet, basename='users')

urlpatterns = [
    path('', include(router.urls)),
]
