# users/urls.py
from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import UserViewSet, signin, signup

router = SimpleRouter()
router.register(r'', UserViewSet, basename='user')

auth_urlpatterns = [
    path('signup/', signup, name='auth-signup'),
    path('signin/', signin, name='auth-signin'),
]

urlpatterns = [
    path('', include(router.urls)),
]
