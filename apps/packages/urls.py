"""
Package URL configuration
"""
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'packages'

router = DefaultRouter()
router.register(r'', views.PackageViewSet, basename='package')

urlpatterns = router.urls
