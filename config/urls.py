from django.http import JsonResponse
from django.urls import path
from rest_framework import permissions
from rest_framework.decorators import api_view, permission_classes


@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def health_check(request):
    """Simple health check endpoint for container orchestration."""
    return JsonResponse({"status": "ok"})


urlpatterns = [
    path("health/", health_check, name="health-check"),
]
