"""
Custom model managers for the gmao application.
"""

from django.db import models
from django.db.models.query import QuerySet


class SiteScopedManager(models.Manager):
    """
    A manager exposing explicit site-scoped querysets.

    The site is always passed in by the caller; nothing is read from request
    or thread-local state.
    """

    def for_site(self, site) -> QuerySet:
        """
        Return a queryset filtered by the specified site.

        Args:
            site: A Site instance or a site id

        Returns:
            A queryset filtered by the specified site
        """
        site_id = getattr(site, "pk", site)
        return super().get_queryset().filter(site_id=site_id)
