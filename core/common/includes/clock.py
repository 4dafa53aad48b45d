"""
Clock abstraction for the gmao application.

Trigger evaluation and generation never call ``timezone.now()`` directly;
they receive a clock so that batches can be replayed for a given date and
tests stay deterministic.
"""

import datetime

from django.utils import timezone


class SystemClock:
    """Wall clock backed by django.utils.timezone and the stored asset counters."""

    def now(self):
        return timezone.now()

    def today(self):
        return timezone.localdate()

    def counter_for(self, asset):
        return asset.get_counter()


class FixedClock(SystemClock):
    """
    Clock frozen at a given date (and optional time), with optional counter
    readings overriding what the assets store, keyed by asset id.
    """

    def __init__(self, today, now=None, counters=None):
        self._today = today
        if now is None:
            now = timezone.make_aware(datetime.datetime.combine(today, datetime.time(6, 0)))
        self._now = now
        self.counters = dict(counters or {})

    def now(self):
        return self._now

    def today(self):
        return self._today

    def counter_for(self, asset):
        if asset.pk in self.counters:
            return self.counters[asset.pk]
        return asset.get_counter()

    def advance(self, **delta):
        """Move the clock forward by a timedelta expressed as keyword arguments."""
        step = datetime.timedelta(**delta)
        self._now = self._now + step
        self._today = timezone.localtime(self._now).date()


default_clock = SystemClock()


def get_clock(clock=None):
    return clock if clock is not None else default_clock
