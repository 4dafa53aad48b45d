"""
Factory helpers for the gmao tests.
"""

import datetime
import itertools
from decimal import Decimal

from django.contrib.auth import get_user_model

from core.common.includes import plans, work_orders
from core.common.includes.clock import FixedClock
from core.common.models import (
    Asset,
    AssetKind,
    FrequencyType,
    Part,
    Site,
)

_sequence = itertools.count(1)

TODAY = datetime.date(2025, 3, 10)


def make_clock(today=TODAY, **kwargs):
    return FixedClock(today, **kwargs)


def create_user(username=None, **kwargs):
    username = username or f"user{next(_sequence)}"
    return get_user_model().objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="password",
        **kwargs,
    )


def create_site(code=None, **kwargs):
    code = code or f"S{next(_sequence)}"
    kwargs.setdefault("name", f"Site {code}")
    return Site.objects.create(code=code, **kwargs)


def create_asset(site, kind=AssetKind.EQUIPMENT, counter=0, **kwargs):
    number = next(_sequence)
    kwargs.setdefault("code", f"AST-{number}")
    kwargs.setdefault("name", f"Asset {number}")
    return Asset.objects.create(site=site, kind=kind, counter=counter, **kwargs)


def create_vehicle(site, counter=10000, **kwargs):
    kwargs.setdefault("counter_unit", "km")
    return create_asset(site, kind=AssetKind.VEHICLE, counter=counter, **kwargs)


def create_part(site, quantity_in_stock=10, unit_price=Decimal("25.00"), minimum_stock=2, **kwargs):
    number = next(_sequence)
    kwargs.setdefault("code", f"PRT-{number}")
    kwargs.setdefault("name", f"Part {number}")
    return Part.objects.create(
        site=site,
        quantity_in_stock=quantity_in_stock,
        unit_price=unit_price,
        minimum_stock=minimum_stock,
        **kwargs,
    )


def create_plan(
    site,
    asset,
    frequency_type=FrequencyType.MONTHLY,
    start_date=TODAY,
    clock=None,
    **kwargs,
):
    kwargs.setdefault("name", "Monthly inspection")
    outcome = plans.create(
        site=site,
        asset=asset,
        frequency_type=frequency_type,
        start_date=start_date,
        clock=clock or make_clock(),
        **kwargs,
    )
    assert outcome, outcome.reason
    return outcome.value


def create_work_order(site, asset, clock=None, **kwargs):
    kwargs.setdefault("title", "Replace filter")
    outcome = work_orders.create(site=site, asset=asset, clock=clock or make_clock(), **kwargs)
    assert outcome, outcome.reason
    return outcome.value
