import re

from django.core.exceptions import ImproperlyConfigured
from rest_framework.throttling import AnonRateThrottle

RATE_PATTERN = re.compile(r"^(?P<num>\d+)/(?P<multiplier>\d*)(?P<unit>[smhd])")

DURATIONS = {"s": 1, "m": 60, "h": 60 * 60, "d": 60 * 60 * 24}


class ApiRateThrottle(AnonRateThrottle):
    """Per-IP limit for anonymous API traffic.

    Besides DRF's ``100/min`` style it accepts a multiplied period such as
    ``100/15m`` (100 requests per 15 minutes).
    """

    scope = "api"

    def parse_rate(self, rate):
        if rate is None:
            return (None, None)
        match = RATE_PATTERN.match(rate)
        if match is None:
            raise ImproperlyConfigured(f"Invalid throttle rate: {rate!r}")
        multiplier = int(match["multiplier"] or 1)
        return (int(match["num"]), multiplier * DURATIONS[match["unit"]])
