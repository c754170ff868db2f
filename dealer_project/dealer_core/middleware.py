from django.conf import settings
from django.utils.deprecation import MiddlewareMixin

from .managers import ALL_DIVISIONS


class CurrentDivisionMiddleware(MiddlewareMixin):
    # Run on every request and attach a .division attribute,
    # so views pass the division explicitly to the services
    def process_request(self, request):
        # an explicit header wins (API clients), then the session choice
        division = request.headers.get("X-Division")
        session = getattr(request, "session", None)
        if not division and session is not None:
            division = session.get("division")

        division = (division or ALL_DIVISIONS).strip().lower()
        # unknown values fall back to "all" instead of leaking into filters
        if division != ALL_DIVISIONS and division not in settings.DEALER_DIVISIONS:
            division = ALL_DIVISIONS
        request.division = division
