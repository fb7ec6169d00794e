"""Data-sourcing strategies for check-in submissions.

All strategies feed the same resolve/assemble/verify pipeline; they only
differ in where the titular client id, labels and guest counts come from.
"""

from structlog import get_logger

from src.config import settings
from src.models.checkin import CheckInRequest, ClientId, ClientReference
from src.models.submission import DataOrigin
from src.services.assembly import AssemblyDefaults

logger = get_logger(__name__)


class DataSourceStrategy:
    """Base strategy: everything comes from the live form."""

    origin: DataOrigin = DataOrigin.FORM

    @property
    def name(self) -> str:
        return self.origin.value

    def client_id(self, request: CheckInRequest) -> ClientId:
        """Titular client id for the payload."""
        # The backend derives the account from the reservation on its side
        return ClientReference.UNRESOLVED

    def guest_counts(self, request: CheckInRequest) -> tuple[int, int, int]:
        """(adults, children, infants) for the payload."""
        return request.adults, request.children, request.infants

    def assembly_defaults(self) -> AssemblyDefaults:
        return AssemblyDefaults.from_settings()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(origin={self.origin.value!r})"


class FormSourcedStrategy(DataSourceStrategy):
    """Room, guest and date fields entirely from the form."""

    origin = DataOrigin.FORM


class FixedTestStrategy(DataSourceStrategy):
    """Fixed development values for diagnosing the endpoint. Not for guest traffic."""

    origin = DataOrigin.FIXED_TEST

    def client_id(self, request: CheckInRequest) -> ClientId:
        return settings.checkin.test_client_id

    def guest_counts(self, request: CheckInRequest) -> tuple[int, int, int]:
        return (
            settings.checkin.test_adults,
            settings.checkin.test_children,
            settings.checkin.test_infants,
        )

    def assembly_defaults(self) -> AssemblyDefaults:
        return AssemblyDefaults(
            assignment_label=settings.checkin.test_assignment_label,
            observation_placeholder=settings.checkin.test_observation,
            placeholder_client_id=settings.checkin.placeholder_client_id,
        )


class ReservationSourcedStrategy(FormSourcedStrategy):
    """Existing-reservation path.

    There is no reservation-read endpoint, so client id, dates and guests
    cannot be taken from the reservation; this behaves like the form-sourced
    strategy and says so in the logs.
    """

    origin = DataOrigin.RESERVATION

    def client_id(self, request: CheckInRequest) -> ClientId:
        logger.info(
            "Reservation data unavailable, using form data",
            reserva_id=request.reservation_id,
        )
        return super().client_id(request)


FORM_SOURCED = FormSourcedStrategy()
FIXED_TEST = FixedTestStrategy()
RESERVATION_SOURCED = ReservationSourcedStrategy()

STRATEGIES: dict[str, DataSourceStrategy] = {
    strategy.name: strategy for strategy in (FORM_SOURCED, FIXED_TEST, RESERVATION_SOURCED)
}


def get_strategy(name: str) -> DataSourceStrategy:
    """Look up a strategy by its data origin name.

    Raises:
        KeyError: If no strategy has that name
    """
    try:
        return STRATEGIES[name]
    except KeyError:
        raise KeyError(f"Unknown data source strategy: {name!r} (choose from {sorted(STRATEGIES)})") from None
