"""Integration tests for the check-in orchestrator with a mocked backend."""

from datetime import date
from unittest.mock import AsyncMock, Mock

import pytest

from src.clients import (
    FrontdeskAPIServerError,
    FrontdeskAPITransportError,
    FrontdeskAPIValidationError,
)
from src.config import settings
from src.models import (
    CheckInState,
    CheckInSubmissionError,
    DataOrigin,
    ErrorKind,
    ResolutionTier,
)
from src.services import (
    FIXED_TEST,
    FORM_SOURCED,
    RESERVATION_SOURCED,
    CheckInOrchestrator,
    get_strategy,
)
from src.services.pipeline import Pipeline, PipelineContext, PipelineStep


@pytest.fixture
def orchestrator(mock_api_client):
    return CheckInOrchestrator(api_client=mock_api_client)


class TestScenarios:
    """End-to-end check-in scenarios."""

    @pytest.mark.asyncio
    async def test_scenario_a_walk_in_succeeds(self, orchestrator, mock_api_client, walk_in_request):
        result = await orchestrator.submit(FORM_SOURCED, walk_in_request)

        assert result.success is True
        assert result.folio_id == 4821
        assert result.room_tier == ResolutionTier.FILTERED_QUERY
        assert result.data_origin == DataOrigin.FORM
        assert result.endpoint_used == "/frontdesk/reserva/57/checkin"

        mock_api_client.submit_checkin.assert_awaited_once()
        reserva_id, body = mock_api_client.submit_checkin.await_args.args
        assert reserva_id == 57
        assert body["id_hab"] == 12
        assert body["fecha_llegada"] == "2025-09-28"
        assert body["fecha_salida"] == "2025-09-29"
        assert (body["adultos"], body["ninos"], body["bebes"]) == (2, 1, 0)

    @pytest.mark.asyncio
    async def test_scenario_b_date_order_blocks_network(self, orchestrator, mock_api_client, walk_in_request):
        request = walk_in_request.model_copy(update={"check_out_date": date(2025, 9, 27)})

        with pytest.raises(CheckInSubmissionError) as exc_info:
            await orchestrator.submit(FORM_SOURCED, request)

        assert exc_info.value.kind == ErrorKind.LOCAL_VALIDATION
        assert "Check-out date must be after check-in date" in exc_info.value.error.message
        assert exc_info.value.failed_state == CheckInState.VALIDATING
        mock_api_client.list_rooms.assert_not_awaited()
        mock_api_client.submit_checkin.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_scenario_c_inventory_down_uses_fallback(self, mock_api_client, walk_in_request):
        mock_api_client.list_rooms = AsyncMock(side_effect=FrontdeskAPIServerError("down", status_code=503))
        orchestrator = CheckInOrchestrator(api_client=mock_api_client)
        request = walk_in_request.model_copy(update={"room_number": "999"})

        result = await orchestrator.submit(FORM_SOURCED, request)

        assert result.room_tier == ResolutionTier.FIXED_FALLBACK
        _, body = mock_api_client.submit_checkin.await_args.args
        assert body["id_hab"] == settings.checkin.fallback_room_id

    @pytest.mark.asyncio
    async def test_scenario_d_room_conflict(self, mock_api_client, walk_in_request, room_conflict_response):
        mock_api_client.submit_checkin = AsyncMock(
            side_effect=FrontdeskAPIValidationError(
                "The given data was invalid.", status_code=422, body=room_conflict_response
            )
        )
        orchestrator = CheckInOrchestrator(api_client=mock_api_client)

        with pytest.raises(CheckInSubmissionError) as exc_info:
            await orchestrator.submit(FORM_SOURCED, walk_in_request)

        assert exc_info.value.kind == ErrorKind.ROOM_CONFLICT
        assert "no disponible" in exc_info.value.error.message
        assert exc_info.value.failed_state == CheckInState.SUBMITTING
        mock_api_client.submit_checkin.assert_awaited_once()


class TestStrategies:
    """Data-sourcing strategies share the pipeline but differ in sourcing."""

    @pytest.mark.asyncio
    async def test_form_sourced_defers_client(self, orchestrator, mock_api_client, reservation_request):
        result = await orchestrator.submit(FORM_SOURCED, reservation_request)

        _, body = mock_api_client.submit_checkin.await_args.args
        assert body["id_cliente_titular"] == settings.checkin.placeholder_client_id
        assert body["nombre_asignacion"].endswith("Llega a las 15hs")
        assert result.requires_charge_split is True

    @pytest.mark.asyncio
    async def test_fixed_test_uses_development_values(self, orchestrator, mock_api_client, reservation_request):
        result = await orchestrator.submit(FIXED_TEST, reservation_request)

        _, body = mock_api_client.submit_checkin.await_args.args
        assert result.data_origin == DataOrigin.FIXED_TEST
        assert body["id_cliente_titular"] == settings.checkin.test_client_id
        assert body["adultos"] == settings.checkin.test_adults
        assert body["ninos"] == settings.checkin.test_children
        assert body["bebes"] == settings.checkin.test_infants
        assert body["nombre_asignacion"].startswith(settings.checkin.test_assignment_label)
        # Room still goes through the resolver
        assert body["id_hab"] == 7

    @pytest.mark.asyncio
    async def test_reservation_sourced_matches_form_payload(self, mock_api_client, reservation_request):
        orchestrator = CheckInOrchestrator(api_client=mock_api_client)

        await orchestrator.submit(FORM_SOURCED, reservation_request)
        form_body = mock_api_client.submit_checkin.await_args.args[1]
        result = await orchestrator.submit(RESERVATION_SOURCED, reservation_request)
        reservation_body = mock_api_client.submit_checkin.await_args.args[1]

        assert reservation_body == form_body
        assert result.data_origin == DataOrigin.RESERVATION

    def test_get_strategy(self):
        assert get_strategy("form") is FORM_SOURCED
        assert get_strategy("fixed_test") is FIXED_TEST
        assert get_strategy("reservation") is RESERVATION_SOURCED
        with pytest.raises(KeyError):
            get_strategy("legacy")


class TestSubmissionOutcomes:
    """Each attempt ends in exactly one outcome."""

    @pytest.mark.asyncio
    async def test_non_numeric_reservation_id_fails_locally(self, orchestrator, mock_api_client, walk_in_request):
        request = walk_in_request.model_copy(update={"reservation_id": "RES-57"})

        with pytest.raises(CheckInSubmissionError) as exc_info:
            await orchestrator.submit(FORM_SOURCED, request)

        assert exc_info.value.kind == ErrorKind.LOCAL_VALIDATION
        mock_api_client.list_rooms.assert_not_awaited()
        mock_api_client.submit_checkin.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reservation_id", ["²", "0", " "])
    async def test_unusable_reservation_id_is_local_validation(
        self, orchestrator, mock_api_client, walk_in_request, reservation_id
    ):
        request = walk_in_request.model_copy(update={"reservation_id": reservation_id})

        with pytest.raises(CheckInSubmissionError) as exc_info:
            await orchestrator.submit(FORM_SOURCED, request)

        assert exc_info.value.kind == ErrorKind.LOCAL_VALIDATION
        assert exc_info.value.failed_state == CheckInState.VALIDATING
        mock_api_client.submit_checkin.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_payload_verification_failure_blocks_network(self, mock_api_client, walk_in_request, monkeypatch):
        monkeypatch.setattr(settings.checkin, "test_adults", 0)
        monkeypatch.setattr(settings.checkin, "test_children", 0)
        monkeypatch.setattr(settings.checkin, "test_infants", 0)
        orchestrator = CheckInOrchestrator(api_client=mock_api_client)

        with pytest.raises(CheckInSubmissionError) as exc_info:
            await orchestrator.submit(FIXED_TEST, walk_in_request)

        assert exc_info.value.kind == ErrorKind.LOCAL_VALIDATION
        assert exc_info.value.failed_state == CheckInState.VERIFYING
        mock_api_client.submit_checkin.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_success_false_body_is_server_error(self, mock_api_client, walk_in_request):
        mock_api_client.submit_checkin = AsyncMock(
            return_value={"success": False, "message": "La reserva ya tiene check-in"}
        )
        orchestrator = CheckInOrchestrator(api_client=mock_api_client)

        with pytest.raises(CheckInSubmissionError) as exc_info:
            await orchestrator.submit(FORM_SOURCED, walk_in_request)

        assert exc_info.value.kind == ErrorKind.SERVER_ERROR
        assert exc_info.value.error.message == "La reserva ya tiene check-in"

    @pytest.mark.asyncio
    async def test_transport_failure_is_unknown_and_not_retried(self, mock_api_client, walk_in_request):
        mock_api_client.submit_checkin = AsyncMock(
            side_effect=FrontdeskAPITransportError("Request timeout for /frontdesk/reserva/57/checkin")
        )
        orchestrator = CheckInOrchestrator(api_client=mock_api_client)

        with pytest.raises(CheckInSubmissionError) as exc_info:
            await orchestrator.submit(FORM_SOURCED, walk_in_request)

        assert exc_info.value.kind == ErrorKind.UNKNOWN
        assert mock_api_client.submit_checkin.await_count == 1

    @pytest.mark.asyncio
    async def test_success_response_without_data(self, mock_api_client, walk_in_request):
        mock_api_client.submit_checkin = AsyncMock(return_value={"success": True, "message": "ok"})
        orchestrator = CheckInOrchestrator(api_client=mock_api_client)

        result = await orchestrator.submit(FORM_SOURCED, walk_in_request)

        assert result.success is True
        assert result.folio_id is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "submit_mock",
        [
            AsyncMock(return_value={"success": True, "message": "ok", "data": {"id": 1}}),
            AsyncMock(side_effect=FrontdeskAPIServerError("down", status_code=500)),
            AsyncMock(side_effect=RuntimeError("unexpected")),
        ],
    )
    async def test_single_outcome(self, mock_api_client, walk_in_request, submit_mock):
        mock_api_client.submit_checkin = submit_mock
        orchestrator = CheckInOrchestrator(api_client=mock_api_client)

        outcomes = []
        try:
            outcomes.append(await orchestrator.submit(FORM_SOURCED, walk_in_request))
        except CheckInSubmissionError as e:
            outcomes.append(e.error)

        assert len(outcomes) == 1


class TestPipelineStates:
    @pytest.mark.asyncio
    async def test_state_sequence_on_success(self, orchestrator, walk_in_request):
        context = PipelineContext(walk_in_request, FORM_SOURCED)

        await orchestrator.build_pipeline().execute(context)

        assert [state for state in context.state_history] == [
            CheckInState.IDLE,
            CheckInState.VALIDATING,
            CheckInState.RESOLVING,
            CheckInState.ASSEMBLING,
            CheckInState.VERIFYING,
            CheckInState.SUBMITTING,
            CheckInState.SUCCEEDED,
        ]
        assert context.get_results()["room_tier"] == 1

    @pytest.mark.asyncio
    async def test_state_sequence_stops_on_failure(self, walk_in_request):
        client = Mock()
        client.list_rooms = AsyncMock()
        client.submit_checkin = AsyncMock()
        context = PipelineContext(walk_in_request.model_copy(update={"adults": 0}), FORM_SOURCED)

        await CheckInOrchestrator(api_client=client).build_pipeline().execute(context)

        assert context.state_history == [CheckInState.IDLE, CheckInState.VALIDATING, CheckInState.FAILED]
        assert context.success is False

    @pytest.mark.asyncio
    async def test_step_returning_false_halts_later_steps(self, walk_in_request):
        class RecordingStep(PipelineStep):
            def __init__(self, name, outcome):
                super().__init__(name)
                self.outcome = outcome
                self.calls = 0

            async def execute(self, context):
                self.calls += 1
                return self.outcome

        first = RecordingStep("First", True)
        failing = RecordingStep("Failing", False)
        never = RecordingStep("Never", True)
        context = PipelineContext(walk_in_request, FORM_SOURCED)

        await Pipeline("halting", [first, failing, never]).execute(context)

        assert (first.calls, failing.calls, never.calls) == (1, 1, 0)
        assert context.success is False
        assert context.state == CheckInState.FAILED
        assert context.stats["pipeline"]["successful_steps"] == 1
        assert context.stats["pipeline"]["failed_steps"] == 1
