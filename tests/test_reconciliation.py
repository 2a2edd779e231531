"""Tests for full reconciliation cycles against mocked network feeds."""

from datetime import datetime, timezone

import pytest

from app.models import Flight, FlightKind, FlightStatus, FleetState, FleetUnit, Network, Pilot, UNASSIGNED_AIRCRAFT
from app.services.orchestration.reconciliation_orchestrator import ReconciliationOrchestrator
from app.services.reconciliation.transition_engine import TransitionEngine

from factories import ivao_feed, ivao_pilot, ivao_strategy, vatsim_feed, vatsim_pilot, vatsim_strategy

EARLIER = datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc)


async def reconcile(database, strategy):
    return await ReconciliationOrchestrator(database, strategy).reconcile()


class TestVatsimCycle:
    """Departure then arrival of a VATSIM flight over two cycles."""

    @pytest.mark.asyncio
    async def test_departure_then_arrival(self, database, make_pilot, make_fleet_unit, make_flight, load):
        pilot = await make_pilot(location_icao="EDDF")
        unit = await make_fleet_unit(state=FleetState.IN_USE, location_icao="EDDF")
        flight = await make_flight(pilot.id, callsign="DLH400", kind=FlightKind.CHARTER, fleet_id=unit.id)

        stats = await reconcile(database, vatsim_strategy(vatsim_feed(vatsim_pilot("DLH400", 80, {}))))

        stored = await load(Flight, flight.id)
        assert stats.matched == 1 and stats.started == 1 and stats.closed == 0
        assert stored.started_at is not None
        assert stored.closed_at is None

        stats = await reconcile(database, vatsim_strategy(vatsim_feed(vatsim_pilot("DLH400", 10, {}))))

        stored = await load(Flight, flight.id)
        assert stats.closed == 1
        assert stored.closed_at is not None

        stored_unit = await load(FleetUnit, unit.id)
        assert stored_unit.state == FleetState.FREE.value
        assert stored_unit.location_icao == "EGLL"
        assert (await load(Pilot, pilot.id)).location_icao == "EGLL"

    @pytest.mark.asyncio
    async def test_second_cycle_on_closed_flight_changes_nothing(self, database, make_pilot, make_flight, load):
        pilot = await make_pilot(location_icao="EDDF")
        flight = await make_flight(pilot.id, started_at=EARLIER)
        strategy = vatsim_strategy(vatsim_feed(vatsim_pilot("DLH400", 10, {})))

        await reconcile(database, strategy)
        first = await load(Flight, flight.id)

        stats = await reconcile(database, strategy)
        second = await load(Flight, flight.id)

        assert stats.closed == 0
        assert second.closed_at == first.closed_at

    @pytest.mark.asyncio
    async def test_first_sample_below_threshold_does_not_close(self, database, make_pilot, make_flight, load):
        pilot = await make_pilot()
        flight = await make_flight(pilot.id)

        stats = await reconcile(database, vatsim_strategy(vatsim_feed(vatsim_pilot("DLH400", 5, {}))))

        stored = await load(Flight, flight.id)
        assert stats.matched == 1
        assert stored.started_at is None and stored.closed_at is None


class TestIvaoCycle:
    """Tests for IVAO reconciliation."""

    @pytest.mark.asyncio
    async def test_free_mode_backfill_and_start(self, database, make_pilot, make_flight, load):
        pilot = await make_pilot()
        flight = await make_flight(
            pilot.id,
            callsign="CCA101",
            network=Network.IVAO,
            kind=FlightKind.FREE_MODE,
            aircraft=UNASSIGNED_AIRCRAFT,
        )

        stats = await reconcile(database, ivao_strategy(ivao_feed(ivao_pilot("CCA101", "Departing", "A320"))))

        stored = await load(Flight, flight.id)
        assert stats.backfilled == 1 and stats.started == 1
        assert stored.aircraft == "A320"
        assert stored.started_at is not None

    @pytest.mark.asyncio
    async def test_on_blocks_closes_started_flight(self, database, make_pilot, make_flight, load):
        pilot = await make_pilot(location_icao="LFPG")
        flight = await make_flight(
            pilot.id, callsign="AFR12", network=Network.IVAO, started_at=EARLIER, arrival_icao="LEMD"
        )

        await reconcile(database, ivao_strategy(ivao_feed(ivao_pilot("AFR12", "On Blocks"))))

        assert (await load(Flight, flight.id)).closed_at is not None
        assert (await load(Pilot, pilot.id)).location_icao == "LEMD"

    @pytest.mark.asyncio
    async def test_untracked_pilot_is_not_matched(self, database, make_pilot, make_flight, load):
        pilot = await make_pilot()
        flight = await make_flight(pilot.id, callsign="AFR12", network=Network.IVAO)

        stats = await reconcile(database, ivao_strategy(ivao_feed(ivao_pilot("AFR12", tracked=False))))

        assert stats.matched == 0
        assert (await load(Flight, flight.id)).started_at is None


class TestCandidateSelection:
    """Only pending flights on the cycle's network are touched."""

    @pytest.mark.asyncio
    async def test_unmatched_flight_is_unchanged(self, database, make_pilot, make_flight, load):
        pilot = await make_pilot()
        flight = await make_flight(pilot.id, callsign="DLH400")

        stats = await reconcile(database, vatsim_strategy(vatsim_feed(vatsim_pilot("BAW9", 200, {}))))

        stored = await load(Flight, flight.id)
        assert stats.candidates == 1 and stats.matched == 0
        assert stored.started_at is None and stored.closed_at is None and stored.aircraft == "A320"

    @pytest.mark.asyncio
    async def test_other_network_and_offline_flights_are_ignored(self, database, make_pilot, make_flight, load):
        pilot = await make_pilot()
        ivao_flight = await make_flight(pilot.id, network=Network.IVAO)
        offline_flight = await make_flight(pilot.id, network=None)

        stats = await reconcile(database, vatsim_strategy(vatsim_feed(vatsim_pilot("DLH400", 200, {}))))

        assert stats.candidates == 0
        assert (await load(Flight, ivao_flight.id)).started_at is None
        assert (await load(Flight, offline_flight.id)).started_at is None

    @pytest.mark.asyncio
    async def test_validated_flights_are_ignored(self, database, make_pilot, make_flight, load):
        pilot = await make_pilot(location_icao="EDDF")
        flight = await make_flight(pilot.id, status=FlightStatus.ACCEPTED, started_at=EARLIER)

        stats = await reconcile(database, vatsim_strategy(vatsim_feed(vatsim_pilot("DLH400", 0, {}))))

        assert stats.candidates == 0
        assert (await load(Flight, flight.id)).closed_at is None
        assert (await load(Pilot, pilot.id)).location_icao == "EDDF"


class TestFailures:
    """Tests for error handling during a cycle."""

    @pytest.mark.asyncio
    async def test_fetch_error_aborts_cycle(self, database, make_pilot, make_flight, load):
        pilot = await make_pilot()
        flight = await make_flight(pilot.id)

        stats = await reconcile(database, vatsim_strategy({"error": "maintenance"}, status_code=502))

        assert stats.error is not None
        assert stats.candidates == 0
        assert (await load(Flight, flight.id)).started_at is None

    @pytest.mark.asyncio
    async def test_malformed_feed_aborts_cycle(self, database, make_pilot, make_flight):
        pilot = await make_pilot()
        await make_flight(pilot.id)

        stats = await reconcile(database, vatsim_strategy({"pilots": "unavailable"}))

        assert not stats.succeeded
        assert stats.matched == 0

    @pytest.mark.asyncio
    async def test_unreadable_entry_does_not_block_other_flights(self, database, make_pilot, make_flight, load):
        pilot = await make_pilot()
        flight = await make_flight(pilot.id, callsign="DLH400")

        stats = await reconcile(
            database,
            vatsim_strategy(vatsim_feed({"groundspeed": 120, "flight_plan": {}}, vatsim_pilot("DLH400", 80, {}))),
        )

        assert stats.succeeded
        assert stats.snapshot_size == 1
        assert stats.started == 1
        assert (await load(Flight, flight.id)).started_at is not None

    @pytest.mark.asyncio
    async def test_one_failing_flight_does_not_stop_the_rest(self, database, monkeypatch, make_pilot, make_flight, load):
        pilot = await make_pilot()
        broken = await make_flight(pilot.id, callsign="DLH400")
        healthy = await make_flight(pilot.id, callsign="BAW22")

        original_apply = TransitionEngine.apply

        async def flaky_apply(self, flight, entry):
            if flight.id == broken.id:
                raise RuntimeError("boom")
            return await original_apply(self, flight, entry)

        monkeypatch.setattr(TransitionEngine, "apply", flaky_apply)

        stats = await reconcile(
            database,
            vatsim_strategy(vatsim_feed(vatsim_pilot("DLH400", 90, {}), vatsim_pilot("BAW22", 90, {}))),
        )

        assert stats.failed == 1
        assert stats.started == 1
        assert (await load(Flight, broken.id)).started_at is None
        assert (await load(Flight, healthy.id)).started_at is not None
