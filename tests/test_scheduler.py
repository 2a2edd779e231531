"""Tests for the reconciliation scheduler."""

import pytest

from app.models import Flight, Network
from app.services.orchestration.scheduler import ReconciliationScheduler

from factories import ivao_feed, ivao_strategy, vatsim_feed, vatsim_pilot, vatsim_strategy


@pytest.fixture
def strategies():
    return {
        Network.IVAO: ivao_strategy(ivao_feed()),
        Network.VATSIM: vatsim_strategy(vatsim_feed(vatsim_pilot("DLH400", 80, {}))),
    }


class TestReconciliationScheduler:
    """Tests for ReconciliationScheduler."""

    @pytest.mark.asyncio
    async def test_start_registers_one_job_per_network(self, database, strategies):
        scheduler = ReconciliationScheduler(database, strategies, interval_seconds=60)

        await scheduler.start()
        try:
            jobs = {job.id: job for job in scheduler.scheduler.get_jobs()}

            assert set(jobs) == {"reconcile_ivao", "reconcile_vatsim"}
            assert all(job.trigger.interval.total_seconds() == 60 for job in jobs.values())
            assert scheduler.get_next_run_time(Network.IVAO) is not None
            assert scheduler.get_status()["running"] is True
        finally:
            await scheduler.stop()

        assert scheduler.running is False
        assert scheduler.get_next_run_time(Network.IVAO) is None

    @pytest.mark.asyncio
    async def test_only_enabled_networks_are_scheduled(self, database, strategies):
        scheduler = ReconciliationScheduler(database, {Network.VATSIM: strategies[Network.VATSIM]})

        await scheduler.start()
        try:
            assert [job.id for job in scheduler.scheduler.get_jobs()] == ["reconcile_vatsim"]
        finally:
            await scheduler.stop()

    @pytest.mark.asyncio
    async def test_job_survives_errors(self, database, strategies, monkeypatch):
        scheduler = ReconciliationScheduler(database, strategies)

        async def exploding_cycle(network):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(scheduler, "run_cycle", exploding_cycle)

        await scheduler._reconcile_job(Network.VATSIM)

        assert scheduler.get_last_stats(Network.VATSIM).error == "database unavailable"

    @pytest.mark.asyncio
    async def test_job_runs_cycle_and_keeps_stats(self, database, strategies, make_pilot, make_flight, load):
        pilot = await make_pilot()
        flight = await make_flight(pilot.id, callsign="DLH400")
        scheduler = ReconciliationScheduler(database, strategies)

        await scheduler._reconcile_job(Network.VATSIM)

        assert scheduler.get_last_stats(Network.VATSIM).started == 1
        assert scheduler.get_last_stats(Network.IVAO) is None
        assert (await load(Flight, flight.id)).started_at is not None

    @pytest.mark.asyncio
    async def test_trigger_manual_sync(self, database, strategies):
        scheduler = ReconciliationScheduler(database, strategies)

        result = await scheduler.trigger_manual_sync(Network.IVAO)

        assert result["status"] == "success"
        assert result["network"] == "IVAO"
        assert result["candidates"] == 0

    @pytest.mark.asyncio
    async def test_trigger_manual_sync_for_disabled_network(self, database, strategies):
        scheduler = ReconciliationScheduler(database, {Network.IVAO: strategies[Network.IVAO]})

        result = await scheduler.trigger_manual_sync(Network.VATSIM)

        assert result["status"] == "error"
        assert "disabled" in result["error"]

    @pytest.mark.asyncio
    async def test_trigger_manual_sync_reports_fetch_error(self, database):
        scheduler = ReconciliationScheduler(database, {Network.VATSIM: vatsim_strategy({}, status_code=500)})

        result = await scheduler.trigger_manual_sync(Network.VATSIM)

        assert result["status"] == "error"
        assert result["error"]
