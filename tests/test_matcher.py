"""Tests for matching stored flights to network snapshot entries."""

from app.models import Flight, FlightKind, FlightStatus, Network
from app.schemas.network import NetworkSnapshotEntry
from app.services.networks import IvaoStrategy, VatsimStrategy
from app.services.reconciliation.flight_matcher import FlightMatcher


def flight(callsign: str, network: Network = Network.IVAO) -> Flight:
    return Flight(
        id=1,
        callsign=callsign,
        aircraft="A320",
        flight_type=FlightKind.REGULAR.value,
        status=FlightStatus.PENDING.value,
        network=network.value,
        departure_icao="LFPG",
        arrival_icao="LEMD",
        pilot_id=1,
    )


def ivao_entry(callsign: str, state=None, tracked: bool = True) -> NetworkSnapshotEntry:
    return NetworkSnapshotEntry(network=Network.IVAO, callsign=callsign, is_tracked=tracked, last_state=state)


def vatsim_entry(callsign: str, groundspeed: float = 0, has_flight_plan: bool = True) -> NetworkSnapshotEntry:
    return NetworkSnapshotEntry(
        network=Network.VATSIM, callsign=callsign, groundspeed=groundspeed, has_flight_plan=has_flight_plan
    )


class TestFlightMatcher:
    """Tests for FlightMatcher."""

    def test_first_match_wins(self):
        """A later, equally valid entry never replaces the first one."""
        snapshot = [ivao_entry("AAA123", "Departing"), ivao_entry("AAA123X", None)]

        match = FlightMatcher(IvaoStrategy()).match(flight("AAA123"), snapshot)

        assert match is snapshot[0]

    def test_first_match_wins_over_exact_match(self):
        snapshot = [ivao_entry("XAAA123", "Boarding"), ivao_entry("AAA123", "Departing")]

        match = FlightMatcher(IvaoStrategy()).match(flight("AAA123"), snapshot)

        assert match is snapshot[0]

    def test_substring_match(self):
        snapshot = [ivao_entry("IBE", "Departing"), ivao_entry("IBE3456_A", "Departing")]

        match = FlightMatcher(IvaoStrategy()).match(flight("IBE3456"), snapshot)

        assert match.callsign == "IBE3456_A"

    def test_ivao_untracked_entry_is_skipped(self):
        snapshot = [ivao_entry("AAA123", tracked=False), ivao_entry("AAA123B", "En Route")]

        match = FlightMatcher(IvaoStrategy()).match(flight("AAA123"), snapshot)

        assert match is snapshot[1]

    def test_vatsim_entry_without_flight_plan_is_skipped(self):
        snapshot = [vatsim_entry("DLH400", 80, has_flight_plan=False)]

        assert FlightMatcher(VatsimStrategy()).match(flight("DLH400", Network.VATSIM), snapshot) is None

    def test_no_match(self):
        snapshot = [vatsim_entry("BAW1"), vatsim_entry("AFR22")]

        assert FlightMatcher(VatsimStrategy()).match(flight("DLH400", Network.VATSIM), snapshot) is None

    def test_empty_snapshot(self):
        assert FlightMatcher(VatsimStrategy()).match(flight("DLH400", Network.VATSIM), []) is None

    def test_empty_callsign_never_matches(self):
        snapshot = [ivao_entry("AAA123", "Departing")]

        assert FlightMatcher(IvaoStrategy()).match(flight(""), snapshot) is None

    def test_match_is_case_sensitive(self):
        snapshot = [ivao_entry("aaa123", "Departing")]

        assert FlightMatcher(IvaoStrategy()).match(flight("AAA123"), snapshot) is None
