"""
Тесты для Session Metrics

Проверяет:
1. Duration по сегментам (login/logout, pause/resume)
2. Rollover-safe дельты прогресса
3. Top-N разбивки с остатком
4. MetricsSnapshot: totals и rate per hour
"""

import pytest

from goldph.core.domain import (
    CASH,
    EXPENSE_REPAIRS,
    INCOME_LOOTED_COIN,
    OwnerKey,
    ProgressTrack,
    Session,
    ValueBucket,
    inventory_account,
    looted_income_account,
)
from goldph.ledger import Ledger
from goldph.metrics import (
    MetricsConfig,
    add_gain,
    compute_metrics,
    duration_so_far,
    finalize_duration,
    fold_open_segment,
    open_segment,
    observe_rollover,
    observe_source,
    pause_clock,
    resume_clock,
    rollover_delta,
    top_contributors,
)


@pytest.fixture
def session() -> Session:
    return Session(
        session_id=1,
        owner=OwnerKey(character="Rexxar", realm="Mok'Nathal", faction="Horde"),
        started_at=0.0,
        current_login_at=0.0,
    )


# =============================================================================
# DURATION
# =============================================================================


class TestDuration:
    """Тесты учёта длительности"""

    def test_open_segment_counts_live(self, session: Session) -> None:
        assert duration_so_far(session, 120.0) == 120.0

    def test_pause_resume_scenario(self, session: Session) -> None:
        """Старт t=0, пауза t=100, resume t=150, запрос t=200 → 150"""
        pause_clock(session, 100.0)
        assert session.accumulated_duration == 100.0
        assert duration_so_far(session, 140.0) == 100.0  # заморожено на паузе

        resume_clock(session, 150.0)
        assert duration_so_far(session, 200.0) == 150.0

    def test_logout_login_folds_segments(self, session: Session) -> None:
        fold_open_segment(session, 60.0)
        assert session.current_login_at is None
        assert duration_so_far(session, 500.0) == 60.0

        assert open_segment(session, 500.0)
        assert duration_so_far(session, 530.0) == 90.0

    def test_open_segment_not_while_paused(self, session: Session) -> None:
        pause_clock(session, 10.0)
        assert not open_segment(session, 20.0)
        assert session.current_login_at is None

    def test_open_segment_not_twice(self, session: Session) -> None:
        assert not open_segment(session, 50.0)
        assert session.current_login_at == 0.0

    def test_negative_segment_clamped(self, session: Session) -> None:
        session.current_login_at = 100.0
        assert duration_so_far(session, 50.0) == 0.0

    def test_finalize_fixes_duration(self, session: Session) -> None:
        finalize_duration(session, 300.0)
        session.ended_at = 300.0
        assert session.duration_sec == 300.0
        assert duration_so_far(session, 10_000.0) == 300.0


# =============================================================================
# ROLLOVER
# =============================================================================


class TestRollover:
    """Тесты rollover_delta"""

    def test_normal_gain(self) -> None:
        assert rollover_delta(100, 1000, 250) == 150

    def test_milestone_rollover(self) -> None:
        """(1000 − 900) + 50 = 150"""
        assert rollover_delta(900, 1000, 50) == 150

    @pytest.mark.parametrize(
        "old, old_max, new",
        [
            (0, 0, 0),
            (500, 100, 10),  # ceiling ниже old
            (999, 1000, 0),
            (10, 0, 5),
            (1000, 1000, 1000),
            (7, 3, 2),
        ],
    )
    def test_delta_never_negative(self, old: int, old_max: int, new: int) -> None:
        assert rollover_delta(old, old_max, new) >= 0

    def test_observe_rollover_baseline_then_gains(self) -> None:
        track = ProgressTrack()
        assert observe_rollover(track, 400, 1000) == 0
        assert track.enabled
        assert track.gained == 0

        assert observe_rollover(track, 900, 1000) == 500
        # Level up: ceiling обновляется на каждом наблюдении
        assert observe_rollover(track, 100, 1200) == 200
        assert track.last_ceiling == 1200
        assert observe_rollover(track, 1100, 1200) == 1000
        assert track.gained == 1700

    def test_observe_source_counts_positive_only(self) -> None:
        track = ProgressTrack()
        assert observe_source(track, "Stormwind", 1000) == 0
        assert observe_source(track, "Stormwind", 1250) == 250
        assert observe_source(track, "Stormwind", 1200) == 0
        assert observe_source(track, "Stormwind", 1300) == 100
        assert observe_source(track, "Ironforge", 50) == 0
        assert observe_source(track, "Ironforge", 80) == 30

        assert track.gained == 380
        assert track.by_source == {"Stormwind": 350, "Ironforge": 30}

    def test_add_gain_with_kills(self) -> None:
        track = ProgressTrack()
        add_gain(track, 20, kill=True)
        add_gain(track, 15)
        add_gain(track, -5)
        assert track.gained == 35
        assert track.kills == 1


# =============================================================================
# TOP-N
# =============================================================================


class TestTopContributors:
    def test_truncates_with_remainder(self) -> None:
        breakdown = top_contributors({"a": 5, "b": 50, "c": 20, "d": 1, "e": 30}, 3)
        assert breakdown.entries == (("b", 50), ("e", 30), ("c", 20))
        assert breakdown.remainder == 2
        assert breakdown.more_label == "+2 more"

    def test_stable_for_ties(self) -> None:
        breakdown = top_contributors({"first": 10, "second": 10, "third": 10}, 2)
        assert breakdown.entries == (("first", 10), ("second", 10))
        assert breakdown.remainder == 1

    def test_fewer_than_n(self) -> None:
        breakdown = top_contributors({"only": 3}, 3)
        assert breakdown.entries == (("only", 3),)
        assert breakdown.remainder == 0
        assert breakdown.more_label is None


# =============================================================================
# SNAPSHOT
# =============================================================================


class TestComputeMetrics:
    """Тесты MetricsSnapshot"""

    def test_rates_over_half_hour(self, session: Session) -> None:
        ledger = Ledger()
        ledger.post(session, CASH, INCOME_LOOTED_COIN, 5000)
        ledger.post(session, EXPENSE_REPAIRS, CASH, 1000)
        ledger.post(
            session,
            inventory_account(ValueBucket.GATHERING),
            looted_income_account(ValueBucket.GATHERING),
            2000,
        )

        snapshot = compute_metrics(session, 1800.0)

        assert snapshot.duration_sec == 1800.0
        assert snapshot.duration_hours == pytest.approx(0.5)
        assert snapshot.cash == 4000
        assert snapshot.cash_per_hour == 8000
        assert snapshot.income_looted_coin == 5000
        assert snapshot.expense_repairs == 1000
        assert snapshot.expenses == 1000
        assert snapshot.expected_inventory == 2000
        assert snapshot.expected_per_hour == 4000
        assert snapshot.inventory_by_bucket[ValueBucket.GATHERING] == 2000
        assert snapshot.total_value == 6000
        assert snapshot.total_per_hour == 12000
        assert snapshot.income_total == 7000
        assert snapshot.equity_realization == 0

    def test_zero_duration_rates_are_zero(self, session: Session) -> None:
        Ledger().post(session, CASH, INCOME_LOOTED_COIN, 5000)
        snapshot = compute_metrics(session, 0.0)
        assert snapshot.cash == 5000
        assert snapshot.cash_per_hour == 0
        assert snapshot.total_per_hour == 0

    def test_progress_and_top_breakdowns(self, session: Session) -> None:
        for faction, gain in [("A", 10), ("B", 40), ("C", 30), ("D", 20)]:
            observe_source(session.progress.rep, faction, 0)
            observe_source(session.progress.rep, faction, gain)
        add_gain(session.progress.honor, 90, kill=True)
        session.gathering.total_nodes = 4
        session.gathering.by_node = {"Copper Vein": 3, "Peacebloom": 1}

        snapshot = compute_metrics(session, 3600.0, MetricsConfig(top_n=3))

        assert snapshot.rep.gained == 100
        assert snapshot.rep.per_hour == 100
        assert snapshot.rep.top.entries == (("B", 40), ("C", 30), ("D", 20))
        assert snapshot.rep.top.remainder == 1
        assert snapshot.honor.gained == 90
        assert snapshot.honor.kills == 1
        assert snapshot.gathering_nodes == 4
        assert snapshot.top_nodes.entries[0] == ("Copper Vein", 3)
        assert not snapshot.xp.enabled

    def test_snapshot_does_not_mutate(self, session: Session) -> None:
        before = session.model_dump()
        compute_metrics(session, 100.0)
        assert session.model_dump() == before
