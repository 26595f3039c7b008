"""
Tests for the concurrent instance registries.
"""
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from learnkit.services.learning import (
    BanditConfig,
    BanditRegistry,
    InvalidConfig,
    NotFound,
    OptimizerConfig,
    OptimizerRegistry,
)


class TestLifecycle:
    """Create / lookup / remove."""

    def test_identifiers_are_unique_and_never_reused(self, bandit_registry):
        first = bandit_registry.create(BanditConfig(param=0.1, num_arms=2))
        bandit_registry.remove(first)
        second = bandit_registry.create(BanditConfig(param=0.1, num_arms=2))

        assert first != second
        assert bandit_registry.ids() == [second]

    def test_invalid_config_leaves_registry_untouched(self, bandit_registry):
        with pytest.raises(InvalidConfig):
            bandit_registry.create(BanditConfig(param=0.1, num_arms=0))
        assert len(bandit_registry) == 0

    def test_unknown_identifier(self, bandit_registry):
        with pytest.raises(NotFound):
            bandit_registry.select("bandit-999")

    def test_removed_identifier_is_not_found(self, bandit_registry):
        bandit_id = bandit_registry.create(BanditConfig(param=0.0, num_arms=2))
        bandit_registry.remove(bandit_id)

        assert bandit_id not in bandit_registry
        with pytest.raises(NotFound):
            bandit_registry.select(bandit_id)
        with pytest.raises(NotFound):
            bandit_registry.update(bandit_id, 0, 1.0)
        with pytest.raises(NotFound):
            bandit_registry.remove(bandit_id)

    def test_optimizer_registry_round_trip(self, optimizer_registry):
        opt_id = optimizer_registry.create(OptimizerConfig(x0=0.0))
        assert optimizer_registry.suggest(opt_id) == 0.0
        optimizer_registry.observe(opt_id, 8.2)

        state = optimizer_registry.state(opt_id)
        assert state["best_reward"] == 8.2
        assert state["history_length"] == 1
        assert optimizer_registry.history(opt_id) == [{"x": 0.0, "reward": 8.2}]

        optimizer_registry.remove(opt_id)
        with pytest.raises(NotFound):
            optimizer_registry.state(opt_id)

    def test_clear_removes_everything(self, optimizer_registry):
        ids = [optimizer_registry.create(OptimizerConfig(x0=float(i))) for i in range(3)]
        optimizer_registry.clear()

        assert len(optimizer_registry) == 0
        for opt_id in ids:
            with pytest.raises(NotFound):
                optimizer_registry.suggest(opt_id)


class TestConcurrency:
    """No lost updates and no cross-instance blocking."""

    def test_concurrent_updates_on_one_bandit(self, bandit_registry):
        num_arms = 4
        total = 2000
        bandit_id = bandit_registry.create(BanditConfig(param=0.1, num_arms=num_arms, seed=1))

        def work(i: int) -> None:
            bandit_registry.update(bandit_id, i % num_arms, float(i % 7))
            bandit_registry.select(bandit_id)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(work, range(total)))

        stats = bandit_registry.stats(bandit_id)
        assert sum(arm["count"] for arm in stats) == total
        assert all(arm["count"] == total // num_arms for arm in stats)

    def test_concurrent_updates_across_bandits(self, bandit_registry):
        ids = [bandit_registry.create(BanditConfig(param=0.5, num_arms=3)) for _ in range(5)]
        per_bandit = 300

        def work(i: int) -> None:
            bandit_registry.update(ids[i % len(ids)], i % 3, 1.0)

        with ThreadPoolExecutor(max_workers=10) as pool:
            list(pool.map(work, range(per_bandit * len(ids))))

        for bandit_id in ids:
            stats = bandit_registry.stats(bandit_id)
            assert sum(arm["count"] for arm in stats) == per_bandit
            assert all(arm["mean"] == 1.0 for arm in stats)

    def test_concurrent_creation_yields_distinct_ids(self, optimizer_registry):
        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(lambda i: optimizer_registry.create(OptimizerConfig(x0=float(i))), range(200)))

        assert len(set(ids)) == 200
        assert len(optimizer_registry) == 200

    def test_busy_instance_does_not_block_others(self, bandit_registry):
        busy = bandit_registry.create(BanditConfig(param=0.0, num_arms=2))
        other = bandit_registry.create(BanditConfig(param=0.0, num_arms=2))
        started = threading.Event()
        release = threading.Event()

        def hold(_bandit):
            started.set()
            release.wait(timeout=5)

        worker = threading.Thread(target=bandit_registry.with_instance, args=(busy, hold))
        worker.start()
        try:
            assert started.wait(timeout=5)
            # Lookup and operation on a different id complete while `busy` is locked
            bandit_registry.update(other, 1, 2.0)
            assert bandit_registry.select(other) == 1
        finally:
            release.set()
            worker.join(timeout=5)

    def test_remove_waits_for_in_flight_operation(self, bandit_registry):
        bandit_id = bandit_registry.create(BanditConfig(param=0.0, num_arms=2))
        started = threading.Event()
        release = threading.Event()
        results = []

        def slow_update(bandit):
            started.set()
            release.wait(timeout=5)
            bandit.update(0, 1.0)
            return bandit.stats()[0]["count"]

        worker = threading.Thread(
            target=lambda: results.append(bandit_registry.with_instance(bandit_id, slow_update))
        )
        remover = threading.Thread(target=bandit_registry.remove, args=(bandit_id,))

        worker.start()
        assert started.wait(timeout=5)
        remover.start()
        remover.join(timeout=0.2)
        assert remover.is_alive()

        release.set()
        worker.join(timeout=5)
        remover.join(timeout=5)

        assert results == [1]
        with pytest.raises(NotFound):
            bandit_registry.select(bandit_id)


class TestSizeReporting:
    """Size callback used by the live-instance gauge."""

    def test_callback_tracks_add_remove_clear(self):
        sizes = []
        registry = BanditRegistry(on_size_change=sizes.append)

        first = registry.create(BanditConfig(param=0.1, num_arms=2))
        registry.create(BanditConfig(param=0.1, num_arms=2))
        registry.remove(first)
        with pytest.raises(NotFound):
            registry.remove(first)
        registry.clear()

        assert sizes == [1, 2, 1, 0]

    def test_invalid_config_does_not_report(self):
        sizes = []
        registry = BanditRegistry(on_size_change=sizes.append)
        with pytest.raises(InvalidConfig):
            registry.create(BanditConfig(param=0.1, num_arms=0))
        assert sizes == []

    def test_last_reported_size_matches_after_concurrent_churn(self):
        reported = []
        registry = OptimizerRegistry(on_size_change=reported.append)

        def churn(i: int) -> None:
            opt_id = registry.create(OptimizerConfig(x0=float(i)))
            if i % 3:
                registry.remove(opt_id)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(churn, range(300)))

        assert len(registry) == 100
        assert reported[-1] == len(registry)
