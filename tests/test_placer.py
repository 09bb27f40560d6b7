# SPDX-License-Identifier: MIT

import itertools
import random

import pytest
from helpers import positioned

from tierline.errors import NotFound, PreconditionViolation
from tierline.model.placed_interval import PlacedInterval
from tierline.service.placer import IntervalPlacer


def _collide(a: PlacedInterval, b: PlacedInterval) -> bool:
    assert a["x"] is not None and a["width"] is not None
    assert b["x"] is not None and b["width"] is not None
    return a["x"] <= b["x"] + b["width"] and b["x"] <= a["x"] + a["width"]


@pytest.fixture
def placer() -> IntervalPlacer:
    return IntervalPlacer()


class TestAssign:
    def test_disjoint_intervals_share_the_top_level(
        self, placer: IntervalPlacer
    ) -> None:
        a = positioned(0, 10)
        b = positioned(20, 10)
        placer.assign([a, b])

        assert (a["level"], b["level"]) == (0, 0)
        assert (a["y"], b["y"]) == (10, 10)
        assert placer.level_count == 1

    def test_overlapping_intervals_stack(self, placer: IntervalPlacer) -> None:
        a = positioned(0, 20)
        b = positioned(10, 20)
        placer.assign([a, b])

        assert (a["level"], b["level"]) == (0, 1)
        assert (a["y"], b["y"]) == (10, 35)

    def test_touching_intervals_collide(self, placer: IntervalPlacer) -> None:
        a = positioned(0, 10)
        b = positioned(10, 10)
        placer.assign([a, b])

        assert (a["level"], b["level"]) == (0, 1)

    def test_one_pixel_gap_is_enough(self, placer: IntervalPlacer) -> None:
        a = positioned(0, 10)
        b = positioned(11, 10)
        placer.assign([a, b])

        assert (a["level"], b["level"]) == (0, 0)

    def test_same_start_always_collides(self, placer: IntervalPlacer) -> None:
        a = positioned(0, 5, duration=10)
        b = positioned(0, 3, duration=5)
        placer.assign([a, b])

        assert (a["level"], b["level"]) == (0, 1)

    def test_collision_with_the_following_neighbour(
        self, placer: IntervalPlacer
    ) -> None:
        first = positioned(50, 10, duration=100)
        reaching = positioned(30, 20, duration=50)
        short_of_it = positioned(30, 19, duration=40)
        placer.assign([first, reaching, short_of_it])

        assert first["level"] == 0
        assert reaching["level"] == 1
        assert short_of_it["level"] == 0

    def test_longest_interval_is_placed_first(self, placer: IntervalPlacer) -> None:
        short = positioned(10, 5, duration=5)
        long = positioned(0, 100, duration=100)
        placer.assign([short, long])

        assert long["level"] == 0
        assert short["level"] == 1

    def test_equal_durations_keep_input_order(self, placer: IntervalPlacer) -> None:
        a = positioned(10, 20, duration=7)
        b = positioned(0, 20, duration=7)
        placer.assign([a, b])

        assert (a["level"], b["level"]) == (0, 1)

    def test_input_order_does_not_matter_for_distinct_durations(self) -> None:
        specs = [(0, 40, 400), (10, 10, 100), (30, 30, 300), (45, 5, 50)]
        outcomes = set()
        for order in itertools.permutations(range(len(specs))):
            intervals = [positioned(*specs[i]) for i in range(len(specs))]
            IntervalPlacer().assign([intervals[i] for i in order])
            outcomes.add(tuple(interval["level"] for interval in intervals))

        assert len(outcomes) == 1

    def test_levels_are_sorted_by_x(self, placer: IntervalPlacer) -> None:
        intervals = [positioned(x, 5) for x in (40, 0, 20, 60)]
        placer.assign(intervals)

        [level] = placer.levels()
        assert [interval["x"] for interval in level] == [0, 20, 40, 60]

    def test_interval_without_geometry_is_rejected(
        self, placer: IntervalPlacer
    ) -> None:
        interval = positioned(0, 10)
        interval["x"] = None
        with pytest.raises(PreconditionViolation):
            placer.assign([interval])

    def test_assigning_twice_is_rejected(self, placer: IntervalPlacer) -> None:
        interval = positioned(0, 10)
        placer.assign([interval])
        with pytest.raises(PreconditionViolation):
            placer.assign([interval])

    def test_rejected_assignment_places_nothing(self, placer: IntervalPlacer) -> None:
        good = positioned(0, 10, duration=100)
        bad = positioned(20, 10, duration=5)
        bad["x"] = None

        with pytest.raises(PreconditionViolation):
            placer.assign([good, bad])

        assert placer.level_count == 0
        assert good["level"] is None and good["y"] is None
        with pytest.raises(PreconditionViolation):
            placer.level_of(good)

        bad["x"] = 20
        placer.assign([good, bad])
        assert (good["level"], bad["level"]) == (0, 0)

    def test_repeated_interval_in_one_call_is_rejected(
        self, placer: IntervalPlacer
    ) -> None:
        interval = positioned(0, 10)
        with pytest.raises(PreconditionViolation):
            placer.assign([interval, interval])

        assert placer.level_count == 0
        assert interval["level"] is None

    def test_rejected_assignment_keeps_earlier_placements(
        self, placer: IntervalPlacer
    ) -> None:
        first = positioned(0, 10)
        placer.assign([first])

        newcomer = positioned(5, 10, duration=50)
        with pytest.raises(PreconditionViolation):
            placer.assign([newcomer, first])

        assert newcomer["level"] is None
        assert placer.level_count == 1
        assert placer.levels() == [[first]]
        assert placer.level_of(first) == 0

    def test_empty_assignment(self, placer: IntervalPlacer) -> None:
        placer.assign([])
        assert placer.level_count == 0
        assert placer.hit_test(0, 10) is None


class TestForget:
    def test_forget_keeps_level_slots(self, placer: IntervalPlacer) -> None:
        a = positioned(0, 20)
        b = positioned(10, 20)
        placer.assign([a, b])
        placer.forget_placements()

        assert placer.level_count == 2
        assert placer.levels() == [[], []]
        assert a["level"] is None and a["y"] is None
        assert b["level"] is None and b["y"] is None
        assert placer.max_y_used() == 60

    def test_reassign_after_forget(self, placer: IntervalPlacer) -> None:
        a = positioned(0, 20)
        b = positioned(10, 20)
        placer.assign([a, b])
        placer.forget_placements()

        a["x"] = 100
        placer.assign([a, b])
        assert (a["level"], b["level"]) == (0, 0)
        assert placer.level_of(a) == 0
        assert placer.level_of(b) == 0


class TestVerticalMetrics:
    def test_max_y_used(self, placer: IntervalPlacer) -> None:
        assert placer.max_y_used() == 10
        placer.assign([positioned(0, 20), positioned(10, 20)])
        assert placer.max_y_used() == 60

    @pytest.mark.parametrize(
        "y, level",
        [(0, None), (9, None), (10, 0), (25, 0), (26, None), (34, None), (35, 1)],
    )
    def test_y_to_level(self, placer: IntervalPlacer, y: int, level: int) -> None:
        placer.assign([positioned(0, 20), positioned(10, 20)])
        assert placer.y_to_level(y) == level

    def test_y_below_the_last_level(self, placer: IntervalPlacer) -> None:
        placer.assign([positioned(0, 20)])
        assert placer.y_to_level(35) is None


class TestLevelOf:
    def test_before_any_assignment(self, placer: IntervalPlacer) -> None:
        with pytest.raises(PreconditionViolation):
            placer.level_of(positioned(0, 10))

    def test_placed_intervals(self, placer: IntervalPlacer) -> None:
        a = positioned(0, 20)
        b = positioned(10, 20)
        placer.assign([a, b])

        assert placer.level_of(a) == 0
        assert placer.level_of(b) == 1

    def test_unplaced_interval_at_a_used_column(
        self, placer: IntervalPlacer
    ) -> None:
        placer.assign([positioned(0, 20)])
        with pytest.raises(NotFound):
            placer.level_of(positioned(0, 20))

    def test_interval_without_geometry(self, placer: IntervalPlacer) -> None:
        placer.assign([positioned(0, 20)])
        stranger = positioned(0, 20)
        stranger["x"] = None
        with pytest.raises(NotFound):
            placer.level_of(stranger)


class TestHitTest:
    @pytest.fixture
    def placed(self, placer: IntervalPlacer) -> tuple[PlacedInterval, PlacedInterval]:
        top = positioned(0, 10, duration=100)
        below = positioned(5, 10, duration=50)
        placer.assign([top, below])
        return top, below

    def test_before_any_assignment(self, placer: IntervalPlacer) -> None:
        with pytest.raises(PreconditionViolation):
            placer.hit_test(0, 10)

    def test_probe_on_the_start(
        self, placer: IntervalPlacer, placed: tuple[PlacedInterval, PlacedInterval]
    ) -> None:
        top, below = placed
        assert placer.hit_test(0, 10) is top
        assert placer.hit_test(5, 35) is below

    def test_probe_inside_and_on_the_end(
        self, placer: IntervalPlacer, placed: tuple[PlacedInterval, PlacedInterval]
    ) -> None:
        top, below = placed
        assert placer.hit_test(5, 20) is top
        assert placer.hit_test(10, 25) is top
        assert placer.hit_test(15, 40) is below

    def test_misses(
        self, placer: IntervalPlacer, placed: tuple[PlacedInterval, PlacedInterval]
    ) -> None:
        assert placer.hit_test(11, 10) is None
        assert placer.hit_test(4, 35) is None
        assert placer.hit_test(5, 5) is None
        assert placer.hit_test(5, 30) is None
        assert placer.hit_test(5, 60) is None
        assert placer.hit_test(-1, 10) is None


@pytest.mark.parametrize("seed", range(5))
def test_random_layouts_respect_the_level_rules(seed: int) -> None:
    rng = random.Random(seed)
    intervals = [
        positioned(rng.randrange(0, 2000), rng.randrange(0, 120)) for _ in range(200)
    ]
    placer = IntervalPlacer()
    placer.assign(intervals)

    levels = placer.levels()
    assert sum(len(level) for level in levels) == len(intervals)
    assert all(levels)

    for level in levels:
        xs = [interval["x"] for interval in level]
        assert xs == sorted(xs)
        for a, b in zip(level, level[1:]):
            assert not _collide(a, b)

    # Every interval sits in the topmost level where it fits.
    for interval in intervals:
        assert interval["level"] is not None
        assert placer.level_of(interval) == interval["level"]
        for above in levels[: interval["level"]]:
            assert any(_collide(interval, other) for other in above)

    # Every corner of every body hits that body.
    for interval in intervals:
        x, width, y = interval["x"], interval["width"], interval["y"]
        assert x is not None and width is not None and y is not None
        for probe_x in (x, x + width):
            for probe_y in (y, y + 15):
                assert placer.hit_test(probe_x, probe_y) is interval
