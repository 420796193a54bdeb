"""
Unit tests for schedule reconstruction.

Covers parsing of flat schedule records, timeline generation, point-in-time
lineup reconstruction and the upcoming-substitution window.
"""
import copy
import unittest

from hockeycoach.models import MatchSchedule, Player, TimelineEvent, flatten_schedule, parse_schedule_key
from hockeycoach.services.schedule_reconstructor import (
    ScheduleReconstructor,
    active_players_at_time,
    current_quarter,
    generate_timeline,
    parse_schedule,
    slot_event_time,
    upcoming_substitutions,
)


def player_dict(player_id: str, position: str = "", name: str = "") -> dict:
    return {"id": player_id, "name": name or player_id.upper(), "number": 1, "position": position}


class TestScheduleKeys(unittest.TestCase):
    """Test cases for the position-quarter-slot key grammar."""

    def test_valid_keys(self) -> None:
        self.assertEqual(parse_schedule_key("striker-1-0"), ("striker", 1, 0))
        self.assertEqual(parse_schedule_key("leftback-4-12"), ("leftback", 4, 12))

    def test_extra_segments_are_ignored(self) -> None:
        self.assertEqual(parse_schedule_key("striker-2-1-old"), ("striker", 2, 1))

    def test_index_limits(self) -> None:
        self.assertEqual(parse_schedule_key("striker-99-99"), ("striker", 99, 99))
        self.assertEqual(parse_schedule_key("striker-1-007"), ("striker", 1, 7))
        for key in ("striker-1-100", "striker-100-0", "striker-1-400000000", "striker-1-" + "9" * 5000):
            with self.subTest(key=key[:30]):
                self.assertIsNone(parse_schedule_key(key))

    def test_invalid_keys(self) -> None:
        for key in ("bad-key", "pos-x-0", "pos-1-y", "formation_key", "quarters",
                    "-1-0", "pos-0-0", "pos--1-0", "pos-1.5-0", "pos- 1-0", "", 12, None):
            with self.subTest(key=key):
                self.assertIsNone(parse_schedule_key(key))


class TestParseSchedule(unittest.TestCase):
    """Test cases for parse_schedule."""

    def test_parse_tolerance(self) -> None:
        record = {
            "a-1-0": player_dict("p1"),
            "bad-key": player_dict("p2"),
            "pos-x-0": player_dict("p3"),
        }
        parsed = parse_schedule(record)
        self.assertEqual(list(parsed.keys()), ["a"])
        self.assertEqual(list(parsed["a"].keys()), [1])
        self.assertEqual(len(parsed["a"][1]), 1)
        self.assertEqual(parsed["a"][1][0].id, "p1")

    def test_invalid_values_are_skipped(self) -> None:
        record = {
            "a-1-0": None,
            "a-1-1": {"name": "No Id"},
            "a-1-2": "p3",
            "b-1-0": player_dict("p4"),
        }
        parsed = parse_schedule(record)
        self.assertNotIn("a", parsed)
        self.assertEqual(parsed["b"][1][0].id, "p4")

    def test_sparse_slots_are_padded_with_none(self) -> None:
        parsed = parse_schedule({"a-2-2": player_dict("p1")})
        self.assertEqual(parsed["a"][2][:2], [None, None])
        self.assertEqual(parsed["a"][2][2].id, "p1")

    def test_huge_slot_index_is_skipped(self) -> None:
        parsed = parse_schedule({
            "striker-1-400000000": player_dict("p1"),
            "striker-1-1": player_dict("p2"),
        })
        self.assertEqual(len(parsed["striker"][1]), 2)
        self.assertIsNone(parsed["striker"][1][0])
        self.assertEqual(parsed["striker"][1][1].id, "p2")
        self.assertEqual(generate_timeline({"striker-1-400000000": player_dict("p1")}, 900, 2), [])

    def test_metadata_keys_are_skipped(self) -> None:
        record = {
            "quarters": 4,
            "formation_key": "3-3-1",
            "subs_per_quarter": 2,
            "striker-1-0": player_dict("p1"),
        }
        self.assertEqual(list(parse_schedule(record).keys()), ["striker"])

    def test_last_write_wins_for_same_slot(self) -> None:
        record = {"a-1-0": player_dict("p1"), "a-01-0": player_dict("p2")}
        self.assertEqual(parse_schedule(record)["a"][1][0].id, "p2")

    def test_non_mapping_record(self) -> None:
        for record in (None, [], "a-1-0", 5):
            with self.subTest(record=record):
                self.assertEqual(parse_schedule(record), {})

    def test_parse_is_deterministic(self) -> None:
        record = {
            "striker-1-0": player_dict("p1"),
            "striker-1-1": player_dict("p2"),
            "keeper-2-0": player_dict("p3"),
            "junk": 1,
        }
        self.assertEqual(parse_schedule(record), parse_schedule(record))

    def test_parse_does_not_mutate_record(self) -> None:
        record = {"striker-1-0": player_dict("p1"), "junk": {"x": 1}}
        before = copy.deepcopy(record)
        parse_schedule(record)
        self.assertEqual(record, before)

    def test_flatten_round_trip(self) -> None:
        record = {
            "striker-1-0": player_dict("p1", "striker"),
            "striker-1-2": player_dict("p2", "striker"),
            "keeper-3-0": player_dict("p3", "keeper"),
            "formation_key": "3-3-1",
        }
        parsed = parse_schedule(record)
        flat = flatten_schedule(parsed)
        self.assertEqual(set(flat), {"striker-1-0", "striker-1-2", "keeper-3-0"})
        self.assertEqual(parse_schedule(flat), parsed)


class TestGenerateTimeline(unittest.TestCase):
    """Test cases for generate_timeline."""

    def test_even_spacing_within_quarter(self) -> None:
        record = {
            "striker-1-0": player_dict("p1"),
            "striker-1-1": player_dict("p2"),
            "striker-1-2": player_dict("p3"),
        }
        events = generate_timeline(record, 900, 2)
        self.assertEqual([e.time for e in events], [300, 600, 900])
        self.assertEqual([e.is_substitution for e in events], [False, True, True])
        self.assertEqual([e.player.id for e in events], ["p1", "p2", "p3"])

    def test_later_quarters_are_offset(self) -> None:
        events = generate_timeline({"striker-3-1": player_dict("p1")}, 900, 2)
        self.assertEqual(events[0].time, 2 * 900 + 600)
        self.assertEqual(events[0].quarter, 3)
        self.assertEqual(events[0].slot, 1)

    def test_sorted_by_time_regardless_of_record_order(self) -> None:
        record = {
            "a-2-0": player_dict("p1"),
            "a-1-2": player_dict("p2"),
            "a-1-0": player_dict("p3"),
        }
        self.assertEqual([e.time for e in generate_timeline(record, 900, 2)], [300, 900, 1200])

    def test_ties_keep_record_order(self) -> None:
        record = {
            "b-1-1": player_dict("p1"),
            "a-1-1": player_dict("p2"),
            "c-1-1": player_dict("p3"),
        }
        events = generate_timeline(record, 900, 2)
        self.assertEqual([e.position for e in events], ["b", "a", "c"])

    def test_fractional_times_are_truncated(self) -> None:
        self.assertEqual(slot_event_time(1, 0, 1000, 2), 333)
        self.assertEqual(slot_event_time(1, 1, 1000, 2), 666)
        self.assertEqual(slot_event_time(2, 0, 1000, 2), 1333)

    def test_invalid_entries_produce_no_events(self) -> None:
        record = {"bad": player_dict("p1"), "a-1-0": None, "a-x-1": player_dict("p2")}
        self.assertEqual(generate_timeline(record, 900, 2), [])
        self.assertEqual(generate_timeline({}, 900, 2), [])
        self.assertEqual(generate_timeline(None, 900, 2), [])

    def test_degenerate_settings_do_not_raise(self) -> None:
        record = {"a-1-1": player_dict("p1")}
        self.assertEqual(generate_timeline(record, 900, -5)[0].time, 1800)
        self.assertEqual(generate_timeline(record, 0, 2)[0].time, 0)


class TestActivePlayersAtTime(unittest.TestCase):
    """Test cases for active_players_at_time."""

    def setUp(self) -> None:
        self.p1 = Player("p1", "Sanne", 7, "striker")
        self.p2 = Player("p2", "Eva", 9, "striker")
        self.lineup = [self.p1]
        self.sub = TimelineEvent(time=300, quarter=1, position="striker", slot=1, player=self.p2, is_substitution=True)

    def test_lineup_seeds_result(self) -> None:
        self.assertEqual(active_players_at_time(self.lineup, [], 0), {"striker": self.p1})
        self.assertEqual(active_players_at_time(self.lineup, [], 500), {"striker": self.p1})

    def test_substitution_boundary_is_inclusive(self) -> None:
        self.assertEqual(active_players_at_time(self.lineup, [self.sub], 299), {"striker": self.p1})
        self.assertEqual(active_players_at_time(self.lineup, [self.sub], 300), {"striker": self.p2})

    def test_time_zero_ignores_events(self) -> None:
        at_zero = TimelineEvent(0, 1, "striker", 1, self.p2, True)
        self.assertEqual(active_players_at_time(self.lineup, [at_zero], 0), {"striker": self.p1})

    def test_non_substitution_events_never_override(self) -> None:
        starter = Player("p3", "Lotte", 3, "striker")
        slot_zero = TimelineEvent(300, 1, "striker", 0, starter, False)
        self.assertEqual(active_players_at_time(self.lineup, [slot_zero], 900), {"striker": self.p1})

    def test_later_events_overwrite_earlier(self) -> None:
        p3 = Player("p3", "Lotte", 3, "striker")
        events = [
            TimelineEvent(600, 1, "striker", 2, p3, True),
            self.sub,
        ]
        self.assertEqual(active_players_at_time(self.lineup, events, 450), {"striker": self.p2})
        self.assertEqual(active_players_at_time(self.lineup, events, 600), {"striker": p3})

    def test_equal_time_events_apply_in_stream_order(self) -> None:
        p3 = Player("p3", "Lotte", 3, "striker")
        events = [self.sub, TimelineEvent(300, 1, "striker", 2, p3, True)]
        self.assertEqual(active_players_at_time([], events, 300), {"striker": p3})

    def test_empty_lineup_uses_substitutions_only(self) -> None:
        self.assertEqual(active_players_at_time([], [self.sub], 1000), {"striker": self.p2})
        self.assertEqual(active_players_at_time([], [self.sub], 100), {})

    def test_lineup_players_without_position_are_ignored(self) -> None:
        self.assertEqual(active_players_at_time([Player("p9", "Bench")], [], 10), {})

    def test_raw_lineup_dicts_are_accepted(self) -> None:
        lineup = [{"id": "p1", "name": "Sanne", "position": "striker"}, {"name": "broken"}]
        result = active_players_at_time(lineup, [], 0)
        self.assertEqual(list(result), ["striker"])
        self.assertEqual(result["striker"].id, "p1")

    def test_idempotent(self) -> None:
        events = [self.sub]
        first = active_players_at_time(self.lineup, events, 450)
        second = active_players_at_time(self.lineup, events, 450)
        self.assertEqual(first, second)
        self.assertEqual(self.lineup, [self.p1])


class TestUpcomingSubstitutions(unittest.TestCase):
    """Test cases for upcoming_substitutions."""

    def setUp(self) -> None:
        self.events = [
            TimelineEvent(t, 1, "striker", i + 1, Player(f"p{i}"), True)
            for i, t in enumerate((100, 200, 300))
        ]

    def test_window(self) -> None:
        upcoming = upcoming_substitutions(self.events, 150, 100)
        self.assertEqual([e.time for e in upcoming], [200])

    def test_window_bounds(self) -> None:
        self.assertEqual([e.time for e in upcoming_substitutions(self.events, 100, 200)], [200, 300])
        self.assertEqual(upcoming_substitutions(self.events, 300, 1000), [])

    def test_non_substitutions_excluded(self) -> None:
        starter = TimelineEvent(150, 1, "keeper", 0, Player("gk"), False)
        upcoming = upcoming_substitutions(self.events + [starter], 120, 100)
        self.assertEqual([e.time for e in upcoming], [200])

    def test_result_is_time_ordered(self) -> None:
        upcoming = upcoming_substitutions(list(reversed(self.events)), 0, 1000)
        self.assertEqual([e.time for e in upcoming], [100, 200, 300])

    def test_idempotent(self) -> None:
        self.assertEqual(
            upcoming_substitutions(self.events, 50, 200),
            upcoming_substitutions(self.events, 50, 200),
        )


class TestCurrentQuarter(unittest.TestCase):
    """Test cases for quarter math."""

    def test_boundaries(self) -> None:
        self.assertEqual(current_quarter(0, 900, 4), 1)
        self.assertEqual(current_quarter(1, 900, 4), 1)
        self.assertEqual(current_quarter(900, 900, 4), 1)
        self.assertEqual(current_quarter(901, 900, 4), 2)
        self.assertEqual(current_quarter(3600, 900, 4), 4)

    def test_clamps_past_final_whistle(self) -> None:
        self.assertEqual(current_quarter(5000, 900, 4), 4)

    def test_degenerate_settings(self) -> None:
        self.assertEqual(current_quarter(500, 0, 4), 1)
        self.assertEqual(current_quarter(500, 100, 0), 1)

    def test_non_finite_times(self) -> None:
        self.assertEqual(current_quarter(float("nan"), 900, 4), 1)
        self.assertEqual(current_quarter(float("inf"), 900, 4), 4)
        self.assertEqual(current_quarter(float("-inf"), 900, 4), 1)


class TestScheduleReconstructor(unittest.TestCase):
    """Test cases for the ScheduleReconstructor service."""

    def setUp(self) -> None:
        self.record = {
            "id": "match-1",
            "lineup": [
                player_dict("p1", "striker"),
                player_dict("p2", "keeper"),
            ],
            "substitution_schedule": {
                "formation_key": "3-3-1",
                "quarters": 4,
                "subs_per_quarter": 2,
                "striker-1-0": player_dict("p1", "striker"),
                "striker-1-1": player_dict("p3", "striker"),
                "keeper-1-0": player_dict("p2", "keeper"),
                "keeper-2-2": player_dict("p4", "keeper"),
            },
        }
        self.reconstructor = ScheduleReconstructor.from_record(self.record)

    def test_positions_and_quarters(self) -> None:
        self.assertEqual(self.reconstructor.positions(), ["keeper", "striker"])
        self.assertEqual(self.reconstructor.quarters(), [1, 2, 3, 4])

    def test_filter_positions(self) -> None:
        self.assertEqual(self.reconstructor.filter_positions("all"), ["keeper", "striker"])
        self.assertEqual(self.reconstructor.filter_positions(None), ["keeper", "striker"])
        self.assertEqual(self.reconstructor.filter_positions("keeper"), ["keeper"])
        self.assertEqual(self.reconstructor.filter_positions("sweeper"), [])

    def test_filter_positions_matches_substring_ignoring_case(self) -> None:
        reconstructor = ScheduleReconstructor.from_record({
            "substitution_schedule": {
                "striker-1-0": player_dict("p1"),
                "rightBack-1-0": player_dict("p2"),
                "leftBack-1-0": player_dict("p3"),
            },
        })
        self.assertEqual(reconstructor.positions(), ["leftBack", "rightBack", "striker"])
        self.assertEqual(reconstructor.filter_positions("back"), ["leftBack", "rightBack"])
        self.assertEqual(reconstructor.filter_positions("STRIK"), ["striker"])

    def test_grid_covers_every_quarter(self) -> None:
        grid = self.reconstructor.grid()
        self.assertEqual(set(grid["striker"].keys()), {1, 2, 3, 4})
        self.assertEqual([p["id"] for p in grid["striker"][1]], ["p1", "p3"])
        self.assertEqual(grid["striker"][2], [])
        self.assertEqual(grid["keeper"][2][:2], [None, None])
        self.assertEqual(grid["keeper"][2][2]["id"], "p4")

    def test_timeline_is_cached(self) -> None:
        self.assertIs(self.reconstructor.timeline, self.reconstructor.timeline)
        self.assertIs(self.reconstructor.parsed, self.reconstructor.parsed)

    def test_active_players_follow_schedule(self) -> None:
        at_start = self.reconstructor.active_players(0)
        self.assertEqual({k: v.id for k, v in at_start.items()}, {"striker": "p1", "keeper": "p2"})
        later = self.reconstructor.active_players(1800)
        self.assertEqual({k: v.id for k, v in later.items()}, {"striker": "p3", "keeper": "p4"})

    def test_snapshot(self) -> None:
        snapshot = self.reconstructor.snapshot(500, 200)
        self.assertEqual(snapshot["current_quarter"], 1)
        self.assertEqual(snapshot["active_count"], 2)
        self.assertEqual(snapshot["upcoming_count"], 1)
        self.assertEqual(snapshot["upcoming_substitutions"][0]["player"]["id"], "p3")
        self.assertEqual(snapshot["active_players"]["striker"]["id"], "p1")

    def test_empty_record(self) -> None:
        reconstructor = ScheduleReconstructor(MatchSchedule())
        self.assertEqual(reconstructor.timeline, [])
        self.assertEqual(reconstructor.grid(), {})
        self.assertEqual(reconstructor.snapshot(100)["active_players"], {})


if __name__ == "__main__":
    unittest.main()
