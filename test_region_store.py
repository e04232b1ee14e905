"""
Tests for RegionStore: membership, selection, adjacency navigation, geometry
nudging, visibility filters, the color overlay and the region hotkey bank.
"""
import random

import pytest

from regionkit.application.annotation import Annotation
from regionkit.domain.models.region_model import Region, ColorSnapshot
from regionkit.domain.services.i_config_repository_service import RegionStoreSettings


def selected_count(store):
    return sum(1 for r in store.regions if r.selected)


class TestMembership:

    def test_add_appends_and_notifies(self, store, entity_events):
        first = store.add_region(Region(id="r1"))
        second = store.add_region(Region(id="r2"))

        assert store.regions == [first, second]
        assert entity_events == [("create", "r1"), ("create", "r2")]

    def test_find_region(self, store, add_regions):
        add_regions([("a", 1, 0.1), ("b", 2, 0.2)])

        assert store.find_region("b").x == 2
        assert store.find_region("zzz") is None

    def test_delete_removes_and_notifies(self, store, add_regions, entity_events):
        a, b = add_regions([("a", 1, 0.1), ("b", 2, 0.2)])
        entity_events.clear()

        store.delete_region(a)

        assert store.regions == [b]
        assert entity_events == [("delete", "a")]

    def test_delete_absent_region_is_noop(self, store, add_regions, entity_events):
        add_regions([("a", 1, 0.1)])
        entity_events.clear()

        store.delete_region(Region(id="ghost"))

        assert len(store) == 1
        assert entity_events == []

    def test_delete_twice_is_idempotent(self, store, add_regions):
        a, b = add_regions([("a", 1, 0.1), ("b", 2, 0.2)])
        store.delete_region(a)
        store.delete_region(a)

        assert store.regions == [b]

    def test_delete_selected_region_clears_selection(self, store, add_regions):
        a, b = add_regions([("a", 1, 0.1), ("b", 2, 0.2)])
        store.select_region(a)

        store.delete_region(a)

        assert store.selected_id is None
        assert store.selected_region is None

    def test_signals_fire_synchronously(self, store):
        seen = []
        store.signals.region_added.connect(lambda r: seen.append(("added", r.id)))
        store.signals.region_deleted.connect(lambda r: seen.append(("deleted", r.id)))

        region = store.add_region(Region(id="r1"))
        assert seen == [("added", "r1")]

        store.delete_region(region)
        assert seen == [("added", "r1"), ("deleted", "r1")]


class TestSelection:

    def test_select_region_replaces_previous(self, store, add_regions):
        a, b = add_regions([("a", 1, 0.1), ("b", 2, 0.2)])

        store.select_region(a)
        store.select_region(b)

        assert not a.selected
        assert b.selected
        assert store.selected_region is b

    def test_select_region_sets_highlighted_node(self, store, annotation, add_regions):
        a, = add_regions([("a", 1, 0.1)])

        store.select_region(a)

        assert annotation.highlighted_node is a

    def test_select_foreign_region_is_ignored(self, store, add_regions):
        add_regions([("a", 1, 0.1)])
        stranger = Region(id="x")

        store.select_region(stranger)

        assert not stranger.selected
        assert store.selected_region is None

    def test_unselect_all_clears_highlighted_node(self, store, annotation, add_regions):
        a, b = add_regions([("a", 1, 0.1), ("b", 2, 0.2)])
        store.select_region(a)

        store.unselect_all()

        assert selected_count(store) == 0
        assert store.selected_id is None
        assert annotation.highlighted_node is None

    def test_unselect_all_forwards_keep_states(self, store, add_regions):
        a, = add_regions([("a", 1, 0.1)])
        store.select_region(a)

        store.unselect_all(try_to_keep_states=True)
        assert not a.selected
        assert a.states_active

        store.select_region(a)
        store.unselect_all()
        assert not a.states_active

    def test_unhighlight_all(self, store, add_regions):
        a, b = add_regions([("a", 1, 0.1), ("b", 2, 0.2)])
        a.set_highlight(True)
        b.set_highlight(True)

        store.unhighlight_all()

        assert not a.highlighted and not b.highlighted

    def test_select_next_without_selection_picks_first(self, store, add_regions):
        a, b, c = add_regions([("a", 1, 0.1), ("b", 2, 0.2), ("c", 3, 0.3)])

        store.select_next()

        assert store.selected_region is a

    def test_select_next_walks_and_wraps(self, store, add_regions):
        a, b, c = add_regions([("a", 1, 0.1), ("b", 2, 0.2), ("c", 3, 0.3)])
        store.select_region(b)

        store.select_next()
        assert store.selected_region is c

        store.select_next()
        assert store.selected_region is a
        assert selected_count(store) == 1

    def test_select_next_on_empty_store(self, store):
        store.select_next()
        assert store.selected_region is None

    def test_single_selection_invariant(self, store, add_regions, registry):
        add_regions([(f"r{i}", random.Random(i).randint(0, 50), i / 10) for i in range(8)])
        rng = random.Random(1234)

        operations = [
            store.select_next,
            store.select_right_adj,
            store.unselect_all,
            lambda: store.select_region(rng.choice(store.regions)),
            lambda: registry.trigger(f"alt+shift+{rng.randint(1, len(store))}"),
            lambda: store.label_visible((0.2, 0.6)),
            store.reset_visible,
        ]
        for _ in range(300):
            rng.choice(operations)()
            assert selected_count(store) <= 1
            if store.selected_region is not None:
                assert store.selected_region.selected


class TestRightAdjacency:

    @pytest.fixture
    def spread(self, add_regions):
        return add_regions([("b", 10, 0.5), ("a", 5, 0.4), ("c", 20, 0.9)])

    def test_moves_to_next_by_x(self, store, spread):
        b, a, c = spread
        store.select_region(a)

        store.select_right_adj()
        assert store.selected_region is b

        store.select_right_adj()
        assert store.selected_region is c

    def test_wraps_from_rightmost_to_leftmost(self, store, spread):
        b, a, c = spread
        store.select_region(c)

        store.select_right_adj()

        assert store.selected_region is a
        assert selected_count(store) == 1

    def test_equal_x_broken_by_id(self, store, add_regions):
        second, first, third = add_regions([("n2", 10, 0.1), ("n1", 10, 0.1), ("n3", 10, 0.1)])
        store.select_region(first)

        store.select_right_adj()
        assert store.selected_region is second

        store.select_right_adj()
        assert store.selected_region is third

        store.select_right_adj()
        assert store.selected_region is first

    def test_hidden_regions_are_skipped(self, store, spread):
        b, a, c = spread
        b.hidden = True
        store.select_region(a)

        store.select_right_adj()

        assert store.selected_region is c

    def test_noop_without_selection(self, store, spread):
        store.select_right_adj()
        assert selected_count(store) == 0

    def test_noop_with_single_region(self, store, add_regions):
        only, = add_regions([("a", 1, 0.1)])
        store.select_region(only)

        store.select_right_adj()

        assert store.selected_region is only

    def test_noop_when_everything_is_hidden(self, store, spread):
        b, a, c = spread
        store.select_region(a)
        for region in spread:
            region.hidden = True

        store.select_right_adj()

        assert store.selected_region is a
        assert a.selected


class TestGeometry:

    @pytest.fixture
    def selected(self, store):
        region = store.add_region(Region(id="g", x=10, y=20, width=30, height=40, rotation=15))
        store.select_region(region)
        return region

    @pytest.mark.parametrize("option, expected", [
        ("w", (10, 19, 30, 41)),
        ("s", (10, 21, 30, 39)),
        ("d", (10, 20, 31, 40)),
        ("a", (10, 20, 29, 40)),
    ])
    def test_adjust_size(self, store, selected, option, expected):
        store.adjust_size(option)

        assert selected.bbox == expected
        assert selected.rotation == 0

    @pytest.mark.parametrize("option, expected", [
        ("up", (10, 19, 30, 40)),
        ("down", (10, 21, 30, 40)),
        ("left", (9, 20, 30, 40)),
        ("right", (11, 20, 30, 40)),
    ])
    def test_adjust_pos(self, store, selected, option, expected):
        store.adjust_pos(option)

        assert selected.bbox == expected

    def test_one_geometry_signal_per_call(self, store, selected):
        changes = []
        store.signals.geometry_changed.connect(lambda r: changes.append(r.bbox))

        store.adjust_size("w")

        assert changes == [(10, 19, 30, 41)]

    def test_noop_without_selection(self, store, selected):
        store.unselect_all()

        store.adjust_size("d")
        store.adjust_pos("left")

        assert selected.bbox == (10, 20, 30, 40)

    def test_unknown_option_is_ignored(self, store, selected):
        store.adjust_size("q")
        store.adjust_pos("sideways")

        assert selected.bbox == (10, 20, 30, 40)


class TestVisibility:

    @pytest.fixture
    def eight(self, add_regions):
        # Inserted out of score order on purpose
        scores = [5, 1, 8, 3, 7, 2, 6, 4]
        return add_regions([(f"s{s}", i, s) for i, s in enumerate(scores)])

    @staticmethod
    def visible_scores(store):
        return sorted(r.score for r in store.regions if not r.hidden)

    def test_label_visible_is_inclusive(self, store, eight):
        store.label_visible((3, 6))

        assert self.visible_scores(store) == [3, 4, 5, 6]

    def test_label_visible_is_idempotent(self, store, eight):
        store.label_visible((2, 5))
        once = [r.hidden for r in store.regions]

        store.label_visible((2, 5))

        assert [r.hidden for r in store.regions] == once

    def test_inverted_range_hides_everything(self, store, eight):
        store.label_visible((6, 3))

        assert self.visible_scores(store) == []

    def test_first_quartile_of_eight(self, store, eight):
        store.quartile_visible([1, 0, 0, 0])

        assert self.visible_scores(store) == [1, 2]

    def test_middle_quartiles(self, store, eight):
        store.quartile_visible([0, 1, 1, 0])

        assert self.visible_scores(store) == [3, 4, 5, 6]

    def test_no_quartile_hides_everything(self, store, eight):
        store.quartile_visible([0, 0, 0, 0])

        assert self.visible_scores(store) == []

    def test_non_contiguous_quartiles_terminate(self, store, eight):
        store.quartile_visible([1, 0, 1, 0])

        assert all(isinstance(r.hidden, bool) for r in store.regions)

    def test_quartile_on_empty_store(self, store):
        store.quartile_visible([1, 1, 1, 1])
        assert store.regions == []

    def test_switching_modes_resets_visibility(self, store, eight):
        store.quartile_visible([1, 0, 0, 0])
        store.label_visible((0, 100))

        assert self.visible_scores(store) == [1, 2, 3, 4, 5, 6, 7, 8]

    def test_reset_visible(self, store, eight):
        store.label_visible((100, 200))

        store.reset_visible()

        assert not any(r.hidden for r in store.regions)

    def test_class_visible(self, store):
        car = store.add_region(Region(id="c1", label="car"))
        person = store.add_region(Region(id="p1", label="person"))

        store.class_visible(False, "car")
        assert car.hidden and not person.hidden

        store.class_visible(True, "car")
        assert not car.hidden


class TestColorShift:

    @pytest.fixture
    def painted(self, store):
        return [
            store.add_region(Region(id="p1", fill_color="#00ff00")),
            store.add_region(Region(id="p2", fill_color="#0000ff", fill_opacity=0.3, opacity=0.9)),
        ]

    def test_enable_records_and_paints(self, store, painted):
        store.shift_color(True)

        assert store.has_map
        assert store.color_map["p1"] == ColorSnapshot("#00ff00", 0.6, 0.6)
        for region in painted:
            assert region.fill_color == "#FF0000"
            assert region.fill_opacity == 1
            assert region.opacity == 1

    def test_round_trip_restores_colors(self, store, painted):
        before = [r.color_snapshot() for r in painted]

        store.shift_color(True)
        store.shift_color(False)

        assert [r.color_snapshot() for r in painted] == before
        assert store.color_map == {}
        assert not store.has_map

    def test_enable_twice_keeps_original_colors(self, store, painted):
        store.shift_color(True)
        store.shift_color(True)
        store.shift_color(False)

        assert painted[0].fill_color == "#00ff00"

    def test_disable_without_overlay_is_noop(self, store, painted):
        store.shift_color(False)

        assert painted[1].color_snapshot() == ColorSnapshot("#0000ff", 0.3, 0.9)

    def test_delete_during_overlay(self, store, painted):
        store.shift_color(True)
        store.delete_region(painted[0])

        store.shift_color(False)

        assert store.color_map == {}
        assert not store.has_map
        assert painted[1].fill_color == "#0000ff"

    def test_region_added_during_overlay_keeps_its_color(self, store, painted):
        store.shift_color(True)
        late = store.add_region(Region(id="late", fill_color="#123456"))

        store.shift_color(False)

        assert late.fill_color == "#123456"

    def test_enable_on_empty_store_is_noop(self, store):
        store.shift_color(True)

        assert not store.has_map
        assert store.color_map == {}

        store.add_region(Region(id="r1"))
        store.shift_color(True)
        assert store.has_map
        assert set(store.color_map) == {"r1"}


class TestSorting:

    def test_score_sort_is_a_view(self, store, add_regions):
        a, b, c = add_regions([("a", 1, 0.9), ("b", 2, 0.1), ("c", 3, 0.5)])

        store.set_sort("score")

        assert store.sorted_regions == [b, c, a]
        assert store.regions == [a, b, c]

    def test_asc_reverses_view(self, store, add_regions):
        a, b, c = add_regions([("a", 1, 0.9), ("b", 2, 0.1), ("c", 3, 0.5)])

        store.toggle_sort_order()

        assert store.sort_order == "asc"
        assert store.sorted_regions == [c, b, a]

    def test_set_sort_resets_order(self, store):
        store.toggle_sort_order()

        store.set_sort("date")

        assert store.sort_order == "desc"

    def test_invalid_modes_raise(self, store):
        with pytest.raises(ValueError):
            store.set_sort("size")
        with pytest.raises(ValueError):
            store.set_group("colour")

    def test_set_group(self, store):
        store.set_group("label")
        assert store.group == "label"


class TestRegionHotkeys:

    def region_keys(self, registry):
        return [k for k in registry.get_keys() if k.startswith("alt+shift+")]

    def test_bank_follows_membership(self, store, registry, add_regions):
        a, b, c = add_regions([("a", 1, 0.1), ("b", 2, 0.2), ("c", 3, 0.3)])

        assert self.region_keys(registry) == ["alt+shift+1", "alt+shift+2", "alt+shift+3", "alt+shift+$n"]

        store.delete_region(b)

        assert self.region_keys(registry) == ["alt+shift+1", "alt+shift+2", "alt+shift+$n"]

    def test_binding_selects_region(self, store, registry, add_regions):
        a, b, c = add_regions([("a", 1, 0.1), ("b", 2, 0.2), ("c", 3, 0.3)])
        store.select_region(a)

        registry.trigger("alt+shift+3")

        assert store.selected_region is c
        assert selected_count(store) == 1

    def test_bank_uses_sort_order(self, store, registry, add_regions):
        a, b, c = add_regions([("a", 1, 0.9), ("b", 2, 0.1), ("c", 3, 0.5)])
        store.set_sort("score")

        registry.trigger("alt+shift+1")

        assert store.selected_region is b

    def test_hidden_regions_get_no_binding(self, store, registry, add_regions):
        add_regions([("a", 1, 0.1), ("b", 2, 0.5), ("c", 3, 0.9)])

        store.label_visible((0.4, 1.0))

        assert self.region_keys(registry) == ["alt+shift+1", "alt+shift+2", "alt+shift+$n"]
        registry.trigger("alt+shift+1")
        assert store.selected_region.id == "b"

    def test_foreign_bindings_are_untouched(self, store, registry, add_regions):
        registry.add_key("ctrl+enter", lambda: None, "Submit")
        registry.add_key("alt+1", lambda: None)

        add_regions([("a", 1, 0.1)])
        store.delete_region(store.regions[0])

        assert "ctrl+enter" in registry.get_keys()
        assert "alt+1" in registry.get_keys()

    def test_stale_callback_for_deleted_region_is_noop(self, store, registry, add_regions):
        a, b = add_regions([("a", 1, 0.1), ("b", 2, 0.2)])
        callback = registry._bindings["alt+shift+2"].callback
        store.select_region(a)

        store.delete_region(b)
        callback()

        assert store.selected_region is a

    def test_reference_entry_is_documented(self, store, registry, add_regions):
        add_regions([("a", 1, 0.1)])

        assert registry.descriptions()["alt+shift+$n"] == "Select a region"

    def test_toggle_hidden_rebuilds_bank(self, store, registry, add_regions):
        a, b = add_regions([("a", 1, 0.1), ("b", 2, 0.2)])

        store.toggle_hidden(a)

        assert a.hidden
        assert self.region_keys(registry) == ["alt+shift+1", "alt+shift+$n"]
        registry.trigger("alt+shift+1")
        assert store.selected_region is b

        store.toggle_hidden(a)
        assert self.region_keys(registry) == ["alt+shift+1", "alt+shift+2", "alt+shift+$n"]

    def test_toggle_hidden_ignores_non_member(self, store, registry, add_regions):
        add_regions([("a", 1, 0.1)])
        outsider = Region(id="x")

        store.toggle_hidden(outsider)

        assert not outsider.hidden

    def test_short_prefix_keeps_global_bindings(self, registry, logger):
        for key in ("ctrl+up", "ctrl+down", "ctrl+backspace"):
            registry.add_key(key, lambda: None)
        annotation = Annotation(registry, logger, settings=RegionStoreSettings(hotkey_prefix="ctrl+"))

        annotation.add_region(Region(id="a"))
        annotation.delete_region(annotation.regions[0])
        annotation.add_region(Region(id="b"))

        keys = registry.get_keys()
        assert {"ctrl+up", "ctrl+down", "ctrl+backspace"} <= set(keys)
        assert "ctrl+1" in keys

    def test_bound_name_owned_elsewhere_is_not_replaced(self, store, registry, add_regions):
        calls = []
        registry.add_key("alt+shift+2", lambda: calls.append("outside"))

        add_regions([("a", 1, 0.1), ("b", 2, 0.2)])
        store.delete_region(store.regions[0])
        registry.trigger("alt+shift+2")

        assert calls == ["outside"]
        assert "alt+shift+1" in registry.get_keys()

    def test_inactive_store_does_not_rebuild(self, store, registry, add_regions):
        add_regions([("a", 1, 0.1)])

        store.set_hotkeys_active(False)
        assert self.region_keys(registry) == []

        add_regions([("b", 2, 0.2)])
        assert self.region_keys(registry) == []

        store.set_hotkeys_active(True)
        assert self.region_keys(registry) == ["alt+shift+1", "alt+shift+2", "alt+shift+$n"]
