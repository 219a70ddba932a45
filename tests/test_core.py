"""Unit tests for core functionality."""

import random
from collections import Counter

import pytest

# Models
from vocabcards.core.models import Definition, VocabItem

# Grouping and shuffling
from vocabcards.core.grouping import build_group_index
from vocabcards.core.shuffle import shuffle_items

# Session
from vocabcards.core.session import SessionController, SessionState
from vocabcards.core.keys import KeyboardHandler
from vocabcards.core.ads import should_show_ad, ad_slot_id
from vocabcards.core.errors import InvalidGroupSelection, InvalidIndex, InvalidUploadFormat

# Rich text
from vocabcards.core.rich_text import sentence_markup


def make_item(key, group, word):
    return VocabItem(
        key=key,
        group=group,
        word=word,
        definitions=(Definition(part_of_speech="noun", definition=f"a {word}"),),
    )


CAT = make_item(1, 1, "cat")
DOG = make_item(2, 1, "dog")
FOX = make_item(3, 2, "fox")


def make_controller(items=(CAT, DOG, FOX), seed=0):
    return SessionController(build_group_index(items), rng=random.Random(seed))


class TestModels:
    """Test dataset entry parsing."""

    def test_from_dict(self):
        item = VocabItem.from_dict({
            "key": 7,
            "group": 2,
            "word": "abate",
            "definitions": [{
                "part_of_speech": "verb",
                "definition": "to lessen",
                "sentence": "The storm <b>abated</b>.",
                "synonyms": ["subside", "wane"],
            }],
        })
        assert item.key == 7
        assert item.group == 2
        assert item.definitions[0].synonyms == ("subside", "wane")
        assert item.definitions[0].sentence == "The storm <b>abated</b>."

    def test_optional_fields_default(self):
        d = Definition.from_dict({"part_of_speech": "noun", "definition": "x"})
        assert d.sentence is None
        assert d.synonyms == ()

    def test_to_dict_round_trips_shape(self):
        data = CAT.to_dict()
        assert data == {
            "key": 1,
            "group": 1,
            "word": "cat",
            "definitions": [{"part_of_speech": "noun", "definition": "a cat"}],
        }
        assert VocabItem.from_dict(data) == CAT

    def test_missing_definitions_rejected(self):
        with pytest.raises(InvalidUploadFormat):
            VocabItem.from_dict({"key": 1, "group": 1, "word": "x", "definitions": []})

    def test_non_integer_key_rejected(self):
        with pytest.raises(InvalidUploadFormat):
            VocabItem.from_dict({
                "key": "1", "group": 1, "word": "x",
                "definitions": [{"definition": "y"}],
            })

    def test_bool_group_rejected(self):
        with pytest.raises(InvalidUploadFormat):
            VocabItem.from_dict({
                "key": 1, "group": True, "word": "x",
                "definitions": [{"definition": "y"}],
            })

    def test_part_of_speech_required(self):
        with pytest.raises(InvalidUploadFormat):
            Definition.from_dict({"definition": "y"})

    def test_synonyms_must_be_a_list(self):
        for synonyms in ({}, 0, "", "calm"):
            with pytest.raises(InvalidUploadFormat):
                Definition.from_dict({
                    "part_of_speech": "noun", "definition": "y", "synonyms": synonyms,
                })

    def test_null_synonyms_are_empty(self):
        d = Definition.from_dict({"part_of_speech": "noun", "definition": "y", "synonyms": None})
        assert d.synonyms == ()


class TestGroupIndex:
    """Test partitioning into groups."""

    def test_scenario_groups(self):
        index = build_group_index([CAT, DOG, FOX])
        assert index.group_ids == (1, 2)
        assert [i.word for i in index.items(1)] == ["cat", "dog"]
        assert [i.word for i in index.items(2)] == ["fox"]

    def test_groups_sorted_numerically(self):
        items = [make_item(1, 10, "a"), make_item(2, 2, "b"), make_item(3, 1, "c")]
        index = build_group_index(items)
        assert index.group_ids == (1, 2, 10)

    def test_items_sorted_by_key_within_group(self):
        items = [make_item(9, 1, "z"), make_item(3, 1, "c"), make_item(5, 1, "e")]
        index = build_group_index(items)
        assert [i.key for i in index.items(1)] == [3, 5, 9]

    def test_empty_dataset(self):
        index = build_group_index([])
        assert index.groups == {}
        assert index.group_ids == ()
        assert index.flatten() == []

    def test_unknown_group_is_empty(self):
        index = build_group_index([CAT])
        assert index.items(99) == ()
        assert 99 not in index

    def test_flatten_is_the_dataset(self):
        rng = random.Random(42)
        items = [make_item(k, rng.randint(1, 6), f"w{k}") for k in range(1, 60)]
        rng.shuffle(items)

        flat = build_group_index(items).flatten()

        assert len(flat) == len(items)
        assert Counter(flat) == Counter(items)
        expected = sorted(items, key=lambda i: (i.group, i.key))
        assert flat == expected


class TestShuffle:
    """Test the Fisher-Yates shuffle."""

    def test_is_permutation(self):
        items = list(range(20))
        result = shuffle_items(items, random.Random(1))
        assert sorted(result) == items
        assert len(result) == len(items)

    def test_does_not_mutate_input(self):
        items = [CAT, DOG, FOX]
        shuffle_items(items, random.Random(3))
        assert items == [CAT, DOG, FOX]

    def test_returns_copy_for_short_inputs(self):
        empty = []
        single = [CAT]
        assert shuffle_items(empty) == []
        assert shuffle_items(empty) is not empty
        assert shuffle_items(single) == [CAT]
        assert shuffle_items(single) is not single

    def test_swap_order(self):
        class FirstIndex:
            def __init__(self):
                self.calls = []

            def randint(self, a, b):
                self.calls.append((a, b))
                return a

        rng = FirstIndex()
        assert shuffle_items(["a", "b", "c"], rng) == ["b", "c", "a"]
        assert rng.calls == [(0, 2), (0, 1)]

    def test_roughly_uniform(self):
        rng = random.Random(1234)
        counts = Counter(tuple(shuffle_items("abc", rng)) for _ in range(3000))
        assert len(counts) == 6
        for count in counts.values():
            assert 400 < count < 600


class TestSessionController:
    """Test the study session state machine."""

    def setup_method(self):
        self.session = make_controller()

    def test_initial_state(self):
        assert self.session.state == SessionState()
        assert not self.session.is_group_selected
        assert self.session.current_item() is None

    def test_select_group(self):
        state = self.session.select_group(1)
        assert state.selected_group == 1
        assert state.active_order == (CAT, DOG)
        assert state.cursor == 0
        assert state.revealed is False
        assert state.shuffled is False
        assert self.session.current_item() == CAT

    def test_select_unknown_group_leaves_state(self):
        self.session.select_group(1)
        self.session.advance()
        before = self.session.state
        with pytest.raises(InvalidGroupSelection):
            self.session.select_group(42)
        assert self.session.state is before

    def test_select_none_resets(self):
        self.session.select_group(1)
        state = self.session.select_group(None)
        assert not state.is_group_selected

    def test_advance_clamps(self):
        # Scenario: two advances on a two-item group stop at the last card
        self.session.select_group(1)
        self.session.advance()
        self.session.advance()
        assert self.session.state.cursor == 1
        assert self.session.current_item().word == "dog"

    def test_advance_many_times(self):
        items = [make_item(k, 1, f"w{k}") for k in range(1, 8)]
        session = make_controller(items)
        session.select_group(1)
        for _ in range(len(items) + 5):
            session.advance()
        assert session.state.cursor == len(items) - 1

    def test_retreat_clamps(self):
        self.session.select_group(1)
        self.session.retreat()
        assert self.session.state.cursor == 0
        self.session.advance()
        self.session.retreat()
        assert self.session.state.cursor == 0

    def test_reveal_then_advance_hides(self):
        self.session.select_group(1)
        assert self.session.toggle_reveal().revealed is True
        assert self.session.advance().revealed is False

    def test_toggle_reveal_is_own_inverse(self):
        self.session.select_group(1)
        self.session.toggle_reveal()
        self.session.toggle_reveal()
        assert self.session.state.revealed is False

    def test_reveal_reset_at_boundary(self):
        # The cursor cannot move, but the card is still hidden again
        self.session.select_group(2)
        self.session.toggle_reveal()
        state = self.session.advance()
        assert state.cursor == 0
        assert state.revealed is False

        self.session.toggle_reveal()
        state = self.session.retreat()
        assert state.cursor == 0
        assert state.revealed is False

    def test_every_navigation_hides(self):
        operations = [
            lambda s: s.advance(),
            lambda s: s.retreat(),
            lambda s: s.jump_to(1),
            lambda s: s.select_group(1),
            lambda s: s.shuffle_current_group(),
        ]
        for operation in operations:
            self.session.select_group(1)
            self.session.toggle_reveal()
            assert operation(self.session).revealed is False

    def test_jump_to(self):
        self.session.select_group(1)
        assert self.session.jump_to(1).cursor == 1
        assert self.session.current_item() == DOG

    def test_jump_out_of_range(self):
        self.session.select_group(1)
        self.session.toggle_reveal()
        before = self.session.state
        with pytest.raises(InvalidIndex):
            self.session.jump_to(2)
        with pytest.raises(InvalidIndex):
            self.session.jump_to(-1)
        assert self.session.state is before

    def test_invalid_index_messages(self):
        assert "0..1" in str(InvalidIndex(2, 2))
        message = str(InvalidIndex(0, 0))
        assert "no cards" in message
        assert "-1" not in message

    def test_shuffle_draws_from_canonical_order(self):
        items = [make_item(k, 1, f"w{k}") for k in range(1, 11)]
        session = make_controller(items, seed=5)
        session.select_group(1)
        session.advance()

        first = session.shuffle_current_group()
        assert first.shuffled is True
        assert first.cursor == 0
        assert sorted(first.active_order, key=lambda i: i.key) == items

        # Same seed applied to the canonical order reproduces the second draw
        expected_rng = random.Random(5)
        shuffle_items(items, expected_rng)
        expected_second = shuffle_items(items, expected_rng)
        second = session.shuffle_current_group()
        assert list(second.active_order) == expected_second
        assert second.selected_group == 1

    def test_shuffle_keeps_canonical_order_available(self):
        self.session.select_group(1)
        self.session.shuffle_current_group()
        assert self.session.index.items(1) == (CAT, DOG)
        assert self.session.unshuffle().active_order == (CAT, DOG)

    def test_empty_group(self):
        # A group id with no items (possible when the index is built by hand)
        from vocabcards.core.grouping import GroupIndex
        index = GroupIndex(groups={3: ()}, group_ids=(3,))
        session = SessionController(index)

        state = session.select_group(3)
        assert state.active_order == ()
        assert session.current_item() is None
        assert session.position() == (0, 0)
        assert session.advance().cursor == 0
        assert session.retreat().cursor == 0
        assert session.toggle_reveal().revealed is True
        assert session.shuffle_current_group().active_order == ()
        with pytest.raises(InvalidIndex):
            session.jump_to(0)

    def test_no_group_operations_are_noops(self):
        for operation in ("advance", "retreat", "toggle_reveal",
                          "shuffle_current_group", "unshuffle"):
            state = getattr(self.session, operation)()
            assert state == SessionState()
        assert self.session.jump_to(3) == SessionState()

    def test_reset(self):
        self.session.select_group(1)
        self.session.toggle_reveal()
        assert self.session.reset() == SessionState()

    def test_position(self):
        self.session.select_group(1)
        assert self.session.position() == (1, 2)
        self.session.advance()
        assert self.session.position() == (2, 2)

    def test_state_is_replaced_not_mutated(self):
        first = self.session.select_group(1)
        self.session.advance()
        assert first.cursor == 0


class TestKeyboardHandler:
    """Test key bindings."""

    def setup_method(self):
        self.session = make_controller()
        self.keys = KeyboardHandler(self.session)

    def test_inactive_without_group(self):
        for key in ("right", "left", " ", "esc", "s"):
            assert self.keys.handle(key) is False
        assert self.session.state == SessionState()

    def test_arrows(self):
        self.session.select_group(1)
        assert self.keys.handle("right") is True
        assert self.session.state.cursor == 1
        assert self.keys.handle("left") is True
        assert self.session.state.cursor == 0

    def test_space_toggles_and_is_consumed(self):
        self.session.select_group(1)
        assert self.keys.handle(" ") is True
        assert self.session.state.revealed is True

    def test_escape_resets(self):
        self.session.select_group(1)
        assert self.keys.handle("esc") is True
        assert not self.session.is_group_selected

    def test_shuffle_keys(self):
        self.session.select_group(1)
        self.keys.handle("s")
        assert self.session.state.shuffled is True
        self.keys.handle("u")
        assert self.session.state.shuffled is False

    def test_unbound_and_mouse_keys(self):
        self.session.select_group(1)
        assert self.keys.handle("x") is False
        assert self.keys.handle(("mouse press", 1, 0, 0)) is False


class TestAds:
    """Test ad placement."""

    def test_every_fifth_card(self):
        for cursor in (5, 10, 15, 100):
            assert should_show_ad(cursor) is True

    def test_other_positions(self):
        for cursor in (0, 1, 2, 3, 4, 6, 7, 8, 9, 11):
            assert should_show_ad(cursor) is False

    def test_slot_ids_unique_per_position(self):
        assert ad_slot_id(1, 5) == "ad-g1-c5"
        assert ad_slot_id(1, 5) != ad_slot_id(1, 10)
        assert ad_slot_id(1, 5) != ad_slot_id(2, 5)


class TestRichText:
    """Test example sentence markup."""

    def test_bold(self):
        assert sentence_markup("The storm <b>abated</b> by morning.") == [
            ("sentence", "The storm "),
            ("sentence_bold", "abated"),
            ("sentence", " by morning."),
        ]

    def test_nested(self):
        assert sentence_markup("<b>x <i>y</i></b>") == [
            ("sentence_bold", "x "),
            ("sentence_italic", "y"),
        ]

    def test_unknown_tags_keep_text(self):
        assert sentence_markup('<span class="hl">hi</span>') == [("sentence", "hi")]

    def test_script_dropped(self):
        assert sentence_markup("<script>alert(1)</script>hi") == [("sentence", "hi")]

    def test_entities_and_breaks(self):
        assert sentence_markup("a &amp; b<br>c") == [("sentence", "a & b\nc")]

    def test_empty(self):
        assert sentence_markup(None) == []
        assert sentence_markup("") == []
