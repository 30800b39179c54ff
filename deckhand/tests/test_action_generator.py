"""
Tests for legal intent generation.
"""

from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import ActionGenerator, legal_actions, is_legal
from .conftest import build_state


def _types(actions):
    return {a.action_type for a in actions}


class TestLegalActions:

    def test_no_state_only_init(self):
        actions = legal_actions(None)
        assert len(actions) == 1
        assert actions[0].action_type == ActionType.INIT

    def test_discarding(self, discarding_state):
        types = _types(legal_actions(discarding_state))

        assert ActionType.TOGGLE_CARD_SELECTION in types
        assert ActionType.CONFIRM_DISCARD in types
        assert ActionType.END_TURN not in types
        assert ActionType.SELECT_FOR_PLAY_ORDER not in types
        assert ActionType.RESET in types

    def test_toggle_candidates_respect_cap(self, discarding_state):
        state = discarding_state._copy_with(selected_card_ids=frozenset({"card-1", "card-2"}))
        toggles = [
            a.payload.instance_id
            for a in legal_actions(state)
            if a.action_type == ActionType.TOGGLE_CARD_SELECTION
        ]
        assert sorted(toggles) == ["card-1", "card-2"]

    def test_planning(self, planning_state):
        state = planning_state._copy_with(play_order_sequence=["card-2"])
        actions = legal_actions(state)
        types = _types(actions)

        assert ActionType.END_TURN not in types
        assert ActionType.LOCK_PLAY_ORDER not in types
        assert ActionType.CLEAR_PLAY_ORDER in types

        selectable = {
            a.payload.instance_id for a in actions
            if a.action_type == ActionType.SELECT_FOR_PLAY_ORDER
        }
        deselectable = {
            a.payload.instance_id for a in actions
            if a.action_type == ActionType.DESELECT_FROM_PLAY_ORDER
        }
        assert selectable == {"card-1", "card-3"}
        assert deselectable == {"card-2"}

    def test_lock_offered_when_complete(self, planning_state):
        state = planning_state._copy_with(play_order_sequence=["card-1", "card-2", "card-3"])
        assert ActionType.LOCK_PLAY_ORDER in _types(legal_actions(state))

    def test_executing(self, planning_state):
        state = planning_state._copy_with(
            play_order_sequence=["card-1", "card-2", "card-3"],
            play_order_locked=True,
            planning_phase=False,
        )
        types = _types(legal_actions(state))

        assert ActionType.END_TURN in types
        assert ActionType.CLEAR_PLAY_ORDER not in types
        assert ActionType.SELECT_FOR_PLAY_ORDER not in types

    def test_idle(self):
        state = build_state(hand=["A"], draw_pile=["B"], hand_size=1, discard_count=0)
        types = _types(legal_actions(state))
        assert types == {ActionType.RESET, ActionType.DEAL_NEXT_HAND, ActionType.END_TURN}

    def test_generated_actions_succeed(self, reducer, initial_state):
        generator = ActionGenerator(reducer=reducer)
        for action in generator.generate(initial_state):
            assert reducer.apply(initial_state, action).success


class TestIsLegal:

    def test_matches_reducer(self, reducer, discarding_state):
        action = Action.toggle_selection("card-1")
        assert is_legal(discarding_state, action)
        assert reducer.apply(discarding_state, action).success

    def test_illegal(self, discarding_state):
        assert not is_legal(discarding_state, Action.end_turn())
        assert not is_legal(discarding_state, Action.toggle_selection("missing"))
