"""
Actions and slice reducers.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict


@dataclass(frozen=True)
class Action:
    type: str
    payload: Any = None


class Slice:
    """
    Reducer for one part of the state, built from named cases.

    `@slice.case("name")` registers a case reducer `(state, payload) -> state`
    for the action type "<slice name>/name" and replaces the function with an
    action creator for that type. Case reducers return a new state, or the
    same object when nothing changed.
    """

    def __init__(self, name: str, initial_state: Any):
        self.name = name
        self.initial_state = initial_state
        self._cases: Dict[str, Callable[[Any, Any], Any]] = {}

    def case(self, action_name: str):
        action_type = f"{self.name}/{action_name}"

        def register(case_reducer):
            self._cases[action_type] = case_reducer

            def action_creator(payload: Any = None) -> Action:
                return Action(action_type, payload)

            action_creator.type = action_type
            action_creator.__name__ = case_reducer.__name__
            action_creator.__doc__ = case_reducer.__doc__
            return action_creator

        return register

    def reducer(self, state: Any, action: Action) -> Any:
        if state is None:
            state = self.initial_state
        case_reducer = self._cases.get(action.type)
        if case_reducer is None:
            return state
        return case_reducer(state, action.payload)
