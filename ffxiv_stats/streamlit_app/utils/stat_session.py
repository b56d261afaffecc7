"""
Session helpers for the stat calculator page.

Each browser session owns one StatSheet in st.session_state. Widgets call
the command callbacks below; nothing outside the engine assigns stat values.
"""
from typing import MutableMapping, Optional

import streamlit as st

from stat_catalog import create_stat_sheet
from stat_display import format_decimal, parse_stat_input
from stat_engine import StatEngine, StatSheet

SHEET_KEY = "stat_sheet"


def _state(state: Optional[MutableMapping]) -> MutableMapping:
    return st.session_state if state is None else state


def input_key(stat_name: str) -> str:
    """Widget key for a stat's text input."""
    return f"stat_input_{stat_name}"


def init_session_state(state: Optional[MutableMapping] = None) -> StatSheet:
    """Create the session's StatSheet (and input widget values) on first run."""
    state = _state(state)
    if SHEET_KEY not in state:
        sheet = create_stat_sheet()
        state[SHEET_KEY] = sheet
        for engine in sheet:
            _sync_input(state, engine)
    return state[SHEET_KEY]


def get_engine(stat_name: str, state: Optional[MutableMapping] = None) -> StatEngine:
    return init_session_state(state)[stat_name]


def _sync_input(state: MutableMapping, engine: StatEngine) -> None:
    state[input_key(engine.name)] = format_decimal(engine.current_value)


# =============================================================================
# WIDGET CALLBACKS
# =============================================================================

def on_input_change(stat_name: str, state: Optional[MutableMapping] = None) -> None:
    """Text input edited: invalid text becomes 0."""
    state = _state(state)
    engine = get_engine(stat_name, state)
    engine.set_value(parse_stat_input(state.get(input_key(stat_name))))
    _sync_input(state, engine)


def on_increment(stat_name: str, state: Optional[MutableMapping] = None) -> None:
    state = _state(state)
    engine = get_engine(stat_name, state)
    engine.increment()
    _sync_input(state, engine)


def on_decrement(stat_name: str, state: Optional[MutableMapping] = None) -> None:
    state = _state(state)
    engine = get_engine(stat_name, state)
    engine.decrement()
    _sync_input(state, engine)
