"""
Unit tests for the stat curve chart data and figure.
"""
from decimal import Decimal

import plotly.graph_objects as go
import pytest
from stat_catalog import CRITICAL_HIT, TENACITY
from stat_engine import StatDefinition, StatEngine, no_breakpoint_value
from streamlit_app.utils.stat_curve_chart import (
    STAT_COLUMN,
    build_curve_frame,
    create_stat_curve_chart,
    exact_column,
)

# More digits than a float keeps
LONG_VALUE = Decimal("0.12345678901234567891")


def long_value_engine():
    return StatEngine(StatDefinition('Long', 0, 3300, (
        no_breakpoint_value('long', 'Long', lambda v, e, inter: LONG_VALUE, is_percent=False),
    )))


class TestBuildCurveFrame:
    """Tests for the sampled curve data."""

    def test_columns_and_range(self):
        frame = build_curve_frame(StatEngine(CRITICAL_HIT), window=5)
        assert list(frame.columns) == [
            STAT_COLUMN,
            'rate', exact_column('rate'),
            'bonus', exact_column('bonus'),
            'edmg', exact_column('edmg'),
        ]
        assert frame[STAT_COLUMN].tolist() == list(range(375, 386))

    def test_values_match_engine(self):
        frame = build_curve_frame(StatEngine(CRITICAL_HIT), window=20)
        at_base = frame[frame[STAT_COLUMN] == 380].iloc[0]
        assert at_base['rate'] == 0.05
        assert at_base['edmg'] == 1.02
        at_397 = frame[frame[STAT_COLUMN] == 397].iloc[0]
        assert at_397['rate'] == 0.051

    def test_exact_column_keeps_all_digits(self):
        frame = build_curve_frame(long_value_engine(), window=2)
        assert set(frame[exact_column('long')]) == {str(LONG_VALUE)}
        assert Decimal(str(frame['long'].iloc[0])) != LONG_VALUE

    def test_does_not_move_current_value(self):
        engine = StatEngine(TENACITY)
        build_curve_frame(engine, window=10)
        assert engine.current_value == 380

    def test_inverted_curve_decreases(self):
        frame = build_curve_frame(StatEngine(TENACITY), window=100)
        mit = frame['mit'].tolist()
        assert mit == sorted(mit, reverse=True)


class TestCreateStatCurveChart:
    """Tests for the Plotly figure."""

    def test_figure_with_breakpoints(self):
        engine = StatEngine(CRITICAL_HIT)
        frame = build_curve_frame(engine, window=30)
        fig = create_stat_curve_chart(frame, engine, 'rate')
        assert isinstance(fig, go.Figure)
        assert len(fig.data) == 1
        # current + two breakpoints
        assert len(fig.layout.shapes) == 3
        assert fig.layout.yaxis.title.text == "Crit Rate (%)"

    def test_figure_without_breakpoints(self):
        engine = StatEngine(CRITICAL_HIT)
        frame = build_curve_frame(engine, window=30)
        fig = create_stat_curve_chart(frame, engine, 'edmg')
        assert len(fig.layout.shapes) == 1

    def test_searches_only_the_charted_value(self, monkeypatch):
        engine = StatEngine(CRITICAL_HIT)
        frame = build_curve_frame(engine, window=30)
        searched = []
        original = engine.find_breakpoints

        def recording(spec, real_value):
            searched.append(spec.name)
            return original(spec, real_value)

        monkeypatch.setattr(engine, 'find_breakpoints', recording)
        create_stat_curve_chart(frame, engine, 'rate')
        create_stat_curve_chart(frame, engine, 'edmg')
        assert searched == ['rate']

    def test_below_base_has_no_breakpoint_markers(self, monkeypatch):
        engine = StatEngine(CRITICAL_HIT)
        engine.set_value(300)
        frame = build_curve_frame(engine, window=10)
        monkeypatch.setattr(engine, 'find_breakpoints',
                            lambda spec, real_value: pytest.fail("searched below base"))
        fig = create_stat_curve_chart(frame, engine, 'rate')
        assert len(fig.layout.shapes) == 1

    def test_hover_uses_exact_value(self):
        engine = long_value_engine()
        frame = build_curve_frame(engine, window=2)
        fig = create_stat_curve_chart(frame, engine, 'long')
        assert all(text.endswith(f"Value: {LONG_VALUE}") for text in fig.data[0].hovertext)
