"""
FFXIV Stat Calculator - Streamlit Web App
Enter level-80 stats to see derived values and their breakpoints.

Run with: streamlit run ffxiv_stats/streamlit_app/app.py
"""
import sys
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).parent.parent))

from stat_display import build_display_rows
from utils.stat_curve_chart import build_curve_frame, create_stat_curve_chart
from utils.stat_session import (
    init_session_state,
    input_key,
    on_decrement,
    on_increment,
    on_input_change,
)

PAGE_TITLE = "FFXIV Stat Calculator"
THEORYJERKS_URL = "http://theoryjerks.akhmorning.com/"
SOURCE_URL = "https://github.com/Drovolon/ffxiv-stat-calculator"

st.set_page_config(
    page_title=PAGE_TITLE,
    page_icon="⚔️",
    layout="centered",
)

st.markdown("""
<style>
    .stat-row {
        font-family: monospace;
        font-size: 14px;
        margin-bottom: 4px;
    }
    .stat-bp {
        color: #888;
    }
    .stat-warn {
        color: #ff4444;
    }
</style>
""", unsafe_allow_html=True)


def render_stat_block(engine):
    """Header, input with -/+ buttons, and the derived value list for one stat."""
    st.subheader(engine.name)

    col_input, col_minus, col_plus = st.columns([6, 1, 1])
    with col_input:
        st.text_input(
            engine.name,
            key=input_key(engine.name),
            on_change=on_input_change,
            args=(engine.name,),
            label_visibility="collapsed",
        )
    with col_minus:
        st.button("-", key=f"dec_{engine.name}", on_click=on_decrement, args=(engine.name,))
    with col_plus:
        st.button("+", key=f"inc_{engine.name}", on_click=on_increment, args=(engine.name,))

    for row in build_display_rows(engine):
        line = f"<b>{row.display_name}</b> = {row.formatted_value}"
        if row.has_breakpoints:
            line += (f' <span class="stat-bp">| next lowest: {row.lesser_breakpoint} '
                     f'({row.lesser_delta}), next highest: {row.greater_breakpoint} '
                     f'({row.greater_delta})</span>')
            if row.inconclusive:
                line += ' <span class="stat-warn">(search limit reached)</span>'
        st.markdown(f'<div class="stat-row">{line}</div>', unsafe_allow_html=True)

    with st.expander("📈 Curve"):
        specs = engine.definition.specs
        key = st.selectbox(
            "Derived value",
            [spec.name for spec in specs],
            format_func=lambda name: next(s.display_name for s in specs if s.name == name),
            key=f"curve_{engine.name}",
        )
        window = st.slider("Range (±)", min_value=10, max_value=300, value=60, step=10,
                           key=f"window_{engine.name}")
        frame = build_curve_frame(engine, window)
        st.plotly_chart(create_stat_curve_chart(frame, engine, key), use_container_width=True)


def main():
    """Main entry point."""
    sheet = init_session_state()

    st.title(PAGE_TITLE)
    st.markdown(
        "Below you can enter FFXIV stats to see their corresponding values at level 80. "
        f"These calculations were taken from the [Theoryjerks]({THEORYJERKS_URL}) "
        "website, and all credit goes to them."
    )
    st.markdown(f"View source code and suggest edits [on GitHub]({SOURCE_URL}).")

    for engine in sheet:
        st.divider()
        render_stat_block(engine)


if __name__ == "__main__":
    main()
