"""
Building Calculators - Streamlit UI
===================================

One page per calculator, each a form with a Calculate button and a
results panel.

Pages:
1. Beam Size
2. Joist Span
3. Wire Size
4. Stair Layout
"""

import logging

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from buildcalc.config import Settings
from buildcalc.tables import beam_capacities, beam_table, joist_spans, joist_table, wire_catalog
from buildcalc.ui.forms import FormOutcome, capacity_curve, options_frame, run_form

logging.basicConfig(level=logging.WARNING)

st.set_page_config(
    page_title="Building Calculators",
    page_icon="📐",
    layout="wide",
    initial_sidebar_state="expanded",
)

SETTINGS = Settings.from_env()


def show_outcome_problems(outcome: FormOutcome) -> bool:
    """Render validation errors or the no-size warning. Returns True if there was one."""
    if outcome.errors:
        for msg in outcome.errors:
            st.error(msg)
        return True
    if outcome.warning:
        st.warning(f"⚠️ {outcome.warning}")
        return True
    return False


def page_beam_size():
    """Beam Size page."""
    st.header("🪵 Beam Size Calculator")
    st.caption("Find built-up and solid timber beams that carry your span and load.")

    species = list(beam_capacities().species)
    with st.form("beam"):
        col1, col2 = st.columns(2)
        with col1:
            span = st.number_input("Beam span (ft)", min_value=0.0, value=None, step=0.5, placeholder="e.g., 12")
            load_type = st.selectbox(
                "Load type",
                ["floor", "deck", "roof", "balcony"],
                format_func={
                    "floor": "Floor (50 psf total)",
                    "deck": "Deck (50 psf total)",
                    "roof": "Roof (35 psf total)",
                    "balcony": "Balcony (60 psf total)",
                }.get,
            )
        with col2:
            trib = st.number_input("Tributary width (ft)", min_value=0.0, value=None, step=0.5, placeholder="e.g., 8")
            sp = st.selectbox("Species", species, format_func=lambda s: beam_capacities().species[s].label)
        beam_type = st.selectbox(
            "Beam type",
            ["any", "built", "solid"],
            format_func={
                "any": "Any (show all options)",
                "built": "Built-up (2x members)",
                "solid": "Solid Timber (4x, 6x)",
            }.get,
        )
        submitted = st.form_submit_button("Calculate", type="primary")

    if not submitted:
        return

    outcome = run_form(
        "beam",
        {"span_ft": span, "tributary_width_ft": trib, "load_type": load_type, "species": sp, "beam_type": beam_type},
        settings=SETTINGS,
    )
    if show_outcome_problems(outcome):
        return

    r = outcome.result
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Recommended", r.recommended.size)
    with col2:
        st.metric("Design load", f"{r.load_plf:.0f} plf")
    with col3:
        st.metric("Utilization", f"{r.recommended.utilization_percent}%")

    st.subheader("Adequate sizes")
    st.dataframe(options_frame(list(r.options)), hide_index=True, use_container_width=True)
    if r.not_applicable:
        st.info(f"Beyond table range at this span: {', '.join(r.not_applicable)}")

    curve = capacity_curve(beam_table(sp, beam_type), r.recommended.size, settings=SETTINGS)
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=curve["span"], y=curve["capacity"], mode="lines", name=r.recommended.size))
    fig.add_trace(go.Scatter(
        x=[r.inputs.span_ft], y=[r.load_plf],
        mode="markers", name="Required", marker=dict(color="red", size=10),
    ))
    fig.update_layout(xaxis_title="Span (ft)", yaxis_title="Allowable load (plf)", height=350)
    st.plotly_chart(fig, use_container_width=True)


def page_joist_span():
    """Joist Span page."""
    st.header("📏 Joist Span Calculator")
    st.caption("Maximum joist spans by species, grade and spacing.")

    data = joist_spans()
    with st.form("joist"):
        col1, col2 = st.columns(2)
        with col1:
            size = st.selectbox("Joist size", data.size_order, index=data.size_order.index("2x10"))
            sp = st.selectbox("Species", list(data.species), format_func=lambda s: data.species[s].label)
            load_type = st.selectbox(
                "Load type",
                ["floor", "ceiling"],
                format_func={"floor": "Floor Joist (40 psf live load)", "ceiling": "Ceiling Joist (10 psf live load)"}.get,
            )
        with col2:
            spacing = st.selectbox("Spacing (in on center)", [12.0, 16.0, 19.2, 24.0], index=1)
            grade = st.selectbox("Grade", ["#1", "#2", "#3"], index=1)
            desired = st.number_input("Desired span (ft, optional)", min_value=0.0, value=None, step=0.5)
        submitted = st.form_submit_button("Calculate", type="primary")

    if not submitted:
        return

    raw = {"joist_size": size, "spacing_in": spacing, "species": sp, "grade": grade, "load_type": load_type}
    if desired:
        raw["desired_span_ft"] = desired
    outcome = run_form("joist", raw, settings=SETTINGS)
    if show_outcome_problems(outcome):
        return

    r = outcome.result
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Maximum span", f"{r.max_span_ft:.1f} ft")
    with col2:
        st.metric("Recommended size", r.recommended_size)
    with col3:
        if r.span_ok is None:
            st.metric("Desired span", "n/a")
        else:
            st.metric("Desired span", "✅ OK" if r.span_ok else "❌ Too long")
    if r.warning:
        st.warning(f"⚠️ {r.warning}")

    df = pd.DataFrame({
        "Size": [s.size for s in r.all_sizes],
        "Max span (ft)": ["n/a" if s.max_span_ft is None else f"{s.max_span_ft:.1f}" for s in r.all_sizes],
    })
    st.dataframe(df, hide_index=True, use_container_width=True)

    table = joist_table(sp, grade, ceiling=load_type == "ceiling", settings=SETTINGS)
    fig = go.Figure()
    for key in table.size_keys():
        curve = capacity_curve(table, key, settings=SETTINGS)
        fig.add_trace(go.Scatter(x=curve["span"], y=curve["capacity"], mode="lines", name=key))
    fig.update_layout(xaxis_title="Spacing (in)", yaxis_title="Maximum span (ft)", height=350)
    st.plotly_chart(fig, use_container_width=True)


def page_wire_size():
    """Wire Size page."""
    st.header("🔌 Wire Size Calculator")
    st.caption("Conductor size by ampacity and voltage drop.")

    with st.form("wire"):
        col1, col2 = st.columns(2)
        with col1:
            amps = st.number_input("Amperage (A)", min_value=0.0, value=None, step=1.0)
            voltage = st.selectbox("Voltage", [120, 240, 208, 277, 480])
            cable = st.selectbox(
                "Cable type",
                ["romex", "thhn", "uf", "ser"],
                format_func={"romex": "NM-B (Romex)", "thhn": "THHN in Conduit", "uf": "UF (Underground)", "ser": "SER Cable"}.get,
            )
        with col2:
            dist = st.number_input("One-way distance (ft)", min_value=0.0, value=None, step=5.0)
            material = st.selectbox("Wire type", ["copper", "aluminum"], format_func=str.title)
            max_drop = st.selectbox(
                "Maximum voltage drop",
                [2.0, 3.0, 5.0],
                index=1,
                format_func={2.0: "2% (Sensitive Electronics)", 3.0: "3% (NEC Recommended)", 5.0: "5% (NEC Maximum)"}.get,
            )
        submitted = st.form_submit_button("Calculate", type="primary")

    if not submitted:
        return

    outcome = run_form(
        "wire",
        {
            "amperage": amps,
            "distance_ft": dist,
            "voltage": voltage,
            "material": material,
            "cable_type": cable,
            "max_voltage_drop_percent": max_drop,
        },
        settings=SETTINGS,
    )
    if show_outcome_problems(outcome):
        return

    r = outcome.result
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Recommended", f"{r.recommended_size} AWG")
    with col2:
        st.metric("Voltage drop", f"{r.voltage_drop_v:.2f} V", f"{r.voltage_drop_percent:.2f}%", delta_color="off")
    with col3:
        st.metric("Estimated cost", f"${r.cost_estimate:.2f}")
    st.markdown(
        f"Minimum by ampacity: **{r.minimum_by_ampacity} AWG** · "
        f"minimum by voltage drop: **{r.minimum_by_voltage_drop} AWG**"
    )

    order = wire_catalog().size_order
    df = pd.DataFrame([o.model_dump() for o in r.options])
    df["size"] = pd.Categorical(df["size"], categories=order, ordered=True)
    st.dataframe(df.sort_values("size"), hide_index=True, use_container_width=True)
    for note in r.notes:
        st.info(note)


def page_stairs():
    """Stair Layout page."""
    st.header("🪜 Stair Layout Calculator")
    st.caption("Risers, treads and stringers for a straight flight.")

    with st.form("stairs"):
        col1, col2 = st.columns(2)
        with col1:
            rise = st.number_input("Total rise (in)", min_value=0.0, value=None, step=0.25)
            width = st.selectbox("Stair width (in)", [36.0, 42.0, 48.0, 60.0])
            preferred = st.number_input("Preferred riser height (in)", min_value=0.0, value=7.5, step=0.125)
        with col2:
            run = st.number_input("Total run (in, optional)", min_value=0.0, value=None, step=0.5)
            spacing = st.selectbox("Stringer spacing (in)", [12.0, 16.0, 24.0], index=1)
            nosing = st.number_input("Nosing overhang (in)", min_value=0.0, value=1.0, step=0.25)
        submitted = st.form_submit_button("Calculate", type="primary")

    if not submitted:
        return

    raw = {
        "total_rise_in": rise,
        "stair_width_in": width,
        "stringer_spacing_in": spacing,
        "preferred_riser_in": preferred,
        "nosing_in": nosing,
    }
    if run:
        raw["total_run_in"] = run
    outcome = run_form("stairs", raw, settings=SETTINGS)
    if show_outcome_problems(outcome):
        return

    r = outcome.result
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Risers", f"{r.risers} × {r.riser_height_in:.2f} in")
    with col2:
        st.metric("Treads", f"{r.treads} × {r.tread_depth_in:.2f} in")
    with col3:
        st.metric("Stringers", f"{r.stringers} × {r.recommended_stock}")
    with col4:
        st.metric("Angle", f"{r.angle_deg:.1f}°")

    if r.code_compliant:
        st.success("✅ Riser and tread dimensions are within code limits")
    else:
        st.error("⚠️ Riser or tread dimensions are outside code limits")
    if not r.comfort_compliant:
        st.warning(f"2R + T = {r.comfort_value_in:.1f} in (24-25 in is most comfortable)")
    st.markdown(
        f"Stringer length **{r.stringer_length_in:.1f} in**; buy **{r.stringer_stock_ft} ft** stock. "
        f"Total run {r.total_run_in:.1f} in."
    )


PAGES = {
    "🪵 Beam Size": page_beam_size,
    "📏 Joist Span": page_joist_span,
    "🔌 Wire Size": page_wire_size,
    "🪜 Stair Layout": page_stairs,
}


def main():
    """Main application."""
    st.title("📐 Building Calculators")
    st.caption("Span-table sizing for beams, joists and wire, plus stair layout")

    with st.sidebar:
        st.header("Navigation")
        page = st.radio("Select Calculator", list(PAGES))
        st.divider()
        st.caption(
            "Results come from prescriptive span and ampacity tables. "
            "For unusual loads, long spans or point loads, consult an engineer."
        )

    PAGES[page]()


if __name__ == "__main__":
    main()
