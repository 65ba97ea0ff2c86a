import io
from contextlib import redirect_stdout

import streamlit as st

# Local solver
from multigrains.chart import plot_plan
from multigrains.errors import SimplexError
from multigrains.farm import CONSUMPTION, FERTILIZERS, GRAINS, fmt_quantity, format_report, solve_farm

st.set_page_config(page_title="Multigrains", layout="wide")
st.title("Grain production: exact Simplex")

# Sidebar options
with st.sidebar:
    st.header("Options")
    show_trace = st.checkbox("Show tableau iterations", value=True)
    show_graph = st.checkbox("Show graph", value=True)

# Defaults for the number inputs
default_resources = [45, 41, 122, 100]
default_prices = [198, 259, 376, 5, 20]

st.subheader("Fertilizer stock (tons)")
res_cols = st.columns(len(FERTILIZERS))
resources = [
    int(col.number_input(name, min_value=0, max_value=2**32 - 1, value=v, step=1))
    for col, name, v in zip(res_cols, FERTILIZERS, default_resources)
]

st.subheader("Grain prices ($/unit)")
price_cols = st.columns(len(GRAINS))
prices = [
    int(col.number_input(name, min_value=0, max_value=2**32 - 1, value=v, step=1))
    for col, name, v in zip(price_cols, GRAINS, default_prices)
]

with st.expander("Fertilizer consumption per unit of grain"):
    st.table({name: [row[j] for row in CONSUMPTION] for j, name in enumerate(GRAINS)})

run = st.button("Solve")

if run:
    # Capture solver verbose output
    buf = io.StringIO()
    try:
        with redirect_stdout(buf):
            plan = solve_farm(resources, prices, verbose=show_trace)
    except SimplexError as e:
        st.error(f"Solver failed: {e}")
    else:
        if show_trace:
            st.subheader("Iterations / Tableaux")
            st.code(buf.getvalue())

        st.subheader("Result")
        st.table({
            "grain": list(GRAINS),
            "units": [fmt_quantity(q) for q in plan.quantities],
            "exact": [str(q) for q in plan.quantities],
            "price": plan.prices,
        })
        st.metric("Total production value", f"${plan.total.to_float():.2f}")
        st.caption(f"{plan.iterations} pivot(s)")
        st.code(format_report(plan))

        if show_graph:
            st.subheader("Graph")
            st.pyplot(plot_plan(plan))
