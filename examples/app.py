import json
import numpy as np
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from reactionlab.presets import (
    build_snelson_prism,
    build_quadruple_prism,
    build_quintuple_prism,
)
from reactionlab.model import (
    from_structure_json,
    reaction_totals,
    solve_reactions,
    to_reaction_dataframe,
    to_structure_json,
)
from reactionlab.reactions import ReactionError

st.title("Tensegrity Reaction Forces")

uploaded = st.file_uploader("Load JSON", type="json")
default_idx = 3 if uploaded else 0
preset = st.selectbox("Preset", ["Prism3", "Prism4", "Prism5", "Custom"], index=default_idx)

radius = st.slider("radius", 0.5, 2.0, 1.0, step=0.1)
height = st.slider("height", 0.5, 2.0, 1.2, step=0.1)
twist_deg = st.slider("twist_deg", 0.0, 180.0, 150.0, step=1.0)
node_mass = st.slider("node_mass", 0.1, 10.0, 1.0, step=0.1)
g = st.number_input("g", min_value=0.0, max_value=100.0, value=9.81, step=0.01)
formulation = st.radio("Formulation", ["original", "physical"], horizontal=True)
arrow_scale = st.slider("arrow_scale", 0.001, 0.2, 0.02, step=0.001)

loaded_model = None
if uploaded is not None:
    loaded_model = from_structure_json(json.loads(uploaded.getvalue().decode("utf-8")))

if st.button("Solve"):
    builders = {
        "Prism3": build_snelson_prism,
        "Prism4": build_quadruple_prism,
        "Prism5": build_quintuple_prism,
    }
    if preset in builders:
        model = builders[preset](
            r=radius,
            h=height,
            theta=np.deg2rad(twist_deg),
            node_mass=node_mass,
        )
    else:
        if loaded_model is None:
            st.error("Upload a JSON for Custom preset")
            st.stop()
        model = loaded_model

    try:
        P = solve_reactions(model, g=g, formulation=formulation)
    except (ReactionError, ValueError) as e:
        st.error(str(e))
        st.stop()

    fx, fy, fz = reaction_totals(P)
    cols = st.columns(3)
    cols[0].metric("Sum Fx", f"{fx:.3f}")
    cols[1].metric("Sum Fy", f"{fy:.3f}")
    cols[2].metric("Sum Fz", f"{fz:.3f}")

    X = model.X
    pinned = model.pinned
    fig = go.Figure()
    fig.add_trace(
        go.Scatter3d(
            x=X[~pinned, 0],
            y=X[~pinned, 1],
            z=X[~pinned, 2],
            mode="markers",
            marker=dict(color="lightgray"),
            name="Free nodes",
        )
    )
    fig.add_trace(
        go.Scatter3d(
            x=X[pinned, 0],
            y=X[pinned, 1],
            z=X[pinned, 2],
            mode="markers",
            marker=dict(color="black", symbol="square"),
            name="Pinned nodes",
        )
    )
    rx, ry, rz = [], [], []
    for i in np.where(pinned)[0]:
        tip = X[i] + arrow_scale * P[i]
        rx.extend([X[i, 0], tip[0], None])
        ry.extend([X[i, 1], tip[1], None])
        rz.extend([X[i, 2], tip[2], None])
    fig.add_trace(
        go.Scatter3d(
            x=rx,
            y=ry,
            z=rz,
            mode="lines",
            line=dict(color="red", width=4),
            name="Reaction",
        )
    )
    fig.update_layout(
        scene=dict(
            xaxis_title="X",
            yaxis_title="Y",
            zaxis_title="Z",
            aspectmode="data",
        ),
        showlegend=True,
    )
    st.plotly_chart(fig, use_container_width=True)

    df = to_reaction_dataframe(model, P)
    st.dataframe(df)
    csv = df.to_csv(index=False).encode("utf-8")
    st.download_button("Download CSV", csv, "reactions.csv", "text/csv")

    magnitudes = pd.Series(np.linalg.norm(P[pinned], axis=1), name="|P|")
    st.bar_chart(magnitudes)

    js = to_structure_json(model, P)
    js_str = json.dumps(js)
    st.download_button(
        "Save JSON", js_str, "structure.json", "application/json"
    )
