# app.py
import math
import streamlit as st
import plotly.graph_objects as go

from graph import Graph
from viewmodel import GraphViewModel
from isomorphism import IsomorphismChecker

ISO_TIMEOUT_S = 30.0

st.set_page_config(page_title="Graf (Web)", layout="wide")

# Session state
if 'graph' not in st.session_state:
    g = Graph(["A", "B", "C"], [(0, 1), (1, 2)])
    st.session_state.graph = g
    st.session_state.gvm = GraphViewModel(g)
    st.session_state.snapshot = None
    st.session_state.checker = IsomorphismChecker()

g: Graph = st.session_state.graph
gvm: GraphViewModel = st.session_state.gvm

def vertex_options():
    # Show "index: label" in UI but store zero-based indices
    return {f"{i}: {label}": i for i, label in enumerate(g.vertices)}

# UI
col_btns, col_plot = st.columns([1, 4], gap="large")

with col_btns:
    st.markdown("### Vertices")
    new_label = st.text_input("Label", key="new_label")
    if st.button("Add Vertex"):
        g.addVertex(new_label)

    opts = vertex_options()
    if opts:
        picked = st.selectbox("Vertex", list(opts), key="vertex_pick")
        rename = st.text_input("Rename to", key="rename")
        c1, c2 = st.columns(2)
        if c1.button("Rename"):
            g.editVertex(opts[picked], rename)
            st.rerun()
        if c2.button("Remove"):
            g.removeVertex(opts[picked])
            st.rerun()
    st.divider()

    st.markdown("### Edges")
    opts = vertex_options()
    if opts:
        a_label = st.selectbox("From", list(opts), key="edge_a")
        b_label = st.selectbox("To", list(opts), key="edge_b")
        if st.button("Add Edge"):
            if not g.addEdge((opts[a_label], opts[b_label])):
                st.warning("Those vertices are already adjacent.")
    if g.edges:
        edge_opts = {f"{i}: {a} - {b}": i for i, (a, b) in enumerate(g.edges)}
        e_label = st.selectbox("Edge", list(edge_opts), key="edge_pick")
        if st.button("Remove Edge"):
            g.removeEdge(edge_opts[e_label])
            st.rerun()
    st.divider()

    if st.button("Re-layout (Spiral)"):
        gvm.position()

    st.markdown("### Isomorphism")
    if st.button("Snapshot Graph"):
        st.session_state.snapshot = g.clone()
    snap = st.session_state.snapshot
    if snap is not None:
        st.caption(f"Snapshot: {snap.vertexCount()} vertices, {snap.edgeCount()} edges")
        if st.button("Compare with Snapshot"):
            with st.spinner("Checking..."):
                same = st.session_state.checker.submit(g, snap).result(timeout=ISO_TIMEOUT_S)
            if same:
                st.success("Isomorphic to the snapshot.")
            else:
                st.error("Not isomorphic to the snapshot.")
    st.divider()

    # Info
    st.markdown(
        f"Vertices: {g.vertexCount()}  \n"
        f"Edges: {g.edgeCount()}  \n"
        f"Connected: {'yes' if g.isConnected() else 'no'}"
    )

# --------- Plotting helpers (Plotly) ----------
def ellipse_shape(x, y, w, h):
    return dict(
        type="circle", xref="x", yref="y",
        x0=x - w / 2, y0=y - h / 2, x1=x + w / 2, y1=y + h / 2,
        line=dict(color="black", width=2), fillcolor="white", layer="above",
    )

def loop_points(x, y, w, h, steps=24):
    # Self-loop: circle of radius h/2 hanging off the lower-right of the vertex
    cx, cy, r = x + w / 2, y + h / 2, h / 2
    xs = [cx + r * math.cos(2 * math.pi * i / steps) for i in range(steps + 1)]
    ys = [cy + r * math.sin(2 * math.pi * i / steps) for i in range(steps + 1)]
    return xs, ys

# --------- Build Plotly figure ----------
with col_plot:
    fig = go.Figure()

    # Draw edges
    for e in gvm.edges:
        a = gvm.vertices[e.getStartIndex()]
        b = gvm.vertices[e.getEndIndex()]
        if e.isLoop():
            xs, ys = loop_points(*a.pos_tuple(), a.getWidth(), a.getHeight())
        else:
            (x1, y1), (x2, y2) = a.pos_tuple(), b.pos_tuple()
            xs, ys = [x1, x2], [y1, y2]
        fig.add_trace(go.Scatter(
            x=xs, y=ys,
            mode='lines',
            line=dict(color='rgba(60,60,60,1)', width=1),
            hoverinfo='skip',
            showlegend=False
        ))

    # Draw vertices
    shapes = []
    vx = []; vy = []; txt = []
    for v in gvm.vertices:
        x, y = v.pos_tuple()
        shapes.append(ellipse_shape(x, y, v.getWidth(), v.getHeight()))
        vx.append(x); vy.append(y); txt.append(v.getText())

    fig.add_trace(go.Scatter(
        x=vx, y=vy, mode='text',
        text=txt, textposition='middle center',
        hoverinfo='skip',
        showlegend=False
    ))

    # Graph space has y pointing down, like the canvas
    fig.update_yaxes(scaleanchor="x", scaleratio=1, autorange="reversed")
    fig.update_layout(
        shapes=shapes,
        margin=dict(l=20, r=20, t=10, b=10),
        xaxis=dict(visible=False), yaxis=dict(visible=False),
        dragmode='pan', height=700
    )
    st.plotly_chart(fig, use_container_width=True)
