import streamlit as st
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data_backend import DashboardData
from visualization import GraphViz
from peergraph.constants import DEFAULT_DATA_PATH, TOP_N

# pyvis chokes on huge ego networks, keep it readable
MAX_EGO_NODES = 400

st.set_page_config(
    page_title="peer graph explorer",
    layout="wide",
    initial_sidebar_state="expanded",
)

if 'data' not in st.session_state:
    st.session_state.data = None
if 'viz' not in st.session_state:
    st.session_state.viz = None

st.sidebar.title("peer graph explorer")
st.sidebar.markdown("---")

data_path = st.sidebar.text_input("Data file path", value=DEFAULT_DATA_PATH, help="path to the survey csv")
top_n = st.sidebar.number_input("Rows per ranking", min_value=1, max_value=100, value=TOP_N)

if st.sidebar.button("Load Data"):
    if os.path.exists(data_path):
        with st.spinner("building graph..."):
            data = DashboardData()
            data.load(data_path)
            st.session_state.data = data
            st.session_state.viz = GraphViz(data)
        st.sidebar.success(f"loaded {len(data.people)} people")
        if data.fallback_count:
            st.sidebar.warning(f"{data.fallback_count} numeric cells were unparsable and set to defaults")
    else:
        st.sidebar.error(f"file not found: {data_path}")

if st.session_state.data is None:
    st.title("peer graph explorer")
    st.info("load data from the sidebar. change the path if your csv is somewhere else")
    st.stop()

data = st.session_state.data
viz = st.session_state.viz

stats = data.get_full_graph_stats()
st.title("peer graph explorer")
cols = st.columns(4)
cols[0].metric("People", stats['num_nodes'])
cols[1].metric("Connections", stats['num_edges'])
cols[2].metric("Avg Degree", f"{stats['avg']:.1f}")
cols[3].metric("Isolated", stats['isolated'])

tab_degree, tab_d2, tab_behavior, tab_ego = st.tabs([
    "Degree Distribution", "Distance-2", "Behavior by Degree", "Ego Network",
])

with tab_degree:
    degree_df = data.degree_df()
    fig = px.bar(degree_df, x='degree', y='count', title="nodes per degree")
    st.plotly_chart(fig, use_container_width=True)

    st.subheader(f"Top {top_n} degrees by node count")
    top_degrees = degree_df.sort_values(['count', 'degree'], ascending=[False, True]).head(top_n)
    st.dataframe(top_degrees, use_container_width=True)

with tab_d2:
    d2_df = data.distance_2_df()
    st.subheader(f"Top {top_n} people with the most distance-2 neighbours")
    st.dataframe(d2_df.head(top_n), use_container_width=True)

    fig = px.histogram(d2_df, x='distance_2_neighbors', nbins=50,
                       title="distance-2 neighbour counts")
    st.plotly_chart(fig, use_container_width=True)

with tab_behavior:
    behavior_df = data.behavior_df()

    fig = go.Figure()
    fig.add_trace(go.Scatter(x=behavior_df['degree'], y=behavior_df['avg_smoking_prevalence'],
                             mode='lines+markers', name='avg smoking prevalence'))
    fig.add_trace(go.Scatter(x=behavior_df['degree'], y=behavior_df['avg_drug_experimentation'],
                             mode='lines+markers', name='avg drug experimentation'))
    fig.update_layout(title="behaviour by degree", xaxis_title="degree", yaxis_title="mean score")
    st.plotly_chart(fig, use_container_width=True)

    st.subheader(f"Top {top_n} degrees by avg smoking prevalence")
    ranked = behavior_df.sort_values(['avg_smoking_prevalence', 'degree'], ascending=[False, True])
    st.dataframe(ranked.head(top_n), use_container_width=True)

with tab_ego:
    col1, col2, col3 = st.columns([2, 1, 1])
    index = col1.number_input("Person index", min_value=0,
                              max_value=max(len(data.people) - 1, 0), value=0)
    hops = col2.slider("Hops", 1, 2, 1)
    color_by = col3.selectbox("Color by", ['age_group', 'socioeconomic_status'])

    node_info = data.get_node(int(index))
    if node_info:
        st.write(pd.DataFrame([node_info]))

    subgraph = data.get_ego_network(int(index), hops)
    if len(subgraph['nodes']) > MAX_EGO_NODES:
        st.warning(f"{len(subgraph['nodes'])} people in range, showing the first {MAX_EGO_NODES}")
        keep = set(subgraph['nodes'][:MAX_EGO_NODES]) | {int(index)}
        subgraph['nodes'] = [n for n in subgraph['nodes'] if n in keep]
        subgraph['edges'] = [(u, v) for u, v in subgraph['edges'] if u in keep and v in keep]

    st.info(f"Showing {len(subgraph['nodes'])} nodes, {len(subgraph['edges'])} edges")
    net = viz.create_graph(subgraph['nodes'], subgraph['edges'], color_by=color_by, center=int(index))
    net.save_graph("dashboard/temp_graph.html")
    with open("dashboard/temp_graph.html", "r") as f:
        st.components.v1.html(f.read(), height=700, scrolling=True)
