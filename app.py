"""
Page Replacement Visualizer — FIFO, LRU, LFU, OPTIMAL, CLOCK & RANDOM

This application lets a user enter a page reference string, pick a
replacement policy and a number of frames, and step through the resulting
trace:
    - Frame contents after every reference
    - Hit / fault timeline with evicted pages
    - Hit and fault statistics
    - Side-by-side comparison of all policies on the same input

The simulation itself lives in engine.py; this file only parses input,
calls the engine and renders its History.

Built with Streamlit for the web interface and Plotly for visualizations.
"""

# =============================================================================
# IMPORTS
# =============================================================================

import random

import streamlit as st                       # Web application framework

from charts import comparison_figure, frames_figure, stats_figure, timeline_figure
from config import Config
from engine import ReplacementPolicy, compare_policies, simulate
from utils import parse_frame_count, parse_reference_string, parse_seed


# =============================================================================
# STREAMLIT UI - Web Application Interface
# =============================================================================

# Configure the Streamlit page
st.set_page_config(page_title=Config.page_title, layout="wide")

# -----------------------------------------------------------------------------
# SIDEBAR NAVIGATION
# -----------------------------------------------------------------------------

page = st.sidebar.radio("Choose View", ["Simulator", "Concepts"])

st.title("Page Replacement Visualizer")

# =============================================================================
# CONCEPTS PAGE - Educational Content
# =============================================================================

if page == "Concepts":
    st.header("Page Replacement Concepts")
    st.markdown(
        """
        ## 📘 Key Concepts

        ### **1. Frames and Pages**
        - Physical memory holds a fixed number of *frames*.
        - Each frame holds at most one *page* at a time.

        ### **2. Page Fault**
        - Occurs when a referenced page is not in any frame.
        - If a frame is free the page is loaded there, otherwise a *victim* is evicted.

        ### **3. Replacement Policies**

        #### **FIFO (First In First Out)**
        - Evict the page that entered memory earliest.

        #### **LRU (Least Recently Used)**
        - Evict the page that hasn't been used for the longest time.

        #### **LFU (Least Frequently Used)**
        - Evict the page with the fewest references; ties go to the lowest frame.

        #### **OPTIMAL**
        - Evict the page whose next use is farthest in the future.
        - Needs the whole reference string, so it is a benchmark rather than a real policy.

        #### **CLOCK (Second Chance)**
        - FIFO order, but a page with its *reference bit* set gets the bit cleared
          and is moved to the back instead of being evicted.

        #### **RANDOM**
        - Evict any frame at random.

        ### **4. Belady's Anomaly**
        - With FIFO, adding frames can *increase* the number of faults.
          Try `1,2,3,4,1,2,5,1,2,3,4,5` with 3 and then 4 frames.
        """
    )
    st.stop()

# =============================================================================
# SIMULATOR PAGE - Main Interactive Interface
# =============================================================================

# -----------------------------------------------------------------------------
# SIDEBAR - Simulation Settings
# -----------------------------------------------------------------------------

st.sidebar.header("Simulation Settings")

policy = st.sidebar.selectbox(
    "Replacement Policy",
    options=[p.value for p in ReplacementPolicy],
    index=[p.value for p in ReplacementPolicy].index(Config.default_policy)
)

frames_input = st.sidebar.slider(
    "Number of frames",
    min_value=Config.min_frames,
    max_value=Config.max_frames,
    value=Config.default_frames
)

access_input = st.sidebar.text_area(
    "Page reference string (comma separated page numbers)",
    value=Config.default_reference_string
)

seed_input = st.sidebar.text_input(
    "Random seed (RANDOM policy, blank for a fresh one)",
    value="" if Config.random_seed is None else str(Config.random_seed)
)

run_clicked = st.sidebar.button("Run Simulation")

if st.sidebar.button("Reset Simulation"):
    st.session_state.pop("result", None)
    st.session_state.pop("seed", None)
    st.session_state.pop("comparison", None)
    st.sidebar.success("Simulation reset")

# -----------------------------------------------------------------------------
# RUN - Parse input and call the engine
# -----------------------------------------------------------------------------

if run_clicked:
    try:
        refs = parse_reference_string(access_input)
        frame_count = parse_frame_count(frames_input, max_frames=Config.max_frames)
        seed = parse_seed(seed_input)
    except ValueError as e:
        st.error(str(e))
        st.stop()

    if len(refs) == 0:
        st.warning("No pages to run")

    # Same seed for the main run and the comparison so RANDOM agrees in both
    st.session_state.result = simulate(policy, frame_count, refs, rng=random.Random(seed))
    st.session_state.seed = seed
    st.session_state.comparison = compare_policies(frame_count, refs, seed=seed)

if "result" not in st.session_state:
    st.info("Enter a reference string and click **Run Simulation**.")
    st.stop()

result = st.session_state.result

if len(result.history) == 0:
    st.write("Reference string empty — nothing to show")
    st.stop()

# =============================================================================
# MAIN CONTENT AREA - Two Column Layout
# =============================================================================

col1, col2 = st.columns([1, 2])

# -----------------------------------------------------------------------------
# LEFT COLUMN - Step Controls and Event Log
# -----------------------------------------------------------------------------

with col1:
    st.subheader("Controls")

    # Replay is just an index into the History
    if len(result.history) > 1:
        current = st.slider(
            "Step",
            min_value=1,
            max_value=len(result.history),
            value=len(result.history)
        ) - 1
    else:
        current = 0
    step = result.history[current]

    if step.fault:
        msg = f"Page {step.page} -> FAULT (frame={step.frame})"
        if step.replaced is not None:
            msg += f", evicted page {step.replaced}"
        st.error(msg)
    else:
        st.success(f"Page {step.page} -> HIT (frame={step.frame})")

    st.subheader("Event Log")
    for ev in result.events[-Config.event_log_limit:][::-1]:
        st.write(ev)

# -----------------------------------------------------------------------------
# RIGHT COLUMN - Visualizations
# -----------------------------------------------------------------------------

with col2:
    st.subheader(f"Frames after reference #{current + 1} ({result.policy.value})")
    st.plotly_chart(frames_figure(step), use_container_width=True)

    st.subheader("Timeline")
    st.plotly_chart(timeline_figure(result, current=current), use_container_width=True)

    # ----- Frame Table Display -----
    st.subheader("Frame Table (all steps)")
    rows = []
    for s in result.history:
        row = {"#": s.index + 1, "page": s.page}
        for i, p in enumerate(s.frames):
            row[f"F{i}"] = "" if p is None else p
        row["result"] = "FAULT" if s.fault else "HIT"
        row["replaced"] = "" if s.replaced is None else s.replaced
        rows.append(row)
    st.table(rows)

    # ----- Statistics Display -----
    st.subheader("Statistics")
    stats = result.get_stats()

    st.metric("Page References", stats['total_refs'])
    st.metric("Page Faults", stats['faults'])
    st.metric("Fault Rate", f"{stats['fault_rate'] * 100:.1f}%")
    st.plotly_chart(stats_figure(result), use_container_width=True)

    # ----- Policy Bookkeeping Display -----
    st.subheader("Replacement State (end of run)")
    st.caption(f"Random seed: {st.session_state.seed}")
    st.write(result.policy_state or "No bookkeeping for this policy")

    # ----- Comparison -----
    st.subheader("All Policies")
    st.plotly_chart(comparison_figure(st.session_state.comparison), use_container_width=True)

# =============================================================================
# FOOTER - Usage Tips and Examples
# =============================================================================

st.markdown("---")
st.markdown(
    "**Usage tips**:\n"
    "- Enter a comma separated page reference string and click **Run Simulation**.\n"
    "- Drag the step slider to replay the run one reference at a time.\n"
    "- Set a random seed to make RANDOM runs reproducible."
)

st.markdown("---")
st.markdown(
    "**Instructor examples**:\n"
    "1) FIFO, 3 frames: `7,0,1,2,0,3,0,4,2,3,0,3,2` (show replacements)\n"
    "2) LRU vs OPTIMAL on the same string to see how close LRU gets.\n"
    "3) CLOCK: `1,2,3,1,4,5` with 3 frames; page 1 gets a second chance."
)
