import streamlit as st
import json
import logging
from dataclasses import dataclass
from typing import Dict, List

from task_graph_analyzer import (
    AnalysisResult,
    CycleDetector,
    InvalidTaskInput,
    TaskGraph,
    TaskGraphBuilder,
    TaskGraphError,
    TaskSpec,
    analyze_graph,
    parse_task_list,
    validate_task_list,
)
from task_graph_analyzer.config import Config
from task_graph_analyzer.cycle_detector import describe_cycle
from task_graph_analyzer.visualizer import STATUS_COLORS, TaskGraphVisualizer

# Configure logging
logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)

SAMPLE_TASKS = [
    {"task_id": "design", "name": "Design schema", "status": "completed", "dependencies": []},
    {"task_id": "api", "name": "Build API", "status": "in_progress", "dependencies": ["design"]},
    {"task_id": "ui", "name": "Build UI", "status": "pending", "dependencies": ["design"]},
    {"task_id": "release", "name": "Release", "status": "blocked", "dependencies": ["api", "ui"]},
]

# =============================================================================
# DATA MODELS
# =============================================================================

@dataclass
class TaskGraphSession:
    """Everything the dashboard needs to render one analyzed task list"""
    specs: List[TaskSpec]
    task_graph: TaskGraph
    result: AnalysisResult
    strongly_connected_components: List[List[str]]
    graph_stats: Dict


def run_analysis(specs: List[TaskSpec]) -> TaskGraphSession:
    """Validate and analyze a task list, raising TaskGraphError on bad input"""
    if len(specs) > Config.MAX_TASKS:
        raise TaskGraphError(f"Task list has {len(specs)} tasks; the limit is {Config.MAX_TASKS}")

    task_graph = TaskGraphBuilder().build_from_task_specs(specs)
    result = analyze_graph(task_graph)
    sccs = CycleDetector(task_graph).find_strongly_connected_components() if result.has_cycles else []

    return TaskGraphSession(
        specs=specs,
        task_graph=task_graph,
        result=result,
        strongly_connected_components=sccs,
        graph_stats=task_graph.get_graph_stats()
    )


def read_task_list(uploaded_file, text: str) -> str:
    """Prefer an uploaded file over the pasted text"""
    if uploaded_file is None:
        return text
    try:
        return uploaded_file.getvalue().decode('utf-8')
    except UnicodeDecodeError as e:
        raise InvalidTaskInput(f"Uploaded file is not UTF-8 text: {e}") from e


def format_task_list(content: str) -> str:
    """Re-indent a task list, raising InvalidTaskInput when it is not JSON"""
    try:
        return json.dumps(json.loads(content), indent=2)
    except (json.JSONDecodeError, RecursionError) as e:
        raise InvalidTaskInput("Cannot format invalid JSON") from e


def _format_text_area():
    try:
        st.session_state.task_list_text = format_task_list(st.session_state.task_list_text)
        st.session_state.pop('format_error', None)
    except InvalidTaskInput as e:
        st.session_state.format_error = str(e)

# =============================================================================
# STREAMLIT UI
# =============================================================================

def main():
    st.set_page_config(page_title="Task Graph Analyzer", layout="wide")

    st.title("Task Graph Analyzer")
    st.markdown("##### Define tasks and their dependencies, then check for cycles, execution order and levels.")

    col1, col2 = st.columns([1, 2])

    with col1:
        st.markdown("#### Task List (JSON)")
        if "task_list_text" not in st.session_state:
            st.session_state.task_list_text = json.dumps(SAMPLE_TASKS, indent=2)
        text = st.text_area("Tasks", height=360, key="task_list_text")
        uploaded_file = st.file_uploader("...or upload a task list", type=['json'], key="task_list_file")

        format_col, validate_col, analyze_col = st.columns(3)
        with format_col:
            st.button("Format", on_click=_format_text_area, use_container_width=True)
        with validate_col:
            validate_clicked = st.button("Validate", use_container_width=True)
        with analyze_col:
            analyze_clicked = st.button("Analyze", type="primary", use_container_width=True)

        if "format_error" in st.session_state:
            st.error(st.session_state.pop("format_error"))

        if validate_clicked:
            try:
                problems = validate_task_list(parse_task_list(read_task_list(uploaded_file, text)))
                if problems:
                    for problem in problems:
                        st.error(problem)
                else:
                    st.success("Task list is valid.")
            except TaskGraphError as e:
                st.error(str(e))

        if analyze_clicked:
            with st.spinner("Analyzing task graph..."):
                try:
                    st.session_state.task_graph_session = run_analysis(parse_task_list(read_task_list(uploaded_file, text)))
                except TaskGraphError as e:
                    logger.warning(f"Task list rejected: {e}")
                    st.session_state.pop('task_graph_session', None)
                    st.error(f"Invalid task list: {e}")

    with col2:
        if 'task_graph_session' not in st.session_state:
            st.info("👈 Enter a task list and click 'Analyze' to see the results.")
            return

        session = st.session_state.task_graph_session
        result = session.result

        st.markdown("#### Quick Stats")
        stat_col1, stat_col2, stat_col3, stat_col4 = st.columns(4)
        with stat_col1:
            st.metric("Tasks", session.graph_stats['total_tasks'])
        with stat_col2:
            st.metric("Dependencies", session.graph_stats['total_dependencies'])
        with stat_col3:
            st.metric("Cycles Found", len(result.cycles))
        with stat_col4:
            st.metric("Levels", max(result.levels.values()) + 1 if result.levels else 0)

        if result.has_cycles:
            st.error(f"**Cyclic**: {len(result.cycles)} circular dependencies found. No execution order exists.")
        else:
            st.success("**Acyclic**: every task can be scheduled.")

    st.markdown("---")
    statuses = {spec.task_id: spec.status for spec in session.specs}
    names = {spec.task_id: spec.name for spec in session.specs}
    visualizer = TaskGraphVisualizer(session.task_graph, result, statuses=statuses, names=names)

    tab1, tab2, tab3, tab4 = st.tabs(["Graph", "Execution Order", "Cycles", "Task Details"])

    with tab1:
        st.plotly_chart(visualizer.create_task_graph_plot(), use_container_width=True)
        st.caption(" · ".join(f"{status.value}: {color}" for status, color in STATUS_COLORS.items()))

        stats_col1, stats_col2, stats_col3 = st.columns(3)
        with stats_col1:
            st.metric("Graph Density", f"{session.graph_stats['density']:.3f}")
        with stats_col2:
            st.metric("Average Degree", f"{session.graph_stats['average_degree']:.1f}")
        with stats_col3:
            st.metric("Weakly Connected", "Yes" if session.graph_stats['is_connected'] else "No")

    with tab2:
        visualizer.display_order_table()

    with tab3:
        visualizer.display_cycle_details_table()
        if session.strongly_connected_components:
            st.markdown("#### Strongly Connected Components")
            for component in session.strongly_connected_components:
                st.write(f"- {', '.join(component)}")

    with tab4:
        if not session.task_graph.task_ids:
            st.info("No tasks defined.")
        else:
            task_id = st.selectbox("Task", session.task_graph.task_ids)
            details = session.task_graph.get_task_details(task_id)
            st.write(f"**{names[task_id]}** ({statuses[task_id].value})")
            if not result.has_cycles:
                st.write(f"**Level**: {result.levels[task_id]}")
            st.write(f"**Depends on**: {', '.join(details.prerequisites) or 'nothing'}")
            st.write(f"**Required by**: {', '.join(details.dependents) or 'nothing'}")
            cycles = [describe_cycle(cycle) for cycle in result.cycles if task_id in cycle]
            for cycle in cycles:
                st.warning(f"In cycle: {cycle}")


if __name__ == "__main__":
    main()
