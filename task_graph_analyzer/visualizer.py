"""
Task Graph Visualizer
Creates layered plotly figures and streamlit tables from an analysis result
"""

import plotly.graph_objects as go
import networkx as nx
from typing import Dict, List, Optional, Set, Tuple
import streamlit as st
import pandas as pd
import logging

from .config import Config
from .cycle_detector import describe_cycle
from .graph_builder import TaskGraph
from .models import AnalysisResult, TaskStatus

logger = logging.getLogger(__name__)

STATUS_COLORS = {
    TaskStatus.PENDING: '#f59e0b',
    TaskStatus.IN_PROGRESS: '#3b82f6',
    TaskStatus.COMPLETED: '#10b981',
    TaskStatus.BLOCKED: '#ef4444',
}


class TaskGraphVisualizer:
    """Creates interactive visualizations for task graph analysis"""

    def __init__(self, task_graph: TaskGraph, result: AnalysisResult,
                 statuses: Optional[Dict[str, TaskStatus]] = None,
                 names: Optional[Dict[str, str]] = None):
        self.task_graph = task_graph
        self.result = result
        self.statuses = statuses or {}
        self.names = names or {}

    def compute_layout(self) -> Dict[str, Tuple[float, float]]:
        """
        Place tasks in tiers: one row per level, centred horizontally,
        in declared order within a row. Cyclic graphs have no levels and
        fall back to a circular layout.
        """
        if not self.task_graph.task_ids:
            return {}

        if self.result.has_cycles:
            pos = nx.circular_layout(self.task_graph.to_networkx(), scale=Config.NODE_SPACING)
            return {node: (float(x), float(y)) for node, (x, y) in pos.items()}

        tiers: Dict[int, List[str]] = {}
        for task_id in self.task_graph.task_ids:
            tiers.setdefault(self.result.levels.get(task_id, 0), []).append(task_id)

        pos = {}
        for level, members in tiers.items():
            offset = (len(members) - 1) * Config.NODE_SPACING / 2
            for i, task_id in enumerate(members):
                pos[task_id] = (i * Config.NODE_SPACING - offset, -level * Config.LEVEL_SPACING)
        return pos

    def create_task_graph_plot(self) -> go.Figure:
        """Create an interactive layered task graph"""
        if not self.task_graph.task_ids:
            return self._create_empty_plot("No tasks to visualize")

        pos = self.compute_layout()
        edge_traces = self._create_edge_traces(pos)
        node_trace = self._create_node_trace(pos)

        return go.Figure(data=edge_traces + [node_trace], layout=self._get_plot_layout())

    def _cycle_edges(self) -> Set[Tuple[str, str]]:
        edges = set()
        for cycle in self.result.cycles:
            for current, next_node in zip(cycle, cycle[1:]):
                edges.add((current, next_node))
        return edges

    def _create_node_trace(self, pos: Dict[str, Tuple[float, float]]) -> go.Scatter:
        cycle_nodes = {task_id for cycle in self.result.cycles for task_id in cycle}

        node_x, node_y, labels, hover, colors = [], [], [], [], []
        for task_id in self.task_graph.task_ids:
            x, y = pos[task_id]
            node_x.append(x)
            node_y.append(y)
            labels.append(task_id)

            status = self.statuses.get(task_id, TaskStatus.PENDING)
            colors.append(STATUS_COLORS[status])

            text = f"<b>{self.names.get(task_id, task_id)}</b><br>"
            text += f"ID: {task_id}<br>"
            text += f"Status: {status.value}<br>"
            if not self.result.has_cycles:
                text += f"Level: {self.result.levels[task_id]}<br>"
            text += f"Prerequisites: {len(self.task_graph.prerequisites[task_id])}<br>"
            text += f"Dependents: {len(self.task_graph.dependents[task_id])}"
            if task_id in cycle_nodes:
                text += "<br><b>Part of cycle</b>"
            hover.append(text)

        return go.Scatter(
            x=node_x, y=node_y,
            mode='markers+text',
            text=labels,
            textposition="top center",
            textfont=dict(size=10),
            hovertemplate='%{hovertext}<extra></extra>',
            hovertext=hover,
            marker=dict(
                size=22,
                color=colors,
                line=dict(width=[3 if task_id in cycle_nodes else 1 for task_id in labels],
                          color=['#FF4444' if task_id in cycle_nodes else 'white' for task_id in labels]),
            ),
            name="Tasks"
        )

    def _create_edge_traces(self, pos: Dict[str, Tuple[float, float]]) -> List[go.Scatter]:
        """Edges run from prerequisite to dependent; cycle edges get their own trace"""
        cycle_edges = self._cycle_edges()

        regular_x, regular_y = [], []
        cycle_x, cycle_y = [], []
        for dependent, prerequisite in self.task_graph.edges:
            x0, y0 = pos[prerequisite]
            x1, y1 = pos[dependent]
            if (prerequisite, dependent) in cycle_edges:
                cycle_x.extend([x0, x1, None])
                cycle_y.extend([y0, y1, None])
            else:
                regular_x.extend([x0, x1, None])
                regular_y.extend([y0, y1, None])

        traces = []
        if regular_x:
            traces.append(go.Scatter(
                x=regular_x, y=regular_y,
                line=dict(width=1, color='#d1d5db'),
                hoverinfo='none',
                mode='lines',
                name="Dependencies"
            ))
        if cycle_x:
            traces.append(go.Scatter(
                x=cycle_x, y=cycle_y,
                line=dict(width=3, color='#FF4444'),
                hoverinfo='none',
                mode='lines',
                name="Cycle Dependencies"
            ))
        return traces

    def _get_plot_layout(self) -> dict:
        title = "Task Graph (cyclic)" if self.result.has_cycles else "Task Graph by Level"
        return dict(
            title=dict(text=title, font=dict(size=16)),
            showlegend=True,
            hovermode='closest',
            margin=dict(b=20, l=5, r=5, t=40),
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            plot_bgcolor='white'
        )

    def _create_empty_plot(self, message: str) -> go.Figure:
        fig = go.Figure()
        fig.add_annotation(
            text=message,
            xref="paper", yref="paper",
            x=0.5, y=0.5,
            showarrow=False,
            font=dict(size=16, color="gray")
        )
        fig.update_layout(
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            plot_bgcolor='white'
        )
        return fig

    def cycles_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{'Cycle ID': i, 'Cycle Path': describe_cycle(cycle), 'Length': len(cycle) - 1}
             for i, cycle in enumerate(self.result.cycles)],
            columns=['Cycle ID', 'Cycle Path', 'Length']
        )

    def order_dataframe(self) -> pd.DataFrame:
        """Topological position and level of each task, in execution order"""
        rows = []
        for position, task_id in enumerate(self.result.topological_order or []):
            rows.append({
                'Position': position,
                'Task ID': task_id,
                'Name': self.names.get(task_id, task_id),
                'Status': self.statuses.get(task_id, TaskStatus.PENDING).value,
                'Level': self.result.levels[task_id],
            })
        return pd.DataFrame(rows, columns=['Position', 'Task ID', 'Name', 'Status', 'Level'])

    def display_cycle_details_table(self):
        if not self.result.has_cycles:
            st.info("No cycles detected in the task graph.")
            return
        st.dataframe(self.cycles_dataframe(), use_container_width=True)

    def display_order_table(self):
        if self.result.topological_order is None:
            st.warning("Execution order is undefined while the graph contains cycles.")
            return
        st.dataframe(self.order_dataframe(), use_container_width=True)
