"""
Task Graph Analyzer
Cycle detection, execution ordering and level assignment for task dependency graphs
"""

from .analyzer import analyze, analyze_graph, analyze_many, analyze_task_specs
from .cycle_detector import CycleDetector
from .exceptions import DuplicateTaskID, InvalidTaskInput, TaskGraphError, UnknownTaskReference
from .graph_builder import TaskGraph, TaskGraphBuilder, parse_task_list, validate_task_list
from .level_assigner import LevelAssigner
from .models import AnalysisResult, TaskDetails, TaskSpec, TaskStatus
from .topological_orderer import TopologicalOrderer

__all__ = [
    'analyze', 'analyze_graph', 'analyze_many', 'analyze_task_specs',
    'TaskGraph', 'TaskGraphBuilder', 'CycleDetector', 'TopologicalOrderer', 'LevelAssigner',
    'AnalysisResult', 'TaskDetails', 'TaskSpec', 'TaskStatus',
    'TaskGraphError', 'DuplicateTaskID', 'UnknownTaskReference', 'InvalidTaskInput',
    'parse_task_list', 'validate_task_list',
]
