"""
Configuration for the task graph analyzer
Values are read from the environment (a local .env file is honoured)
"""

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Configuration for logging, input limits and layout spacing"""
    LOG_LEVEL = os.getenv("TASK_GRAPH_LOG_LEVEL", "INFO").upper()

    # Input limits
    MAX_TASKS = int(os.getenv("TASK_GRAPH_MAX_TASKS", "10000"))

    # Batch analysis; None lets the executor pick
    MAX_WORKERS = int(os.getenv("TASK_GRAPH_MAX_WORKERS", "0")) or None

    # Layered layout
    LEVEL_SPACING = float(os.getenv("TASK_GRAPH_LEVEL_SPACING", "150"))
    NODE_SPACING = float(os.getenv("TASK_GRAPH_NODE_SPACING", "200"))
