"""
Baseline Gap Agent Package

A simple heuristic agent that steers around the next obstacle using the
next_pipe_* observations. Serves as a benchmark and example.
"""

from .agent import BardAgent, create_agent

__all__ = ["BardAgent", "create_agent"]
