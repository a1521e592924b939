"""
Course roadmap planner: AI-selected study plans rendered as prerequisite
flowcharts over a fixed syllabus catalog.
"""

__version__ = "1.0.0"
