"""
Workflow layer - Conversion jobs and run planning.

Plans are DATA STRUCTURES that define what to do for each file.
They do NOT execute anything - that's the runner's job.
"""

from .jobs import ConversionJob, JobAction, ResolvedPath
from .plan import ConversionPlan, PlanMode, create_conversion_plan, output_path_for, resolve_paths

__all__ = [
    "ConversionJob",
    "JobAction",
    "ResolvedPath",
    "ConversionPlan",
    "PlanMode",
    "create_conversion_plan",
    "output_path_for",
    "resolve_paths",
]
