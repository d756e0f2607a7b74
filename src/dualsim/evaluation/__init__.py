"""
Evaluation helpers for inspecting candidate arrays.
"""

from dualsim.evaluation.metrics import candidate_sizes, refinement_summary

__all__ = [
    "candidate_sizes",
    "refinement_summary",
]
