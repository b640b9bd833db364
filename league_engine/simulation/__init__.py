"""
Match outcome model: logistic expected goals, performance variance and Poisson
goal sampling over an explicit, seeded random source.
"""
from .rng import SeededRNG
from .xg import XGCalibration, DEFAULT_CALIBRATION, calculate_base_xg, calculate_form_score, sigmoid
from .performance import (
    PerformanceLevel,
    PERFORMANCE_LEVELS,
    generate_performance_modifier,
    sample_performance_level,
)
from .poisson import poisson_sample
from .match_simulator import MatchSimulator, SimulationDetail

__all__ = [
    "SeededRNG",
    "XGCalibration",
    "DEFAULT_CALIBRATION",
    "calculate_base_xg",
    "calculate_form_score",
    "sigmoid",
    "PerformanceLevel",
    "PERFORMANCE_LEVELS",
    "generate_performance_modifier",
    "sample_performance_level",
    "poisson_sample",
    "MatchSimulator",
    "SimulationDetail",
]
