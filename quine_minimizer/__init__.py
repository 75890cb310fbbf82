"""Quine-McCluskey two-level minimization with structural Verilog synthesis."""

from .function import BooleanFunction, FunctionFormatError, parse_function, load_function
from .quine_mccluskey import Implicant, generate_prime_implicants, variable_name
from .cover import (
    DEFAULT_MAX_COVER_SIZE,
    build_coverage_chart,
    extract_essentials,
    find_minimal_covers,
    maxsat_minimum_cover,
)
from .solver import CoverStatus, MinimizationResult, minimize
from .export import synthesize, to_verilog, to_equations, to_report
from .verify import verify_result, verify_solution

__all__ = [
    "BooleanFunction",
    "FunctionFormatError",
    "parse_function",
    "load_function",
    "Implicant",
    "generate_prime_implicants",
    "variable_name",
    "DEFAULT_MAX_COVER_SIZE",
    "build_coverage_chart",
    "extract_essentials",
    "find_minimal_covers",
    "maxsat_minimum_cover",
    "CoverStatus",
    "MinimizationResult",
    "minimize",
    "synthesize",
    "to_verilog",
    "to_equations",
    "to_report",
    "verify_result",
    "verify_solution",
]
__version__ = "0.1.0"
