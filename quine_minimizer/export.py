"""
Export minimized functions to structural Verilog and plain-text reports.
"""

from .function import BooleanFunction
from .quine_mccluskey import Implicant, variable_name
from .solver import MinimizationResult

OUTPUT_NAME = "F"


def _output_port(input_names: list[str]) -> str:
    """Output port name; renamed when an input is already called F."""
    if OUTPUT_NAME in input_names:
        return f"{OUTPUT_NAME}_out"
    return OUTPUT_NAME


def _module_header(module_name: str, input_names: list[str], output: str) -> list[str]:
    return [
        f"module {module_name} (",
        f"    input {', '.join(input_names)},",
        f"    output {output}",
        ");",
        "",
    ]


def _complemented_variables(cover: list[Implicant], variable_count: int) -> list[int]:
    """Variable indices any term uses complemented, ascending."""
    needed = set()
    for impl in cover:
        for var_idx, positive in impl.literals(variable_count):
            if not positive:
                needed.add(var_idx)
    return sorted(needed)


def synthesize(
    cover: list[Implicant],
    variable_count: int,
    module_name: str = "boolean_function",
) -> str:
    """
    Synthesize a sum-of-products cover into a structural Verilog module.

    Uses primitive not/and/or gates. Gate instances are numbered in
    traversal order (inverters, product terms, final OR), so the same
    cover always produces identical text.

    Args:
        cover: Product terms of the sum-of-products, in output order
        variable_count: Number of input ports
        module_name: Verilog module identifier, used verbatim

    Returns:
        Verilog source code as string
    """
    input_names = [variable_name(i) for i in range(variable_count)]
    output = _output_port(input_names)

    lines = _module_header(module_name, input_names, output)

    if not cover:
        lines.append("    // Function is always 0 (no minterms)")
        lines.append(f"    assign {output} = 1'b0;")
        lines.append("")
        lines.append("endmodule")
        return "\n".join(lines) + "\n"

    term_literals = []
    for impl in cover:
        term_literals.append([
            input_names[var_idx] if positive else f"{input_names[var_idx]}_n"
            for var_idx, positive in impl.literals(variable_count)
        ])

    if len(cover) == 1 and not term_literals[0]:
        lines.append("    // Function is always 1 (tautology)")
        lines.append(f"    assign {output} = 1'b1;")
        lines.append("")
        lines.append("endmodule")
        return "\n".join(lines) + "\n"

    inverted = _complemented_variables(cover, variable_count)
    single_term = len(cover) == 1

    # Wire declarations
    lines.append("    // Inverted input signals")
    for var_idx in inverted:
        lines.append(f"    wire {input_names[var_idx]}_n;")
    if not inverted:
        lines.append("    // (no inverted inputs needed)")
    lines.append("")

    lines.append("    // Product term outputs")
    if single_term:
        lines.append("    // (single product term - direct connection to output)")
    else:
        for i in range(len(cover)):
            lines.append(f"    wire p{i};")
    lines.append("")

    gate_num = 0

    lines.append("    // NOT gates for complemented inputs")
    for var_idx in inverted:
        var = input_names[var_idx]
        lines.append(f"    not g{gate_num} ({var}_n, {var});")
        gate_num += 1
    if not inverted:
        lines.append("    // (no NOT gates needed)")
    lines.append("")

    lines.append("    // AND gates for product terms")
    for i, literals in enumerate(term_literals):
        target = output if single_term else f"p{i}"
        if not literals:
            lines.append(f"    // Product term {i}: constant 1 (tautology)")
            lines.append(f"    assign {target} = 1'b1;")
        elif len(literals) == 1:
            lines.append(f"    // Product term {i}: {literals[0]}")
            lines.append(f"    assign {target} = {literals[0]};")
        else:
            lines.append(f"    // Product term {i}: {' & '.join(literals)}")
            lines.append(f"    and g{gate_num} ({target}, {', '.join(literals)});")
            gate_num += 1
    lines.append("")

    if not single_term:
        wires = ", ".join(f"p{i}" for i in range(len(cover)))
        lines.append("    // OR gate for sum of products")
        lines.append(f"    or g{gate_num} ({output}, {wires});")
        lines.append("")

    lines.append("endmodule")
    return "\n".join(lines) + "\n"


def to_verilog(
    result: MinimizationResult,
    solution_index: int = 0,
    module_name: str = "boolean_function",
) -> str:
    """
    Export one minimal solution of a result to Verilog.

    Raises:
        ValueError: if the result has no solution at that index
    """
    cover = result.solution(solution_index)
    return synthesize(cover, result.variable_count, module_name)


def sop_to_str(cover: list[Implicant], variable_count: int) -> str:
    """Sum-of-products string such as A'B + C; the empty cover is "0"."""
    if not cover:
        return "0"
    return " + ".join(impl.as_boolean_expression(variable_count) for impl in cover)


def _term_list(terms) -> str:
    terms = sorted(terms)
    return ", ".join(str(t) for t in terms) if terms else "None"


def to_equations(result: MinimizationResult) -> str:
    """
    Export the minimal solutions as Boolean equations, one per line.

    A result without any solution yields an empty string.
    """
    n = result.variable_count
    lines = []

    if result.minimal_solutions:
        for cover in result.minimal_solutions:
            lines.append(f"F = {sop_to_str(cover, n)}")
    elif result.maxsat_solution is not None:
        lines.append(f"F = {sop_to_str(result.maxsat_solution, n)}")

    return "\n".join(lines)


def to_report(function: BooleanFunction, result: MinimizationResult) -> str:
    """
    Human-readable minimization report.

    Covers the input summary, prime and essential implicants, minterms left
    after the essentials, every minimal solution and summary statistics.
    """
    n = result.variable_count
    lines = []

    lines.append("Input Summary")
    lines.append("-" * 13)
    lines.append(f"Variables: {function.variable_count}")
    lines.append(f"Minterms:  {_term_list(function.minterms)}")
    lines.append(f"Don't-Cares: {_term_list(function.dont_cares)}")
    lines.append("")

    lines.append("Prime Implicants")
    lines.append("-" * 16)
    if not result.prime_implicants:
        lines.append("No prime implicants found.")
    else:
        lines.append(f"Total: {len(result.prime_implicants)}")
        lines.append("")
        lines.append(f"{'Binary':<15}{'Expression':<20}Covers")
        lines.append("-" * 60)
        for impl in result.prime_implicants:
            covers = ", ".join(str(m) for m in sorted(impl.covered))
            lines.append(
                f"{impl.as_binary_string(n):<15}"
                f"{impl.as_boolean_expression(n):<20}"
                f"{{{covers}}}"
            )
    lines.append("")

    lines.append("Essential Prime Implicants")
    lines.append("-" * 26)
    if not result.essential_implicants:
        lines.append("No essential prime implicants.")
    else:
        lines.append(f"Total: {len(result.essential_implicants)}")
        lines.append("")
        for impl in result.essential_implicants:
            lines.append(
                f"{impl.as_binary_string(n):<15}{impl.as_boolean_expression(n)}"
            )
    lines.append("")

    lines.append("Uncovered Minterms (after EPIs)")
    lines.append("-" * 31)
    if not result.uncovered_minterms:
        lines.append("All minterms covered by essential prime implicants.")
    else:
        lines.append(
            f"Minterms still needing coverage: {_term_list(result.uncovered_minterms)}"
        )
    lines.append("")

    lines.append("Minimal Boolean Expressions")
    lines.append("-" * 27)
    if result.minimal_solutions:
        lines.append(f"Found {len(result.minimal_solutions)} minimal solution(s):")
        lines.append("")
        for i, cover in enumerate(result.minimal_solutions, start=1):
            plural = "" if len(cover) == 1 else "s"
            lines.append(
                f"Solution {i}: F = {sop_to_str(cover, n)}  "
                f"(uses {len(cover)} term{plural})"
            )
    else:
        lines.append(
            f"No minimal solution found: search stopped at "
            f"{result.max_cover_size} non-essential terms."
        )
        if result.maxsat_solution is not None:
            lines.append(
                f"MaxSAT minimum cover: F = "
                f"{sop_to_str(result.maxsat_solution, n)}  "
                f"(uses {len(result.maxsat_solution)} terms)"
            )
    lines.append("")

    lines.append("Statistics")
    lines.append("-" * 10)
    lines.append(f"Prime Implicants: {len(result.prime_implicants)}")
    lines.append(f"Essential PIs: {len(result.essential_implicants)}")
    lines.append(f"Minimal Solutions: {len(result.minimal_solutions)}")
    lines.append(f"Search: {result.status.value}")
    if result.num_terms is not None:
        lines.append(f"Terms in minimal form: {result.num_terms}")

    return "\n".join(lines)
