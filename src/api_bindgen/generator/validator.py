"""Checks on the generated module before it is written."""

import ast


def defined_functions(source: str) -> list[str]:
    """Names of the top-level functions defined in *source*, in order."""
    tree = ast.parse(source)
    return [node.name for node in tree.body if isinstance(node, ast.FunctionDef)]


def validate_structure(source: str, expected: list[str]) -> list[str]:
    """Check that *source* defines exactly the *expected* functions, once each, in order.

    Returns a list of problems; empty when the module is well formed.
    """
    found = defined_functions(source)
    problems = []
    missing = [name for name in expected if name not in found]
    if missing:
        problems.append(f"missing functions: {', '.join(missing)}")
    duplicates = sorted({name for name in found if found.count(name) > 1})
    if duplicates:
        problems.append(f"duplicate functions: {', '.join(duplicates)}")
    if not problems and found != expected:
        problems.append("functions are not in method-name order")
    return problems


def validate_module(filename: str, source: str, expected: list[str]) -> dict[str, str]:
    """Parse the generated module and check its function layout.

    Returns ``{filename: message}`` when something is wrong, else an empty
    dict. A module that does not parse is reported without structure checks.
    """
    try:
        ast.parse(source, filename=filename)
    except SyntaxError as e:
        return {filename: f"SyntaxError: {e.msg} (line {e.lineno})"}
    problems = validate_structure(source, expected)
    if problems:
        return {filename: "; ".join(problems)}
    return {}
