"""Benchmark units: a name paired with a zero-argument action.

Actions are ordinary callables.  Two builders turn configuration into
callables: :func:`build_action` compiles a statement (with optional
setup code) the way :mod:`timeit` templates its inner loop, and
:func:`import_action` resolves a ``module:attribute`` reference.
"""

from __future__ import annotations

import importlib
import textwrap
from dataclasses import dataclass
from typing import Any, Callable

_ACTION_TEMPLATE = """\
def _microbench_action():
{body}
"""


@dataclass(frozen=True)
class BenchUnit:
    """A named block of code whose execution time is measured."""

    name: str
    action: Callable[[], Any]


def build_action(stmt: str, setup: str = "", *, name: str = "unit") -> Callable[[], Any]:
    """Compile *stmt* into a zero-argument function.

    *setup* runs once, immediately, and the names it binds become the
    globals of the compiled function, so ``stmt`` can reference them
    without paying for lookups of closure cells.

    Both snippets are executed with :func:`exec` and can do anything
    the current process can.  Only build actions from profiles and
    command lines you trust.

    Raises:
        ValueError: If *stmt* is empty or either snippet fails to compile.
    """
    if not stmt.strip():
        raise ValueError(f"Unit '{name}' has an empty statement.")

    namespace: dict[str, Any] = {}
    if setup.strip():
        try:
            setup_code = compile(textwrap.dedent(setup), f"<setup {name}>", "exec")
        except SyntaxError as exc:
            raise ValueError(f"Invalid setup code for unit '{name}': {exc}") from exc
        exec(setup_code, namespace)  # noqa: S102

    body = textwrap.indent(textwrap.dedent(stmt).strip(), "    ")
    source = _ACTION_TEMPLATE.format(body=body)
    try:
        code = compile(source, f"<unit {name}>", "exec")
    except SyntaxError as exc:
        raise ValueError(f"Invalid statement for unit '{name}': {exc}") from exc
    exec(code, namespace)  # noqa: S102
    return namespace["_microbench_action"]


def import_action(reference: str) -> Callable[[], Any]:
    """Resolve a ``package.module:attr.path`` reference to a callable.

    Raises:
        ValueError: If the reference is malformed, cannot be imported,
            or does not name a callable.
    """
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Invalid callable reference '{reference}'. Expected 'module:attribute'.")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValueError(f"Cannot import module '{module_name}': {exc}") from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ValueError(f"'{reference}' has no attribute '{part}'.") from exc

    if not callable(obj):
        raise ValueError(f"'{reference}' is not callable.")
    return obj
