"""Benchmark configuration and unit profile loading.

Handles:
- Display time units (conversion ratios from native nanoseconds).
- Loading benchmark profiles from YAML files.
- Parsing inline unit definitions from CLI arguments.
- Merging CLI options with profile defaults.
- Validating the final configuration before execution.
- Building BenchUnits from unit definitions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from microbench.units import BenchUnit, build_action, import_action

log = logging.getLogger("microbench")


# ---------------------------------------------------------------------------
# Time units
# ---------------------------------------------------------------------------

# Native clock ticks (nanoseconds) per display unit.
TIME_UNITS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
}

_TIME_UNIT_ALIASES: dict[str, str] = {
    "nanoseconds": "ns",
    "microseconds": "us",
    "µs": "us",
    "milliseconds": "ms",
    "seconds": "s",
    "sec": "s",
}


def resolve_time_unit(name: str) -> int:
    """Return the ratio for a time unit name such as ``"us"`` or ``"milliseconds"``.

    Raises:
        ValueError: If the name is not a recognized unit.
    """
    key = name.strip().lower()
    key = _TIME_UNIT_ALIASES.get(key, key)
    if key not in TIME_UNITS:
        raise ValueError(
            f"Unknown time unit '{name}'. Valid units: {', '.join(TIME_UNITS)}"
        )
    return TIME_UNITS[key]


# ---------------------------------------------------------------------------
# UnitDef / BenchConfig
# ---------------------------------------------------------------------------


@dataclass
class UnitDef:
    """Definition of one benchmark unit before it is compiled."""

    name: str
    stmt: str = ""  # Python statement(s) to time
    setup: str = ""  # Run once before timing; names become globals of stmt
    call: str = ""  # Alternative to stmt: "module:attribute" callable


@dataclass
class BenchConfig:
    """Resolved configuration for a benchmark run."""

    name: str = ""
    description: str = ""

    units: list[UnitDef] = field(default_factory=list)

    count: int = 1000  # Repetitions per unit

    # Display
    unit: str = "us"
    precision: int = 2
    width: int = 10

    # File export
    output_base: Path | None = None
    delimiter: str = "\t"
    file_precision: int = 5

    compare: bool = True

    @property
    def unit_ratio(self) -> int:
        """Nanoseconds per display unit."""
        return resolve_time_unit(self.unit)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationError:
    """A single configuration validation error."""

    field: str
    message: str
    severity: str = "error"  # "error" or "warning"


def validate_config(config: BenchConfig) -> list[ValidationError]:
    """Validate a benchmark configuration.

    Returns a list of validation errors.  Empty list means valid.
    """
    errors: list[ValidationError] = []

    if not config.units:
        errors.append(
            ValidationError(
                field="units",
                message=(
                    "No benchmark units defined. "
                    "Use --profile or --unit-def to define at least one."
                ),
            )
        )

    seen: set[str] = set()
    for i, unit in enumerate(config.units):
        if not unit.name or not unit.name.strip():
            errors.append(
                ValidationError(
                    field=f"units[{i}].name",
                    message="Unit names must be non-empty.",
                )
            )
        elif unit.name in seen:
            errors.append(
                ValidationError(
                    field=f"units[{i}].name",
                    message=f"Unit name '{unit.name}' is used more than once.",
                    severity="warning",
                )
            )
        seen.add(unit.name)

        if bool(unit.stmt.strip()) == bool(unit.call.strip()):
            errors.append(
                ValidationError(
                    field=f"units[{i}]",
                    message=(
                        f"Unit '{unit.name}' must define exactly one of 'stmt' or 'call'."
                    ),
                )
            )

    if config.count < 0:
        errors.append(
            ValidationError(
                field="count",
                message=f"Repetition count cannot be negative (got {config.count}).",
            )
        )
    elif config.count == 0:
        errors.append(
            ValidationError(
                field="count",
                message="Repetition count is 0; results will be empty.",
                severity="warning",
            )
        )

    try:
        resolve_time_unit(config.unit)
    except ValueError as exc:
        errors.append(ValidationError(field="unit", message=str(exc)))

    if config.precision < 0:
        errors.append(
            ValidationError(
                field="precision",
                message=f"Precision cannot be negative (got {config.precision}).",
            )
        )

    if config.file_precision < 0:
        errors.append(
            ValidationError(
                field="file_precision",
                message=f"File precision cannot be negative (got {config.file_precision}).",
            )
        )

    if config.width < 1:
        errors.append(
            ValidationError(
                field="width",
                message=f"Column width must be at least 1 (got {config.width}).",
            )
        )

    if len(config.delimiter) != 1:
        errors.append(
            ValidationError(
                field="delimiter",
                message=f"Delimiter must be a single character (got {config.delimiter!r}).",
            )
        )

    return errors


# ---------------------------------------------------------------------------
# YAML profile loading
# ---------------------------------------------------------------------------


def load_profile(profile_path: Path) -> dict[str, Any]:
    """Load a benchmark profile from a YAML file.

    Profile format::

        name: "string to float"
        description: "optional description"
        count: 1000000
        unit: us

        setup: |
          val = "3.141592653589793238462643383279502884"

        units:
          float:
            stmt: float(val)
          decimal:
            setup: |
              from decimal import Decimal
              val = "3.141592653589793238462643383279502884"
            stmt: Decimal(val)
          loads:
            call: "mymodule:parse_pi"

    A unit given as a plain string is shorthand for ``{stmt: ...}``.
    A top-level ``setup`` applies to every unit without its own.

    Returns:
        The parsed YAML as a dict.
    """
    import yaml

    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_path}")

    text = profile_path.read_text()
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in profile {profile_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Profile must be a YAML mapping, got {type(data).__name__}")

    return data


def _as_int(key: str, value: Any) -> int:
    """Coerce a profile value to an int.

    YAML reads ``1e6`` as a string and ``10.0`` as a float; both are
    accepted when they denote a whole number.
    """
    if isinstance(value, bool):
        raise ValueError(f"Profile '{key}' must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    number = value
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            raise ValueError(f"Profile '{key}' must be an integer, got {value!r}") from None
    if isinstance(number, float) and number.is_integer():
        return int(number)
    raise ValueError(f"Profile '{key}' must be an integer, got {value!r}")


def config_from_profile(
    profile_data: dict[str, Any],
    *,
    cli_overrides: dict[str, Any] | None = None,
) -> BenchConfig:
    """Build a BenchConfig from a parsed YAML profile.

    CLI overrides take precedence over profile values for:
    name, count, unit, precision, width, output_base, delimiter,
    compare.

    Args:
        profile_data: Parsed YAML profile dict.
        cli_overrides: Dict of CLI option values that override
            profile defaults.  Keys match BenchConfig field names;
            None means "not given".

    Returns:
        BenchConfig with units and settings populated.
    """
    cli = cli_overrides or {}

    def _pick(key: str, default: Any) -> Any:
        if cli.get(key) is not None:
            return cli[key]
        return profile_data.get(key, default)

    output_base = _pick("output_base", None)
    config = BenchConfig(
        name=str(_pick("name", "") or ""),
        description=str(profile_data.get("description", "") or ""),
        count=_as_int("count", _pick("count", 1000)),
        unit=str(_pick("unit", "us")),
        precision=_as_int("precision", _pick("precision", 2)),
        width=_as_int("width", _pick("width", 10)),
        output_base=Path(output_base) if output_base else None,
        delimiter=str(_pick("delimiter", "\t")),
        file_precision=_as_int("file_precision", _pick("file_precision", 5)),
        compare=_pick("compare", True),
    )

    default_setup = profile_data.get("setup", "") or ""
    units_data = profile_data.get("units", {})
    if not isinstance(units_data, dict):
        raise ValueError("Profile 'units' must be a mapping of unit_name -> definition")

    for name, unit_data in units_data.items():
        if isinstance(unit_data, str):
            unit_data = {"stmt": unit_data}
        if not isinstance(unit_data, dict):
            raise ValueError(
                f"Unit '{name}' must be a string or mapping, got {type(unit_data).__name__}"
            )
        config.units.append(
            UnitDef(
                name=str(name),
                stmt=str(unit_data.get("stmt", "") or ""),
                setup=str(unit_data.get("setup", default_setup) or ""),
                call=str(unit_data.get("call", "") or ""),
            )
        )

    return config


# ---------------------------------------------------------------------------
# Inline unit parsing
# ---------------------------------------------------------------------------


def parse_inline_unit(spec: str, *, setup: str = "") -> UnitDef:
    """Parse an inline unit specification from CLI.

    Format: ``"name=statement"`` or ``"name=@module:attribute"`` for an
    importable callable.

    Examples::

        "float=float(val)"
        "sorted=sorted(data)"
        "dumps=@mybench:dump_payload"

    Returns:
        UnitDef with parsed values.
    """
    if "=" not in spec:
        raise ValueError(f"Invalid unit spec: '{spec}'. Expected format: 'name=statement'")

    name, stmt = spec.split("=", 1)
    name = name.strip()
    stmt = stmt.strip()
    if not name:
        raise ValueError("Unit name cannot be empty.")
    if not stmt:
        raise ValueError(f"Unit '{name}' has an empty statement.")

    if stmt.startswith("@"):
        return UnitDef(name=name, call=stmt[1:].strip())
    return UnitDef(name=name, stmt=stmt, setup=setup)


# ---------------------------------------------------------------------------
# Unit construction
# ---------------------------------------------------------------------------


def units_from_config(config: BenchConfig) -> list[BenchUnit]:
    """Compile every UnitDef in *config* into a BenchUnit.

    Raises:
        ValueError: If a statement does not compile or a callable
            reference cannot be resolved.
    """
    units: list[BenchUnit] = []
    for unit_def in config.units:
        if unit_def.call:
            action = import_action(unit_def.call)
            log.debug("Unit %s calls %s", unit_def.name, unit_def.call)
        else:
            action = build_action(unit_def.stmt, unit_def.setup, name=unit_def.name)
            log.debug("Unit %s compiled from statement", unit_def.name)
        units.append(BenchUnit(name=unit_def.name, action=action))
    return units
