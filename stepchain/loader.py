"""
Pipeline config loader with YAML parsing and JSON Schema validation
"""

import json
from collections.abc import Iterable
from pathlib import Path

import yaml
from jsonschema import ValidationError as JSONValidationError
from jsonschema import validate
from pydantic import ValidationError

from .models import ArgSource, MissingArgPolicy, PipelineConfig


class ConfigLoadError(Exception):
    """Raised when pipeline config loading or validation fails"""

    pass


def load_config(
    path: str | Path,
    schema_path: str | Path | None = None,
) -> PipelineConfig:
    """
    Load and validate a pipeline config YAML file

    Args:
        path: Path to the config file
        schema_path: Optional path to JSON schema (defaults to bundled schema)

    Returns:
        Validated PipelineConfig; an empty file gives the defaults

    Raises:
        ConfigLoadError: If loading or validation fails
    """
    path = Path(path)

    if not path.exists():
        raise ConfigLoadError(f"Config file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"YAML parsing failed: {e}") from e
    except OSError as e:
        raise ConfigLoadError(f"Failed to read file: {e}") from e

    if data is None:
        data = {}

    if schema_path is None:
        schema_path = Path(__file__).parent / "schema" / "pipeline.schema.json"

    try:
        with open(schema_path, encoding="utf-8") as f:
            schema = json.load(f)

        validate(instance=data, schema=schema)
    except JSONValidationError as e:
        path_str = ".".join(str(p) for p in e.absolute_path)
        raise ConfigLoadError(
            f"Schema validation failed at '{path_str}': {e.message}",
        ) from e
    except FileNotFoundError as e:
        raise ConfigLoadError(f"Schema file not found: {schema_path}") from e

    try:
        return PipelineConfig(**data)
    except ValidationError as e:
        raise ConfigLoadError(f"Pydantic parsing failed: {e}") from e


def lint_config(
    path: str | Path,
    step_names: Iterable[str] | None = None,
) -> list[str]:
    """
    Lint a pipeline config and return warnings (not errors)

    Args:
        path: Path to the config file
        step_names: Registered step names to check references against

    Returns:
        List of warning messages
    """
    warnings = []

    try:
        config = load_config(path)
    except ConfigLoadError as e:
        return [f"Error loading config: {e}"]

    known = set(step_names) if step_names is not None else None

    seen = set()
    for name in config.step_order:
        if name in seen:
            warnings.append(f"Step '{name}' listed more than once (step_order)")
        seen.add(name)
        if known is not None and name not in known:
            warnings.append(f"Unknown step '{name}' will be skipped (step_order)")

    if known is not None:
        for name in config.output_filter:
            if name not in known:
                warnings.append(f"Unknown step '{name}' never produces output (output_filter)")

    if config.missing_arg_policy == MissingArgPolicy.FAIL and not config.step_configs:
        warnings.append(
            "Policy is 'fail' but no bindings are configured; "
            "any step with parameters will fail (missing_arg_policy)",
        )

    for step_name, step_config in config.step_configs.items():
        where = f"step_configs.{step_name}"
        if known is not None and step_name not in known:
            warnings.append(f"Bindings for unknown step '{step_name}' ({where})")

        for position, binding in enumerate(step_config.arg_bindings):
            if binding is None:
                continue
            slot = f"{where}.arg_bindings.{position}"
            if binding.index < 0:
                warnings.append(f"Negative index {binding.index} always fails ({slot}.index)")
            if binding.source != ArgSource.FUNCTION_OUTPUT:
                continue
            if not binding.name:
                warnings.append(f"function_output binding without a step name ({slot}.name)")
            elif known is not None and binding.name not in known:
                warnings.append(f"Binding references unknown step '{binding.name}' ({slot}.name)")

    return warnings
