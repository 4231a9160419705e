"""
YAML configuration loader with schema validation.

Loads the grid, species and run limits from a YAML file, validates the
raw document against a JSON schema, then builds the dataclasses (which
apply their own range checks).
"""

import yaml
import json
from pathlib import Path
from typing import Optional
import jsonschema

from .data_types import (
    SimulationConfig, GridConfig, HerbivoreSpecies, PredatorSpecies, RunLimits
)


SCHEMA_FILENAME = "simulation.schema.json"


class DataLoadError(Exception):
    """Raised when data loading or validation fails"""
    pass


def load_yaml(file_path: Path) -> dict:
    """Load YAML file and return parsed dict"""
    file_path = Path(file_path)
    if not file_path.exists():
        raise DataLoadError(f"File not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DataLoadError(f"YAML parse error in {file_path}: {e}")

    if not isinstance(data, dict):
        raise DataLoadError(f"Expected a mapping at top level of {file_path}")
    return data


def validate_against_schema(data: dict, schema_path: Path, data_path: Path):
    """Validate data dict against JSON schema"""
    if not schema_path.exists():
        raise DataLoadError(f"Schema not found: {schema_path}")

    try:
        with open(schema_path, 'r') as f:
            schema = json.load(f)
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise DataLoadError(f"Validation error in {data_path}: {e.message}")
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Invalid JSON schema {schema_path}: {e}")


def _build(cls, data: dict, where: str):
    try:
        return cls(**data)
    except TypeError as e:
        raise DataLoadError(f"Bad fields for {where}: {e}")


def parse_config(data: dict, source: str = "<dict>") -> SimulationConfig:
    """
    Build a SimulationConfig from an already-parsed document.

    Raises:
        DataLoadError: required section missing or unknown field
        ConfigError: a value fails a range check
    """
    if 'herbivores' not in data:
        raise DataLoadError(f"Missing 'herbivores' section in {source}")

    grid = _build(GridConfig, data.get('grid', {}), f"grid in {source}")
    herbivores = [
        _build(HerbivoreSpecies, s, f"herbivore in {source}") for s in data['herbivores']
    ]
    predators = [
        _build(PredatorSpecies, s, f"predator in {source}") for s in data.get('predators', [])
    ]
    limits = _build(RunLimits, data.get('limits', {}), f"limits in {source}")

    kwargs = {}
    for key in ('seed', 'name', 'description'):
        if key in data:
            kwargs[key] = data[key]

    return SimulationConfig(
        grid=grid,
        herbivores=herbivores,
        predators=predators,
        limits=limits,
        **kwargs
    )


def load_config(file_path: Path, schema_dir: Optional[Path] = None) -> SimulationConfig:
    """Load simulation configuration from YAML"""
    file_path = Path(file_path)
    data = load_yaml(file_path)

    # Validate if schema directory given
    if schema_dir:
        schema_path = Path(schema_dir) / SCHEMA_FILENAME
        validate_against_schema(data, schema_path, file_path)

    return parse_config(data, str(file_path))
