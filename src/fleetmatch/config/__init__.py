"""Configuration module for Fleetmatch parameters."""

from .defaults import (
    DEFAULT_SCENARIO,
    DEFAULT_SCENARIO_VERSION,
    get_default_scenario,
)
from .loader import dump_yaml
from .loader import load_yaml as load_fleetmatch_params
from .loader import parse_scenario
from .params import (
    AlgorithmParams,
    FleetmatchParams,
    IOParams,
    ReportParams,
    RuntimeParams,
)

__all__ = [
    "ReportParams",
    "AlgorithmParams",
    "IOParams",
    "RuntimeParams",
    "FleetmatchParams",
    "DEFAULT_SCENARIO",
    "DEFAULT_SCENARIO_VERSION",
    "get_default_scenario",
    "load_fleetmatch_params",
    "parse_scenario",
    "dump_yaml",
]
