"""Configuration dataclass, validation and YAML loader for the segregation CA simulation."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
from pathlib import Path
import yaml


DEFAULT_DELAY_US = 900000
DEFAULT_DIMENSION = 15
DEFAULT_STRENGTH = 50
DEFAULT_VACANCY = 20
DEFAULT_ENDLINE = 60

MIN_DIMENSION = 5
MAX_DIMENSION = 39
MIN_PERCENT = 1
MAX_PERCENT = 99

EXIT_FAILURE = 1
EXIT_RANGE_ERROR = 2


class ConfigError(ValueError):
    """Invalid configuration value; carries the process exit code to use."""

    def __init__(self, message: str, exit_code: int = EXIT_FAILURE):
        super().__init__(message)
        self.exit_code = exit_code


@dataclass
class SimulationConfig:
    dimension: int = DEFAULT_DIMENSION
    strength: int = DEFAULT_STRENGTH  # minimum happiness (percent) to stay put
    vacancy: int = DEFAULT_VACANCY    # percent of all cells
    endline: int = DEFAULT_ENDLINE    # percent of occupied cells
    delay_us: int = DEFAULT_DELAY_US  # interactive mode only
    cycles: Optional[int] = None      # None selects interactive mode
    seed: Optional[int] = None

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = False
    snapshot_enabled: bool = False
    gif_enabled: bool = False
    report_enabled: bool = False
    out_dir: Path = field(default_factory=lambda: Path("./output"))

    @property
    def interactive(self) -> bool:
        return self.cycles is None

    def set_delay(self, delay_us: Optional[int]) -> None:
        """Accept only positive delays; anything else keeps the current value."""
        if delay_us is not None and delay_us > 0:
            self.delay_us = delay_us


def check_cycles(cycles: Optional[int]) -> None:
    if cycles is not None and cycles < 0:
        raise ConfigError(
            f"count ({cycles}) must be a non-negative integer.",
            EXIT_RANGE_ERROR
        )


def check_dimension(dimension: int) -> None:
    if not MIN_DIMENSION <= dimension <= MAX_DIMENSION:
        raise ConfigError(
            f"dimension ({dimension}) must be a value in "
            f"[{MIN_DIMENSION}...{MAX_DIMENSION}]",
            EXIT_RANGE_ERROR
        )


def check_strength(strength: int) -> None:
    if not MIN_PERCENT <= strength <= MAX_PERCENT:
        raise ConfigError(
            f"preference strength ({strength}) must be a value in "
            f"[{MIN_PERCENT}...{MAX_PERCENT}]",
            EXIT_FAILURE
        )


def check_vacancy(vacancy: int) -> None:
    if not MIN_PERCENT <= vacancy <= MAX_PERCENT:
        raise ConfigError(
            f"vacancy ({vacancy}) must be a value in "
            f"[{MIN_PERCENT}...{MAX_PERCENT}]",
            EXIT_RANGE_ERROR
        )


def check_endline(endline: int) -> None:
    if not MIN_PERCENT <= endline <= MAX_PERCENT:
        raise ConfigError(
            f"endline proportion ({endline}) must be a value in "
            f"[{MIN_PERCENT}...{MAX_PERCENT}]",
            EXIT_RANGE_ERROR
        )


# Range check per field, in the order validate_config applies them
FIELD_CHECKS: Dict[str, Callable[[Any], None]] = {
    'cycles': check_cycles,
    'dimension': check_dimension,
    'strength': check_strength,
    'vacancy': check_vacancy,
    'endline': check_endline,
}


def validate_config(config: SimulationConfig) -> None:
    """Check value ranges, raising ConfigError for the first violation."""
    for name, check in FIELD_CHECKS.items():
        check(getattr(config, name))


def _section(raw: Dict, name: str) -> Dict:
    """Return an optional mapping section of the YAML document."""
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{name}' must be a mapping")
    return section


def _get_int(section: Dict, key: str, default: Optional[int]) -> Optional[int]:
    value = section.get(key, default)
    if value is None and default is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    return value


def _get_bool(section: Dict, key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false, got {value!r}")
    return value


def _get_path(section: Dict, key: str, default: Path) -> Path:
    value = section.get(key, default)
    if isinstance(value, Path):
        return value
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a directory path, got {value!r}")
    return Path(value)


def load_config(config_path: Path) -> SimulationConfig:
    """Load a YAML configuration file. Ranges are checked by validate_config."""
    with open(config_path) as f:
        raw: Any = yaml.safe_load(f)

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Configuration root must be a mapping: {config_path}")

    # Parse board config
    board_raw = _section(raw, 'board')

    # Parse simulation config
    sim_raw = _section(raw, 'simulation')

    # Parse export config (optional)
    export_raw = _section(raw, 'export')

    config = SimulationConfig(
        dimension=_get_int(board_raw, 'dimension', DEFAULT_DIMENSION),
        strength=_get_int(board_raw, 'strength', DEFAULT_STRENGTH),
        vacancy=_get_int(board_raw, 'vacancy', DEFAULT_VACANCY),
        endline=_get_int(board_raw, 'endline', DEFAULT_ENDLINE),
        cycles=_get_int(sim_raw, 'cycles', None),
        seed=_get_int(sim_raw, 'seed', None),
        csv_enabled=_get_bool(export_raw, 'csv', False),
        snapshot_enabled=_get_bool(export_raw, 'snapshot', False),
        gif_enabled=_get_bool(export_raw, 'gif', False),
        report_enabled=_get_bool(export_raw, 'report', False),
        out_dir=_get_path(export_raw, 'out_dir', Path("./output"))
    )
    config.set_delay(_get_int(sim_raw, 'delay_us', None))

    return config
