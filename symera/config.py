"""Configuration loading and validation."""

import json
import os
import sys
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

from symera.engine.window import SUNDAY, ViewMode, parse_week_start


@dataclass
class ApiConfig:
    url: str = "http://localhost:5000"
    token: Optional[str] = None
    timeout: float = 30.0


@dataclass
class CalendarConfig:
    timezone: Optional[str] = None  # None means the machine's local zone
    week_start: int = SUNDAY
    default_view: ViewMode = ViewMode.MONTH
    max_visible_month: int = 2
    max_visible_week: int = 3


@dataclass
class RenderConfig:
    day_start_hour: int = 7
    day_end_hour: int = 22


@dataclass
class Config:
    api: ApiConfig
    calendar: CalendarConfig
    render: RenderConfig

    def max_visible(self, view_mode: ViewMode) -> Optional[int]:
        if view_mode is ViewMode.MONTH:
            return self.calendar.max_visible_month
        if view_mode is ViewMode.WEEK:
            return self.calendar.max_visible_week
        return None


def load_config(path: Optional[str] = None) -> Config:
    """Load configuration from a JSON file and SYMERA_* environment variables.

    Searches for config.json in the following order:
    1. Explicit path argument (must exist)
    2. ./config.json (current directory)
    3. The project directory

    Environment variables take precedence over the file; anything missing
    from both falls back to the defaults.
    """
    if path:
        config_path = Path(path)
        if not config_path.exists():
            print(f"Error: Config file not found at {config_path}", file=sys.stderr)
            sys.exit(1)
    else:
        config_path = Path("config.json")
        if not config_path.exists():
            config_path = Path(__file__).parent.parent / "config.json"

    file_config = {}
    if config_path.exists():
        try:
            with open(config_path) as f:
                file_config = json.load(f)
        except json.JSONDecodeError as e:
            print(f"Error: Invalid JSON in {config_path}: {e}", file=sys.stderr)
            sys.exit(1)

    def get_val(section: str, key: str, env_var: str, default=None):
        # 1. Env var
        val = os.environ.get(env_var)
        if val is not None:
            return val
        # 2. Config file
        if key in file_config.get(section, {}):
            return file_config[section][key]
        # 3. Default
        return default

    try:
        api_config = ApiConfig(
            url=str(get_val("api", "url", "SYMERA_API_URL", ApiConfig.url)).rstrip("/"),
            token=get_val("api", "token", "SYMERA_API_TOKEN"),
            timeout=float(get_val("api", "timeout", "SYMERA_API_TIMEOUT", ApiConfig.timeout)),
        )

        calendar_config = CalendarConfig(
            timezone=get_val("calendar", "timezone", "SYMERA_TIMEZONE"),
            week_start=parse_week_start(
                get_val("calendar", "week_start", "SYMERA_WEEK_START", SUNDAY)
            ),
            default_view=ViewMode(
                get_val("calendar", "default_view", "SYMERA_DEFAULT_VIEW", ViewMode.MONTH.value)
            ),
            max_visible_month=int(
                get_val("calendar", "max_visible_month", "SYMERA_MAX_VISIBLE_MONTH", 2)
            ),
            max_visible_week=int(
                get_val("calendar", "max_visible_week", "SYMERA_MAX_VISIBLE_WEEK", 3)
            ),
        )

        render_config = RenderConfig(
            day_start_hour=int(get_val("render", "day_start_hour", "SYMERA_DAY_START_HOUR", 7)),
            day_end_hour=int(get_val("render", "day_end_hour", "SYMERA_DAY_END_HOUR", 22)),
        )
        if not 0 <= render_config.day_start_hour < render_config.day_end_hour <= 24:
            raise ValueError("render hours must satisfy 0 <= day_start_hour < day_end_hour <= 24")

        return Config(api=api_config, calendar=calendar_config, render=render_config)
    except (TypeError, ValueError) as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)
