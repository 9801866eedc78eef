"""
================================================================================
Test Configuration
================================================================================

Typed, immutable configuration tree for the UI automation framework.

Configuration loading order:
    1. Base configuration file (config/config.yaml)
    2. Environment-specific overlay (config/{ENV}.yaml), deep-merged
    3. Environment variables using the double underscore convention,
       e.g. TEST_CONFIGURATION__BROWSER__HEADLESS=true

All settings live under the ``test_configuration`` root key. A missing file,
section or base URL fails fast with ``ConfigurationError`` before any browser
is launched.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

import yaml
from loguru import logger


SECTION_NAME = "test_configuration"
ENV_PREFIX = "TEST_CONFIGURATION__"
REQUIRED_SECTIONS = ("browser", "application", "execution", "reporting", "logging")

# Repository-level default location
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "config.yaml"

T = TypeVar("T")


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""
    pass


# =============================================================================
# Configuration Sections
# =============================================================================

@dataclass(frozen=True)
class BrowserConfiguration:
    default_browser: str = "chrome"
    headless: bool = False
    viewport_width: int = 1920
    viewport_height: int = 1080
    start_maximized: bool = True
    accept_downloads: bool = True
    timeout_ms: int = 30000
    navigation_timeout_ms: int = 30000
    launch_args: List[str] = field(default_factory=list)
    storage_state_path: Optional[str] = None


@dataclass(frozen=True)
class UserCredentials:
    username: str = ""
    password: str = ""
    role: str = "User"
    additional_properties: Dict[str, str] = field(default_factory=dict)

    def __repr__(self) -> str:
        # Never leak the password into logs or reports
        return f"UserCredentials(username={self.username!r}, role={self.role!r})"


@dataclass(frozen=True)
class ApplicationConfiguration:
    base_url: str = ""
    environment: str = "QA"
    name: str = ""
    api_base_url: str = ""
    default_user: UserCredentials = field(default_factory=UserCredentials)
    users: Dict[str, UserCredentials] = field(default_factory=dict)


@dataclass(frozen=True)
class ExecutionConfiguration:
    max_retry_attempts: int = 2
    retry_delay_ms: int = 1000
    capture_screenshot_on_failure: bool = True
    full_page_screenshots: bool = True
    record_video: bool = False
    record_trace: bool = False
    max_workers: int = field(default_factory=lambda: os.cpu_count() or 1)
    test_data_directory: str = "test_data"
    output_directory: str = "test_results"
    highlight_elements: bool = True
    highlight_duration_ms: int = 1500
    highlight_border_width: int = 3
    highlight_color: str = "red"


@dataclass(frozen=True)
class ReportingConfiguration:
    allure_enabled: bool = True
    allure_results_directory: str = "allure-results"
    generate_html_report: bool = True
    report_title: str = "UI Automation Report"
    include_environment_info: bool = True


@dataclass(frozen=True)
class LoggingConfiguration:
    minimum_level: str = "Information"
    write_to_console: bool = True
    write_to_file: bool = True
    log_file_path_template: str = "logs/test-log-{Date}.txt"
    structured_logging: bool = True


@dataclass(frozen=True)
class OtpConfiguration:
    provider: str = "twilio"
    api_base_url: str = "https://api.twilio.com"
    account_sid: str = ""
    auth_token: str = ""
    phone_number: str = ""
    code_pattern: str = r"\d{6}"
    poll_attempts: int = 5
    poll_interval_ms: int = 2000
    initial_delay_ms: int = 2000

    @property
    def is_configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.phone_number)

    def __repr__(self) -> str:
        return (
            f"OtpConfiguration(provider={self.provider!r}, "
            f"phone_number={self.phone_number!r}, configured={self.is_configured})"
        )


@dataclass(frozen=True)
class TestConfiguration:
    """
    Root of the configuration tree.

    Loaded once per test class by the base test and shared read-only with
    pages, locator helpers and the browser manager.
    """

    __test__ = False  # not a pytest test class

    browser: BrowserConfiguration = field(default_factory=BrowserConfiguration)
    application: ApplicationConfiguration = field(default_factory=ApplicationConfiguration)
    execution: ExecutionConfiguration = field(default_factory=ExecutionConfiguration)
    reporting: ReportingConfiguration = field(default_factory=ReportingConfiguration)
    logging: LoggingConfiguration = field(default_factory=LoggingConfiguration)
    otp: OtpConfiguration = field(default_factory=OtpConfiguration)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TestConfiguration":
        """
        Build the configuration tree from a plain mapping.

        Args:
            data: Contents of the ``test_configuration`` section

        Returns:
            TestConfiguration instance

        Raises:
            ConfigurationError: Required section or base URL missing
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"'{SECTION_NAME}' section must be a mapping")

        missing = [name for name in REQUIRED_SECTIONS if name not in data]
        if missing:
            raise ConfigurationError(
                f"Missing configuration section(s): {', '.join(missing)}"
            )

        application_data = dict(data["application"] or {})
        default_user = _build_section(
            UserCredentials, application_data.pop("default_user", None) or {},
            "application.default_user",
        )
        users = {
            name: _build_section(UserCredentials, user or {}, f"application.users.{name}")
            for name, user in (application_data.pop("users", None) or {}).items()
        }
        application = _build_section(
            ApplicationConfiguration, application_data, "application",
            default_user=default_user, users=users,
        )
        if not application.base_url:
            raise ConfigurationError("application.base_url is required")

        known = set(REQUIRED_SECTIONS) | {"otp"}
        for key in data:
            if key not in known:
                logger.warning(f"Ignoring unknown configuration section: {key}")

        return cls(
            browser=_build_section(BrowserConfiguration, data["browser"] or {}, "browser"),
            application=application,
            execution=_build_section(ExecutionConfiguration, data["execution"] or {}, "execution"),
            reporting=_build_section(ReportingConfiguration, data["reporting"] or {}, "reporting"),
            logging=_build_section(LoggingConfiguration, data["logging"] or {}, "logging"),
            otp=_build_section(OtpConfiguration, data.get("otp") or {}, "otp"),
        )

    def get_user(self, name: Optional[str] = None) -> UserCredentials:
        """Return named credentials, or the default user when no name is given."""
        if name is None:
            return self.application.default_user
        try:
            return self.application.users[name]
        except KeyError:
            raise ConfigurationError(f"User '{name}' not found in configuration") from None


# =============================================================================
# Loading
# =============================================================================

def resolve_config_path(path: Optional[os.PathLike] = None) -> Path:
    """
    Resolve the base configuration file.

    Order: explicit path, TEST_CONFIG_PATH, ./config/config.yaml,
    repository config/config.yaml.
    """
    if path is not None:
        return Path(path)

    env_path = os.getenv("TEST_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    local = Path("config") / "config.yaml"
    if local.exists():
        return local
    return DEFAULT_CONFIG_PATH


def load_configuration(
    path: Optional[os.PathLike] = None,
    environment: Optional[str] = None,
) -> TestConfiguration:
    """
    Load configuration from YAML files and environment variables.

    Args:
        path: Base configuration file (see ``resolve_config_path``)
        environment: Overlay name; defaults to ENVIRONMENT / ENV / "development"

    Returns:
        Immutable TestConfiguration

    Raises:
        ConfigurationError: File missing, unreadable or incomplete
    """
    config_path = resolve_config_path(path)
    raw = _read_yaml(config_path, required=True)

    env = environment or os.getenv("ENVIRONMENT", os.getenv("ENV", "development"))
    overlay_path = config_path.parent / f"{env.lower()}.yaml"
    if overlay_path.exists() and overlay_path.resolve() != config_path.resolve():
        raw = _deep_merge(raw, _read_yaml(overlay_path, required=False))
        logger.debug(f"Merged environment config: {overlay_path}")

    _apply_env_overrides(raw)

    section = raw.get(SECTION_NAME)
    if section is None:
        raise ConfigurationError(
            f"'{SECTION_NAME}' section not found in {config_path}"
        )

    config = TestConfiguration.from_dict(section)
    logger.debug(
        f"Configuration loaded from {config_path} "
        f"(environment={config.application.environment})"
    )
    return config


def _read_yaml(path: Path, required: bool) -> Dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigurationError(f"Configuration file not found: {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Top level of {path} must be a mapping")
    return data


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merges two dictionaries, with override taking precedence.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides(raw: Dict[str, Any]) -> None:
    """
    Applies environment variable overrides to the raw configuration.

    Example: TEST_CONFIGURATION__BROWSER__HEADLESS=true overrides
    test_configuration.browser.headless
    """
    for key, value in os.environ.items():
        if key.upper().startswith(ENV_PREFIX):
            parts = [p.lower() for p in key.split("__") if p]
            _set_nested(raw, parts, value)


def _set_nested(d: Dict, keys: List[str], value: Any) -> None:
    for key in keys[:-1]:
        existing = d.get(key)
        if not isinstance(existing, dict):
            existing = {}
            d[key] = existing
        d = existing
    d[keys[-1]] = value


def _build_section(cls: Type[T], data: Mapping[str, Any], name: str, **extra: Any) -> T:
    """Instantiate a section dataclass, converting string values by default type."""
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Configuration section '{name}' must be a mapping")

    defaults = cls()
    valid = {f.name for f in fields(cls)}
    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in valid:
            logger.warning(f"Ignoring unknown configuration key: {name}.{key}")
            continue
        kwargs[key] = _convert_type(value, getattr(defaults, key), f"{name}.{key}")
    kwargs.update(extra)
    return cls(**kwargs)


def _convert_type(value: Any, reference: Any, key: str) -> Any:
    """
    Convert a value to match the reference default's type.

    Environment variables are always strings; YAML values pass through.
    """
    if value is None or not isinstance(value, str) or reference is None:
        return value

    if isinstance(reference, bool):
        return value.strip().lower() in ("true", "1", "yes", "on")
    if isinstance(reference, int):
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(f"{key} must be an integer, got {value!r}") from None
    if isinstance(reference, float):
        try:
            return float(value)
        except ValueError:
            raise ConfigurationError(f"{key} must be a number, got {value!r}") from None
    if isinstance(reference, list):
        return [item.strip() for item in value.split(",") if item.strip()]

    return value


def section_as_pairs(config: TestConfiguration) -> List[Tuple[str, str]]:
    """Flatten the non-secret parts of the configuration for reporting."""
    return [
        ("Environment", config.application.environment),
        ("Browser", config.browser.default_browser),
        ("Base URL", config.application.base_url),
        ("Headless", str(config.browser.headless)),
    ]


__all__ = [
    "ApplicationConfiguration",
    "BrowserConfiguration",
    "ConfigurationError",
    "ExecutionConfiguration",
    "LoggingConfiguration",
    "OtpConfiguration",
    "ReportingConfiguration",
    "TestConfiguration",
    "UserCredentials",
    "load_configuration",
    "resolve_config_path",
    "section_as_pairs",
]
