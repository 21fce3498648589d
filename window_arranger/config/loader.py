"""
Configuration loader for layout files.

Loads and parses:
- layout.json (JSON format): a list of rule records, or an object with
  "settings" and "rules"
- layout.toml (TOML format): [settings] table and [[rules]] array of tables

A record with missing or invalid fields is rejected on its own; a file that
cannot be read or parsed at all raises ConfigLoadError.
"""

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..errors import ConfigLoadError, ErrorCode, RuleValidationError
from ..models import ArrangerSettings, LayoutConfig, PlacementRule, RejectedRecord

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "window-arranger" / "layout.json"


def _describe(error: ValidationError) -> str:
    """Flatten a pydantic error into one line."""
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ())) or "record"
        parts.append(f"{location}: {detail.get('msg')}")
    return "; ".join(parts)


class ConfigLoader:
    """Loads a layout from a JSON or TOML file."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Layout file (defaults to ~/.config/window-arranger/layout.json)
        """
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    def read_raw(self) -> Any:
        """
        Read and parse the layout file.

        Returns:
            Parsed JSON or TOML document

        Raises:
            ConfigLoadError: If the file is missing, unreadable or malformed
        """
        path = self.config_path
        if not path.exists():
            raise ConfigLoadError(str(path), "file not found", code=ErrorCode.CONFIG_NOT_FOUND)

        try:
            if path.suffix == ".toml":
                with open(path, "rb") as f:
                    return tomllib.load(f)
            with open(path, "r") as f:
                return json.load(f)
        except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
            raise ConfigLoadError(str(path), str(e), code=ErrorCode.SYNTAX_ERROR)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigLoadError(str(path), str(e))

    def load(self) -> LayoutConfig:
        """
        Load settings and rules.

        Returns:
            LayoutConfig with valid rules in file order and the rejected records

        Raises:
            ConfigLoadError: If the document as a whole is unusable
        """
        data = self.read_raw()
        return self.parse(data)

    def parse(self, data: Any) -> LayoutConfig:
        """Build a LayoutConfig from an already parsed document."""
        source = str(self.config_path)

        if isinstance(data, list):
            records = data
            settings_data: Dict[str, Any] = {}
        elif isinstance(data, dict):
            unexpected = sorted(set(data) - {"rules", "settings"})
            if "rules" not in data and unexpected:
                raise ConfigLoadError(
                    source,
                    f"object has no 'rules' list (found keys: {', '.join(unexpected)}); "
                    f"wrap single records in a list"
                )
            records = data.get("rules", [])
            settings_data = data.get("settings") or {}
        else:
            raise ConfigLoadError(source, f"expected a list or an object, got {type(data).__name__}")

        if not isinstance(records, list):
            raise ConfigLoadError(source, "'rules' must be a list")

        try:
            settings = ArrangerSettings(**settings_data)
        except (TypeError, ValidationError) as e:
            reason = _describe(e) if isinstance(e, ValidationError) else str(e)
            raise ConfigLoadError(source, f"invalid settings: {reason}")

        rules: List[PlacementRule] = []
        rejected: List[RejectedRecord] = []

        for position, record in enumerate(records):
            try:
                rules.append(self.parse_record(position, record))
            except RuleValidationError as e:
                logger.warning(e.message)
                rejected.append(RejectedRecord(
                    position=position,
                    window=e.context.get("window"),
                    message=e.message,
                ))

        logger.info(f"Loaded {len(rules)} rules from {source} ({len(rejected)} rejected)")
        return LayoutConfig(settings=settings, rules=rules, rejected=rejected)

    @staticmethod
    def parse_record(position: int, record: Any) -> PlacementRule:
        """
        Validate one layout record.

        Raises:
            RuleValidationError: If the record is not a valid placement rule
        """
        if not isinstance(record, dict):
            raise RuleValidationError(position, f"expected an object, got {type(record).__name__}")

        window = record.get("window") if isinstance(record.get("window"), str) else None
        try:
            return PlacementRule(**record)
        except ValidationError as e:
            raise RuleValidationError(position, _describe(e), window=window)
