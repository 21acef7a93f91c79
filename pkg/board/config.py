# Dragboard configuration
# Override behavior via config/board.yaml or the DRAGBOARD_CONFIG env var.

import logging
import os
import yaml
from pathlib import Path
from dataclasses import dataclass, fields
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "config" / "board.yaml"

INDEX_POLICIES = ("noop", "raise", "clamp")
PLACEMENTS = ("keep", "append")


@dataclass
class BoardConfig:
    """Runtime configuration for a board session."""

    # Reorder engine
    invalid_index_policy: str = "noop"          # "noop" | "raise" | "clamp"

    # Task dropped on a column: "keep" flat index, or "append" after the
    # last task already in the target column
    task_over_column_placement: str = "keep"

    # Cancelled gesture restores the task arrangement captured at drag start
    rollback_cancelled_drag: bool = False

    # Defaults for new entities ({n} = current count + 1)
    column_title_template: str = "Column {n}"
    task_content_template: str = "Task {n}"
    first_id: int = 1                           # start of the shared column/task id counter

    # Ambient
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 3000

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Reset invalid values to their defaults so store operations never fail on them."""
        if self.invalid_index_policy not in INDEX_POLICIES:
            logger.warning(
                f"Unknown invalid_index_policy {self.invalid_index_policy!r}, using 'noop'"
            )
            self.invalid_index_policy = "noop"
        if self.task_over_column_placement not in PLACEMENTS:
            logger.warning(
                f"Unknown task_over_column_placement {self.task_over_column_placement!r}, using 'keep'"
            )
            self.task_over_column_placement = "keep"
        self.rollback_cancelled_drag = bool(self.rollback_cancelled_drag)
        self.log_level = str(self.log_level).upper()

        try:
            self.first_id = int(self.first_id)
        except (TypeError, ValueError):
            logger.warning(f"Invalid first_id {self.first_id!r}, using 1")
            self.first_id = 1

        for name, default in (
            ("column_title_template", "Column {n}"),
            ("task_content_template", "Task {n}"),
        ):
            template = getattr(self, name)
            try:
                str(template).format(n=1)
            except (KeyError, IndexError, ValueError, AttributeError) as e:
                logger.warning(f"Invalid {name} {template!r} ({e!r}), using {default!r}")
                setattr(self, name, default)
            else:
                setattr(self, name, str(template))

    @classmethod
    def load(cls, path: Optional[str] = None) -> "BoardConfig":
        """Load config from YAML file, falling back to defaults."""
        env_path = os.environ.get("DRAGBOARD_CONFIG")
        cfg_path = Path(path) if path else Path(env_path) if env_path else CONFIG_PATH
        known = {f.name for f in fields(cls)}
        if cfg_path.exists():
            try:
                with open(cfg_path, "r") as f:
                    data = yaml.safe_load(f) or {}
                cfg = cls(**{k: v for k, v in data.items() if k in known})
            except (OSError, TypeError, AttributeError, yaml.YAMLError) as e:
                logger.warning(f"Failed to read config {cfg_path}: {e}; using defaults")
                cfg = cls()
        else:
            cfg = cls()
        return cfg
