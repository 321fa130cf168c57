"""Configuration for the fight scheduler CLI."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .models import SchedulingStrategy

# Load .env file if present
load_dotenv()


@dataclass
class SchedulerConfig:
    """Defaults for scheduling runs, overridable from the command line."""

    strategy: SchedulingStrategy = SchedulingStrategy.TIME_BOXED
    output_dir: Path = Path(".")
    verbose: bool = False

    @classmethod
    def from_env(cls) -> "SchedulerConfig":
        """Load configuration from environment variables."""
        return cls(
            strategy=SchedulingStrategy(
                os.getenv("FIGHT_SCHEDULER_STRATEGY", SchedulingStrategy.TIME_BOXED.value).lower()
            ),
            output_dir=Path(os.getenv("FIGHT_SCHEDULER_OUTPUT_DIR", ".")),
            verbose=os.getenv("FIGHT_SCHEDULER_VERBOSE", "false").lower() == "true",
        )
