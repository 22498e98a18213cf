import os
import sys
from pathlib import Path

from logic_looper.rules.models import Rules

DATA_DIR_ENV = "LOGIC_LOOPER_DATA_DIR"
RULES_PATH_ENV = "LOGIC_LOOPER_RULES"
DEFAULT_RULES_PATH = "rules.yaml"


def resolve_rules_path(explicit: str | None = None) -> Path:
    return Path(explicit or os.environ.get(RULES_PATH_ENV, DEFAULT_RULES_PATH))


def resolve_data_dir(rules: Rules) -> Path:
    """Environment overrides the rules file."""
    return Path(os.environ.get(DATA_DIR_ENV, rules.storage.data_dir))


def validate_ops_rules(rules: Rules, base_dir: Path) -> None:
    """
    Validate operational requirements before startup.
    Exits the process when a requirement is not met.
    """
    ops = rules.ops

    # 1. Check Data Dir
    if ops.data_dir_required and rules.storage.backend != "memory":
        if not base_dir.is_dir() or not os.access(base_dir, os.W_OK):
            print(f"CRITICAL: Data directory not writable: {base_dir}", file=sys.stderr)
            sys.exit(1)

    # 2. Check Required Env
    missing = [env_var for env_var in ops.required_env if env_var not in os.environ]
    if missing:
        print(
            f"CRITICAL: Missing required environment variables: {', '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)
