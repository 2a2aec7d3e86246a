import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from src.domain.state import StatusTable, build_status_table
from src.rules.models import Rules

logger = logging.getLogger(__name__)


def load_rules(path: Path) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or the schema is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        rules = Rules.model_validate(data)
    except ValidationError as e:
        # Re-raise with a clear message for the caller/logs
        raise ValueError(f"Rules validation failed:\n{e}") from e

    logger.debug("Loaded rules %s v%s", rules.project.slug, rules.project.rules_version)
    return rules


def status_table_from_rules(rules: Rules) -> StatusTable:
    """Build the (role, requested status) -> status table from the workflow section."""
    return build_status_table(
        {role: wf.default_status for role, wf in rules.workflow.items()},
        {role: wf.downgrade for role, wf in rules.workflow.items()},
    )
