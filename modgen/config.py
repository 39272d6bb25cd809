"""Generator configuration.

Static rule tables (module types, reserved words, parameter prefixes) live
here as module-level constants so every validator reads the same source.
Tunable defaults use a Pydantic v2 model that can be validated at
construction time and read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Static rule tables
# ---------------------------------------------------------------------------

MODULE_TYPES: tuple[str, ...] = (
    "activity",
    "campaign",
    "channel",
    "location",
    "milestone",
    "operation",
    "report",
    "security",
    "distribution",
    "hook",
)

# Module types allowed as the type segment of a bundle name.
BUNDLE_NAME_TYPES: frozenset[str] = frozenset(
    {"channel", "location", "activity", "operation"}
)

BUNDLE_SUFFIX = "Bundle"

LOCATION_PARAMETER_PREFIX = "campaignchain.location."
OPERATION_PARAMETER_PREFIX = "campaignchain.operation."

# PHP reserved words; none may appear as a whole namespace/package segment.
RESERVED_WORDS: frozenset[str] = frozenset(
    {
        "abstract", "and", "array", "as", "break", "callable", "case",
        "catch", "class", "clone", "const", "continue", "declare",
        "default", "do", "else", "elseif", "enddeclare", "endfor",
        "endforeach", "endif", "endswitch", "endwhile", "extends", "final",
        "finally", "for", "foreach", "function", "global", "goto", "if",
        "implements", "interface", "instanceof", "insteadof", "namespace",
        "new", "or", "private", "protected", "public", "static", "switch",
        "throw", "trait", "try", "use", "var", "while", "xor", "yield",
        "__class__", "__dir__", "__file__", "__line__", "__function__",
        "__method__", "__namespace__", "__trait__", "__halt_compiler",
        "die", "echo", "empty", "exit", "eval", "include", "include_once",
        "isset", "list", "require", "require_once", "return", "print",
        "unset",
    }
)

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "scaffolder" / "templates"


# ---------------------------------------------------------------------------
# Tunable defaults
# ---------------------------------------------------------------------------


class GeneratorConfig(BaseModel):
    """Defaults offered to the user and the template location.

    Defaults are only ever *offered* in interactive prompts; non-interactive
    runs never apply them to required fields.
    """

    template_dir: Path | None = Field(
        default=None, description="Override for the packaged Jinja2 templates"
    )
    default_target_dir: Path = Field(default=Path("src"))
    default_license: str = Field(default="Apache-2.0")
    default_website: str = Field(default="http://www.campaignchain.com")
    default_routing: str = Field(default="no")

    @field_validator("default_routing")
    @classmethod
    def _routing_is_yes_or_no(cls, value: str) -> str:
        value = value.lower()
        if value not in ("yes", "no"):
            raise ValueError("default_routing must be 'yes' or 'no'")
        return value

    @property
    def templates_path(self) -> Path:
        """Directory the template renderer loads from."""
        return self.template_dir or _DEFAULT_TEMPLATE_DIR

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            MODGEN_TEMPLATE_DIR, MODGEN_TARGET_DIR, MODGEN_LICENSE,
            MODGEN_WEBSITE, MODGEN_ROUTING.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("MODGEN_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["MODGEN_TEMPLATE_DIR"])
        if os.environ.get("MODGEN_TARGET_DIR"):
            kwargs["default_target_dir"] = Path(os.environ["MODGEN_TARGET_DIR"])
        if os.environ.get("MODGEN_LICENSE"):
            kwargs["default_license"] = os.environ["MODGEN_LICENSE"]
        if os.environ.get("MODGEN_WEBSITE"):
            kwargs["default_website"] = os.environ["MODGEN_WEBSITE"]
        if os.environ.get("MODGEN_ROUTING"):
            kwargs["default_routing"] = os.environ["MODGEN_ROUTING"]
        return cls(**kwargs)
