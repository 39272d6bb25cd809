"""Data models for a bundle and the modules it contains.

Both models are Pydantic v2 ``BaseModel`` subclasses.  Values stored in
them have already passed the validators in :mod:`modgen.validators`; the
models add the batch-level invariants and expose the derived names the
templates need.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator

from . import naming
from .exceptions import FormatError


# ---------------------------------------------------------------------------
# Module descriptor
# ---------------------------------------------------------------------------


class ModuleDescriptor(BaseModel):
    """One module of a bundle."""

    module_name: str
    module_name_suffix: str = ""
    display_name: str
    description: str = ""

    # operation
    owns_location: str | None = None
    metrics_for_operation: list[str] = Field(default_factory=list)

    # activity
    channels_for_activity: list[str] = Field(default_factory=list)
    hooks_for_activity: list[str] = Field(default_factory=list)
    location_parameter_name: str | None = None
    equals_operation: str | None = None
    operation_parameter_names: list[str] = Field(default_factory=list)

    @property
    def class_name(self) -> str:
        return naming.derive_class_name(self.module_name, self.module_name_suffix)

    @property
    def module_name_underscore(self) -> str:
        return naming.underscore(self.module_name)

    @property
    def module_name_hyphen(self) -> str:
        return naming.hyphenate(self.module_name)

    @property
    def module_name_suffix_underscore(self) -> str:
        return naming.underscore(self.module_name_suffix)

    @property
    def module_name_suffix_hyphen(self) -> str:
        return naming.hyphenate(self.module_name_suffix)

    @property
    def file_suffix(self) -> str:
        return naming.file_suffix(self.module_name_suffix)

    def identifier(self, vendor_name: str) -> str:
        return naming.derive_identifier(
            vendor_name, self.module_name, self.module_name_suffix
        )

    def template_parameters(self, vendor_name: str) -> dict[str, Any]:
        """Flat per-module parameters merged over the bundle parameters."""
        return {
            "module_name": self.module_name,
            "module_name_suffix": self.module_name_suffix,
            "module_name_underscore": self.module_name_underscore,
            "module_name_hyphen": self.module_name_hyphen,
            "module_name_suffix_underscore": self.module_name_suffix_underscore,
            "module_name_suffix_hyphen": self.module_name_suffix_hyphen,
            "class_name": self.class_name,
            "identifier": self.identifier(vendor_name),
            "display_name": self.display_name,
            "description": self.description,
            "owns_location": self.owns_location,
            "metrics_for_operation": list(self.metrics_for_operation),
            "channels_for_activity": list(self.channels_for_activity),
            "hooks_for_activity": list(self.hooks_for_activity),
            "location_parameter_name": self.location_parameter_name,
            "equals_operation": self.equals_operation,
            "operation_parameter_names": list(self.operation_parameter_names),
        }


# ---------------------------------------------------------------------------
# Bundle definition
# ---------------------------------------------------------------------------


class BundleDefinition(BaseModel):
    """Everything needed to generate one bundle."""

    module_type: str
    vendor_name: str
    author_name: str
    author_email: str
    package_license: str
    package_website: str
    package_description: str = ""
    namespace: str
    bundle_name: str
    package_name: str
    target_dir: Path
    routing: str = "no"
    modules: list[ModuleDescriptor]

    @model_validator(mode="after")
    def _check_module_batch(self) -> "BundleDefinition":
        if not self.modules:
            raise FormatError("At least one module must be defined.", field="modules")
        shared = self.modules[0].module_name
        first_suffix = self.modules[0].module_name_suffix
        seen: set[str] = {first_suffix} if first_suffix else set()
        for module in self.modules[1:]:
            if module.module_name != shared:
                raise FormatError(
                    f'All modules of a bundle share the module name "{shared}".',
                    field="module_name",
                )
            if not module.module_name_suffix:
                raise FormatError(
                    "A module name suffix is required for every module after the first.",
                    field="module_name_suffix",
                )
            if module.module_name_suffix in seen:
                raise FormatError(
                    "The module name suffix is already in use.",
                    field="module_name_suffix",
                )
            seen.add(module.module_name_suffix)
        return self

    @property
    def gen_routing(self) -> bool:
        return self.routing == "yes"

    @property
    def bundle_class_name(self) -> str:
        return naming.bundle_class_name(self.namespace)

    @property
    def extension_class_name(self) -> str:
        return naming.extension_class_name(self.namespace)

    @property
    def bundle_dir(self) -> Path:
        """Directory the bundle is written to: target dir plus namespace path."""
        return Path(self.target_dir) / naming.namespace_path(self.namespace)

    @property
    def route_prefix(self) -> str:
        return naming.route_prefix(self.package_name)


# ---------------------------------------------------------------------------
# Inline module records
# ---------------------------------------------------------------------------

_COMMON_FIELDS = ("module_name", "module_name_suffix", "display_name", "description")

_TYPE_FIELDS: dict[str, tuple[str, ...]] = {
    "operation": ("owns_location", "metrics_for_operation"),
    "activity": (
        "channels_for_activity",
        "hooks_for_activity",
        "location_parameter_name",
        "equals_operation",
        "operation_parameter_names",
    ),
}


def record_fields(module_type: str) -> tuple[str, ...]:
    """Positional field names of an inline record for *module_type*."""
    return _COMMON_FIELDS + _TYPE_FIELDS.get(module_type, ())


def parse_module_record(record: str, module_type: str) -> dict[str, str]:
    """Split a colon-separated inline module record into named raw fields.

    ``twitter:update-status:Update Status:Posts a status:true:Clicks,Likes``
    for an operation gives the four common fields plus ``owns_location``
    and ``metrics_for_operation``.  Positions that are not supplied come back
    as empty strings; extra positions are ignored.  Values are *not*
    validated here.
    """
    parts = record.split(":")
    fields = record_fields(module_type)
    return {
        name: (parts[index] if index < len(parts) else "")
        for index, name in enumerate(fields)
    }
