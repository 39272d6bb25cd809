"""Validation rules for generator input.

Each rule is an independent pure function: it takes the raw answer (plus
whatever context it needs) and either returns the normalized value or raises
:class:`~modgen.exceptions.FormatError` with a message naming the rule that
failed.  Rules never touch the filesystem beyond resolving the target
directory against the current working directory.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import AnyUrl, EmailStr, TypeAdapter, ValidationError

from .config import (
    BUNDLE_NAME_TYPES,
    BUNDLE_SUFFIX,
    LOCATION_PARAMETER_PREFIX,
    MODULE_TYPES,
    OPERATION_PARAMETER_PREFIX,
    RESERVED_WORDS,
)
from .exceptions import FormatError

_NAME_RE = re.compile(r"[A-Za-z0-9_-]+")
_LABEL_RE = re.compile(r"[A-Za-z0-9.,\-_\s]+")
_DESCRIPTION_RE = re.compile(r"[A-Za-z0-9.,\-_\s]*")
_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_PACKAGE_CHARS_RE = re.compile(r"[A-Za-z0-9_/-]+")
_SEGMENT = r"[A-Za-z][A-Za-z0-9_]*"
_CHANNEL_RE = re.compile(
    rf"{_SEGMENT}/channel(?:-{_SEGMENT})+/{_SEGMENT}(?:-{_SEGMENT})*"
)
_HOOK_RE = re.compile(r"[a-z0-9_-]+")
_METRIC_RE = re.compile(r"[A-Za-z0-9_]+")
_PARAMETER_TAIL = rf"{_SEGMENT}(?:\.{_SEGMENT}){{1,2}}"

_email_adapter = TypeAdapter(EmailStr)
_url_adapter = TypeAdapter(AnyUrl)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def split_list(value: str | Iterable[str] | None) -> list[str]:
    """Split a comma-separated answer into stripped entries.

    ``None`` and blank strings give an empty list rather than ``[""]``.
    Already-split lists are passed through (stripped).
    """
    if value is None:
        return []
    if isinstance(value, str):
        if not value.strip():
            return []
        return [item.strip() for item in value.split(",")]
    return [str(item).strip() for item in value]


def _check_reserved(segments: Iterable[str], subject: str) -> None:
    for segment in segments:
        if segment.lower() in RESERVED_WORDS:
            raise FormatError(
                f'The {subject} cannot contain PHP reserved words ("{segment}").'
            )


# ---------------------------------------------------------------------------
# Enumerations and booleans
# ---------------------------------------------------------------------------


def validate_module_type(value: str) -> str:
    module_type = _text(value).strip().lower()
    if module_type not in MODULE_TYPES:
        raise FormatError(f'Type "{module_type}" is not supported.', field="module_type")
    return module_type


def validate_boolean_answer(value: str) -> str:
    """Accept ``yes`` or ``no`` (any case) and return it lower-cased."""
    answer = _text(value).strip().lower()
    if answer not in ("yes", "no"):
        raise FormatError(f'Answer "{value}" is not supported, use "yes" or "no".')
    return answer


def validate_true_false(value: str) -> str:
    """Accept ``true`` or ``false`` (any case) and return it lower-cased."""
    answer = _text(value).strip().lower()
    if answer not in ("true", "false"):
        raise FormatError("Only 'true' and 'false' values are supported.")
    return answer


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------


def validate_module_name(value: str) -> str:
    name = _text(value)
    if not _NAME_RE.fullmatch(name):
        raise FormatError("The module name contains invalid characters.", field="module_name")
    return name


def validate_vendor_name(value: str) -> str:
    name = _text(value)
    if not _NAME_RE.fullmatch(name):
        raise FormatError("The vendor name contains invalid characters.", field="vendor_name")
    return name


def validate_module_name_suffix(
    value: str,
    modules: Iterable[Any] = (),
    required: bool = False,
) -> str:
    """Validate a module name suffix.

    The first module of a batch may leave the suffix empty.  Every later
    module must supply one (``required=True``) and it must not already be
    used by a module in *modules*.
    """
    suffix = _text(value)
    if not suffix:
        if required:
            raise FormatError(
                "A module name suffix is required for every module after the first.",
                field="module_name_suffix",
            )
        return suffix
    if not _NAME_RE.fullmatch(suffix):
        raise FormatError(
            "The module name suffix contains invalid characters.",
            field="module_name_suffix",
        )
    if required:
        for module in modules:
            used = (
                module.get("module_name_suffix")
                if isinstance(module, dict)
                else getattr(module, "module_name_suffix", None)
            )
            if used == suffix:
                raise FormatError(
                    "The module name suffix is already in use.",
                    field="module_name_suffix",
                )
    return suffix


def validate_module_count(modules: list[Any]) -> list[Any]:
    if not modules:
        raise FormatError("At least one module must be defined.", field="modules")
    return modules


# ---------------------------------------------------------------------------
# Free text
# ---------------------------------------------------------------------------


def validate_display_name(value: str) -> str:
    name = _text(value)
    if not _LABEL_RE.fullmatch(name):
        raise FormatError("The display name contains invalid characters.", field="display_name")
    return name


def validate_description(value: str) -> str:
    description = _text(value)
    if not _DESCRIPTION_RE.fullmatch(description):
        raise FormatError("The description contains invalid characters.", field="description")
    return description


def validate_author_name(value: str) -> str:
    name = _text(value)
    if not _LABEL_RE.fullmatch(name):
        raise FormatError("The author name contains invalid characters.", field="author_name")
    return name


def validate_package_license(value: str) -> str:
    license_ = _text(value)
    if not _LABEL_RE.fullmatch(license_):
        raise FormatError("The license contains invalid characters.", field="package_license")
    return license_


def validate_author_email(value: str) -> str:
    email = _text(value).strip()
    try:
        _email_adapter.validate_python(email)
    except ValidationError:
        raise FormatError("The email address is invalid.", field="author_email") from None
    return email


def validate_package_website_url(value: str) -> str:
    url = _text(value).strip()
    try:
        parsed = _url_adapter.validate_python(url)
    except ValidationError:
        raise FormatError("The URL is invalid.", field="package_website") from None
    if not parsed.host:
        raise FormatError("The URL is invalid.", field="package_website")
    return url


# ---------------------------------------------------------------------------
# Package, namespace and bundle identity
# ---------------------------------------------------------------------------


def validate_package_name(value: str, module_type: str) -> str:
    """Validate a Composer package name such as ``acme/operation-twitter``."""
    package = _text(value)
    module_type = _text(module_type).lower()

    if not _PACKAGE_CHARS_RE.fullmatch(package):
        raise FormatError("The package name contains invalid characters.", field="package_name")

    _check_reserved(package.split("/"), "package name")

    if "/" not in package:
        raise FormatError(
            "The package name must contain a vendor name "
            f'(e.g. "vendor/{package}" instead of simply "{package}").',
            field="package_name",
        )

    pattern = rf"[A-Za-z_][A-Za-z0-9_-]*/{re.escape(module_type)}(?:-[A-Za-z_][A-Za-z0-9_]*)+"
    if not re.fullmatch(pattern, package):
        label = package.split("/", 1)[1]
        raise FormatError(
            f"The package name must include the specified module type '{module_type}' "
            f'after the vendor name (e.g. "vendor/{module_type}-{label}" instead of '
            f'simply "{label}").',
            field="package_name",
        )
    return package


def validate_bundle_namespace(value: str) -> str:
    """Validate a bundle namespace such as ``Acme\\Operation\\TwitterBundle``.

    Forward slashes are accepted as separators and normalized to
    backslashes.
    """
    namespace = _text(value).strip().replace("/", "\\").strip("\\")
    if not namespace:
        raise FormatError("The namespace cannot be empty.", field="namespace")

    segments = namespace.split("\\")
    for segment in segments:
        if not _IDENTIFIER_RE.fullmatch(segment):
            raise FormatError("The namespace contains invalid characters.", field="namespace")

    if not namespace.endswith(BUNDLE_SUFFIX):
        raise FormatError(
            f'The namespace must end with "{BUNDLE_SUFFIX}".', field="namespace"
        )

    _check_reserved(segments, "namespace")

    if len(segments) < 2:
        raise FormatError(
            "The namespace must contain a vendor namespace "
            f'(e.g. "VendorName\\{namespace}" instead of simply "{namespace}").',
            field="namespace",
        )
    return namespace


def validate_bundle_name(value: str, module_type: str | None = None) -> str:
    """Validate a bundle name such as ``acme/channel-twitter``.

    The type segment must be one of the channel/location/activity/operation
    types; when *module_type* is given it is accepted as well.
    """
    name = _text(value)
    allowed = set(BUNDLE_NAME_TYPES)
    if module_type:
        allowed.add(module_type.lower())

    if "/" not in name:
        raise FormatError(
            'The bundle name must be in the format "vendor/type-name".', field="bundle_name"
        )
    vendor, _, label = name.partition("/")
    _check_reserved([vendor, label], "bundle name")

    if name.count("-") > 1:
        raise FormatError(
            "The bundle name may contain at most one hyphen.", field="bundle_name"
        )
    type_token, hyphen, rest = label.partition("-")
    if type_token not in allowed:
        raise FormatError(
            f'The bundle type "{type_token}" must be one of: '
            + ", ".join(sorted(allowed))
            + ".",
            field="bundle_name",
        )
    if not (_IDENTIFIER_RE.fullmatch(vendor) and hyphen and _IDENTIFIER_RE.fullmatch(rest or "-")):
        raise FormatError(
            'The bundle name must be in the format "vendor/type-name".', field="bundle_name"
        )
    return name


def validate_target_dir(value: str) -> str:
    """Resolve *value* against the current working directory."""
    raw = _text(value).strip()
    if not raw:
        raise FormatError("The target directory cannot be empty.", field="dir")
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    return str(path.resolve())


# ---------------------------------------------------------------------------
# Type-specific lists
# ---------------------------------------------------------------------------


def validate_channels_for_activity(value: str | list[str] | None) -> list[str]:
    channels = split_list(value)
    for channel in channels:
        if not _CHANNEL_RE.fullmatch(channel):
            raise FormatError(
                "At least one of the channel package names does not seem to be valid, "
                "each channel package name should be in the format "
                '"[vendor-name]/channel-[module-name]/[channel-module-name]".',
                field="channels_for_activity",
            )
    return channels


def validate_hooks_for_activity(value: str | list[str] | None) -> list[str]:
    hooks = split_list(value)
    for hook in hooks:
        if not _HOOK_RE.fullmatch(hook):
            raise FormatError(
                "At least one of the hook names does not seem to be valid, "
                'each hook name should be in the format "[module-name]".',
                field="hooks_for_activity",
            )
    return hooks


def validate_metrics_for_operation(value: str | list[str] | None) -> list[str]:
    metrics = split_list(value)
    for metric in metrics:
        if not _METRIC_RE.fullmatch(metric):
            raise FormatError(
                "At least one of the metric names does not seem to be valid, "
                "use alphanumeric characters and underscores only.",
                field="metrics_for_operation",
            )
    return metrics


def validate_location_parameter_name(value: str) -> str:
    name = _text(value).strip()
    pattern = re.escape(LOCATION_PARAMETER_PREFIX) + _PARAMETER_TAIL
    if not re.fullmatch(pattern, name):
        raise FormatError(
            "The Location parameter name is not valid. The format should be "
            f'"{LOCATION_PARAMETER_PREFIX}[vendor name].[module name].[optional module-suffix]".',
            field="location_parameter_name",
        )
    return name


def validate_operation_parameter_names(value: str | list[str] | None) -> list[str]:
    names = split_list(value)
    pattern = re.compile(re.escape(OPERATION_PARAMETER_PREFIX) + _PARAMETER_TAIL)
    for name in names:
        if not pattern.fullmatch(name):
            raise FormatError(
                "At least one of the Operation parameter names does not seem to be valid. "
                "Each of them should be in the format "
                f'"{OPERATION_PARAMETER_PREFIX}[vendor-name].[module-name].[optional module-suffix]".',
                field="operation_parameter_names",
            )
    return names
