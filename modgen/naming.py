"""Name derivation helpers.

Pure string transforms that turn the user's naming fragments into the
conventional class names, identifiers, namespaces and package names of a
CampaignChain bundle.  Nothing here validates input; callers run the
validators first.
"""

from __future__ import annotations

import re

from .config import BUNDLE_SUFFIX
from .exceptions import FormatError


def _upper_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def to_pascal(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", value)
    return "".join(_upper_first(word) for word in parts if word)


def underscore(value: str) -> str:
    """``Mail-Chimp`` -> ``mail_chimp``."""
    return value.replace("-", "_").lower()


def hyphenate(value: str) -> str:
    """``Mail_Chimp`` -> ``mail-chimp``."""
    return value.replace("_", "-").lower()


# ---------------------------------------------------------------------------
# Module-level derivations
# ---------------------------------------------------------------------------


def derive_class_name(module_name: str, module_name_suffix: str = "") -> str:
    """Build the CamelCase class name for a module.

    Both fragments are split on hyphens and each word gets an upper-case
    first letter; the rest of the word is kept as typed, so the function is
    idempotent on its own output.

    Examples::

        derive_class_name("update-status") -> "UpdateStatus"
        derive_class_name("mail-chimp", "send-campaign") -> "MailChimpSendCampaign"
    """
    words = module_name.split("-")
    if module_name_suffix:
        words += module_name_suffix.split("-")
    return "".join(_upper_first(word) for word in words if word)


def derive_identifier(
    vendor_name: str, module_name: str, module_name_suffix: str = ""
) -> str:
    """Canonical module identifier, e.g. ``acme-twitter-update-status``."""
    parts = [vendor_name, module_name]
    if module_name_suffix:
        parts.append(module_name_suffix)
    return "-".join(part.lower() for part in parts)


def file_suffix(module_name_suffix: str) -> str:
    """``"update-status"`` -> ``"_update_status"``; empty stays empty."""
    if not module_name_suffix:
        return ""
    return "_" + underscore(module_name_suffix)


# ---------------------------------------------------------------------------
# Bundle-level defaults
# ---------------------------------------------------------------------------


def _first_module_name(modules: list) -> str:
    if not modules:
        raise FormatError("At least one module must be defined.", field="modules")
    first = modules[0]
    if isinstance(first, dict):
        return first["module_name"]
    return first.module_name


def default_namespace(vendor_name: str, module_type: str, modules: list) -> str:
    """``Acme\\Operation\\TwitterBundle`` for the first module of *modules*."""
    module_name = _first_module_name(modules)
    return "\\".join(
        [
            to_pascal(vendor_name),
            to_pascal(module_type),
            to_pascal(module_name) + BUNDLE_SUFFIX,
        ]
    )


def default_package_name(vendor_name: str, module_type: str, modules: list) -> str:
    """``acme/operation-twitter`` for the first module of *modules*."""
    module_name = _first_module_name(modules)
    return f"{vendor_name.lower()}/{module_type.lower()}-{hyphenate(module_name)}"


def default_bundle_name(vendor_name: str, module_type: str, modules: list) -> str:
    """``acme/operation-mail_chimp``: one hyphen only, between type and label."""
    module_name = _first_module_name(modules)
    return f"{underscore(vendor_name)}/{module_type.lower()}-{underscore(module_name)}"


def bundle_class_name(namespace: str) -> str:
    """``Acme\\Operation\\TwitterBundle`` -> ``AcmeOperationTwitterBundle``."""
    return namespace.replace("\\", "").replace("/", "")


def extension_class_name(namespace: str) -> str:
    """``Acme\\Operation\\TwitterBundle`` -> ``AcmeOperationTwitterExtension``."""
    name = bundle_class_name(namespace)
    if name.endswith(BUNDLE_SUFFIX):
        name = name[: -len(BUNDLE_SUFFIX)]
    return name + "Extension"


def namespace_path(namespace: str) -> str:
    """``Acme\\Operation\\TwitterBundle`` -> ``Acme/Operation/TwitterBundle``."""
    return namespace.replace("\\", "/")


def route_prefix(package_name: str) -> str:
    """``acme/operation-twitter`` -> ``acme_operation_twitter``."""
    return package_name.replace("/", "_").replace("-", "_")
