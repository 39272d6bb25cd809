"""Shared pytest fixtures for the modgen test suite.

Provides reusable fixtures for:
- A recording Rich console
- Complete option sets for non-interactive runs
- Pre-built bundle definitions for the generator tests
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from modgen.models import BundleDefinition, ModuleDescriptor


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------


@pytest.fixture
def record_console() -> Console:
    """A console that writes into a buffer instead of the terminal."""
    return Console(file=io.StringIO(), width=120, force_terminal=False, color_system=None)


# ---------------------------------------------------------------------------
# Option sets
# ---------------------------------------------------------------------------


@pytest.fixture
def operation_options(tmp_path: Path) -> dict[str, Any]:
    """Every option needed to generate an operation bundle non-interactively."""
    return {
        "module_type": "operation",
        "vendor_name": "Acme",
        "author_name": "Jane Doe",
        "author_email": "jane.doe@acme.org",
        "package_license": "Apache-2.0",
        "package_website": "https://www.acme.org",
        "package_description": "Posts updates to Twitter.",
        "namespace": "Acme\\Operation\\TwitterBundle",
        "bundle_name": "acme/operation-twitter",
        "package_name": "acme/operation-twitter",
        "dir": str(tmp_path / "src"),
        "routing": "yes",
        "modules": ["twitter::Post Update:Posts a status update:true:Clicks,Likes"],
    }


@pytest.fixture
def activity_options(tmp_path: Path) -> dict[str, Any]:
    """Every option needed to generate an activity bundle non-interactively."""
    return {
        "module_type": "activity",
        "vendor_name": "Acme",
        "author_name": "Jane Doe",
        "author_email": "jane.doe@acme.org",
        "package_license": "Apache-2.0",
        "package_website": "https://www.acme.org",
        "package_description": "",
        "namespace": "Acme\\Activity\\TwitterBundle",
        "bundle_name": "acme/activity-twitter",
        "package_name": "acme/activity-twitter",
        "dir": str(tmp_path / "src"),
        "routing": "no",
        "modules": [
            "twitter:update-status:Update Status:Tweets a message:"
            "acme/channel-twitter/acme-twitter:campaignchain-due,campaignchain-assignee",
        ],
    }


# ---------------------------------------------------------------------------
# Bundle definitions
# ---------------------------------------------------------------------------


def _make_bundle(tmp_path: Path, module_type: str = "operation", **overrides: Any) -> BundleDefinition:
    """Build a valid ``BundleDefinition`` for *module_type*."""
    modules = overrides.pop(
        "modules",
        [
            ModuleDescriptor(
                module_name="twitter",
                display_name="Post Update",
                description="Posts a status update",
                owns_location="true" if module_type == "operation" else None,
                metrics_for_operation=["Clicks", "Likes"] if module_type == "operation" else [],
            )
        ],
    )
    fields: dict[str, Any] = {
        "module_type": module_type,
        "vendor_name": "Acme",
        "author_name": "Jane Doe",
        "author_email": "jane.doe@acme.org",
        "package_license": "Apache-2.0",
        "package_website": "https://www.acme.org",
        "package_description": "A test bundle.",
        "namespace": f"Acme\\{module_type.capitalize()}\\TwitterBundle",
        "bundle_name": f"acme/{module_type}-twitter",
        "package_name": f"acme/{module_type}-twitter",
        "target_dir": tmp_path / "src",
        "routing": "yes",
        "modules": modules,
    }
    fields.update(overrides)
    return BundleDefinition(**fields)


@pytest.fixture
def operation_bundle(tmp_path: Path) -> BundleDefinition:
    return _make_bundle(tmp_path, "operation")


@pytest.fixture
def bundle_factory(tmp_path: Path):
    """Build bundles of any module type rooted in ``tmp_path``."""

    def _factory(module_type: str = "operation", **overrides: Any) -> BundleDefinition:
        return _make_bundle(tmp_path, module_type, **overrides)

    return _factory
