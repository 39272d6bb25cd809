"""Bundle generation.

Takes a validated ``BundleDefinition`` and writes the bundle skeleton, the
per-module files selected by module type, the per-bundle service
configuration and the shared manifest files.  Every file operation is
attempted independently; failures are collected into the result instead of
stopping the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..exceptions import RenderError
from ..models import BundleDefinition, ModuleDescriptor
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# File tables: (template, output path relative to the bundle directory)
# ---------------------------------------------------------------------------

SKELETON_FILES: list[tuple[str, str]] = [
    ("bundle/Bundle.php.j2", "{bundle_class_name}.php"),
    ("bundle/Extension.php.j2", "DependencyInjection/{extension_class_name}.php"),
    ("bundle/Configuration.php.j2", "DependencyInjection/Configuration.php"),
    ("bundle/services.yml.j2", "Resources/config/services.yml"),
    ("bundle/routing.yml.j2", "Resources/config/routing.yml"),
]

MODULE_FILES: dict[str, list[tuple[str, str]]] = {
    "operation": [
        ("job/Job.php.j2", "Job/{class_name}Job.php"),
        ("job/Report.php.j2", "Job/{class_name}Report.php"),
        ("form/OperationType.php.j2", "Form/Type/{class_name}OperationType.php"),
        ("entity/Entity.php.j2", "Entity/{class_name}.php"),
        ("views/read.html.twig.j2", "Resources/views/read{file_suffix}.html.twig"),
        (
            "public/css/base.css.j2",
            "Resources/public/css/{module_name_underscore}{file_suffix}.css",
        ),
    ],
    "activity": [
        ("controller/ActivityHandler.php.j2", "Controller/{class_name}Handler.php"),
    ],
    "campaign": [
        ("service/CampaignJob.php.j2", "Service/Job.php"),
    ],
    "channel": [
        ("controller/ChannelController.php.j2", "Controller/{class_name}Controller.php"),
    ],
    "report": [
        ("controller/ReportController.php.j2", "Controller/{class_name}Controller.php"),
    ],
}

CHANNEL_ICON = "public/images/icons/channel.png"
CHANNEL_ICON_SIZES: tuple[str, ...] = ("16x16", "24x24", "32x32")

BUNDLE_FILES: dict[str, list[tuple[str, str]]] = {
    "activity": [("config/activity_services.yml.j2", "Resources/config/services.yml")],
    "location": [("config/location_services.yml.j2", "Resources/config/services.yml")],
    "operation": [
        ("config/operation_services.yml.j2", "Resources/config/services.yml"),
        ("views/fields.html.twig.j2", "Resources/views/Form/fields.html.twig"),
    ],
    "campaign": [("config/campaign_services.yml.j2", "Resources/config/services.yml")],
}

SHARED_FILES: list[tuple[str, str]] = [
    ("config/campaignchain.yml.j2", "campaignchain.yml"),
    ("config/composer.json.j2", "composer.json"),
    ("config/config.yml.j2", "Resources/config/config.yml"),
]

ROUTING_FILE: tuple[str, str] = ("config/routing.yml.j2", "Resources/config/routing.yml")


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass
class GenerationResult:
    """Outcome of one ``ModuleGenerator.generate`` call."""

    bundle_dir: Path
    written: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ModuleGenerator:
    """Renders a CampaignChain bundle from a ``BundleDefinition``.

    The renderer is the only collaborator touching the filesystem, so tests
    can hand in a mock and assert on the render calls.
    """

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    # -- Parameter assembly ------------------------------------------------

    def build_parameters(self, bundle: BundleDefinition) -> dict[str, Any]:
        """Bundle-level parameters shared by every render call.

        ``route_prefix`` is only present when routing generation was
        requested.
        """
        parameters: dict[str, Any] = {
            "namespace": bundle.namespace,
            "namespace_escaped": bundle.namespace.replace("\\", "\\\\"),
            "bundle_name": bundle.bundle_name,
            "bundle_class_name": bundle.bundle_class_name,
            "extension_class_name": bundle.extension_class_name,
            "module_type": bundle.module_type,
            "modules": [m.template_parameters(bundle.vendor_name) for m in bundle.modules],
            "package_license": bundle.package_license,
            "package_website": bundle.package_website,
            "vendor_name": bundle.vendor_name,
            "author_name": bundle.author_name,
            "author_email": bundle.author_email,
            "package_name": bundle.package_name,
            "package_description": bundle.package_description,
            "gen_routing": bundle.routing,
        }
        if bundle.gen_routing:
            parameters["route_prefix"] = bundle.route_prefix
        return parameters

    def module_parameters(
        self, parameters: dict[str, Any], module: ModuleDescriptor
    ) -> dict[str, Any]:
        """Merge one module's parameters over the bundle parameters."""
        return {
            **parameters,
            **module.template_parameters(parameters["vendor_name"]),
            "file_suffix": module.file_suffix,
        }

    # -- Public API --------------------------------------------------------

    def generate(self, bundle: BundleDefinition) -> GenerationResult:
        """Write the bundle and return what was written, removed or failed."""
        bundle_dir = bundle.bundle_dir
        result = GenerationResult(bundle_dir=bundle_dir)
        module_type = bundle.module_type
        parameters = self.build_parameters(bundle)

        # 1. Bundle skeleton
        for template, output in SKELETON_FILES:
            self._render(result, template, output, parameters)

        # 2. Per-module files
        for module in bundle.modules:
            module_params = self.module_parameters(parameters, module)
            for template, output in MODULE_FILES.get(module_type, []):
                self._render(result, template, output, module_params)
            if module_type == "channel":
                icon_name = module.module_name_hyphen
                if module.module_name_suffix:
                    icon_name += "-" + module.module_name_suffix_hyphen
                for size in CHANNEL_ICON_SIZES:
                    self._copy(
                        result,
                        CHANNEL_ICON,
                        f"Resources/public/images/icons/{size}/{icon_name}.png",
                    )

        # 3. Per-bundle service configuration
        for template, output in BUNDLE_FILES.get(module_type, []):
            self._render(result, template, output, parameters)

        # 4. Shared manifests and routing
        for template, output in SHARED_FILES:
            self._render(result, template, output, parameters)
        if bundle.gen_routing:
            self._render(result, *ROUTING_FILE, parameters)
        else:
            self._remove(result, ROUTING_FILE[1])

        return result

    # -- Internal helpers --------------------------------------------------

    def _render(
        self,
        result: GenerationResult,
        template: str,
        output: str,
        parameters: dict[str, Any],
    ) -> None:
        try:
            path = result.bundle_dir / output.format(**parameters)
            result.written.append(self.renderer.render_to_file(template, path, parameters))
        except (RenderError, OSError, KeyError) as exc:
            result.errors.append(_describe(template, exc))

    def _copy(self, result: GenerationResult, asset: str, output: str) -> None:
        try:
            result.written.append(self.renderer.copy(asset, result.bundle_dir / output))
        except (RenderError, OSError) as exc:
            result.errors.append(_describe(asset, exc))

    def _remove(self, result: GenerationResult, output: str) -> None:
        path = result.bundle_dir / output
        try:
            if self.renderer.remove(path):
                result.removed.append(path)
        except (RenderError, OSError) as exc:
            result.errors.append(_describe(output, exc))


def _describe(target: str, exc: Exception) -> str:
    if isinstance(exc, RenderError):
        return str(exc)
    if isinstance(exc, KeyError):
        return f"{target}: missing parameter {exc}"
    return f"{target}: {exc}"
