"""Input collection for the ``generate:module`` command.

Every field is resolved the same way: a value supplied on the command line
is validated; an absent or invalid value is asked for interactively (with a
default and a retry loop) or, in a non-interactive session, fails the whole
invocation before anything is generated.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TextIO

from rich.console import Console
from rich.prompt import Prompt

from . import naming
from .config import GeneratorConfig
from .exceptions import FormatError, MissingFieldError
from .models import BundleDefinition, ModuleDescriptor, parse_module_record
from .utils import console, print_error, print_section_header
from .validators import (
    validate_author_email,
    validate_author_name,
    validate_boolean_answer,
    validate_bundle_name,
    validate_bundle_namespace,
    validate_channels_for_activity,
    validate_description,
    validate_display_name,
    validate_hooks_for_activity,
    validate_location_parameter_name,
    validate_metrics_for_operation,
    validate_module_count,
    validate_module_name,
    validate_module_name_suffix,
    validate_module_type,
    validate_operation_parameter_names,
    validate_package_license,
    validate_package_name,
    validate_package_website_url,
    validate_target_dir,
    validate_true_false,
    validate_vendor_name,
)

Validator = Callable[[Any], Any]

DEFAULT_ACTIVITY_HOOKS = "campaignchain-due,campaignchain-assignee"


def _optional(validator: Validator) -> Validator:
    """Wrap *validator* so that a blank answer yields ``None``."""

    def _validate(value: Any) -> Any:
        if value is None or not str(value).strip():
            return None
        return validator(value)

    return _validate


def _display_default(module_name: str, suffix: str) -> str:
    words = (suffix or module_name).replace("_", "-").split("-")
    return " ".join(word.capitalize() for word in words if word)


# ---------------------------------------------------------------------------
# Prompting
# ---------------------------------------------------------------------------


class _LineReader:
    """Wraps an answer stream and records when it runs dry."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self.exhausted = False

    def readline(self) -> str:
        line = self._stream.readline()
        if not line:
            self.exhausted = True
        return line


class QuestionHelper:
    """Asks questions on a Rich console and loops until the answer validates.

    ``stream`` replaces stdin, which lets tests feed answers from a
    ``StringIO``.  Once the stream is exhausted an answer that fails
    validation raises ``EOFError`` instead of asking again.
    """

    def __init__(self, out: Console | None = None, stream: TextIO | None = None) -> None:
        self.console = out or console
        self.stream = _LineReader(stream) if stream is not None else None

    def section(self, title: str) -> None:
        print_section_header(title, out=self.console)

    def ask(
        self,
        question: str,
        default: str | None = None,
        validator: Validator | None = None,
        help_text: str | None = None,
    ) -> Any:
        """Ask *question* until *validator* accepts the answer.

        An empty answer is replaced by *default*.  Validation failures are
        printed and the question is asked again.
        """
        if help_text:
            self.console.print(help_text, highlight=False)
        while True:
            kwargs: dict[str, Any] = {"console": self.console, "stream": self.stream}
            if default:
                kwargs["default"] = default
            answer = Prompt.ask(f"[green]{question}[/green]", **kwargs)
            answer = (answer or "").strip()
            if not answer and default is not None:
                answer = default
            if validator is None:
                return answer
            try:
                return validator(answer)
            except FormatError as exc:
                print_error(str(exc), out=self.console)
                if self.stream is not None and self.stream.exhausted:
                    raise EOFError("no more answers to read") from exc

    def confirm(self, question: str, default: str = "yes") -> bool:
        return self.ask(question, default, validate_boolean_answer) == "yes"


# ---------------------------------------------------------------------------
# Collector
# ---------------------------------------------------------------------------


class InputCollector:
    """Turns command-line options and answers into a ``BundleDefinition``.

    Args:
        options: Raw option values keyed by field name; ``None`` means the
            option was not given.  ``modules`` is a list of inline records.
        interactive: Whether missing or invalid values may be asked for.
        questions: Prompt helper used in interactive sessions.
        config: Source of the defaults offered in prompts.
    """

    def __init__(
        self,
        options: dict[str, Any],
        interactive: bool,
        questions: QuestionHelper | None = None,
        config: GeneratorConfig | None = None,
    ) -> None:
        self.options = options
        self.interactive = interactive
        self.questions = questions or QuestionHelper()
        self.config = config or GeneratorConfig()

    # -- Field resolution --------------------------------------------------

    def _resolve(
        self,
        name: str,
        value: Any,
        question: str,
        validator: Validator,
        default: str | None = None,
        required: bool = True,
        fallback: str | None = None,
        help_text: str | None = None,
    ) -> Any:
        if value is not None:
            try:
                return validator(value)
            except FormatError as exc:
                if exc.field is None:
                    exc.field = name
                if not self.interactive:
                    raise
                print_error(str(exc), out=self.questions.console)

        if not self.interactive:
            if required:
                raise MissingFieldError(name)
            return validator(fallback) if fallback is not None else None

        return self.questions.ask(question, default, validator, help_text)

    def _option(self, name: str, question: str, validator: Validator, **kwargs: Any) -> Any:
        return self._resolve(name, self.options.get(name), question, validator, **kwargs)

    # -- Public API --------------------------------------------------------

    def collect(self) -> BundleDefinition:
        """Resolve every field and return the validated bundle definition."""
        if self.interactive:
            self.questions.section("Welcome to the CampaignChain module generator")

        module_type = self._option(
            "module_type",
            "Module type",
            validate_module_type,
            help_text="Supported types: activity, campaign, channel, location, "
            "milestone, operation, report, security, distribution, hook.",
        )
        vendor_name = self._option("vendor_name", "Vendor name", validate_vendor_name)

        modules = self.collect_modules(module_type, vendor_name)

        if self.interactive:
            self.questions.section("Package metadata")
        author_name = self._option("author_name", "Author name", validate_author_name)
        author_email = self._option("author_email", "Author email", validate_author_email)
        package_license = self._option(
            "package_license",
            "Package license",
            validate_package_license,
            default=self.config.default_license,
        )
        package_website = self._option(
            "package_website",
            "Package website",
            validate_package_website_url,
            default=self.config.default_website,
        )
        package_description = self._option(
            "package_description",
            "Package description",
            validate_description,
            default="",
            required=False,
            fallback="",
        )

        if self.interactive:
            self.questions.section("Bundle identity")
        namespace = self._option(
            "namespace",
            "Bundle namespace",
            validate_bundle_namespace,
            default=naming.default_namespace(vendor_name, module_type, modules),
            help_text="The namespace must end with Bundle and start with a vendor "
            "namespace, e.g. Acme\\Operation\\TwitterBundle.",
        )
        bundle_name = self._option(
            "bundle_name",
            "Bundle name",
            lambda value: validate_bundle_name(value, module_type),
            default=naming.default_bundle_name(vendor_name, module_type, modules),
        )
        package_name = self._option(
            "package_name",
            "Package name",
            lambda value: validate_package_name(value, module_type),
            default=naming.default_package_name(vendor_name, module_type, modules),
            help_text=f"The package name must look like vendor/{module_type}-name.",
        )
        target_dir = self._option(
            "dir",
            "Target directory",
            validate_target_dir,
            default=str(self.config.default_target_dir),
        )
        routing = self._option(
            "routing",
            "Do you want to generate the routing?",
            validate_boolean_answer,
            default=self.config.default_routing,
            required=False,
            fallback=self.config.default_routing,
        )

        return BundleDefinition(
            module_type=module_type,
            vendor_name=vendor_name,
            author_name=author_name,
            author_email=author_email,
            package_license=package_license,
            package_website=package_website,
            package_description=package_description,
            namespace=namespace,
            bundle_name=bundle_name,
            package_name=package_name,
            target_dir=target_dir,
            routing=routing,
            modules=modules,
        )

    # -- Modules -----------------------------------------------------------

    def collect_modules(self, module_type: str, vendor_name: str) -> list[ModuleDescriptor]:
        """Collect the module batch from ``--modules`` records or prompts."""
        records = self.options.get("modules") or []
        modules: list[ModuleDescriptor] = []

        if records:
            for record in records:
                raw = parse_module_record(record, module_type)
                modules.append(self.collect_module(module_type, vendor_name, modules, raw))
            return validate_module_count(modules)

        if not self.interactive:
            raise MissingFieldError("modules")

        while True:
            self.questions.section(f"Module {len(modules) + 1}")
            modules.append(self.collect_module(module_type, vendor_name, modules))
            if not self.questions.confirm("Do you want to add another module?", "no"):
                break
        return validate_module_count(modules)

    def collect_module(
        self,
        module_type: str,
        vendor_name: str,
        modules: list[ModuleDescriptor],
        raw: dict[str, str] | None = None,
    ) -> ModuleDescriptor:
        """Collect one module descriptor.

        The first module of a batch sets the module name shared by the rest
        of the batch; every later module needs its own unique suffix.
        """
        raw = raw or {}
        first = not modules

        def value(name: str) -> str | None:
            # Blank record positions count as not supplied.
            item = raw.get(name)
            return item if item else None

        if first:
            module_name = self._resolve(
                "module_name", value("module_name"), "Module name", validate_module_name
            )
            suffix = self._resolve(
                "module_name_suffix",
                raw.get("module_name_suffix"),
                "Module name suffix (optional)",
                validate_module_name_suffix,
                default="",
            )
        else:
            module_name = modules[0].module_name
            supplied = value("module_name")
            if supplied is not None and supplied != module_name:
                raise FormatError(
                    f'All modules of a bundle share the module name "{module_name}".',
                    field="module_name",
                )
            suffix = self._resolve(
                "module_name_suffix",
                raw.get("module_name_suffix"),
                "Module name suffix",
                lambda answer: validate_module_name_suffix(answer, modules, required=True),
            )

        display_name = self._resolve(
            "display_name",
            value("display_name"),
            "Display name",
            validate_display_name,
            default=_display_default(module_name, suffix),
        )
        description = self._resolve(
            "description",
            raw.get("description"),
            "Description",
            validate_description,
            default="",
            required=False,
            fallback="",
        )

        fields: dict[str, Any] = {
            "module_name": module_name,
            "module_name_suffix": suffix,
            "display_name": display_name,
            "description": description,
        }
        if module_type == "operation":
            fields.update(self._operation_fields(raw, value))
        elif module_type == "activity":
            fields.update(self._activity_fields(raw, value, vendor_name, module_name, suffix))
        return ModuleDescriptor(**fields)

    def _operation_fields(self, raw: dict[str, str], value: Callable) -> dict[str, Any]:
        owns_location = self._resolve(
            "owns_location",
            value("owns_location"),
            "Does the operation own a location? (true/false)",
            validate_true_false,
            default="false",
            required=False,
            fallback="false",
        )
        metrics = self._resolve(
            "metrics_for_operation",
            raw.get("metrics_for_operation"),
            "Metrics (comma-separated, optional)",
            validate_metrics_for_operation,
            default="",
            required=False,
            fallback="",
        )
        return {"owns_location": owns_location, "metrics_for_operation": metrics}

    def _activity_fields(
        self,
        raw: dict[str, str],
        value: Callable,
        vendor_name: str,
        module_name: str,
        suffix: str,
    ) -> dict[str, Any]:
        channels = self._resolve(
            "channels_for_activity",
            raw.get("channels_for_activity"),
            "Channels (comma-separated vendor/channel-name/identifier)",
            validate_channels_for_activity,
            default="",
            required=False,
            fallback="",
        )
        hooks = self._resolve(
            "hooks_for_activity",
            raw.get("hooks_for_activity"),
            "Hooks (comma-separated)",
            validate_hooks_for_activity,
            default=DEFAULT_ACTIVITY_HOOKS,
            required=False,
            fallback="",
        )
        location_default = ".".join(
            part
            for part in (
                "campaignchain.location",
                naming.underscore(vendor_name),
                naming.underscore(module_name),
                naming.underscore(suffix),
            )
            if part
        )
        location_parameter_name = self._resolve(
            "location_parameter_name",
            raw.get("location_parameter_name"),
            "Location parameter name (optional)",
            _optional(validate_location_parameter_name),
            default=location_default,
            required=False,
            fallback="",
        )
        equals_operation = self._resolve(
            "equals_operation",
            value("equals_operation"),
            "Does the activity equal its operation? (true/false)",
            validate_true_false,
            default="true",
            required=False,
            fallback="true",
        )
        operation_parameter_names: list[str] = []
        if equals_operation == "false":
            operation_parameter_names = self._resolve(
                "operation_parameter_names",
                raw.get("operation_parameter_names"),
                "Operation parameter names (comma-separated)",
                validate_operation_parameter_names,
                default="",
                required=False,
                fallback="",
            )
        return {
            "channels_for_activity": channels,
            "hooks_for_activity": hooks,
            "location_parameter_name": location_parameter_name,
            "equals_operation": equals_operation,
            "operation_parameter_names": operation_parameter_names,
        }
