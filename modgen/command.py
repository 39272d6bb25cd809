"""Command-line entry point for modgen.

Usage::

    modgen generate:module
    modgen generate:module -n --module-type=operation --vendor-name=Acme \\
        --modules="twitter::Post Update::true:Clicks,Likes" ...
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, TextIO

from rich.console import Console

from .collector import InputCollector, QuestionHelper
from .config import GeneratorConfig
from .exceptions import FormatError, GenerationAborted, MissingFieldError
from .models import BundleDefinition
from .scaffolder import ModuleGenerator, TemplateRenderer
from .utils import (
    console,
    print_error,
    print_file_list,
    print_section_header,
    print_success,
    print_summary_table,
    print_warning,
)

OPTION_FIELDS: tuple[str, ...] = (
    "module_type",
    "vendor_name",
    "author_name",
    "author_email",
    "package_license",
    "package_website",
    "package_description",
    "namespace",
    "bundle_name",
    "package_name",
    "dir",
    "routing",
    "modules",
)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modgen",
        description="Scaffold CampaignChain modules and bundles.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    gen = subparsers.add_parser(
        "generate:module",
        help="Generates a CampaignChain module",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Inline module records (--modules, repeatable) are colon-separated:\n"
            "  name:suffix:display name:description[:type-specific fields]\n"
            "  operation: ...:owns_location:metrics\n"
            "  activity:  ...:channels:hooks[:location parameter:equals operation:"
            "operation parameters]\n"
        ),
    )
    gen.add_argument("--module-type", help="Module type (operation, activity, channel, ...)")
    gen.add_argument("--vendor-name", help="Vendor name, e.g. Acme")
    gen.add_argument("--author-name", help="Author name")
    gen.add_argument("--author-email", help="Author email address")
    gen.add_argument("--package-license", help="Package license, e.g. Apache-2.0")
    gen.add_argument("--package-website", help="Package website URL")
    gen.add_argument("--package-description", help="Package description")
    gen.add_argument("--namespace", help="Bundle namespace, e.g. Acme\\Operation\\TwitterBundle")
    gen.add_argument("--bundle-name", help="Bundle name, e.g. acme/operation-twitter")
    gen.add_argument("--package-name", help="Package name, e.g. acme/operation-twitter")
    gen.add_argument("--dir", help="Directory the bundle is created in")
    gen.add_argument("--routing", help="Generate the routing file (yes/no)")
    gen.add_argument(
        "--modules",
        action="append",
        default=None,
        help="Inline module record; repeat for every module of the bundle",
    )
    gen.add_argument(
        "--no-interaction",
        "-n",
        action="store_true",
        help="Do not ask any interactive question",
    )
    return parser


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------


def _summary(bundle: BundleDefinition) -> dict[str, str]:
    return {
        "Module type": bundle.module_type,
        "Vendor": bundle.vendor_name,
        "Modules": ", ".join(
            m.identifier(bundle.vendor_name) for m in bundle.modules
        ),
        "Namespace": bundle.namespace,
        "Bundle name": bundle.bundle_name,
        "Package name": bundle.package_name,
        "Target directory": str(bundle.bundle_dir),
        "Routing": bundle.routing,
    }


def run(
    args: argparse.Namespace,
    out: Console | None = None,
    stream: TextIO | None = None,
    interactive: bool | None = None,
    config: GeneratorConfig | None = None,
    renderer: TemplateRenderer | None = None,
) -> int:
    """Execute ``generate:module`` for parsed *args* and return the exit code."""
    out = out or console
    config = config or GeneratorConfig.from_env()
    if interactive is None:
        interactive = not args.no_interaction and sys.stdin.isatty()

    options: dict[str, Any] = {name: getattr(args, name) for name in OPTION_FIELDS}
    questions = QuestionHelper(out, stream)
    collector = InputCollector(options, interactive, questions, config)

    try:
        bundle = collector.collect()
        print_summary_table(_summary(bundle), title="Bundle", out=out)
        if bundle.bundle_dir.exists():
            print_warning(
                f"Existing files will be overwritten in {bundle.bundle_dir}",
                out=out,
            )
        if interactive and not questions.confirm("Do you confirm generation?", "yes"):
            raise GenerationAborted()
    except (MissingFieldError, FormatError, GenerationAborted) as exc:
        print_error(f"Error: {exc}", out=out)
        return 1
    except (EOFError, KeyboardInterrupt):
        print_error(f"Error: {GenerationAborted()}", out=out)
        return 1

    generator = ModuleGenerator(renderer or TemplateRenderer(config.templates_path))
    result = generator.generate(bundle)

    print_file_list(result.written, result.bundle_dir, "created", out=out)
    print_file_list(result.removed, result.bundle_dir, "removed", out=out)

    if result.errors:
        print_section_header("The command was not able to configure everything", out=out)
        for error in result.errors:
            print_error(f"- {error}", out=out)
        return 1

    print_success("You can now start using the generated code!", out=out)
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``modgen``."""
    args = build_parser().parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
