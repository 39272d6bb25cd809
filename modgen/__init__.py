"""modgen -- scaffolding for CampaignChain modules and bundles.

Quick usage::

    from modgen import BundleDefinition, ModuleDescriptor, ModuleGenerator

    bundle = BundleDefinition(...)
    result = ModuleGenerator().generate(bundle)
"""

from modgen.exceptions import (
    FormatError,
    GenerationAborted,
    MissingFieldError,
    ModgenError,
    RenderError,
)
from modgen.models import BundleDefinition, ModuleDescriptor
from modgen.scaffolder import GenerationResult, ModuleGenerator, TemplateRenderer

__version__ = "0.1.0"

__all__ = [
    "BundleDefinition",
    "FormatError",
    "GenerationAborted",
    "GenerationResult",
    "MissingFieldError",
    "ModgenError",
    "ModuleDescriptor",
    "ModuleGenerator",
    "RenderError",
    "TemplateRenderer",
]
