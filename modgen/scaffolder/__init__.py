"""Bundle scaffolder -- renders CampaignChain bundles from Jinja2 templates.

Quick usage::

    from modgen.scaffolder import ModuleGenerator

    result = ModuleGenerator().generate(bundle)
    if not result.success:
        print(result.errors)
"""

from modgen.scaffolder.generator import GenerationResult, ModuleGenerator
from modgen.scaffolder.templates import TemplateRenderer

__all__ = [
    "GenerationResult",
    "ModuleGenerator",
    "TemplateRenderer",
]
