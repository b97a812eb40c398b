"""Template definitions, discovery and project generation."""

from cliforge.templates.base import (
    FileSpec,
    GeneratorConfig,
    ManifestDependencies,
    TemplateDefinition,
    find_template,
    validate_template,
)
from cliforge.templates.builtin import BUILTIN_TEMPLATES
from cliforge.templates.generator import (
    DEFAULT_INSTALL_COMMAND,
    MANIFEST_FILENAME,
    ProjectGenerator,
    build_manifest,
)
from cliforge.templates.loader import (
    get_all_templates,
    get_global_templates_path,
    get_local_templates_path,
    get_package_templates_path,
    load_template_from_dir,
)

__all__ = [
    "BUILTIN_TEMPLATES",
    "DEFAULT_INSTALL_COMMAND",
    "FileSpec",
    "GeneratorConfig",
    "MANIFEST_FILENAME",
    "ManifestDependencies",
    "ProjectGenerator",
    "TemplateDefinition",
    "build_manifest",
    "find_template",
    "get_all_templates",
    "get_global_templates_path",
    "get_local_templates_path",
    "get_package_templates_path",
    "load_template_from_dir",
    "validate_template",
]
