"""Template loading and discovery from directories on disk.

A template directory contains ``template.yaml`` and a ``files/`` tree whose
contents are written to the project verbatim.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from cliforge.errors import ErrorContext, TemplateError
from cliforge.templates.base import (
    FileSpec,
    ManifestDependencies,
    TemplateDefinition,
    validate_template,
)

logger = logging.getLogger(__name__)

# Constants
TEMPLATE_DIRNAME = "templates"
TEMPLATE_YAML = "template.yaml"
FILES_DIRNAME = "files"


def get_package_templates_path() -> Path:
    """Get path to package-bundled default templates."""
    return Path(__file__).parent / "default"


def get_global_templates_path() -> Path:
    """Get path to global user templates: ~/.cliforge/templates/."""
    return Path.home() / ".cliforge" / TEMPLATE_DIRNAME


def get_local_templates_path() -> Path:
    """Get path to project-specific templates: ./.cliforge/templates/."""
    return Path.cwd() / ".cliforge" / TEMPLATE_DIRNAME


def discover_template_dirs(base_path: Path) -> dict[str, Path]:
    """Discover template directories within a base path.

    Returns dict mapping directory name -> template directory path.
    Only includes directories containing template.yaml.
    """
    templates: dict[str, Path] = {}
    if not base_path.exists():
        return templates

    for item in sorted(base_path.iterdir()):
        if item.is_dir() and (item / TEMPLATE_YAML).exists():
            templates[item.name] = item

    return templates


def _load_files(files_dir: Path) -> tuple[FileSpec, ...]:
    if not files_dir.is_dir():
        return ()
    paths = sorted(p for p in files_dir.rglob("*") if p.is_file())
    return tuple(
        FileSpec(
            path=p.relative_to(files_dir).as_posix(),
            content=p.read_text(encoding="utf-8"),
        )
        for p in paths
    )


def load_template_from_dir(template_dir: Path) -> TemplateDefinition | None:
    """Load a TemplateDefinition from a template directory.

    Returns None if template.yaml is missing or is not a YAML mapping.

    Raises:
        TemplateError: If the definition is structurally invalid.
    """
    template_yaml = template_dir / TEMPLATE_YAML
    if not template_yaml.exists():
        return None

    try:
        with template_yaml.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.warning("Ignoring template %s: invalid YAML (%s)", template_dir, e)
        return None
    if not isinstance(data, dict):
        logger.warning(
            "Ignoring template %s: %s is not a mapping", template_dir, TEMPLATE_YAML
        )
        return None

    name = str(data.get("name") or template_dir.name)
    description = str(data.get("description", ""))

    scripts_raw = data.get("scripts") or {}
    if not isinstance(scripts_raw, dict):
        raise TemplateError(
            f"Template '{name}': scripts must be a mapping",
            ErrorContext(
                operation="loadTemplate", template=name, file_path=str(template_yaml)
            ),
        )
    scripts = {str(k): str(v) for k, v in scripts_raw.items()}

    deps_raw = data.get("dependencies")
    dependencies: ManifestDependencies | None = None
    if deps_raw is not None:
        if not isinstance(deps_raw, dict):
            raise TemplateError(
                f"Template '{name}': dependencies must be a mapping",
                ErrorContext(
                    operation="loadTemplate", template=name, file_path=str(template_yaml)
                ),
            )
        dependencies = ManifestDependencies.from_dict(deps_raw)

    template = TemplateDefinition(
        name=name,
        description=description,
        files=_load_files(template_dir / FILES_DIRNAME),
        dependencies=dependencies,
        scripts=scripts,
        source=template_dir,
    )
    validate_template(template)
    return template


def load_templates_from(base_path: Path) -> dict[str, TemplateDefinition]:
    """Load every valid template under base_path, skipping broken ones."""
    templates: dict[str, TemplateDefinition] = {}
    for template_dir in discover_template_dirs(base_path).values():
        try:
            template = load_template_from_dir(template_dir)
        except TemplateError as e:
            logger.warning("Ignoring template %s: %s", template_dir, e.message)
            continue
        if template is not None:
            templates[template.name] = template
    return templates


def get_all_templates() -> dict[str, TemplateDefinition]:
    """Discover and load all templates from filesystem locations.

    Resolution order (later wins for same name):
    1. Package defaults
    2. Global (~/.cliforge/templates/)
    3. Project (./.cliforge/templates/)
    """
    templates: dict[str, TemplateDefinition] = {}
    for base_path in (
        get_package_templates_path(),
        get_global_templates_path(),
        get_local_templates_path(),
    ):
        templates.update(load_templates_from(base_path))
    return templates
