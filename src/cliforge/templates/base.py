"""Template, file and generator configuration definitions."""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cliforge.errors import ErrorContext, TemplateError
from cliforge.prompts.base import AnswerSet

# 1.2.3, ^1.2.3, ~1.2.3 with optional prerelease/build suffix
VERSION_SPEC_RE = re.compile(
    r"^[\^~]?\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$"
)

ContentProducer = str | Callable[[AnswerSet], str]
PostInstallHook = Callable[[Path, AnswerSet], Awaitable[None] | None]


@dataclass(frozen=True)
class FileSpec:
    """A file the generator writes into the project.

    ``content`` is either literal text or a function of the answers.
    Files without a condition are always written.
    """

    path: str
    content: ContentProducer
    condition: Callable[[AnswerSet], bool] | None = None

    def is_included(self, answers: AnswerSet) -> bool:
        return self.condition is None or bool(self.condition(answers))

    def render(self, answers: AnswerSet) -> str:
        if callable(self.content):
            return self.content(answers)
        return self.content


@dataclass(frozen=True)
class ManifestDependencies:
    """Runtime, dev and peer dependency maps (package name -> version)."""

    runtime: dict[str, str] = field(default_factory=dict)
    dev: dict[str, str] = field(default_factory=dict)
    peer: dict[str, str] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (self.runtime or self.dev or self.peer)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {
            "runtime": dict(self.runtime),
            "dev": dict(self.dev),
            "peer": dict(self.peer),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ManifestDependencies:
        """Create from a dictionary with optional runtime/dev/peer maps."""

        def _section(key: str) -> dict[str, str]:
            raw = data.get(key) or {}
            if not isinstance(raw, dict):
                raise TemplateError(
                    f"Dependency section '{key}' must be a mapping",
                    ErrorContext(operation="loadTemplate"),
                )
            return {str(k): str(v) for k, v in raw.items()}

        return cls(
            runtime=_section("runtime"), dev=_section("dev"), peer=_section("peer")
        )


@dataclass(frozen=True)
class TemplateDefinition:
    """A named bundle of files, manifest declarations and a post-install hook."""

    name: str
    description: str
    files: tuple[FileSpec, ...] = ()
    dependencies: ManifestDependencies | None = None
    scripts: dict[str, str] = field(default_factory=dict)
    post_install: PostInstallHook | None = None
    source: Path | None = None  # Directory the template was loaded from

    def __post_init__(self) -> None:
        if not isinstance(self.files, tuple):
            object.__setattr__(self, "files", tuple(self.files))


@dataclass(frozen=True)
class GeneratorConfig:
    """Everything the generator needs for one run."""

    project_name: str
    template: str
    answers: AnswerSet
    output_root: Path

    @property
    def project_path(self) -> Path:
        return Path(self.output_root) / self.project_name


def validate_template(template: TemplateDefinition) -> None:
    """Check a template definition for structural problems.

    Raises:
        TemplateError: If the name is empty, a file path is empty or absolute,
            or a dependency version is not a 1.2.3 / ^1.2.3 / ~1.2.3 spec.
    """
    context = ErrorContext(operation="validateTemplate", template=template.name or None)
    if not template.name:
        raise TemplateError("Template name is required", context)

    for spec in template.files:
        if not spec.path or Path(spec.path).is_absolute():
            raise TemplateError(
                f"Template '{template.name}' has an invalid file path: {spec.path!r}",
                context,
            )

    if template.dependencies is None:
        return
    for section, deps in template.dependencies.to_dict().items():
        for package, version in deps.items():
            if not VERSION_SPEC_RE.match(version):
                raise TemplateError(
                    f"Template '{template.name}' has an invalid {section} version "
                    f"for '{package}': {version!r}",
                    context,
                )


def find_template(
    templates: dict[str, TemplateDefinition], name: str
) -> TemplateDefinition:
    """Look up a template by name.

    Raises:
        TemplateError: If no template has that name.
    """
    template = templates.get(name)
    if template is None:
        raise TemplateError(
            f"Template '{name}' not found",
            ErrorContext(
                operation="findTemplate",
                template=name,
                additional_info={"available": sorted(templates)},
            ),
        )
    return template
