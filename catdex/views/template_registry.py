"""Load-once registry of compiled Jinja2 page templates."""

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from jinja2 import (
    ChainableUndefined,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateSyntaxError,
    select_autoescape,
)

from catdex.exceptions import TemplateLoadException, TemplateNotFoundException, TemplateRenderException
from catdex.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


class TemplateRegistry:
    """Immutable mapping of template name to compiled template.

    Built once at startup with ``load_all`` and shared by reference between
    request handlers. Nothing is added, removed or recompiled afterwards.

    Rendering with data that does not match the placeholders a template uses
    is not an error by default: missing values render as empty. Pass
    ``strict=True`` to ``load_all`` to make such mismatches raise instead.
    """

    def __init__(self, templates: Mapping[str, Template]):
        self._templates = MappingProxyType(dict(templates))

    @classmethod
    def load_all(
        cls,
        directory: Path | str,
        extension: str = ".html",
        strict: bool = False,
    ) -> "TemplateRegistry":
        """Compile every template file under ``directory``.

        The registry key is the file path relative to ``directory`` without
        the extension, so ``index.html`` registers as ``index`` and
        ``partials/card.html`` as ``partials/card``.

        Args:
            directory: Template source directory
            extension: File extension of template sources
            strict: Raise on undefined template variables instead of rendering them empty

        Returns:
            Populated TemplateRegistry

        Raises:
            TemplateLoadException: If the directory is missing or unreadable,
                or any template fails to parse
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise TemplateLoadException(
                f"Template directory not found: {directory}",
                details={"directory": str(directory)},
            )

        environment = Environment(
            loader=FileSystemLoader(directory),
            autoescape=select_autoescape(enabled_extensions=("html", "htm", "xml", extension.lstrip("."))),
            undefined=StrictUndefined if strict else ChainableUndefined,
            auto_reload=False,
        )

        try:
            sources = sorted(path for path in directory.rglob(f"*{extension}") if path.is_file())
        except OSError as e:
            raise TemplateLoadException(
                f"Template directory is not readable: {directory}: {e}",
                details={"directory": str(directory)},
            ) from e

        templates: dict[str, Template] = {}
        for path in sources:
            relative = path.relative_to(directory).as_posix()
            template_name = relative[: -len(extension)]
            try:
                templates[template_name] = environment.get_template(relative)
            except TemplateSyntaxError as e:
                raise TemplateLoadException(
                    f"Invalid template {relative} (line {e.lineno}): {e.message}",
                    details={"template": relative, "line": e.lineno},
                ) from e
            except (OSError, UnicodeDecodeError, TemplateError) as e:
                raise TemplateLoadException(
                    f"Failed to load template {relative}: {e}",
                    details={"template": relative},
                ) from e

        if not templates:
            log_with_context(
                logger,
                "warning",
                "Template directory contains no templates",
                directory=str(directory),
                extension=extension,
                event_type="templates_empty",
            )

        log_with_context(
            logger,
            "info",
            "Templates registered",
            directory=str(directory),
            templates=sorted(templates),
            strict=strict,
            event_type="templates_loaded",
        )
        return cls(templates)

    @property
    def names(self) -> frozenset[str]:
        return frozenset(self._templates)

    def __contains__(self, template_name: object) -> bool:
        return template_name in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def render(self, template_name: str, data: Mapping[str, Any]) -> bytes:
        """Render a registered template to UTF-8 bytes.

        Raises:
            TemplateNotFoundException: If no template is registered under the name
            TemplateRenderException: If the template raises while rendering
        """
        template = self._templates.get(template_name)
        if template is None:
            raise TemplateNotFoundException(template_name)

        try:
            return template.render(data).encode("utf-8")
        except Exception as e:
            # Filters and tests can raise plain Python errors on mismatched data
            raise TemplateRenderException(
                f"Failed to render template {template_name!r}: {e}",
                details={"template": template_name, "error_type": type(e).__name__},
            ) from e
