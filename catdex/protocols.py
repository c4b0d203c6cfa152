"""Protocol definitions for dependency injection."""

from collections.abc import Mapping
from typing import Any, Protocol


class PageRenderer(Protocol):
    """Protocol for turning a named template and its data into page bytes.

    Request handlers depend on this interface only, so the lenient
    missing-data behaviour of the default registry can be swapped for a
    strict renderer without touching them.
    """

    def render(self, template_name: str, data: Mapping[str, Any]) -> bytes:
        """Render a template.

        Args:
            template_name: Registered template name (e.g. "index")
            data: Template context

        Returns:
            Rendered page encoded as UTF-8

        Raises:
            TemplateException: If the template is unknown or fails to render
        """
        ...
