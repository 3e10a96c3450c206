"""HTML report rendering for source migrations."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Sequence

from ..models import SourceFileDetails
from .templates import create_environment

TEMPLATE_NAME = "migration_report.html.j2"


class ReportGenerator:
    """Renders migrated-file details into a self-contained HTML document."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self._env = create_environment(templates_dir)

    def render(
        self, files: Sequence[SourceFileDetails], generated_at: datetime | None = None
    ) -> str:
        """Return the report; only the embedded timestamp varies for identical input."""
        timestamp = (generated_at or datetime.now()).strftime("%B %d, %Y at %I:%M %p")
        template = self._env.get_template(TEMPLATE_NAME)
        return template.render(
            files=files,
            generated_on=timestamp,
            total_changes=sum(len(details.changes) for details in files),
        )


__all__ = ["ReportGenerator"]
