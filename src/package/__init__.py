"""Package model and version formatting."""

from .models import Package, Project, Repository
from .version_formatter import format_version

__all__ = ["Package", "Project", "Repository", "format_version"]
