"""Package scaffolding: options, manifest, templates and file emission."""

from .errors import PartialWriteError, ScaffoldError
from .options import ProjectOptions

__all__ = ["PartialWriteError", "ScaffoldError", "ProjectOptions"]
