"""Version parsing, filtering and selection."""

from .models import (  # noqa: F401
    DocumentPatchResult,
    Failed,
    FailureKind,
    PropertyEdit,
    RangeConstraint,
    ResolutionOutcome,
    Selected,
    TargetSpec,
    Version,
    has_variant,
    is_snapshot,
    parse_version,
)
from .service import ResolutionService, build_targets  # noqa: F401
