from kleffpairing.validation.round_plan import (
    CriterionResult,
    CriterionStatus,
    RoundPlanValidator,
    ValidationReport,
    ViolationType,
)

__all__ = [
    "CriterionResult",
    "CriterionStatus",
    "RoundPlanValidator",
    "ValidationReport",
    "ViolationType",
]
