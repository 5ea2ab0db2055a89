"""Format workflow: step table, job state, orchestrator and error translation."""

from .error_translator import ErrorCategory, friendly_message, translate
from .job import FormatJob, JobOutcome
from .labels import normalize_label
from .models import FormatResult
from .orchestrator import FormatOrchestrator, create_format_orchestrator
from .steps import FORMAT_STEPS, TOTAL_STEPS, FormatStep, StepDescriptor


__all__ = [
    "FORMAT_STEPS",
    "TOTAL_STEPS",
    "ErrorCategory",
    "FormatJob",
    "FormatOrchestrator",
    "FormatResult",
    "FormatStep",
    "JobOutcome",
    "StepDescriptor",
    "create_format_orchestrator",
    "friendly_message",
    "normalize_label",
    "translate",
]
