"""Data Alchemist: editing, validation and export of client/worker/task tables."""
from alchemist.io.export import build_export_bundle
from alchemist.io.loader import parse_payload, read_upload
from alchemist.models import (
    BusinessRule,
    Client,
    Dataset,
    PrioritizationWeights,
    RuleType,
    Task,
    Worker,
)
from alchemist.rules import RuleRegistry
from alchemist.search import KeywordMode, search
from alchemist.validation import ValidationReport, validate_dataset
from alchemist.workspace import Workspace

__version__ = "0.1.0"

__all__ = [
    "Client", "Worker", "Task", "Dataset",
    "BusinessRule", "RuleType", "RuleRegistry", "PrioritizationWeights",
    "parse_payload", "read_upload",
    "validate_dataset", "ValidationReport",
    "search", "KeywordMode",
    "build_export_bundle",
    "Workspace",
]
