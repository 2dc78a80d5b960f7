"""
Workspace State
===============
Everything one editing session holds: the tables, the current validation
report, the search view, the rule registry and the weights. The Streamlit
app keeps one Workspace in its session state; the CLI builds one per run.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from alchemist.io.export import ExportFile, build_export_bundle
from alchemist.models.dataset import Dataset
from alchemist.models.entities import apply_cell_edit
from alchemist.models.weights import PrioritizationWeights
from alchemist.rules import RuleRegistry
from alchemist.search import KeywordMode, SearchResult, search
from alchemist.utils.logging_setup import get_logger
from alchemist.validation import ValidationReport, validate_dataset

logger = get_logger("alchemist.workspace")


@dataclass
class Workspace:
    dataset: Dataset = field(default_factory=Dataset)
    rules: RuleRegistry = field(default_factory=RuleRegistry)
    weights: PrioritizationWeights = field(default_factory=PrioritizationWeights)
    report: ValidationReport = field(default_factory=ValidationReport)
    query: str = ""
    keyword_mode: KeywordMode = KeywordMode.ALL
    view: Optional[SearchResult] = None

    def __post_init__(self):
        self.revalidate()

    def revalidate(self) -> ValidationReport:
        self.report = validate_dataset(self.dataset)
        return self.report

    def load(self, dataset: Dataset, merge: bool = False) -> ValidationReport:
        """Install newly loaded tables, revalidate and reset the search view."""
        self.dataset = self.dataset.merge(dataset) if merge else dataset
        self.query = ""
        self.view = None
        logger.info("Loaded dataset %s (merge=%s)", self.dataset.counts(), merge)
        return self.revalidate()

    def _refresh_view(self):
        # Edits drop the filter, like a fresh load
        self.query = ""
        self.view = None

    def edit_cell(self, table: str, row: int, column: str, value: Any) -> ValidationReport:
        """Change one cell of the full table and revalidate."""
        rows = list(self.dataset.table(table))
        rows[row] = apply_cell_edit(rows[row], column, value)
        self.dataset = self.dataset.replace_table(table, rows)
        self._refresh_view()
        return self.revalidate()

    def replace_table(self, table: str, rows: List) -> ValidationReport:
        """Swap a whole table (bulk grid edit) and revalidate."""
        self.dataset = self.dataset.replace_table(table, rows)
        self._refresh_view()
        return self.revalidate()

    def update_rows(self, table: str, edits: List[Tuple[Any, Any]]) -> ValidationReport:
        """
        Apply ``(shown_row, edited_row)`` pairs from a possibly filtered grid.

        Rows are matched by identity, not by ID, so duplicate IDs stay
        distinct and the hidden rows are kept.
        """
        replacements = {id(original): updated for original, updated in edits}
        rows = [replacements.get(id(r), r) for r in self.dataset.table(table)]
        return self.replace_table(table, rows)

    def run_search(self, query: str) -> SearchResult:
        self.query = query
        self.view = search(query, self.dataset, mode=self.keyword_mode)
        return self.view

    def clear_search(self) -> SearchResult:
        self.query = ""
        self.view = None
        return self.visible()

    def visible(self) -> SearchResult:
        """The filtered view, or every row when no search is active."""
        return self.view if self.view is not None else SearchResult.unfiltered(self.dataset)

    def export_bundle(self, base_name: Optional[str] = None) -> Dict[str, ExportFile]:
        return build_export_bundle(
            self.dataset, self.rules.to_list(), self.weights, base_name=base_name, report=self.report,
        )
