"""Tests for the editable grid helpers."""
from app.components.banners import truncate_issues
from app.components.grid import ISSUE_COLUMN, frame_to_edits, rows_to_frame
from alchemist.models.entities import apply_cell_edit
from alchemist.validation import validate_dataset


def test_rows_to_frame_flags_error_rows(sample_dataset):
    tasks = [sample_dataset.tasks[0], apply_cell_edit(sample_dataset.tasks[1], "Duration", 0)]
    ds = sample_dataset.replace_table("tasks", tasks)
    report = validate_dataset(ds)

    df = rows_to_frame("tasks", ds.tasks, report)

    assert list(df.columns)[0] == ISSUE_COLUMN
    assert list(df[ISSUE_COLUMN]) == ["", "❌"]
    assert list(df["TaskID"]) == ["T1", "T2"]


def test_frame_to_edits_unchanged(sample_dataset):
    df = rows_to_frame("workers", sample_dataset.workers)
    assert frame_to_edits(sample_dataset.workers, df) == []


def test_frame_to_edits_detects_change(sample_dataset):
    df = rows_to_frame("clients", sample_dataset.clients)
    df.loc[1, "PriorityLevel"] = 4
    df.loc[2, "GroupTag"] = "GroupC"

    changed = frame_to_edits(sample_dataset.clients, df)

    assert [shown for shown, _ in changed] == sample_dataset.clients[1:]
    assert changed[0][0] is sample_dataset.clients[1]
    assert changed[0][1].priority_level == 4
    assert changed[1][1].group_tag == "GroupC"


def test_frame_to_edits_number_cleared(sample_dataset):
    df = rows_to_frame("tasks", sample_dataset.tasks)
    df["MaxConcurrent"] = df["MaxConcurrent"].astype(float)
    df.loc[0, "MaxConcurrent"] = float("nan")

    changed = frame_to_edits(sample_dataset.tasks, df)

    assert len(changed) == 1
    assert changed[0][1].max_concurrent == 0


def test_frame_to_edits_numeric_looking_text(sample_dataset):
    rows = [apply_cell_edit(sample_dataset.clients[0], "GroupTag", "01")]
    df = rows_to_frame("clients", rows)
    df.loc[0, "GroupTag"] = "1"

    changed = frame_to_edits(rows, df)

    assert len(changed) == 1
    assert changed[0][1].group_tag == "1"


def test_frame_to_edits_whole_float_is_unchanged_int(sample_dataset):
    df = rows_to_frame("clients", sample_dataset.clients)
    df["PriorityLevel"] = df["PriorityLevel"].astype(float)
    assert frame_to_edits(sample_dataset.clients, df) == []


def test_truncate_issues():
    items = [f"e{i}" for i in range(7)]
    assert truncate_issues(items, 5) == ["e0", "e1", "e2", "e3", "e4", "... and 2 more"]
    assert truncate_issues(items[:2], 5) == ["e0", "e1"]
