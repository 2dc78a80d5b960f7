"""Tests for file loading."""
import io
import json

import pandas as pd
import pytest

from alchemist.errors import LoadError
from alchemist.io.export import export_clients_csv
from alchemist.io.loader import decode_upload, detect_table, load_file, parse_payload, read_upload
from alchemist.models.entities import Client


class TestParsePayload:
    """Tests for mapping decoded content into a Dataset."""

    def test_named_keys(self):
        ds = parse_payload({
            "Clients 1": [{"ClientID": "C1", "PriorityLevel": 3}],
            "Worker 1": [{"WorkerID": "W1"}],
            "Tasks 1": [{"TaskID": "T1"}, {"TaskID": "T2"}],
        })
        assert ds.counts() == {"clients": 1, "workers": 1, "tasks": 2}
        assert ds.clients[0].priority_level == 3

    def test_lowercase_keys(self):
        ds = parse_payload({"clients": [{"ClientID": "C1"}], "tasks": [{"TaskID": "T1"}]})
        assert ds.counts() == {"clients": 1, "workers": 0, "tasks": 1}

    def test_missing_and_wrong_shapes(self):
        ds = parse_payload({"Clients 1": "nope", "other": []})
        assert ds.is_empty
        assert parse_payload(42).is_empty
        assert parse_payload(None).is_empty

    def test_row_list_goes_to_detected_table(self):
        ds = parse_payload([{"WorkerID": "W1", "Skills": "coding"}])
        assert [w.worker_id for w in ds.workers] == ["W1"]
        assert ds.clients == [] and ds.tasks == []

    def test_unrecognized_row_list(self):
        assert parse_payload([{"Name": "x"}]).is_empty

    def test_detect_table(self):
        assert detect_table([{"taskid": "T1"}]) == "tasks"
        assert detect_table([]) is None


class TestReadUpload:
    """Tests for decoding uploaded bytes."""

    def test_json(self):
        content = json.dumps({"Tasks 1": [{"TaskID": "T1", "Duration": 2}]}).encode()
        ds = read_upload("data.json", content)
        assert ds.tasks[0].duration == 2

    def test_json_with_bom(self):
        content = "\ufeff".encode() + b'{"Worker 1": [{"WorkerID": "W1"}]}'
        assert len(read_upload("data.json", content).workers) == 1

    def test_csv(self):
        content = (
            "ClientID,ClientName,PriorityLevel,RequestedTaskIDs,GroupTag,AttributesJSON\n"
            'C1,Acme,5,"T1,T2",GroupA,{}\n'
            "C2,Globex,,T3,GroupB,\n"
        ).encode()
        ds = read_upload("clients.csv", content)
        assert [c.client_id for c in ds.clients] == ["C1", "C2"]
        assert ds.clients[0].requested_task_list == ["T1", "T2"]
        assert ds.clients[1].priority_level is None

    def test_csv_export_reimports_unchanged(self):
        clients = [Client("C1", " lead space", 3, "T1", "GroupA ", "")]
        ds = read_upload("clients.csv", export_clients_csv(clients))
        assert ds.clients[0].client_name == " lead space"
        assert ds.clients[0].group_tag == "GroupA "

    def test_xlsx(self):
        df = pd.DataFrame({
            "TaskID": ["T1", "T2"],
            "TaskName": ["Build", "Test"],
            "Duration": [3, None],
            "RequiredSkills": ["coding", "testing"],
        })
        buffer = io.BytesIO()
        df.to_excel(buffer, index=False, engine="openpyxl")
        ds = read_upload("tasks.xlsx", buffer.getvalue())
        assert [t.task_id for t in ds.tasks] == ["T1", "T2"]
        assert ds.tasks[0].duration == 3
        assert ds.tasks[1].duration is None

    def test_invalid_json_raises_load_error(self):
        with pytest.raises(LoadError, match="Failed to process uploaded file") as exc_info:
            read_upload("bad.json", b"{not json")
        assert exc_info.value.file_name == "bad.json"
        assert exc_info.value.__cause__ is not None

    def test_unsupported_extension(self):
        with pytest.raises(LoadError):
            read_upload("notes.txt", b"hello")
        with pytest.raises(ValueError, match="Unsupported"):
            decode_upload("notes.txt", b"hello")

    def test_load_sample_file(self, sample_json_path):
        ds = load_file(sample_json_path)
        assert ds.counts() == {"clients": 5, "workers": 5, "tasks": 5}

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(LoadError):
            load_file(tmp_path / "missing.json")
