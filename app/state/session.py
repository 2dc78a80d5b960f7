"""
Session State Management
========================
Encapsulates all Streamlit session state interactions.
"""
from typing import List, Optional

import streamlit as st

from alchemist.models.dataset import Dataset
from alchemist.validation import ValidationReport
from alchemist.workspace import Workspace


class SessionStateManager:
    """Manages type-safe access to session state."""

    @staticmethod
    def init_state():
        """Initialize default session state values."""
        defaults = {
            "workspace": None,
            "upload_name": None,
            "upload_error": None,
            "upload_signature": None,
            "uploader_generation": 0,
            "banner_dismissed": False,
            "search_query": "",
            "reset_search": False,
            "export_name": "data-alchemist-export",
        }

        for key, value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = value

        if st.session_state["workspace"] is None:
            st.session_state["workspace"] = Workspace()

    @property
    def workspace(self) -> Workspace:
        return st.session_state["workspace"]

    @property
    def dataset(self) -> Dataset:
        return self.workspace.dataset

    @property
    def report(self) -> ValidationReport:
        return self.workspace.report

    @property
    def errors(self) -> List[str]:
        return self.workspace.report.errors

    @property
    def warnings(self) -> List[str]:
        return self.workspace.report.warnings

    @property
    def upload_error(self) -> Optional[str]:
        return st.session_state.get("upload_error")

    @upload_error.setter
    def upload_error(self, value: Optional[str]):
        st.session_state["upload_error"] = value

    @property
    def upload_name(self) -> Optional[str]:
        return st.session_state.get("upload_name")

    @upload_name.setter
    def upload_name(self, value: Optional[str]):
        st.session_state["upload_name"] = value

    @property
    def banner_dismissed(self) -> bool:
        return bool(st.session_state.get("banner_dismissed"))

    @banner_dismissed.setter
    def banner_dismissed(self, value: bool):
        st.session_state["banner_dismissed"] = value

    @property
    def uploader_key(self) -> str:
        # A new key gives an empty file uploader after a reset
        return f"data_uploader_{st.session_state.get('uploader_generation', 0)}"

    def is_new_upload(self, name: str, size: int) -> bool:
        """True the first time a file is seen; reruns with the same file are skipped."""
        signature = (name, size)
        if st.session_state.get("upload_signature") == signature:
            return False
        st.session_state["upload_signature"] = signature
        return True

    def forget_upload(self):
        """Let the next upload load even when it is the same file again."""
        st.session_state["upload_signature"] = None

    def load_dataset(self, dataset: Dataset, name: str, merge: bool = False) -> ValidationReport:
        """Install an uploaded dataset and re-show the validation banner."""
        report = self.workspace.load(dataset, merge=merge)
        self.upload_name = name
        self.upload_error = None
        self.banner_dismissed = False
        st.session_state["reset_search"] = True
        return report

    def reset(self):
        """Drop all tables, rules and weights."""
        st.session_state["workspace"] = Workspace()
        for key in [k for k in st.session_state.keys() if str(k).startswith("weight_")]:
            del st.session_state[key]
        self.upload_name = None
        self.upload_error = None
        self.banner_dismissed = False
        st.session_state["reset_search"] = True
        self.forget_upload()
        st.session_state["uploader_generation"] = st.session_state.get("uploader_generation", 0) + 1
