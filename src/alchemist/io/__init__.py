# alchemist/io - File loading and export
from .export import ExportFile, build_export_bundle, write_export
from .loader import load_file, parse_payload, read_upload

__all__ = [
    "read_upload", "load_file", "parse_payload",
    "build_export_bundle", "write_export", "ExportFile",
]
