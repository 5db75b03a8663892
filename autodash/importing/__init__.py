"""
File decoding (CSV / Excel) and built-in demo datasets.
"""

from .demo_templates import DemoTemplate, get_template, list_templates
from .file_loader import decode_upload_contents, parse_file

__all__ = ["DemoTemplate", "get_template", "list_templates", "decode_upload_contents", "parse_file"]
