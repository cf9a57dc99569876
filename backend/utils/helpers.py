"""
General helper utilities
"""
from typing import Optional


def parse_form_bool(value: Optional[str], default: bool = True) -> bool:
    """Interpret a multipart form flag ("true"/"false"); missing means default"""
    if value is None or value == "":
        return default
    return value.strip().lower() == "true"


def build_folder_path(name: str, parent_path: Optional[str] = None) -> str:
    """Materialized path of a folder: parent's path + "/" + name, or just name at root"""
    if parent_path:
        return f"{parent_path}/{name}"
    return name


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence from a model response"""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()
