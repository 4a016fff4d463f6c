"""
Extraction of PlantUML source or JSON payloads from raw model output.
"""

import re

from text2uml.core.errors import NoRecognizedBlockError
from text2uml.core.logger import Logger

START_SENTINEL = "@startuml"
END_SENTINEL = "@enduml"

PLANTUML_FENCE = re.compile(
    r"```[ \t]*(?:plantuml|puml|uml)\b[^\n]*\n(.*?)```",
    re.DOTALL | re.IGNORECASE
)
JSON_FENCE = re.compile(
    r"```[ \t]*(?:json)?[ \t]*\r?\n(.*?)```",
    re.DOTALL | re.IGNORECASE
)
JSON_FENCE_OPEN = re.compile(r"^```[ \t]*(?:json)?", re.IGNORECASE)
START_PATTERN = re.compile(re.escape(START_SENTINEL), re.IGNORECASE)
END_PATTERN = re.compile(re.escape(END_SENTINEL), re.IGNORECASE)


def _reject(raw_text: str, what: str) -> NoRecognizedBlockError:
    error = NoRecognizedBlockError(raw_text, what)
    if raw_text and raw_text.strip():
        Logger.log_warning(str(error))
    else:
        Logger.log_warning(f"Empty upstream output while looking for a {what} block")
    return error


def extract_plantuml(raw_text: str) -> str:
    """
    Extract PlantUML code from markdown blocks or raw text.

    A fenced block tagged plantuml/puml/uml wins. Otherwise the text from the
    first @startuml to the last @enduml is returned, so a stray intermediate
    @enduml does not cut the diagram short.

    Args:
        raw_text: Untrusted generator output

    Returns:
        Extracted PlantUML code

    Raises:
        NoRecognizedBlockError: If neither form is present
    """
    if not raw_text or not raw_text.strip():
        raise _reject(raw_text, "PlantUML")

    fence_match = PLANTUML_FENCE.search(raw_text)
    if fence_match:
        return fence_match.group(1).strip()

    start_match = START_PATTERN.search(raw_text)
    if start_match:
        end_matches = list(END_PATTERN.finditer(raw_text, start_match.end()))
        if end_matches:
            return raw_text[start_match.start():end_matches[-1].end()]

    raise _reject(raw_text, "PlantUML")


def extract_json(raw_text: str) -> str:
    """
    Extract a JSON payload from markdown fences or surrounding prose.

    Exactly one opening and one closing fence are stripped; the JSON itself is
    returned as-is, broken or not.

    Raises:
        NoRecognizedBlockError: If the text is empty
    """
    if not raw_text or not raw_text.strip():
        raise _reject(raw_text, "JSON")

    text = raw_text.strip()

    fence_match = JSON_FENCE.search(text)
    if fence_match:
        return fence_match.group(1).strip()

    # Opening fence without a closing one (truncated answer) or a one-liner
    if text.startswith("```"):
        text = JSON_FENCE_OPEN.sub("", text, count=1)
        if text.endswith("```"):
            text = text[:-3]
        return text.strip()

    # Top-level arrays are kept whole so the parser can report them
    if text.startswith("["):
        end_idx = text.rfind("]")
        return text[:end_idx + 1] if end_idx != -1 else text

    start_idx = text.find("{")
    end_idx = text.rfind("}")
    if start_idx != -1 and end_idx > start_idx:
        return text[start_idx:end_idx + 1]

    return text
