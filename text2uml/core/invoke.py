from typing import Any

from text2uml.core.errors import UpstreamError
from text2uml.core.logger import Logger


def message_text(response: Any) -> str:
    """Flatten a chat response into plain text."""
    content = getattr(response, "content", response)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return "" if content is None else str(content)


def invoke_text(runnable: Any, input_data: Any, **kwargs) -> str:
    """
    Invoke a runnable (LLM or chain) once and return its text.

    Args:
        runnable: The runnable to invoke
        input_data: Input data for the runnable
        **kwargs: Additional keyword arguments

    Returns:
        Text of the response

    Raises:
        UpstreamError: If the call fails or returns no text
    """
    try:
        response = runnable.invoke(input_data, **kwargs)
    except Exception as e:
        Logger.log_error(f"LLM call failed: {type(e).__name__}: {e}")
        raise UpstreamError(f"Text generation service unavailable: {type(e).__name__}: {e}") from e

    text = message_text(response)
    if not text.strip():
        Logger.log_warning("LLM returned empty output")
        raise UpstreamError("Text generation service returned empty output")
    return text
