"""
Text Processing Utilities

Helpers shared by the pipeline stages for bounding prompt input and
classifying completion-service errors.

Usage:
    from pdf_questions.pipelines.utils.text_utils import (
        truncate_text,
        is_token_limit_error,
    )

    prompt_text = truncate_text(summary, max_length=4000)
    if is_token_limit_error(str(error)):
        logger.error(TOKEN_LIMIT_HINT)
"""

TOKEN_LIMIT_HINT = (
    "Tip: Try using a smaller PDF file. Large documents exceed the token limit."
)

# Substrings that mark a provider error as a context-length problem
_TOKEN_LIMIT_MARKERS = ("context length", "token")


def truncate_text(text: str, max_length: int, suffix: str = "") -> str:
    """
    Truncate text to at most max_length characters.

    Cuts at exactly max_length so the result is always a prefix of the input
    (plus the optional suffix, which counts towards max_length).

    Args:
        text: Text to truncate
        max_length: Maximum length (including suffix)
        suffix: String to append if truncated

    Returns:
        Truncated text
    """
    if not text or len(text) <= max_length:
        return text

    target_length = max_length - len(suffix)
    if target_length <= 0:
        return suffix[:max_length]

    return text[:target_length] + suffix


def is_token_limit_error(message: str) -> bool:
    """
    Guess whether an error message reports an exceeded context window.

    Substring heuristic only; providers word these errors differently.

    Args:
        message: Error message from the completion service

    Returns:
        True if the message mentions context length or tokens
    """
    if not message:
        return False
    return any(marker in message for marker in _TOKEN_LIMIT_MARKERS)
