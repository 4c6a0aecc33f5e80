"""Pull an embedded curl command out of free-form text."""

import re

PROGRAM = "curl"

# curl```...``` anywhere in the text; interior may span lines
_FENCE_PATTERN = re.compile(rf"{PROGRAM}```(.*?)```", re.IGNORECASE | re.DOTALL)


def extract_command(text: str) -> str:
    """
    Return the command text to validate.

    If the text contains a fenced block opened by ``curl```, the block
    interior is prefixed with the program name. Otherwise the text is
    returned unchanged. No validation happens here.
    """
    match = _FENCE_PATTERN.search(text)
    if match:
        return f"{PROGRAM} {match.group(1)}"
    return text
