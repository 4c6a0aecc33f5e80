"""Split a command string into argv tokens.

Supports single quotes (literal), double quotes (with backslash escapes)
and backslash escapes outside quotes. Anything shell-like beyond that is
left to the policy to reject.
"""

from curlguard.probe.errors import LexError

_QUOTES = ("'", '"')


def tokenize(text: str) -> list[str]:
    """
    Tokenize a command line in a single left-to-right pass.

    A token is emitted only once something starts it (a quote or a
    non-whitespace character), so ``''`` yields an explicit empty token
    while runs of whitespace yield nothing.

    Raises:
        LexError: If a quote is opened and never closed
    """
    tokens: list[str] = []
    current: list[str] = []
    started = False
    quote: str | None = None

    i = 0
    length = len(text)
    while i < length:
        char = text[i]

        if quote:
            if char == quote:
                # Closing quote ends the quoted run, not the token
                quote = None
            elif char == "\\" and quote == '"' and i + 1 < length:
                i += 1
                current.append(text[i])
            else:
                current.append(char)
            i += 1
            continue

        if char in _QUOTES:
            quote = char
            started = True
        elif char == "\\" and i + 1 < length:
            i += 1
            current.append(text[i])
            started = True
        elif char.isspace():
            if started:
                tokens.append("".join(current))
                current = []
                started = False
        else:
            current.append(char)
            started = True
        i += 1

    if quote:
        raise LexError("Unclosed quote in command")
    if started:
        tokens.append("".join(current))
    return tokens
