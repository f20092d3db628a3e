from typing import List, Optional

FENCE = "```"


def extract_code_blocks(text: str) -> List[str]:
    """
    Returns the contents of every fenced code block in ``text``.

    The scan toggles between being outside and inside a fence on each line
    that starts with three backticks; a language tag after the opening fence
    is ignored. An unterminated final block is still returned.
    """
    blocks = []
    current: Optional[List[str]] = None

    for line in text.splitlines():
        if line.strip().startswith(FENCE):
            if current is None:
                current = []
            else:
                blocks.append("\n".join(current))
                current = None
            continue
        if current is not None:
            current.append(line)

    if current:
        blocks.append("\n".join(current))
    return blocks


def extract_command(text: str) -> str:
    """The first fenced code block of a reply, or the whole reply if it has none."""
    for block in extract_code_blocks(text):
        if block.strip():
            return block.strip()
    return text.strip()
