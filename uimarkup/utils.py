def _compute_row_col(text: str, position: int) -> tuple[int, int]:
    row = text.count("\n", 0, position) + 1
    line_start = text.rfind("\n", 0, position) + 1
    return (row, position - line_start + 1)


def _caret_excerpt(text: str, position: int) -> str:
    """Render the line containing `position` with a caret under it."""
    line_start = text.rfind("\n", 0, position) + 1
    line_end = text.find("\n", position)
    if line_end == -1:
        line_end = len(text)
    line = text[line_start:line_end]
    padding = "".join(
        "\t" if char == "\t" else " " for char in text[line_start:position]
    )
    return f"{line}\n{padding}^"
