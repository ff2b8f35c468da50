"""
HTML rendering for history pages.

The engine never produces markup; every value that reaches a page is
escaped here.
"""

from html import escape
from typing import Any
from urllib.parse import quote

from src.history_engine import Cell, ElementType, HistoryMatrix

STATIC_PREFIX = "/history/static"
OSM_BROWSE_URL = "https://openstreetmap.org"
TAGINFO_KEY_URL = "https://taginfo.openstreetmap.org/keys/{key}#overview"


def truncate(val: Any, max_length: int) -> str:
    """Escape a display value, abbreviating long strings."""
    if not isinstance(val, str):
        return escape(str(val).lower() if isinstance(val, bool) else str(val))

    if len(val) > max_length:
        return f'{escape(val[:max_length])}<abbr title="{escape(val)}">…</abbr>'

    return escape(val)


def base_template(content: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>OSM Deep History</title>
    <link rel="stylesheet" href="{STATIC_PREFIX}/styles.css">
    <script src="{STATIC_PREFIX}/app.js"></script>
</head>
<body>
{content}
</body>
</html>"""


def render_cell(cell: Cell, max_length: int) -> str:
    value = truncate(cell.val, max_length)
    if cell.url:
        return f'<td class="{cell.clz.value}"><a href="{escape(cell.url)}">{value}</a></td>'
    return f'<td class="{cell.clz.value}">{value}</td>'


def render_marker_cell(cell: Cell) -> str:
    return f'<td class="{cell.clz.value}">&nbsp;</td>'


def section_header(title: str, colspan: int) -> str:
    return f"""
        <tr>
            <td class="header" colspan="{colspan}"><strong>{title}</strong></td>
        </tr>"""


def empty_section(message: str, colspan: int) -> str:
    return f"""
        <tr>
            <td colspan="{colspan}"><em>{message}</em></td>
        </tr>"""


def render_table_header(matrix: HistoryMatrix) -> str:
    last_version = matrix.versions[-1].version
    numbers = "".join(
        f'<th id="version-{v.version}"><a href="#version-{v.version}">{v.version}</a></th>'
        for v in matrix.versions
    )
    timestamps = "".join(f"<th>{escape(v.timestamp)}</th>" for v in matrix.versions)
    return f"""
    <thead>
        <tr>
            <th><a href="#version-{last_version}">Go to Recent &rightarrow;</a></th>
            {numbers}
        </tr>
        <tr>
            <th>&nbsp;</th>
            {timestamps}
        </tr>
    </thead>"""


def table_row(header: str, cells: str) -> str:
    return f"""
        <tr>
            <th>{header}</th>
            {cells}
        </tr>"""


def render_property_rows(matrix: HistoryMatrix, max_length: int) -> str:
    rows = []
    for line in matrix.properties:
        cells = "".join(render_cell(cell, max_length) for cell in line.cells)
        rows.append(table_row(escape(line.name), cells))
    return "".join(rows)


def render_tag_rows(matrix: HistoryMatrix, max_length: int) -> str:
    if not matrix.tags:
        return empty_section("No tags", len(matrix.versions) + 1)

    rows = []
    for line in matrix.tags:
        taginfo = TAGINFO_KEY_URL.format(key=quote(line.key, safe=""))
        header = f'<code><a href="{escape(taginfo)}">{escape(line.key)}</a></code>'
        cells = "".join(render_cell(cell, max_length) for cell in line.cells)
        rows.append(table_row(header, cells))
    return "".join(rows)


def render_node_rows(matrix: HistoryMatrix) -> str:
    if not matrix.nodes:
        return empty_section("No nodes", len(matrix.versions) + 1)

    rows = []
    for line in matrix.nodes:
        header = f'<code><a href="/history/node/{line.ref}">{line.ref}</a></code>'
        cells = "".join(render_marker_cell(cell) for cell in line.cells)
        rows.append(table_row(header, cells))
    return "".join(rows)


def render_member_rows(matrix: HistoryMatrix) -> str:
    if not matrix.members:
        return empty_section("No members", len(matrix.versions) + 1)

    rows = []
    for line in matrix.members:
        member = line.member
        kind = member.type.value
        label = f"{member.ref} - {member.role or '(no role)'}"
        header = (
            f'<span class="member-type">{kind}</span> '
            f'<code><a href="/history/{kind}/{member.ref}">{escape(label)}</a></code>'
        )
        cells = "".join(render_marker_cell(cell) for cell in line.cells)
        rows.append(table_row(header, cells))
    return "".join(rows)


def render_index() -> str:
    forms = "".join(
        f"""
    <tr>
        <form action="/history/{element_type.value}.php">
            <td align="right"><label for="{element_type.value}">{element_type.value.capitalize()} ID:</label></td>
            <td><input type="text" size="16" id="{element_type.value}" name="id"></td>
            <td><input type="submit" value="Get History"></td>
        </form>
    </tr>"""
        for element_type in ElementType
    )
    return base_template(f"""
<h3>Deep History</h3>
<hr/>

<table>{forms}
</table>
""")


def render_history(matrix: HistoryMatrix, max_column_length: int = 20) -> str:
    """
    Render the change table for one element history.

    Args:
        matrix: Assembled history matrix
        max_column_length: Strings longer than this are abbreviated

    Returns:
        Complete HTML document
    """
    kind = matrix.element_type.value
    colspan = len(matrix.versions) + 1

    body = section_header("Primitive Info", colspan)
    body += render_property_rows(matrix, max_column_length)
    body += section_header("Tags", colspan)
    body += render_tag_rows(matrix, max_column_length)

    if matrix.element_type == ElementType.WAY:
        body += section_header("Nodes", colspan)
        body += render_node_rows(matrix)
    elif matrix.element_type == ElementType.RELATION:
        body += section_header("Members", colspan)
        body += render_member_rows(matrix)

    return base_template(f"""
<h3>History of {kind.capitalize()} <a href="{OSM_BROWSE_URL}/{kind}/{matrix.element_id}">{matrix.element_id}</a></h3>
<hr/>

<table>
    {render_table_header(matrix)}
    <tbody>{body}
    </tbody>
</table>
""")


def render_missing_element(url: str, status_code: int) -> str:
    return base_template(f"""
<h3>Object Missing</h3>
<hr/>

<p>The OSM API server says that object doesn't exist. Perhaps you could <a href="/history">go look for another object</a>?</p>

<p><code>HTTP {status_code} - <a href="{escape(url)}">{escape(url)}</a></code></p>
""")


def render_upstream_error(url: str) -> str:
    return base_template(f"""
<h3>OSM API Unavailable</h3>
<hr/>

<p>The OSM API server could not deliver this history. Please try again later, or <a href="/history">look up another object</a>.</p>

<p><code><a href="{escape(url)}">{escape(url)}</a></code></p>
""")
