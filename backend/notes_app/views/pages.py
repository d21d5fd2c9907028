"""
Notes App Backend — Page Rendering
====================================

What:  Builds the HTML for the list, detail and form pages.
How:   f-string fragments joined together, wrapped by render_page().
       Every note value goes through _esc() (html.escape, quotes included)
       before it lands in markup or an attribute.
"""

from html import escape
from typing import Any, Iterable, Optional

from notes_app.schemas.note import Note

_STYLE = """
        body { font-family: sans-serif; margin: 2em; }
        .note { border: 1px solid #ccc; padding: 1em; margin-bottom: 1em; }
        a { text-decoration: none; color: #0074d9; }
"""


def _esc(value: Any) -> str:
    if value is None:
        return ""
    return escape(str(value), quote=True)


def render_page(title: str, body_html: str) -> str:
    """Wrap `body_html` in the shared shell; `title` is used for <title> and <h1>."""
    safe_title = _esc(title)
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{safe_title}</title>
    <style>{_STYLE}    </style>
</head>
<body>
    <h1>{safe_title}</h1>
    {body_html}
</body>
</html>
"""


def render_list(notes: Iterable[Note]) -> str:
    """Add-note link plus one block per note with a title link and a delete button."""
    blocks = "".join(
        f"""
        <div class="note">
            <h3><a href="/notes/{note.id}">{_esc(note.title)}</a></h3>
            <form method="POST" action="/notes/{note.id}/delete" style="display:inline;">
                <button type="submit">Delete</button>
            </form>
        </div>"""
        for note in notes
    )
    return f"""
    <a href="/notes/new">Add Note</a>
    <div>{blocks}
    </div>
"""


def render_detail(note: Note) -> str:
    return f"""
    <a href="/">Back to Notes</a>
    <div class="note">
        <h2>{_esc(note.title)}</h2>
        <p>{_esc(note.content)}</p>
        <a href="/notes/{note.id}/edit">Edit</a>
    </div>
"""


def render_form(note: Optional[Note] = None) -> str:
    """
    Create-or-edit form.

    With a note the form posts to /notes/{id}/edit and is pre-filled;
    without one it posts to /notes/new and starts empty. Both fields are
    marked required.
    """
    if note is not None:
        action = f"/notes/{note.id}/edit"
        label = "Update"
        title, content = note.title, note.content
    else:
        action = "/notes/new"
        label = "Create"
        title = content = None

    return f"""
    <a href="/">Back to Notes</a>
    <form method="POST" action="{action}">
        <div>
            <label>Title:</label><br>
            <input name="title" value="{_esc(title)}" required>
        </div>
        <div>
            <label>Content:</label><br>
            <textarea name="content" required>{_esc(content)}</textarea>
        </div>
        <button type="submit">{label} Note</button>
    </form>
"""


def render_message(text: str) -> str:
    return f"<div>{_esc(text)}</div>"
