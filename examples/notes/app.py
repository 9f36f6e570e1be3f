"""Notes: routed pages inside the shell.

Demonstrates eager and lazily imported pages, path parameters, a prefix
entry, a page that fails while rendering, and the session-dependent nav
links (the demo API below signs everyone in as "ada").

Run:
    python app.py
"""

from pageshell import App, AppConfig, SessionUser
from pageshell.views.elements import card, panel_navbar

NOTES = {
    1: ("Groceries", "Milk, eggs, coffee."),
    2: ("Ideas", "A shell that never goes blank."),
}


class DemoApi:
    """Stand-in for the remote API: one signed-in visitor until logout."""

    def __init__(self) -> None:
        self.user = SessionUser.from_payload({"id": 1, "username": "ada"})

    async def get_current_user(self) -> SessionUser:
        return self.user

    async def logout_current_user(self) -> None:
        self.user = SessionUser()


app = App(AppConfig(site_title="Notes", footer_text="Notes demo"), api=DemoApi())


@app.page("/")
def landing() -> str:
    items = "".join(f'<li><a href="/notes/{i}">{title}</a></li>' for i, (title, _) in NOTES.items())
    return f"{panel_navbar('Notes', icon_name='mdi-note')}<ul>{items}</ul>"


@app.page("/notes/{id:int}")
def note(id: int) -> str:  # noqa: A002
    title, body = NOTES[id]
    return f"{panel_navbar(title, action='view')}{card(title, body)}"


@app.page("/broken")
def broken() -> str:
    msg = "X failed"
    raise RuntimeError(msg)


app.lazy_page("/about", "notes_pages:about")
app.lazy_page("/help", "notes_pages:help_page", exact=False)


if __name__ == "__main__":
    app.run()
