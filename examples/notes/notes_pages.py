"""Pages imported on first navigation."""

from pageshell.views.elements import card, message_card


def about() -> str:
    return card("About", "Notes is a pageshell demo.")


def help_page() -> str:
    return message_card("Help", "Every page under /help lands here.", icon_name="mdi-help-circle")
