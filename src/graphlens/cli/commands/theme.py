"""
Theme Command - Show or change the saved page theme.
"""

import click

from ...core.preferences import PreferenceStore
from ...graph.styles import Theme
from ..utils import echo_info, echo_success

TOGGLE = "toggle"


@click.command()
@click.argument("choice", required=False,
                type=click.Choice([t.value for t in Theme] + [TOGGLE]))
def theme(choice: str | None):
    """
    Show the saved theme, or set it to CHOICE (dark, light or toggle).
    """
    store = PreferenceStore()

    if choice is None:
        echo_info(f"Theme: {store.get_theme().value}")
        return

    if choice == TOGGLE:
        saved = store.toggle_theme()
    else:
        saved = store.set_theme(Theme(choice))

    echo_success(f"Theme set to {saved.value}")
