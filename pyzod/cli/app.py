"""Cyclopts application and command routing for the pyzod CLI.

The CLI provides the following commands:
- render: Finalize raw issues from a file and print a projection
- list-locales: List registered locales
- check-config: Validate configuration files
"""

from cyclopts import App

from pyzod import __version__
from pyzod.cli import commands

app = App(
    name="pyzod",
    help="Render validation issues as messages, trees and field maps",
    version=__version__,
)

app.command(commands.render)
app.command(commands.list_locales, name="list-locales")
app.command(commands.check_config, name="check-config")
