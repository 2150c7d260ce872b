"""Main CLI application using Cyclopts."""

import cyclopts

from ohmage.cli.commands import check, server

app = cyclopts.App(
    name="ohmage",
    help="ohmage - mobile health data collection service",
)

app.command(server.app, name="server")
app.command(check.app, name="check")
