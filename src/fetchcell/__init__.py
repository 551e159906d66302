"""
fetchcell: concurrent evaluation of notebook fetch cells.

A fetch cell lists resources to retrieve (files or URLs) and how to bind
each one into a running environment: as a variable, an executed script, or
an installed stylesheet. Directives run concurrently; the cell reports a
single SUCCESS or ERROR verdict.
"""

__version__ = "0.1.0"
