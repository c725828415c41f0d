"""Curses front-end: skill list, chart and a username prompt."""
