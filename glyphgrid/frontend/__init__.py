"""Tkinter front end: palette, map canvas, file dialogs."""
