"""Interfaces Tkinter."""
