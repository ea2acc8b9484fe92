"""Capa de presentación: comandos Typer y render Rich."""
