"""Interfaces package for dps-configurator."""

from .menu import ConfigurationMenu, MenuState

__all__ = ["ConfigurationMenu", "MenuState"]
