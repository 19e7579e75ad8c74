"""
dps-configurator - settings engine for the DPS NixOS installer.

Usage:
    dps-config                     # Validate, prompt for errors, open the menu
    dps-config --export out.sh     # Write confirmed non-default values
    dps-config --no-menu           # Validate environment overrides only
"""

__version__ = "0.4.1"
