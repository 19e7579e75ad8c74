"""Packages preset: base package set and Nix flakes."""

PRESET = "packages"

ESSENTIAL_PACKAGES = "vim git curl wget htop tmux"


def register(store) -> None:
    store.create_preset(PRESET, display="Packages", priority=60)

    store.create(
        "ESSENTIAL_PACKAGES",
        "string",
        preset=PRESET,
        display="Essential Packages (space-separated)",
        default=ESSENTIAL_PACKAGES,
    )
    store.create(
        "ADDITIONAL_PACKAGES",
        "string",
        preset=PRESET,
        display="Additional Packages (space-separated)",
        default="",
    )
    store.create(
        "ENABLE_FLAKES", "toggle", preset=PRESET, display="Enable Nix Flakes", default="true"
    )
