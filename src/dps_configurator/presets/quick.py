"""Quick setup: one country code that fills in the region preset."""

PRESET = "quick"


def register(store) -> None:
    store.create_preset(PRESET, display="Quick Setup", priority=10)

    store.create(
        "COUNTRY",
        "country",
        preset=PRESET,
        display="Country (quick setup)",
        default="",
        exportable=False,
    )
