"""Floor directory: the name of each level and how levels are written."""

FLOOR_NAMES: dict[int, str] = {
    6: "Space Station",
    5: "Sky Café",
    4: "Library",
    3: "Cinema",
    2: "Art Centre",
    1: "Toy Shop",
    0: "Ground Floor",
    -1: "Car Park",
    -2: "Aquarium",
    -3: "Crystal Mine",
    -4: "Ancient Caves",
    -5: "Dinosaur Museum",
}


def floor_name(level: int) -> str:
    return FLOOR_NAMES.get(level, f"Level {level}")


def signed_level(level: int) -> str:
    """2 → "+2", 0 → "0", -5 → "-5"."""
    return f"+{level}" if level > 0 else str(level)


def level_prefix(level: int) -> str:
    """Direction arrow plus distance from the ground floor: ↑3, ↓2, 0."""
    if level > 0:
        return f"↑{level}"
    if level < 0:
        return f"↓{-level}"
    return "0"


def status_text(level: int) -> str:
    return f"Level: {signed_level(level)}"
