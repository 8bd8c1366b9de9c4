from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        "rooms_attempted": 0,
        "rooms_placed": 0,
        "corridors_carved": 0,
        "extra_links": 0,
        "regions_before_repair": 0,
        "repaired": False,
        "floor_tiles": 0,
        "runtime_ms": 0.0,
    }
