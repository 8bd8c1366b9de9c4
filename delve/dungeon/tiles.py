# Tile constants centralized for modular imports (row-major grid[y][x] values)
FLOOR = 0
WALL = 1

# ASCII glyphs for debug output and the CLI map view
GLYPHS = {FLOOR: ".", WALL: "#"}

__all__ = ["FLOOR", "WALL", "GLYPHS"]
